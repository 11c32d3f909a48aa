"""
Core services — version detection and download verification.

    from toolpin.core.services import detect_version, verify_checksum
"""

from toolpin.core.services.artifact import DownloadArtifact, verify_download  # noqa: F401
from toolpin.core.services.checksum import (  # noqa: F401
    Verifiable,
    get_sha256_hash_of_file,
    verify_checksum,
)
from toolpin.core.services.ecosystem import (  # noqa: F401
    EcosystemProbe,
    NullProbe,
    VersionFileProbe,
)
from toolpin.core.services.version_detect import (  # noqa: F401
    DETECTED_FROM_ENV,
    DetectedVersion,
    VersionSource,
    detect_version,
    publish_detected_from,
)
