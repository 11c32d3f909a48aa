"""
Domain models — version specs and config file contents.

    from toolpin.core.models import ToolpinConfig, UnresolvedVersionSpec
"""

from toolpin.core.models.config import (
    DetectStrategy,
    ToolConfig,
    ToolpinConfig,
    ToolpinSettings,
)
from toolpin.core.models.version import UnresolvedVersionSpec, VersionKind

__all__ = [
    # config.py
    "DetectStrategy",
    "ToolConfig",
    "ToolpinConfig",
    "ToolpinSettings",
    # version.py
    "UnresolvedVersionSpec",
    "VersionKind",
]
