"""toolpin — resolve which tool version is active and verify what was downloaded."""

__version__ = "0.1.0"
