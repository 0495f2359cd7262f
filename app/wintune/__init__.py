"""wintune - curate winget packages and hand them off to an Intune import."""

__version__ = "0.3.0"
