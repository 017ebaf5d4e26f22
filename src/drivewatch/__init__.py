"""DriveWatch - watch a Google Drive folder together in a Watch2Gether room."""

from drivewatch.__about__ import __version__

__all__ = ["__version__"]
