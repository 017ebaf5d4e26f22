"""DriveWatch server: playlist controller and Flask REST API."""
