"""Error types raised by playlist operations.

Each error carries the HTTP status the REST layer should answer with.
"""


class DriveWatchError(Exception):
    """Base error for playlist operations."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code


class ValidationError(DriveWatchError):
    """Malformed or missing input. Raised before any state change."""

    status_code = 400


class NotFoundError(DriveWatchError):
    """An operation's precondition about existing data failed."""

    status_code = 404


class RemoteError(DriveWatchError):
    """Google Drive or Watch2Gether call failed."""

    status_code = 500
