"""Request body validation for the REST API.

Each parser takes the decoded JSON body and returns the operation's input,
or raises ValidationError with the first problem found.
"""

from drivewatch.server.errors import ValidationError

DIRECTIONS = ("next", "prev")


def parse_init(data: dict) -> str:
    folder_url = data.get("folderUrl")
    if not isinstance(folder_url, str) or not folder_url:
        raise ValidationError("Folder URL is required")
    return folder_url


def parse_play(data: dict) -> int:
    index = data.get("index")
    # JSON has one number type, so 1.0 is a valid index
    if isinstance(index, float) and index.is_integer():
        index = int(index)
    # bool is an int subclass; JSON true/false is not an index
    if isinstance(index, bool) or not isinstance(index, int) or index < 0:
        raise ValidationError("Index must be a non-negative integer")
    return index


def parse_navigate(data: dict) -> str:
    direction = data.get("direction")
    if direction not in DIRECTIONS:
        raise ValidationError("Direction must be 'next' or 'prev'")
    return direction
