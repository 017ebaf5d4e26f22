"""Google Drive folder resolution and video listing.

Talks to the Drive v3 files.list endpoint with an API key, so the folder
has to be shared publicly (or be in a drive the key can see).
"""

import logging
import re

import httpx

from drivewatch.server.episodes import Episode
from drivewatch.server.errors import RemoteError

logger = logging.getLogger(__name__)

DRIVE_FILES_URL = "https://www.googleapis.com/drive/v3/files"
DEFAULT_PAGE_SIZE = 1000

_FOLDER_PATH_RE = re.compile(r"/folders/([a-zA-Z0-9_-]+)")
_ID_PARAM_RE = re.compile(r"id=([a-zA-Z0-9_-]+)")
_BARE_ID_RE = re.compile(r"^([a-zA-Z0-9_-]+)$")


def extract_folder_id(ref: str) -> str | None:
    """Extract a folder ID from a Drive URL or a bare ID. Returns None if not found.

    Accepts .../folders/<id>, ...?id=<id>, or the ID itself. Anything shaped
    like an ID passes the last check, so a stray word is only rejected later
    by Drive when the folder is listed.
    """
    ref = ref.strip()
    for pattern in (_FOLDER_PATH_RE, _ID_PARAM_RE, _BARE_ID_RE):
        m = pattern.search(ref)
        if m:
            return m.group(1)
    return None


def _error_message(e: httpx.HTTPError) -> str:
    """Prefer the message from a Google API error body.

    Never uses httpx's status error text: its request URL carries the API key.
    """
    if isinstance(e, httpx.HTTPStatusError):
        try:
            body = e.response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            err = body.get("error")
            if isinstance(err, dict) and err.get("message"):
                return err["message"]
        return f"Google Drive request failed with status code {e.response.status_code}"
    return str(e) or "Failed to initialize"


class DriveCatalog:
    """Lists the video files of a Drive folder."""

    def __init__(
        self,
        api_key: str,
        client: httpx.Client | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self.api_key = api_key
        self.page_size = page_size
        self._client = client or httpx.Client()

    def close(self):
        self._client.close()

    def _params(self, folder_id: str, page_token: str | None) -> dict:
        params = {
            "key": self.api_key,
            "q": f"'{folder_id}' in parents and mimeType contains 'video/'",
            "fields": "nextPageToken, files(id, name, mimeType)",
            "pageSize": self.page_size,
            "orderBy": "name",
            "supportsAllDrives": "true",
            "includeItemsFromAllDrives": "true",
        }
        if page_token:
            params["pageToken"] = page_token
        return params

    def list_videos(self, folder_id: str) -> list[Episode]:
        """Fetch every video in the folder, following pagination.

        Returned in fetch order. Any failed page aborts the whole listing.
        """
        files: list[dict] = []
        page_token = None
        while True:
            logger.info("Fetching videos from folder %s (page token: %s)", folder_id, page_token or "first page")
            try:
                resp = self._client.get(DRIVE_FILES_URL, params=self._params(folder_id, page_token))
                resp.raise_for_status()
                data = resp.json()
            except httpx.HTTPError as e:
                message = _error_message(e)
                logger.warning("Drive listing failed for %s: %s", folder_id, message)
                raise RemoteError(message) from e
            except ValueError as e:
                raise RemoteError(f"Invalid response from Google Drive: {e}") from e
            if not isinstance(data, dict):
                raise RemoteError("Invalid response from Google Drive")

            page = data.get("files") or []
            files.extend(page)
            logger.info("Fetched %d files, %d so far", len(page), len(files))
            page_token = data.get("nextPageToken")
            if not page_token:
                break

        logger.info("Total files found in %s: %d", folder_id, len(files))
        return [Episode.from_drive_file(f) for f in files]
