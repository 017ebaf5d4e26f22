"""HTTP client for talking to a running DriveWatch server.

Used by the `drivewatch` remote-control command.
"""

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0  # init walks every page of a Drive folder


class DriveWatchAPIError(Exception):
    """Error communicating with the DriveWatch server."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


def _server_error(resp: httpx.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and data.get("error"):
        return data["error"]
    return f"HTTP {resp.status_code}"


class DriveWatchClient:
    """HTTP client for the DriveWatch REST API.

    Usage:
        client = DriveWatchClient("http://localhost:5050")
        client.init("https://drive.google.com/drive/folders/abc")
        client.next()
    """

    def __init__(self, base_url: str = "http://localhost:5050", transport: httpx.BaseTransport | None = None):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(base_url=self.base_url, timeout=DEFAULT_TIMEOUT, transport=transport)

    def close(self):
        self._client.close()

    def _request(self, method: str, path: str, data: dict | None = None) -> Any:
        try:
            resp = self._client.request(method, path, json=data)
        except httpx.ConnectError:
            raise DriveWatchAPIError(f"Cannot connect to {self.base_url}")
        except httpx.TimeoutException:
            raise DriveWatchAPIError("Request timed out")
        if resp.is_error:
            raise DriveWatchAPIError(_server_error(resp), resp.status_code)
        return resp.json()

    def health(self) -> dict:
        return self._request("GET", "/api/health")

    def get_state(self) -> dict:
        return self._request("GET", "/api/state")

    def init(self, folder_url: str) -> dict:
        return self._request("POST", "/api/init", {"folderUrl": folder_url})

    def play(self, index: int) -> dict:
        return self._request("POST", "/api/play", {"index": index})

    def navigate(self, direction: str) -> dict:
        return self._request("POST", "/api/navigate", {"direction": direction})

    def next(self) -> dict:
        return self.navigate("next")

    def prev(self) -> dict:
        return self.navigate("prev")

    def new_room(self) -> dict:
        return self._request("POST", "/api/new-room")
