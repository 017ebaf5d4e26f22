"""Watch2Gether room API client."""

import logging

import httpx

from drivewatch.server.errors import RemoteError

logger = logging.getLogger(__name__)

W2G_API_URL = "https://api.w2g.tv"
W2G_ROOM_URL = "https://w2g.tv/rooms/{room_id}"
DEFAULT_PLACEHOLDER_URL = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"


def room_url(room_id: str) -> str:
    """Public link viewers open to join a room."""
    return W2G_ROOM_URL.format(room_id=room_id)


class W2GClient:
    """Creates rooms and changes what they are playing.

    Usage:
        w2g = W2GClient(api_key)
        room_id = w2g.create_room()
        w2g.sync_update(room_id, "https://drive.google.com/file/d/abc/preview")
    """

    def __init__(
        self,
        api_key: str,
        placeholder_url: str = DEFAULT_PLACEHOLDER_URL,
        bg_color: str = "#1a1a1a",
        bg_opacity: str = "90",
        client: httpx.Client | None = None,
    ):
        self.api_key = api_key
        self.placeholder_url = placeholder_url
        self.bg_color = bg_color
        self.bg_opacity = bg_opacity
        self._client = client or httpx.Client(base_url=W2G_API_URL)

    def close(self):
        self._client.close()

    def _post(self, path: str, data: dict) -> httpx.Response:
        try:
            resp = self._client.post(path, json=data)
            resp.raise_for_status()
            return resp
        except httpx.HTTPStatusError as e:
            raise RemoteError(f"Watch2Gether request failed ({e.response.status_code}): {path}") from e
        except httpx.HTTPError as e:
            raise RemoteError(f"Watch2Gether request failed: {e}") from e

    def create_room(self) -> str:
        """Create a room seeded with the placeholder video. Returns its stream key."""
        logger.info("Creating W2G room")
        resp = self._post("/rooms/create.json", {
            "w2g_api_key": self.api_key,
            "share": self.placeholder_url,
            "bg_color": self.bg_color,
            "bg_opacity": self.bg_opacity,
        })
        try:
            data = resp.json()
        except ValueError:
            data = None
        room_id = data.get("streamkey") if isinstance(data, dict) else None
        if not room_id:
            raise RemoteError("Watch2Gether did not return a room key")
        logger.info("W2G room created: %s", room_id)
        return room_id

    def sync_update(self, room_id: str, item_url: str):
        """Replace what the room is playing."""
        self._post(f"/rooms/{room_id}/sync_update", {
            "w2g_api_key": self.api_key,
            "item_url": item_url,
        })
        logger.info("Room %s now playing %s", room_id, item_url)
