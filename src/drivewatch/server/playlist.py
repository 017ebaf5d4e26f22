"""Shared playlist state and the operations that move it.

There is exactly one playlist per server process. The controller keeps the
Watch2Gether room in step with the current index: each operation works out
its next state, pushes to the room, and only then commits locally. A room
that was created stays committed even if a later push fails, since it
already exists on the W2G side.

No locking: mutations assume one request at a time, last write wins.
"""

import logging
from dataclasses import dataclass, field

from drivewatch.server.drive import DriveCatalog, extract_folder_id
from drivewatch.server.episodes import Episode, sort_episodes
from drivewatch.server.errors import NotFoundError, ValidationError
from drivewatch.server.w2g import W2GClient

logger = logging.getLogger(__name__)

NO_VIDEOS_MESSAGE = "No videos found in folder. Make sure the folder is publicly accessible."


@dataclass
class PlaylistState:
    """Process-wide playlist record."""

    folder_id: str | None = None
    room_id: str | None = None
    episodes: tuple[Episode, ...] = field(default_factory=tuple)
    current_index: int = 0

    @property
    def initialized(self) -> bool:
        return bool(self.room_id) and bool(self.episodes)

    def current_episode(self) -> Episode | None:
        if not self.episodes:
            return None
        return self.episodes[self.current_index]

    def to_dict(self) -> dict:
        return {
            "roomId": self.room_id,
            "episodes": [ep.to_dict() for ep in self.episodes],
            "currentIndex": self.current_index,
        }


@dataclass(frozen=True)
class NowPlaying:
    """Result of play/navigate."""

    current_index: int
    episode: Episode

    def to_dict(self) -> dict:
        return {"currentIndex": self.current_index, "episode": self.episode.to_dict()}


class PlaylistController:
    """Runs initialize/play/navigate/new-room against one PlaylistState."""

    def __init__(self, state: PlaylistState, catalog: DriveCatalog, rooms: W2GClient):
        self.state = state
        self._catalog = catalog
        self._rooms = rooms

    def get_state(self) -> PlaylistState:
        return self.state

    def _ensure_room(self) -> str:
        if not self.state.room_id:
            self.state.room_id = self._rooms.create_room()
        return self.state.room_id

    def _require_initialized(self):
        if not self.state.initialized:
            raise NotFoundError("No playlist initialized", status_code=400)

    def initialize(self, folder_url: str) -> PlaylistState:
        """Load a Drive folder as the playlist and start its first episode.

        Reuses the existing room if there is one. Prior episodes are kept
        untouched unless the whole load, push included, succeeds.
        """
        folder_id = extract_folder_id(folder_url)
        logger.info("Extracted folder ID %s from %r", folder_id, folder_url)
        if not folder_id:
            raise ValidationError("Invalid Google Drive folder URL")

        episodes = tuple(sort_episodes(self._catalog.list_videos(folder_id)))
        logger.info("Videos found: %d", len(episodes))
        if not episodes:
            raise NotFoundError(NO_VIDEOS_MESSAGE)

        room_id = self._ensure_room()
        first = episodes[0]
        logger.info("Loading first episode: %s", first.name)
        self._rooms.sync_update(room_id, first.stream_url)

        self.state.folder_id = folder_id
        self.state.episodes = episodes
        self.state.current_index = 0
        return self.state

    def _push(self, index: int) -> NowPlaying:
        episode = self.state.episodes[index]
        logger.info("Playing episode %d: %s", index, episode.name)
        self._rooms.sync_update(self.state.room_id, episode.stream_url)
        self.state.current_index = index
        return NowPlaying(index, episode)

    def play(self, index: int) -> NowPlaying:
        """Jump to an episode. Always pushes, even if it is already current."""
        self._require_initialized()
        if index < 0 or index >= len(self.state.episodes):
            raise ValidationError("Invalid episode index")
        return self._push(index)

    def navigate(self, direction: str) -> NowPlaying:
        """Step to the next/previous episode, clamped to the list ends.

        Hitting either end is a no-op with no push.
        """
        self._require_initialized()
        index = self.state.current_index
        if direction == "next":
            index = min(index + 1, len(self.state.episodes) - 1)
        elif direction == "prev":
            index = max(index - 1, 0)
        else:
            raise ValidationError("Direction must be 'next' or 'prev'")
        if index == self.state.current_index:
            return NowPlaying(index, self.state.episodes[index])
        return self._push(index)

    def new_room(self) -> str:
        """Swap in a fresh room and load the current episode into it."""
        room_id = self._rooms.create_room()
        self.state.room_id = room_id
        logger.info("Switched to new room %s", room_id)
        episode = self.state.current_episode()
        if episode:
            self._rooms.sync_update(room_id, episode.stream_url)
        return room_id
