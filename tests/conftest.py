"""Shared test fixtures for DriveWatch test suite."""

import pytest

from drivewatch.config import Config
from drivewatch.server.app import create_app
from drivewatch.server.episodes import Episode
from drivewatch.server.errors import RemoteError
from drivewatch.server.playlist import PlaylistController, PlaylistState


class FakeCatalog:
    """Stands in for DriveCatalog. folders maps folder ID -> Drive file dicts."""

    def __init__(self):
        self.folders: dict[str, list[dict]] = {}
        self.error: Exception | None = None
        self.calls: list[str] = []

    def list_videos(self, folder_id):
        self.calls.append(folder_id)
        if self.error:
            raise self.error
        return [Episode.from_drive_file(f) for f in self.folders.get(folder_id, [])]


class FakeRooms:
    """Stands in for W2GClient. Records every room created and every push."""

    def __init__(self):
        self.created: list[str] = []
        self.pushes: list[tuple[str, str]] = []
        self.fail_create = False
        self.fail_push = False

    def create_room(self):
        if self.fail_create:
            raise RemoteError("Watch2Gether request failed (500): /rooms/create.json")
        room_id = f"room{len(self.created) + 1}"
        self.created.append(room_id)
        return room_id

    def sync_update(self, room_id, item_url):
        if self.fail_push:
            raise RemoteError(f"Watch2Gether request failed (404): /rooms/{room_id}/sync_update")
        self.pushes.append((room_id, item_url))


TWO_EPISODES = [
    {"id": "f10", "name": "10.mp4"},
    {"id": "f2", "name": "2.mp4"},
]


@pytest.fixture
def catalog():
    cat = FakeCatalog()
    cat.folders["ABC123"] = list(TWO_EPISODES)
    return cat


@pytest.fixture
def rooms():
    return FakeRooms()


@pytest.fixture
def controller(catalog, rooms):
    """A PlaylistController over fresh state and fake remotes."""
    return PlaylistController(PlaylistState(), catalog, rooms)


@pytest.fixture
def app(catalog, rooms):
    """Create a Flask test app wired to fake remotes."""
    app = create_app(Config(), catalog=catalog, rooms=rooms)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    """Create a Flask test client."""
    return app.test_client()


@pytest.fixture
def loaded_client(client):
    """Test client with the two-episode ABC123 folder already loaded."""
    resp = client.post("/api/init", json={"folderUrl": "https://drive.google.com/drive/folders/ABC123"})
    assert resp.status_code == 200
    return client
