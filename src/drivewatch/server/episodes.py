"""Episodes resolved from a Drive folder and their playback order."""

import re
import unicodedata
from dataclasses import dataclass

DRIVE_PREVIEW_URL = "https://drive.google.com/file/d/{file_id}/preview"

_NUMBER_RE = re.compile(r"(\d+)")


def stream_url_for(file_id: str) -> str:
    """Embeddable preview URL for a Drive file."""
    return DRIVE_PREVIEW_URL.format(file_id=file_id)


@dataclass(frozen=True)
class Episode:
    """One playable video file from the folder."""

    id: str
    name: str
    stream_url: str

    @classmethod
    def from_drive_file(cls, data: dict) -> "Episode":
        return cls(id=data["id"], name=data.get("name", ""), stream_url=stream_url_for(data["id"]))

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name}


def episode_number(name: str) -> int:
    """First run of digits in a name, or 0 if there is none."""
    m = _NUMBER_RE.search(name)
    return int(m.group(1)) if m else 0


def _natural_key(name: str) -> tuple:
    # Strip accents and case, then split so digit runs compare by value.
    folded = unicodedata.normalize("NFKD", name)
    folded = "".join(c for c in folded if not unicodedata.combining(c)).casefold()
    parts = _NUMBER_RE.split(folded)
    return tuple(int(p) if i % 2 else p for i, p in enumerate(parts))


def sort_key(episode: Episode) -> tuple:
    return (episode_number(episode.name), _natural_key(episode.name))


def sort_episodes(episodes) -> list[Episode]:
    """Order episodes by leading number, then by natural name order.

    "2.mp4" sorts before "10.mp4", and "Ep 3 - b" before "ep 3 - C".
    Episodes with equal keys keep their fetch order.
    """
    return sorted(episodes, key=sort_key)
