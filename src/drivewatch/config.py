"""Configuration loader for DriveWatch."""

import os
from dataclasses import dataclass, field
from pathlib import Path

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # Python 3.10 fallback

from drivewatch.server.w2g import DEFAULT_PLACEHOLDER_URL


@dataclass
class ServerConfig:
    """Configuration for the HTTP server."""

    host: str = "0.0.0.0"
    port: int = 5050


@dataclass
class GoogleConfig:
    """Google Drive API access."""

    api_key: str = ""


@dataclass
class W2GConfig:
    """Watch2Gether API access and room appearance."""

    api_key: str = ""
    placeholder_url: str = DEFAULT_PLACEHOLDER_URL  # shown until a playlist is loaded
    bg_color: str = "#1a1a1a"
    bg_opacity: str = "90"


@dataclass
class Config:
    """Top-level DriveWatch configuration."""

    server: ServerConfig = field(default_factory=ServerConfig)
    google: GoogleConfig = field(default_factory=GoogleConfig)
    w2g: W2GConfig = field(default_factory=W2GConfig)


def load_config(path: str | None = None) -> Config:
    """Load configuration from drivewatch.toml.

    Search order:
    1. Explicit path argument
    2. ./drivewatch.toml
    3. ~/.config/drivewatch/drivewatch.toml
    4. Defaults

    GOOGLE_API_KEY and W2G_API_KEY fill in any key the file leaves empty.
    """
    search_paths = []
    if path:
        search_paths.append(Path(path))
    search_paths.extend([
        Path("drivewatch.toml"),
        Path.home() / ".config" / "drivewatch" / "drivewatch.toml",
    ])

    config = Config()
    for p in search_paths:
        if p.exists():
            with open(p, "rb") as f:
                data = tomllib.load(f)
            config = _parse_config(data)
            break

    return _apply_env(config, os.environ)


def _parse_config(data: dict) -> Config:
    """Parse a TOML dict into Config."""
    config = Config()

    if "server" in data:
        s = data["server"]
        config.server = ServerConfig(
            host=s.get("host", config.server.host),
            port=s.get("port", config.server.port),
        )

    if "google" in data:
        g = data["google"]
        config.google = GoogleConfig(api_key=g.get("api_key", ""))

    if "w2g" in data:
        w = data["w2g"]
        config.w2g = W2GConfig(
            api_key=w.get("api_key", ""),
            placeholder_url=w.get("placeholder_url", config.w2g.placeholder_url),
            bg_color=w.get("bg_color", config.w2g.bg_color),
            bg_opacity=str(w.get("bg_opacity", config.w2g.bg_opacity)),
        )

    return config


def _apply_env(config: Config, env) -> Config:
    """Fill empty API keys from the environment."""
    if not config.google.api_key:
        config.google.api_key = env.get("GOOGLE_API_KEY", "")
    if not config.w2g.api_key:
        config.w2g.api_key = env.get("W2G_API_KEY", "")
    return config
