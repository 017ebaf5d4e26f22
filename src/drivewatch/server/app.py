"""Flask REST API for DriveWatch.

Maps the playlist operations onto JSON endpoints. The playlist state is
created here, once per app, and shared by every request handler.
"""

import logging

from flask import Flask, jsonify, request

from drivewatch.config import Config
from drivewatch.server import schemas
from drivewatch.server.drive import DriveCatalog
from drivewatch.server.errors import DriveWatchError
from drivewatch.server.playlist import PlaylistController, PlaylistState
from drivewatch.server.w2g import W2GClient

logger = logging.getLogger(__name__)


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _error(e: DriveWatchError):
    return jsonify({"error": str(e)}), e.status_code


def create_app(
    config: Config | None = None,
    catalog: DriveCatalog | None = None,
    rooms: W2GClient | None = None,
) -> Flask:
    """Create and configure the Flask application.

    Args:
        config: Full configuration. Uses defaults if None.
        catalog: Drive listing client. Built from config.google if None.
        rooms: Watch2Gether client. Built from config.w2g if None.
    """
    if config is None:
        config = Config()

    app = Flask(__name__)
    app.config["DRIVEWATCH"] = config

    if catalog is None:
        catalog = DriveCatalog(config.google.api_key)
    if rooms is None:
        rooms = W2GClient(
            config.w2g.api_key,
            placeholder_url=config.w2g.placeholder_url,
            bg_color=config.w2g.bg_color,
            bg_opacity=config.w2g.bg_opacity,
        )

    state = PlaylistState()
    playlist = PlaylistController(state, catalog, rooms)

    # JSON errors instead of HTML 500 pages
    @app.errorhandler(Exception)
    def handle_exception(e):
        from werkzeug.exceptions import HTTPException
        if isinstance(e, HTTPException):
            return e
        logger.exception("Unhandled error: %s", e)
        return jsonify({"error": str(e) or "Internal server error"}), 500

    @app.after_request
    def add_cors_headers(response):
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
        response.headers["Access-Control-Allow-Headers"] = "Content-Type"
        return response

    app.playlist = playlist
    app.catalog = catalog
    app.rooms = rooms

    @app.route("/api/health")
    def health():
        from drivewatch.__about__ import __version__
        return jsonify({"status": "ok", "version": __version__})

    @app.route("/api/init", methods=["POST"])
    def init():
        """Load a Drive folder as the shared playlist."""
        try:
            folder_url = schemas.parse_init(_json_body())
            logger.info("Received folder URL: %s", folder_url)
            s = playlist.initialize(folder_url)
        except DriveWatchError as e:
            logger.warning("Init failed: %s", e)
            return _error(e)
        return jsonify(s.to_dict())

    @app.route("/api/state")
    def get_state():
        return jsonify(playlist.get_state().to_dict())

    @app.route("/api/play", methods=["POST"])
    def play():
        """Play an episode by its position in the playlist."""
        try:
            index = schemas.parse_play(_json_body())
            result = playlist.play(index)
        except DriveWatchError as e:
            return _error(e)
        return jsonify(result.to_dict())

    @app.route("/api/navigate", methods=["POST"])
    def navigate():
        try:
            direction = schemas.parse_navigate(_json_body())
            result = playlist.navigate(direction)
        except DriveWatchError as e:
            return _error(e)
        return jsonify(result.to_dict())

    @app.route("/api/new-room", methods=["POST"])
    def new_room():
        """Replace the W2G room, keeping the playlist."""
        try:
            room_id = playlist.new_room()
        except DriveWatchError as e:
            logger.warning("New room failed: %s", e)
            return _error(e)
        return jsonify({"roomId": room_id})

    return app
