"""CLI entry points for DriveWatch.

drivewatch-server: Runs the Flask server
drivewatch: Remote control for a running server
"""

import argparse
import logging
import sys


def run_server():
    """Entry point for drivewatch-server command."""
    parser = argparse.ArgumentParser(
        description="DriveWatch server - watch a Google Drive folder together on Watch2Gether"
    )
    parser.add_argument(
        "--host", default=None, help="Host to bind to (default: 0.0.0.0)"
    )
    parser.add_argument(
        "--port", type=int, default=None, help="Port to listen on (default: 5050)"
    )
    parser.add_argument(
        "--config", default=None, help="Path to drivewatch.toml config file"
    )
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug mode"
    )
    parser.add_argument(
        "--log-level", default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: INFO)"
    )
    parser.add_argument(
        "--quiet", action="store_true",
        help="Suppress per-request werkzeug logs"
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    from drivewatch.config import load_config
    from drivewatch.server.app import create_app

    config = load_config(args.config)

    # CLI args override config file
    if args.host:
        config.server.host = args.host
    if args.port:
        config.server.port = args.port

    # httpx logs full request URLs at INFO, and Drive URLs carry the API key
    logging.getLogger("httpx").setLevel(logging.WARNING)

    log = logging.getLogger("drivewatch")
    if not config.google.api_key:
        log.warning("No Google API key configured; folder loads will fail")
    if not config.w2g.api_key:
        log.warning("No Watch2Gether API key configured; room calls will fail")

    app = create_app(config)

    if args.quiet:
        logging.getLogger("werkzeug").setLevel(logging.WARNING)

    log.info("DriveWatch server starting on %s:%d", config.server.host, config.server.port)

    app.run(
        host=config.server.host,
        port=config.server.port,
        debug=args.debug,
        threaded=True,
        use_reloader=False,
    )


def format_state(state: dict) -> str:
    """Render /api/state output for the terminal."""
    from drivewatch.server.w2g import room_url

    lines = []
    room_id = state.get("roomId")
    lines.append(f"Room: {room_url(room_id)}" if room_id else "Room: (none)")
    episodes = state.get("episodes", [])
    if not episodes:
        lines.append("No playlist loaded.")
    current = state.get("currentIndex", 0)
    for i, ep in enumerate(episodes):
        marker = ">" if i == current else " "
        lines.append(f"{marker} {i:3d}  {ep['name']}")
    return "\n".join(lines)


def run_remote(argv: list[str] | None = None) -> int:
    """Entry point for drivewatch command. Controls a server via HTTP API."""
    from drivewatch.api_client import DriveWatchAPIError, DriveWatchClient
    from drivewatch.server.w2g import room_url

    parser = argparse.ArgumentParser(
        description="DriveWatch remote control"
    )
    parser.add_argument(
        "--server", default="http://localhost:5050",
        help="DriveWatch server URL (default: http://localhost:5050)"
    )
    sub = parser.add_subparsers(dest="command")

    p_init = sub.add_parser("init", help="Load a Google Drive folder as the playlist")
    p_init.add_argument("folder_url", help="Drive folder URL or ID")

    sub.add_parser("state", help="Show the room and playlist")

    p_play = sub.add_parser("play", help="Play an episode by index")
    p_play.add_argument("index", type=int, help="Episode index (0-based)")

    sub.add_parser("next", help="Play the next episode")
    sub.add_parser("prev", help="Play the previous episode")
    sub.add_parser("new-room", help="Create a fresh Watch2Gether room")

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 1

    client = DriveWatchClient(args.server)
    try:
        if args.command == "init":
            state = client.init(args.folder_url)
            print(f"Loaded {len(state['episodes'])} episodes")
            print(format_state(state))
        elif args.command == "state":
            print(format_state(client.get_state()))
        elif args.command == "play":
            result = client.play(args.index)
            print(f"Playing {result['currentIndex']}: {result['episode']['name']}")
        elif args.command in ("next", "prev"):
            result = client.navigate(args.command)
            print(f"Playing {result['currentIndex']}: {result['episode']['name']}")
        elif args.command == "new-room":
            result = client.new_room()
            print(f"New room: {room_url(result['roomId'])}")
    except DriveWatchAPIError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        client.close()
    return 0


def main():
    sys.exit(run_remote())
