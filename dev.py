"""One-command developer entrypoint.

Starts the Socket.IO game server. The browser page connects to it, sends
button clicks and key presses, and draws whatever the server sends back.
Press Ctrl+C to stop.
"""
from __future__ import annotations

import argparse
import logging
import os


def main():
    parser = argparse.ArgumentParser(description="Run the snake game server for development")
    parser.add_argument("--host", default=os.environ.get("HOST", "127.0.0.1"), help="Host interface")
    parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", 5000)), help="Server port")
    parser.add_argument("--frame-rate", type=int, default=None,
                        help="Frames per second of the tick poll loop (default: FRAME_RATE or 60)")
    parser.add_argument("--debug", action="store_true", help="Verbose logging and Flask debug mode")
    args = parser.parse_args()

    # Imported here so --help works without the server stack configured
    from server.app import app, socketio, set_frame_rate

    if args.frame_rate is not None:
        set_frame_rate(args.frame_rate)
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    print(f"[dev] Starting server on http://{args.host}:{args.port}")
    socketio.run(
        app,
        host=args.host,
        port=args.port,
        debug=args.debug,
        use_reloader=False,
        log_output=args.debug
    )


if __name__ == "__main__":
    main()
