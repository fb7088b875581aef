"""Main entry point for the Jangi game server."""

import argparse
import logging
import os
import uvicorn

from jangi.config import Settings

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Jangi Server")
    parser.add_argument(
        "--depth",
        "-d",
        type=int,
        default=None,
        help="AI search depth in plies (default: 3)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the AI's random fallback move",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--host",
        type=str,
        default="0.0.0.0",
        help="Host to bind to (default: 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        "-p",
        type=int,
        default=8000,
        help="Port to bind to (default: 8000)",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )

    args = parser.parse_args()

    # Pass settings to the app (and reloaded workers) through the environment
    if args.depth is not None:
        os.environ["JANGI_DEPTH"] = str(args.depth)
    if args.seed is not None:
        os.environ["JANGI_SEED"] = str(args.seed)
    if args.log_level is not None:
        os.environ["JANGI_LOG_LEVEL"] = args.log_level

    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    print(f"AI side: {settings.ai_side.name}, depth: {settings.depth}, seed: {settings.seed}")

    uvicorn.run("api:app", host=args.host, port=args.port, reload=args.reload)
