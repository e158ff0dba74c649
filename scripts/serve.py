#!/usr/bin/env python3
"""
run the faraway api.

usage:
    python scripts/serve.py
    python scripts/serve.py --host 0.0.0.0 --port 8080

reads credentials from the environment:
    OPENAI_API_KEY, REDIS_URL, MIGRATE_SECRET
plus optional FARAWAY_* overrides (see faraway/config.py). .env.local and
.env in the working directory are loaded too.
"""

import argparse
from dataclasses import replace
import sys
from pathlib import Path

# add parent dir to path so we can import faraway
sys.path.insert(0, str(Path(__file__).parent.parent))

import uvicorn

from faraway.app import create_app
from faraway.config import Config
from faraway.errors import ConfigError
from faraway.logutil import setup_logging
from faraway.service import build_service


def main():
    parser = argparse.ArgumentParser(description="run the faraway api")
    parser.add_argument("--host", type=str, default="127.0.0.1", help="bind address (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="port (default: 8000)")
    parser.add_argument(
        "--scale-policy",
        choices=["sigmoid", "linear"],
        default=None,
        help="override the score scale policy",
    )
    args = parser.parse_args()

    try:
        config = Config.from_env()
        if args.scale_policy:
            config = replace(config, scale_policy=args.scale_policy)
    except ConfigError as e:
        print(f"error: {e}")
        sys.exit(1)

    setup_logging(config.log_level, config.log_format)

    if not config.openai_api_key:
        print("error: OPENAI_API_KEY is not set")
        sys.exit(1)
    if not config.migrate_secret:
        print("note: MIGRATE_SECRET is not set, /api/migrate will always answer 401")

    print(f"scale: {config.scale}")
    print(f"leaderboard key: {config.leaderboard_key!r}")

    app = create_app(build_service(config))
    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
