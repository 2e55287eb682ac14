#!/usr/bin/env python3
"""
Manual check against a running Klara backend

Usage:
    # liveness (no token needed)
    python run_notes.py health

    # list notes / show profile
    python run_notes.py notes --token <session token>
    KLARA_TOKEN=<session token> python run_notes.py profile

    # other backend
    python run_notes.py notes --base-url http://localhost:9000/api/v1
"""

import argparse
import logging
import os
import sys

from klara.api import NotesApi, UserApi
from klara.client import ApiClient
from klara.errors import KlaraError
from klara.log import setup_logging
from klara.session import session_manager


def main():
    parser = argparse.ArgumentParser(description="Klara client smoke checks")
    parser.add_argument("command", choices=["health", "notes", "profile"])
    parser.add_argument("--token", default=os.getenv("KLARA_TOKEN"), help="Bearer token (default: $KLARA_TOKEN)")
    parser.add_argument("--base-url", default=None, help="API root including /api/v1 (default: from settings)")
    parser.add_argument("--log-level", default="info", choices=["debug", "info", "warning", "error"], help="Log level")

    args = parser.parse_args()
    setup_logging(level=args.log_level)
    logger = logging.getLogger("run_notes")

    client = ApiClient(base_url=args.base_url)

    if args.command != "health" and not args.token:
        parser.error("a token is required (--token or KLARA_TOKEN)")

    def token_source():
        return args.token

    try:
        if args.command == "health":
            print(client.health())
        elif args.command == "notes":
            notes = NotesApi(client).get_notes(token_source)
            logger.info(f"📚 {len(notes)} notes")
            for note in notes:
                print(f"{note.id}  {note.updated_at or '-'}  {note.title or 'Untitled'}")
        else:
            profile = UserApi(client).get_profile(token_source)
            print(profile.model_dump_json(indent=2))
    except KlaraError as e:
        logger.error(f"❌ {e}")
        sys.exit(1)
    finally:
        session_manager.stop_session_extension()


if __name__ == "__main__":
    main()
