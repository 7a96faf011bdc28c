"""CLI for reading per-user and global question statistics."""

from __future__ import annotations

import argparse
import json

from dotenv import load_dotenv

load_dotenv()

from fitqa.config import FitqaSettings, configure_logging
from fitqa.stats.repository import MAX_PERIOD_DAYS, QuestionRepository


def _print_error(error: str, message: str) -> None:
    print(json.dumps({"success": False, "error": error, "message": message}, ensure_ascii=False))


def main(argv: list[str] | None = None) -> int:
    try:
        settings = FitqaSettings.from_env()
    except ValueError as error:
        _print_error("invalid configuration", str(error))
        return 1

    parser = argparse.ArgumentParser(description="Show classified question statistics")
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--user-id", type=int, help="User to report on")
    target.add_argument("--global", dest="global_stats", action="store_true", help="Aggregate over all users")
    parser.add_argument("--db-path", default=str(settings.db_path), help="SQLite database path")
    parser.add_argument(
        "--days",
        type=int,
        default=None,
        help=f"Restrict user stats to the last N days (1-{MAX_PERIOD_DAYS})",
    )
    parser.add_argument("--preferences", action="store_true", help="Include the user's primary interest")
    args = parser.parse_args(argv)

    configure_logging(settings.log_level)

    try:
        with QuestionRepository(args.db_path) as repository:
            repository.seed_categories()
            if args.global_stats:
                payload = repository.get_global_stats().to_dict()
            else:
                if args.days is not None:
                    payload = repository.get_user_weekly_stats(args.user_id, days=args.days).to_dict()
                else:
                    payload = {"stats": repository.get_user_stats(args.user_id).to_dict()}
                if args.preferences:
                    payload["preferences"] = repository.get_user_preferences(args.user_id).to_dict()
    except ValueError as error:
        _print_error("invalid input", str(error))
        return 2

    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
