"""Utility script to issue a bearer token for calling the API."""

from __future__ import annotations

import argparse
from datetime import timedelta

from fleetdata.config import get_settings
from fleetdata.infrastructure.security import create_access_token


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Print a signed access token whose subject is the given actor.",
    )
    parser.add_argument("subject", help="Actor identifier stored as the token subject")
    parser.add_argument(
        "--minutes",
        type=int,
        default=None,
        help="Lifetime in minutes (default: ACCESS_TOKEN_EXPIRE_MINUTES)",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    minutes = args.minutes or get_settings().access_token_expire_minutes
    print(create_access_token({"sub": args.subject}, timedelta(minutes=minutes)))


if __name__ == "__main__":
    main()
