# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Create a user in the configured database."""

from __future__ import annotations

import argparse
import getpass
import sys

from authcore.infrastructure.container import Container
from authcore.infrastructure.db import init_db
from authcore.shared.errors import AppError
from authcore.shared.logging import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create an authcore user")
    parser.add_argument("username")
    parser.add_argument("--email", required=True)
    parser.add_argument("--name", default="")
    parser.add_argument(
        "--password",
        help="Password; prompted for when omitted",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()
    init_db()

    password = args.password
    confirm = password
    if password is None:
        password = getpass.getpass("Password: ")
        confirm = getpass.getpass("Password (again): ")

    container = Container()
    try:
        user = container.register_user_use_case.execute(
            name=args.name,
            email=args.email,
            username=args.username,
            password=password,
            password_confirm=confirm,
        )
    except AppError as exc:
        print(f"error: {exc.code}", file=sys.stderr)
        return 1

    print(f"created user id={user.id} username={user.username}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
