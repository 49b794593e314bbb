#!/usr/bin/env python3
"""Create an admin account, e.g. on a fresh database.

Usage (from the project directory):
    python tools/create_admin.py --email admin@example.com --password secret123
    python tools/create_admin.py -e admin@example.com -p secret123 --name "Site Admin"
"""

import argparse
import asyncio
import sys

from dotenv import load_dotenv

load_dotenv()

from taskdesk.db import async_session_maker, engine  # noqa: E402
from taskdesk.models import UserRole  # noqa: E402
from taskdesk.schemas.auth import UserCreate  # noqa: E402
from taskdesk.services.user_service import UserService  # noqa: E402


async def create_admin(email: str, password: str, full_name: str | None) -> int:
    """Create the account; returns a process exit code."""
    data = UserCreate(email=email, password=password, full_name=full_name, role=UserRole.ADMIN)

    try:
        async with async_session_maker() as session:
            try:
                user = await UserService(session).create(data)
            except ValueError as e:
                print(f"ERROR: {e}")
                return 1
            await session.commit()
    finally:
        await engine.dispose()

    print(f"Admin created: {user.email} ({user.id})")
    return 0


def main():
    parser = argparse.ArgumentParser(description="Create a Taskdesk admin account.")
    parser.add_argument("--email", "-e", required=True, help="Admin email address")
    parser.add_argument("--password", "-p", required=True, help="Password (min 8 characters)")
    parser.add_argument("--name", "-n", default=None, help="Full name")
    args = parser.parse_args()

    sys.exit(asyncio.run(create_admin(args.email, args.password, args.name)))


if __name__ == "__main__":
    main()
