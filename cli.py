"""
Command line helpers for local development.

Usage:
    python cli.py seed-demo --email me@example.com --password test --full-name "Moe Enis"
"""

import argparse
import asyncio
import logging
import sys

from core.database import AsyncSessionLocal, engine
from models.user import UserType
from schemas.auth import UserRegister
from services.authentication_service import (
    EmailAlreadyRegistered,
    authenticate_user,
    register_user,
)
from services.demo_data import DemoDataService

logger = logging.getLogger(__name__)


async def seed_demo(email: str, password: str, full_name: str = None) -> int:
    """Register (or log in as) a patient and fill the account with demo history."""
    async with AsyncSessionLocal() as session:
        try:
            user = await register_user(
                session,
                UserRegister(email=email, password=password, user_type=UserType.PATIENT, full_name=full_name),
            )
            print(f"Registered patient {user.email}")
        except EmailAlreadyRegistered:
            user = await authenticate_user(session, email, password)
            if not user:
                print("Account exists but the password does not match", file=sys.stderr)
                return 1
            print(f"Using existing account {user.email}")

        if user.user_type != UserType.PATIENT:
            print("Demo data can only be generated for patients", file=sys.stderr)
            return 1

        summary = await DemoDataService(session).regenerate(user)

    await engine.dispose()

    print(f"Falls: {summary['falls_generated']}")
    print(f"Exercise weeks: {summary['exercise_weeks_generated']}")
    print(f"Screenings: {summary['screenings_generated']}")
    print(f"Data period: {summary['data_period']}")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="FallGuard development helpers")
    subparsers = parser.add_subparsers(dest="command", required=True)

    seed = subparsers.add_parser("seed-demo", help="create a patient with demo data")
    seed.add_argument("--email", required=True)
    seed.add_argument("--password", required=True)
    seed.add_argument("--full-name", default=None)

    args = parser.parse_args(argv)

    if args.command == "seed-demo":
        return asyncio.run(seed_demo(args.email, args.password, args.full_name))
    return 1


if __name__ == "__main__":
    sys.exit(main())
