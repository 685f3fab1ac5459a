#!/usr/bin/env python3
"""
Database management script.
Creates or resets the schema and seeds the first administrator account.
"""

import argparse
import asyncio
import logging
import os
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from cityhom.config import settings
from cityhom.database import engine, Base, AsyncSessionLocal
from cityhom.models.user import User, UserRole
from cityhom.repositories.user import UserRepository

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def create_schema(target_engine: AsyncEngine = engine) -> None:
    """Create every table that does not exist yet."""
    async with target_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("All tables created")


async def reset_schema(target_engine: AsyncEngine = engine) -> None:
    """Drop and recreate all tables. Refused outside development and testing."""
    if not (settings.is_development or settings.is_testing):
        raise RuntimeError("Database reset is only allowed in development or test mode")

    logger.warning("Resetting database - all data will be lost!")
    async with target_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        logger.info("All tables dropped")
        await conn.run_sync(Base.metadata.create_all)
        logger.info("All tables created")


async def seed_admin(
    email: str,
    password: str,
    phone_number: int,
    name: str = "system administrator",
    session_factory: async_sessionmaker = AsyncSessionLocal
) -> Optional[User]:
    """
    Create a super_admin account unless the email is already registered.

    Returns:
        The created user, or None when it already existed
    """
    async with session_factory() as session:
        repo = UserRepository(session)
        if await repo.get_by_email(email):
            logger.info(f"User {email} already exists, skipping seed")
            return None

        admin = await repo.create_user({
            "name": name.strip().lower(),
            "email": email.strip().lower(),
            "password": password,
            "phone_number": phone_number,
            "roles": [UserRole.SUPER_ADMIN.value],
            "is_verified": True,
            "is_email_verified": True,
        })
        logger.info(f"Super admin created: {admin.email}")
        logger.warning("Please change the seeded admin password after the first login!")
        return admin


def main():
    """CLI interface for schema management."""
    parser = argparse.ArgumentParser(description="CityHom database management")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("create", help="Create all tables")

    reset_parser = subparsers.add_parser("reset", help="Drop and recreate all tables (development only)")
    reset_parser.add_argument("--confirm", action="store_true", help="Confirm database reset")

    seed_parser = subparsers.add_parser("seed-admin", help="Create the first super admin")
    seed_parser.add_argument("--email", default=os.getenv("ADMIN_EMAIL"), help="Admin email (ADMIN_EMAIL)")
    seed_parser.add_argument("--password", default=os.getenv("ADMIN_PASSWORD"), help="Admin password (ADMIN_PASSWORD)")
    seed_parser.add_argument("--phone-number", type=int, default=os.getenv("ADMIN_PHONE_NUMBER"),
                             help="Admin phone number (ADMIN_PHONE_NUMBER)")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    if args.command == "create":
        asyncio.run(create_schema())

    elif args.command == "reset":
        if not args.confirm:
            print("Database reset requires --confirm flag")
            return
        asyncio.run(reset_schema())

    elif args.command == "seed-admin":
        if not (args.email and args.password and args.phone_number):
            parser.error("seed-admin needs an email, a password and a phone number")
        asyncio.run(seed_admin(args.email, args.password, int(args.phone_number)))


if __name__ == "__main__":
    main()
