#!/usr/bin/env python3
"""
Database maintenance script.
Creates and drops tables and seeds demo data.
"""

import asyncio
import sys
import argparse
import logging
from decimal import Decimal

from marketplace_api.config import Settings, get_settings
from marketplace_api.database import create_engine, create_session_factory, create_tables, drop_tables
from marketplace_api.models.listing import ListingCategory, ListingCondition
from marketplace_api.repositories.listing import ListingRepository
from marketplace_api.repositories.user import UserRepository

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "demopassword123"

DEMO_LISTINGS = [
    {
        "title": "Desk",
        "description": "Wood desk",
        "price": Decimal("40.00"),
        "condition": ListingCondition.USED,
        "category": ListingCategory.FURNITURE,
    },
    {
        "title": "Road bike",
        "description": "Aluminium frame, 56cm, recently serviced",
        "price": Decimal("250.00"),
        "condition": ListingCondition.USED,
        "category": ListingCategory.SPORTS,
    },
    {
        "title": "Wireless headphones",
        "description": "Sealed in box",
        "price": Decimal("89.99"),
        "condition": ListingCondition.NEW,
        "category": ListingCategory.ELECTRONICS,
    },
]


class MigrationManager:
    """Manages the schema and demo data for the configured database."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.engine = create_engine(settings)
        self.session_factory = create_session_factory(self.engine)

    async def create(self) -> None:
        logger.info("Creating database tables")
        await create_tables(self.engine)

    async def drop(self) -> None:
        logger.warning("Dropping database tables - all data will be lost!")
        await drop_tables(self.engine, self.settings)

    async def reset(self) -> None:
        """Drop and recreate all tables, then seed."""
        if not self.settings.is_development and not self.settings.is_testing:
            raise RuntimeError("Database reset is only allowed in development or test mode")

        await self.drop()
        await self.create()
        await self.seed()
        logger.info("Database reset completed")

    async def seed(self) -> None:
        """Seed a demo user with a few listings. Skipped if the demo user exists."""
        async with self.session_factory() as session:
            user_repo = UserRepository(session)

            if await user_repo.get_by_email(DEMO_EMAIL):
                logger.info("Demo user already exists, skipping seed")
                return

            user = await user_repo.create_user({
                "first_name": "Demo",
                "last_name": "User",
                "email": DEMO_EMAIL,
                "password": DEMO_PASSWORD,
            })

            listing_repo = ListingRepository(session)
            for listing in DEMO_LISTINGS:
                await listing_repo.create_listing({**listing, "owner_id": user.id})

            logger.info("Database seeded successfully")
            logger.info(f"  Email: {DEMO_EMAIL}")
            logger.info(f"  Password: {DEMO_PASSWORD}")
            logger.info(f"  Listings: {len(DEMO_LISTINGS)}")

    async def close(self) -> None:
        await self.engine.dispose()


async def run(command: str, settings: Settings) -> None:
    manager = MigrationManager(settings)
    try:
        if command == "create":
            await manager.create()
        elif command == "drop":
            await manager.drop()
        elif command == "reset":
            await manager.reset()
        elif command == "seed":
            await manager.create()
            await manager.seed()
    finally:
        await manager.close()


def main():
    """Main CLI interface for database maintenance."""
    parser = argparse.ArgumentParser(description="Marketplace database management")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("create", help="Create missing tables")
    subparsers.add_parser("drop", help="Drop all tables (not allowed in production)")
    subparsers.add_parser("seed", help="Create tables and seed demo data")

    reset_parser = subparsers.add_parser("reset", help="Drop, recreate and seed (development only)")
    reset_parser.add_argument("--confirm", action="store_true", help="Confirm database reset")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    if args.command == "reset" and not args.confirm:
        print("Database reset requires --confirm flag")
        return

    try:
        asyncio.run(run(args.command, get_settings()))
    except Exception as e:
        logger.error(f"Command failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
