"""CLI entry point for bootstrapping an Admin account.

Role changes are only accepted from Admins, so the first one has to be
created out of band.

Usage:
    python -m access_hub.cli.create_admin --username alice --password s3cret
    access-hub-create-admin --username alice --password s3cret

Exit Codes:
    0 - Success: user created, or existing user promoted to Admin
    1 - Failure: error encountered; database state unchanged
"""

import argparse
import asyncio
import logging
import sys

from sqlalchemy.ext.asyncio import AsyncSession

from access_hub.config import settings
from access_hub.models.user import User, UserRole
from access_hub.services.logging import setup_server_logging
from access_hub.services.user_service import UserService

logger = logging.getLogger(__name__)


async def create_admin(session: AsyncSession, username: str, password: str) -> User:
    """Create an Admin, or promote an existing user of that name to Admin.

    The password is only used when a new account is created.
    """
    users = UserService(session)
    existing = await users.get_by_username(username)
    if existing is None:
        return await users.create_user(username, password, role=UserRole.ADMIN)
    if existing.role == UserRole.ADMIN:
        logger.info("User %s is already an Admin", username)
        return existing
    return await users.update_role(existing.id, UserRole.ADMIN)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create or promote an Admin user.")
    parser.add_argument("--username", required=True)
    parser.add_argument("--password", required=True)
    return parser.parse_args(argv)


async def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the admin bootstrap CLI.

    Returns:
        Exit code: 0 for success, 1 for failure
    """
    args = parse_args(argv)
    setup_server_logging(settings.log_file, settings.log_level)

    from access_hub.services import AsyncSessionLocal, engine, init_models

    try:
        await init_models()
        async with AsyncSessionLocal() as session:
            user = await create_admin(session, args.username, args.password)
        logger.info("Admin ready: %s (%s)", user.username, user.id)
        return 0
    except Exception as e:
        logger.error("Admin bootstrap failed: %s", e, exc_info=True)
        return 1
    finally:
        await engine.dispose()


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
