"""
Seed the default ERP permissions (idempotent).

Usage:
    python -m apps.access.scripts.seed_permissions
"""
import asyncio
import sys

from loguru import logger

from framework.config import settings
from framework.database.manager import DatabaseManager
from framework.logging.logger import LogConfig
from framework.repository.unit_of_work import UnitOfWork
from apps.access.service import AccessService, DEFAULT_PERMISSIONS


async def seed() -> int:
    manager = DatabaseManager.get_instance()
    try:
        async with manager.sql.session_factory() as session:
            service = AccessService(UnitOfWork(session=session))
            return await service.seed_default_permissions()
    finally:
        await manager.sql.disconnect()


def main() -> int:
    LogConfig.setup_script_logging("seed_permissions")
    logger.info(f"Seeding {len(DEFAULT_PERMISSIONS)} permissions into {settings.DB_NAME}")
    try:
        created = asyncio.run(seed())
    except Exception as e:
        logger.error(f"Seeding permissions failed: {str(e)}")
        return 1
    logger.info(f"Seeded {created} new permission(s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
