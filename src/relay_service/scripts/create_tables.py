"""One-time script: create the participants and messages tables in Postgres."""
from __future__ import annotations

import asyncio
import logging

from relay_service.config import settings
from relay_service.infrastructure.db import models  # noqa: F401
from relay_service.infrastructure.db.base import Base
from relay_service.infrastructure.db.session import engine
from relay_service.log_config import configure_logging

logger = logging.getLogger(__name__)


async def create_tables() -> None:
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info(
            "Created tables %s in database '%s'",
            ", ".join(sorted(Base.metadata.tables)),
            settings.POSTGRES_DB,
        )
    finally:
        await engine.dispose()


def main() -> None:
    configure_logging(settings.LOG_LEVEL)
    asyncio.run(create_tables())


if __name__ == "__main__":
    main()
