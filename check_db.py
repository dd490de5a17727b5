import asyncio
import os
import sys

from loguru import logger
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

# Add project root to sys.path when run as a plain script
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from app.db.session import async_session_maker, engine

TABLES = [
    "exercises",
    "workout_templates",
    "workout_template_exercises",
    "workout_logs",
    "workout_log_exercises",
    "workout_log_sets",
]


async def check_data():
    async with async_session_maker() as session:
        logger.info("Checking tables: {}", TABLES)
        for table in TABLES:
            try:
                result = await session.execute(text(f"SELECT count(*) FROM {table}"))
                count = result.scalar()
                logger.info("Table '{}' row count: {}", table, count)
            except SQLAlchemyError as e:
                logger.error("Error querying {}: {}", table, e)
                await session.rollback()

        result = await session.execute(
            text("SELECT count(*) FROM workout_logs WHERE end_time IS NOT NULL")
        )
        logger.info("Completed workout logs: {}", result.scalar())
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(check_data())
