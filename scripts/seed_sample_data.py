"""Create the tables and a few completed sample sessions for local development."""

import asyncio
import os
import sys
from datetime import datetime, timedelta, timezone

# Add parent directory to path so we can import app modules
sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from loguru import logger
from sqlalchemy import func, select

from app.db.session import async_session_maker, create_tables, engine
from app.models import Exercise, WorkoutLog, WorkoutLogExercise, WorkoutLogSet

SAMPLE_EXERCISES = [
    ("Bench Press", "Chest"),
    ("Barbell Row", "Back"),
    ("Squat", "Legs"),
    ("Overhead Press", "Shoulders"),
    ("Push-up", "Chest"),
]

# (days ago, exercise name, weights per set); None = bodyweight set
SAMPLE_SESSIONS = [
    (14, "Bench Press", [50, 55, 60]),
    (14, "Squat", [80, 90, 90]),
    (7, "Bench Press", [55, 60, 62.5]),
    (7, "Push-up", [None, None, None]),
    (2, "Bench Press", [60, 62.5, 65]),
    (2, "Barbell Row", [50, 55, 55]),
]


async def main():
    await create_tables()
    async with async_session_maker() as session:
        existing = await session.execute(select(func.count(Exercise.id)))
        if existing.scalar():
            logger.info("Exercises already present, skipping seed.")
            await engine.dispose()
            return

        exercises = {name: Exercise(name=name, muscle_group=group) for name, group in SAMPLE_EXERCISES}
        session.add_all(exercises.values())
        await session.flush()

        now = datetime.now(timezone.utc)
        logs: dict[int, WorkoutLog] = {}
        order_in_log: dict[int, int] = {}
        for days_ago, name, weights in SAMPLE_SESSIONS:
            log = logs.get(days_ago)
            if log is None:
                start = now - timedelta(days=days_ago)
                log = WorkoutLog(
                    name=f"Sample workout - {start:%d/%m/%Y}",
                    start_time=start,
                    end_time=start + timedelta(minutes=55),
                )
                session.add(log)
                await session.flush()
                logs[days_ago] = log
            order_in_log[days_ago] = order_in_log.get(days_ago, 0) + 1
            exercise = exercises[name]
            log_exercise = WorkoutLogExercise(
                log_id=log.id,
                exercise_id=exercise.id,
                exercise_name=exercise.name,
                order=order_in_log[days_ago],
            )
            session.add(log_exercise)
            await session.flush()
            for number, weight in enumerate(weights, start=1):
                session.add(
                    WorkoutLogSet(
                        log_exercise_id=log_exercise.id,
                        set_number=number,
                        reps=10 if weight is not None else 20,
                        weight=weight,
                        completed=True,
                    )
                )

        # An unfinished session: never counted in progress summaries
        open_log = WorkoutLog(name="Unfinished workout", start_time=now)
        session.add(open_log)
        await session.commit()
        logger.info("Seeded {} exercises and {} sessions", len(exercises), len(logs) + 1)

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
