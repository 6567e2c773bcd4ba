"""
Notekeeper Backend — Database Seeder
======================================

What:  Fills the notes table with generated sample notes.
How:   NoteFactory builds validated NoteCreate payloads; seed() stores them
       through SQLAlchemyNoteRepository in a single transaction.
Who:   Developers, from the backend directory:

           python -m app.seed --count 25
           python -m app.seed --count 5 --user-id 3 --create-tables
"""

import argparse
import asyncio
import logging
import random
import sys
from typing import List, Optional

from app.config import settings
from app.database import async_session_factory, create_tables, dispose_engine
from app.repositories.notes import SQLAlchemyNoteRepository
from app.schemas.note import NoteCreate

logger = logging.getLogger(__name__)

TOPICS = [
    "Groceries", "Meeting", "Reading list", "Ideas", "Travel",
    "Recipe", "Workout", "Budget", "Project", "Reminder",
]

WORDS = (
    "lorem ipsum dolor sit amet consectetur adipiscing elit sed do eiusmod "
    "tempor incididunt ut labore et dolore magna aliqua enim ad minim veniam"
).split()


class NoteFactory:
    """Builds plausible note payloads; pass `seed` for repeatable output."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._random = random.Random(seed)
        self._sequence = 0

    def _sentence(self, min_words: int = 6, max_words: int = 14) -> str:
        words = self._random.choices(WORDS, k=self._random.randint(min_words, max_words))
        return " ".join(words).capitalize() + "."

    def make(self, user_id: Optional[int] = None) -> NoteCreate:
        self._sequence += 1
        title = f"{self._random.choice(TOPICS)} #{self._sequence}"
        body = " ".join(self._sentence() for _ in range(self._random.randint(1, 4)))
        return NoteCreate(title=title, body=body, user_id=user_id)

    def make_many(self, count: int, user_id: Optional[int] = None) -> List[NoteCreate]:
        return [self.make(user_id=user_id) for _ in range(count)]


async def seed(count: int, user_id: Optional[int] = None, factory: Optional[NoteFactory] = None) -> int:
    """Insert `count` generated notes and return how many were stored."""
    factory = factory or NoteFactory()
    async with async_session_factory() as session:
        repository = SQLAlchemyNoteRepository(session)
        for payload in factory.make_many(count, user_id=user_id):
            await repository.add(payload)
        await session.commit()
    return count


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m app.seed",
        description="Insert generated sample notes into the configured database.",
    )
    parser.add_argument("--count", type=positive_int, default=20, help="number of notes to create (default: 20)")
    parser.add_argument("--user-id", type=positive_int, default=None, help="owner reference for every note")
    parser.add_argument("--seed", type=int, default=None, help="random seed for repeatable content")
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="create the schema first (development databases without Alembic)",
    )
    return parser


async def _run(args: argparse.Namespace) -> int:
    try:
        if args.create_tables:
            await create_tables()
        created = await seed(args.count, user_id=args.user_id, factory=NoteFactory(args.seed))
    finally:
        await dispose_engine()
    logger.info("Seeded %d notes into %s", created, settings.database_url.split("@")[-1])
    return created


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(message)s")
    asyncio.run(_run(args))
    return 0


if __name__ == "__main__":
    sys.exit(main())
