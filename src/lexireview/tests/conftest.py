"""Test configuration."""
import os
import random
from datetime import date, timedelta
from pathlib import Path

import pytest
import pytest_asyncio
from dotenv import load_dotenv
from faker import Faker
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

# Set test environment before any imports
os.environ["ENV"] = "test"

# Load test environment variables
test_env_path = Path(__file__).parent.parent.parent.parent / ".env.test"
load_dotenv(test_env_path)

# Import after environment setup
from lexireview.models.base import Base
from lexireview.models.review_models import Difficulty, WordEntry
from lexireview.services.word_store import WordStore

fake = Faker()

TODAY = date(2024, 6, 15)


def make_word(
    word: str = None,
    meaning: str = None,
    difficulty: Difficulty = Difficulty.NORMAL,
    correct_count: int = 0,
    wrong_count: int = 0,
    last_reviewed: date = None,
    date_added: date = TODAY - timedelta(days=40),
) -> WordEntry:
    """Create a word entry with fake text where none is given."""
    return WordEntry(
        word=word or fake.unique.word().capitalize(),
        meaning=meaning or fake.unique.sentence(nb_words=6),
        eli5=fake.sentence(),
        example_sentence=fake.sentence(),
        difficulty=difficulty,
        correct_count=correct_count,
        wrong_count=wrong_count,
        last_reviewed=last_reviewed,
        date_added=date_added,
    )


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source."""
    return random.Random(1234)


@pytest.fixture
def words() -> list[WordEntry]:
    """A small vocabulary with distinct meanings."""
    return [
        make_word("Happy", "feeling pleasure"),
        make_word("Brave", "ready to face danger"),
        make_word("Swift", "moving very fast"),
        make_word("Quiet", "making little noise"),
        make_word("Eager", "wanting to do something very much"),
        make_word("Vivid", "very bright and strong"),
    ]


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    """Session factory over a fresh database for each test."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'words.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    await engine.dispose()


@pytest_asyncio.fixture
async def broken_session_factory(tmp_path):
    """Session factory over a database without tables."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
    yield async_sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
def store(session_factory) -> WordStore:
    """Create a word store instance."""
    return WordStore(session_factory)
