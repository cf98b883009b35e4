"""Per-user storage of saved words."""
import logging
from datetime import date, datetime
from typing import List, Optional, Union

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from lexireview import monitoring
from lexireview.models.base import SessionLocal
from lexireview.models.models import SavedWord
from lexireview.models.review_models import (
    Difficulty,
    SaveResult,
    WordEntry,
    WriteResult,
    canonical_word,
    word_key,
)
from lexireview.services.answer_processor import answer_counter, review_date

logger = logging.getLogger(__name__)


def parse_difficulty(value: Optional[str]) -> Difficulty:
    """Stored difficulty flag; unknown or missing values read as normal."""
    try:
        return Difficulty(value or Difficulty.NORMAL.value)
    except ValueError:
        logger.warning(f"Unknown difficulty '{value}' read as normal")
        return Difficulty.NORMAL


def to_entry(row: SavedWord) -> WordEntry:
    """Convert a database row to a word entry."""
    return WordEntry(
        word=row.word,
        meaning=row.meaning,
        eli5=row.eli5 or "",
        example_sentence=row.example or "",
        difficulty=parse_difficulty(row.difficulty),
        correct_count=row.correct_count or 0,
        wrong_count=row.wrong_count or 0,
        last_reviewed=row.last_reviewed,
        date_added=row.date_added,
    )


def to_row(user_id: str, entry: WordEntry) -> SavedWord:
    """Convert a word entry to a new database row for ``user_id``."""
    return SavedWord(
        user_id=user_id,
        word=canonical_word(entry.word),
        word_key=word_key(entry.word),
        meaning=entry.meaning,
        eli5=entry.eli5,
        example=entry.example_sentence,
        difficulty=entry.difficulty.value,
        correct_count=entry.correct_count,
        wrong_count=entry.wrong_count,
        last_reviewed=entry.last_reviewed,
        date_added=entry.date_added,
    )


class WordStore:
    """Async access to a user's saved words.

    Failures never reach the caller: reads degrade to empty results and
    writes report that nothing was saved.
    """

    def __init__(self, session_factory: async_sessionmaker = SessionLocal):
        """Initialize the store with a session factory."""
        self.session_factory = session_factory

    def _authenticated(self, user_id: Optional[str], operation: str) -> bool:
        if not user_id:
            logger.info(f"User not authenticated - {operation} skipped")
            return False
        return True

    def _failed(self, operation: str, error: Exception) -> None:
        logger.error(f"Error in {operation}: {error}")
        monitoring.store_errors.labels(operation=operation).inc()

    async def _get_row(self, db: AsyncSession, user_id: str, word: str) -> Optional[SavedWord]:
        result = await db.execute(
            select(SavedWord).where(
                SavedWord.user_id == user_id,
                SavedWord.word_key == word_key(word),
            )
        )
        return result.scalar_one_or_none()

    async def list_words(self, user_id: Optional[str]) -> List[WordEntry]:
        """Get all words of a user, most recently added first."""
        if not self._authenticated(user_id, "list_words"):
            return []
        try:
            async with self.session_factory() as db:
                result = await db.execute(
                    select(SavedWord)
                    .where(SavedWord.user_id == user_id)
                    .order_by(SavedWord.date_added.desc(), SavedWord.id.desc())
                )
                return [to_entry(row) for row in result.scalars().all()]
        except SQLAlchemyError as e:
            self._failed("list_words", e)
            return []

    async def word_exists(self, user_id: Optional[str], word: str) -> bool:
        """Check whether the user already saved ``word``, ignoring case."""
        if not self._authenticated(user_id, "word_exists"):
            return False
        try:
            async with self.session_factory() as db:
                return await self._get_row(db, user_id, word) is not None
        except SQLAlchemyError as e:
            self._failed("word_exists", e)
            return False

    async def insert_word(self, user_id: Optional[str], entry: WordEntry) -> SaveResult:
        """Save a new word.

        Duplicates are rejected by the table's unique constraint, so two
        concurrent saves of the same word cannot both succeed.
        """
        if not self._authenticated(user_id, "insert_word"):
            return SaveResult.FAILED
        async with self.session_factory() as db:
            db.add(to_row(user_id, entry))
            try:
                await db.commit()
            except IntegrityError:
                await db.rollback()
                logger.info(f"Word already exists - skipping duplicate: {entry.word}")
                return SaveResult.CONFLICT
            except SQLAlchemyError as e:
                await db.rollback()
                self._failed("insert_word", e)
                return SaveResult.FAILED
        monitoring.words_saved.inc()
        logger.info(f"Word saved successfully: {entry.word}")
        return SaveResult.SAVED

    async def update_difficulty(self, user_id: Optional[str], word: str,
                                difficulty: Difficulty) -> WriteResult:
        """Set the difficulty flag of a saved word."""
        if not self._authenticated(user_id, "update_difficulty"):
            return WriteResult.FAILED
        try:
            async with self.session_factory() as db:
                row = await self._get_row(db, user_id, word)
                if row is None:
                    logger.warning(f"Word not found for difficulty update: {word}")
                    return WriteResult.FAILED
                row.difficulty = difficulty.value
                await db.commit()
                return WriteResult.OK
        except SQLAlchemyError as e:
            self._failed("update_difficulty", e)
            return WriteResult.FAILED

    async def record_answer(self, user_id: Optional[str], word: str, was_correct: bool,
                            now: Union[date, datetime]) -> Optional[WordEntry]:
        """Record a quiz answer and return the updated word.

        The counter is incremented in the UPDATE statement itself, so
        concurrent answers for the same word are all counted.
        """
        if not self._authenticated(user_id, "record_answer"):
            return None
        counter = answer_counter(was_correct)
        try:
            async with self.session_factory() as db:
                async with db.begin():
                    result = await db.execute(
                        update(SavedWord)
                        .where(
                            SavedWord.user_id == user_id,
                            SavedWord.word_key == word_key(word),
                        )
                        .values({
                            counter: getattr(SavedWord, counter) + 1,
                            "last_reviewed": review_date(now),
                        })
                        .execution_options(synchronize_session=False)
                    )
                    if result.rowcount == 0:
                        logger.warning(f"Word not found for answer: {word}")
                        return None
                    updated = to_entry(await self._get_row(db, user_id, word))
        except SQLAlchemyError as e:
            self._failed("record_answer", e)
            return None
        monitoring.answers_recorded.labels(result="correct" if was_correct else "wrong").inc()
        return updated

    async def delete_word(self, user_id: Optional[str], word: str) -> WriteResult:
        """Delete a word and its review history."""
        if not self._authenticated(user_id, "delete_word"):
            return WriteResult.FAILED
        try:
            async with self.session_factory() as db:
                result = await db.execute(
                    delete(SavedWord).where(
                        SavedWord.user_id == user_id,
                        SavedWord.word_key == word_key(word),
                    )
                )
                await db.commit()
        except SQLAlchemyError as e:
            self._failed("delete_word", e)
            return WriteResult.FAILED
        if result.rowcount == 0:
            logger.warning(f"Word not found for deletion: {word}")
            return WriteResult.FAILED
        return WriteResult.OK
