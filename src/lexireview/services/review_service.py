"""Service for running review sessions over a user's vocabulary."""
import logging
import random
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from typing import List, Optional, Union

from lexireview import monitoring
from lexireview.config import LearningSettings, settings
from lexireview.models.review_models import (
    AnswerResult,
    Difficulty,
    ProgressSnapshot,
    Question,
    SaveResult,
    SessionOutcome,
    WordEntry,
    WriteResult,
)
from lexireview.services import answer_processor
from lexireview.services.progress_service import filter_words, round_half_up, summarize
from lexireview.services.quiz_generator import build_questions
from lexireview.services.review_selector import select_for_review
from lexireview.services.word_store import WordStore

logger = logging.getLogger(__name__)

NOT_ENOUGH_WORDS_MESSAGE = (
    "You need at least {count} words with different meanings in your vocabulary "
    "to take a test. Start by searching and saving some words!"
)
NOT_ENOUGH_QUESTIONS_MESSAGE = (
    "Not enough different meanings to build a test. Save a few more words and try again."
)


class SessionFinishedError(Exception):
    """Raised when answering a session that has no questions left."""


class AnswerPendingError(Exception):
    """Raised when the current question is answered again before its answer is saved."""


class ReviewSession:
    """One bounded sequence of questions, answered strictly in order."""

    def __init__(self, store: WordStore, user_id: str, questions: List[Question]):
        self.store = store
        self.user_id = user_id
        self.questions = questions
        self.position = 0
        self.results: List[AnswerResult] = []
        self._answer_pending = False

    @property
    def current(self) -> Optional[Question]:
        """The question being shown, or None once the session is over."""
        if self.is_finished:
            return None
        return self.questions[self.position]

    @property
    def is_finished(self) -> bool:
        return self.position >= len(self.questions)

    @property
    def correct_count(self) -> int:
        return sum(1 for result in self.results if result.correct)

    @property
    def score_percent(self) -> int:
        if not self.results:
            return 0
        return round_half_up(100 * self.correct_count / len(self.results))

    async def answer(self, choice: str, now: Optional[Union[date, datetime]] = None) -> AnswerResult:
        """Answer the current question and move on to the next one.

        The answer is written to the store before the next question becomes
        current. A failed write is reported in the result, not raised. Only
        one answer per question is accepted.
        """
        question = self.current
        if question is None:
            raise SessionFinishedError("No questions left in this session")
        if self._answer_pending:
            raise AnswerPendingError(f"'{question.word.word}' is already being answered")

        self._answer_pending = True
        try:
            now = now or datetime.now(UTC)
            correct = question.is_correct(choice)
            updated = await self.store.record_answer(self.user_id, question.word.word, correct, now)
            if updated is None:
                logger.warning(f"Answer for '{question.word.word}' was not saved")

            result = AnswerResult(word=question.word.word, correct=correct, saved=updated is not None)
            self.results.append(result)
            self.position += 1
        finally:
            self._answer_pending = False
        return result


@dataclass
class SessionStart:
    """Result of asking for a new review session."""
    outcome: SessionOutcome
    session: Optional[ReviewSession] = None
    message: str = ""
    words: List[WordEntry] = field(default_factory=list)


class ReviewService:
    """Service for selecting words, building quizzes and tracking progress."""

    def __init__(self, store: WordStore, rng: Optional[random.Random] = None,
                 learning: Optional[LearningSettings] = None):
        """Initialize the service with a word store and a random source."""
        self.store = store
        self.rng = rng or random.Random()
        self.learning = learning or settings.learning

    async def start_session(self, user_id: Optional[str], count: Optional[int] = None,
                            now: Optional[Union[date, datetime]] = None) -> SessionStart:
        """Select the words most in need of review and build their questions."""
        if count is None:
            count = self.learning.session_size
        now = now or datetime.now(UTC)

        vocabulary = await self.store.list_words(user_id)
        distinct_meanings = {word.meaning for word in vocabulary}
        if len(distinct_meanings) < self.learning.min_vocabulary:
            logger.info(f"Session refused for user {user_id}: {len(distinct_meanings)} distinct meanings")
            monitoring.sessions_refused.inc()
            return SessionStart(
                outcome=SessionOutcome.NOT_ENOUGH_DATA,
                message=NOT_ENOUGH_WORDS_MESSAGE.format(count=self.learning.min_vocabulary),
                words=vocabulary,
            )

        selected = select_for_review(vocabulary, count, now, self.rng, self.learning)
        questions = build_questions(selected, vocabulary, self.rng, self.learning)
        if len(questions) < self.learning.min_questions:
            logger.info(f"Session refused for user {user_id}: only {len(questions)} questions")
            monitoring.sessions_refused.inc()
            return SessionStart(
                outcome=SessionOutcome.NOT_ENOUGH_DATA,
                message=NOT_ENOUGH_QUESTIONS_MESSAGE,
                words=vocabulary,
            )

        logger.info(f"Starting review session for user {user_id} with {len(questions)} questions")
        monitoring.sessions_started.inc()
        return SessionStart(
            outcome=SessionOutcome.READY,
            session=ReviewSession(self.store, user_id, questions),
            words=vocabulary,
        )

    async def get_progress(self, user_id: Optional[str]) -> ProgressSnapshot:
        """Summarize the user's vocabulary as it is stored right now."""
        return summarize(await self.store.list_words(user_id), self.learning)

    async def add_word(self, user_id: Optional[str], entry: WordEntry) -> SaveResult:
        """Save a looked-up word to the user's vocabulary."""
        return await self.store.insert_word(user_id, entry)

    async def set_difficulty(self, user_id: Optional[str], word: str,
                             difficulty: Difficulty) -> WriteResult:
        """Set the manual difficulty flag without touching review history."""
        return await self.store.update_difficulty(user_id, word, difficulty)

    async def toggle_difficulty(self, user_id: Optional[str], entry: WordEntry) -> Difficulty:
        """Flip the difficulty of ``entry``; returns the difficulty now stored."""
        new_difficulty = answer_processor.toggle_difficulty(entry.difficulty)
        result = await self.store.update_difficulty(user_id, entry.word, new_difficulty)
        if result == WriteResult.OK:
            return new_difficulty
        return entry.difficulty

    async def remove_word(self, user_id: Optional[str], word: str) -> WriteResult:
        """Delete a word and discard its history."""
        return await self.store.delete_word(user_id, word)

    async def search_vocabulary(self, user_id: Optional[str], query: str = "",
                                difficulty: Optional[Difficulty] = None) -> List[WordEntry]:
        """List the user's words matching ``query``, optionally of one difficulty."""
        return filter_words(await self.store.list_words(user_id), query, difficulty)
