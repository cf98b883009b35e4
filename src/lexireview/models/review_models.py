"""Models for review-related data structures."""
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional


class Difficulty(Enum):
    """Manual difficulty flag set by the user."""
    NORMAL = "normal"
    DIFFICULT = "difficult"


class SaveResult(Enum):
    """Outcome of saving a new word."""
    SAVED = "saved"
    CONFLICT = "conflict"  # Word already in the user's vocabulary
    FAILED = "failed"  # Store unavailable or user not authenticated


class WriteResult(Enum):
    """Outcome of a write against an existing word."""
    OK = "ok"
    FAILED = "failed"


class SessionOutcome(Enum):
    """Outcome of trying to start a review session."""
    READY = "ready"
    NOT_ENOUGH_DATA = "not_enough_data"


def canonical_word(text: str) -> str:
    """Display form of a word: stripped, first letter capitalized."""
    text = text.strip()
    return text[:1].upper() + text[1:]


def word_key(text: str) -> str:
    """Case-insensitive key used for per-user uniqueness."""
    return text.strip().lower()


@dataclass
class WordEntry:
    """A word saved by a user together with its review history."""
    word: str
    meaning: str
    eli5: str = ""
    example_sentence: str = ""
    difficulty: Difficulty = Difficulty.NORMAL
    correct_count: int = 0
    wrong_count: int = 0
    last_reviewed: Optional[date] = None
    date_added: date = field(default_factory=date.today)

    @property
    def attempts(self) -> int:
        return self.correct_count + self.wrong_count

    @property
    def is_difficult(self) -> bool:
        return self.difficulty == Difficulty.DIFFICULT


@dataclass
class Question:
    """A multiple-choice question about the meaning of a word."""
    word: WordEntry
    options: List[str]
    correct_answer: str

    def is_correct(self, answer: str) -> bool:
        return answer == self.correct_answer


@dataclass
class ProgressSnapshot:
    """Summary statistics over a user's whole vocabulary."""
    total_words: int = 0
    mastered_words: int = 0
    weak_words: int = 0
    difficult_words: int = 0
    accuracy: int = 0
    total_correct: int = 0
    total_wrong: int = 0

    @property
    def mastery_percent(self) -> int:
        """Share of the vocabulary that is mastered, in whole percent."""
        if self.total_words == 0:
            return 0
        return int(100 * self.mastered_words / self.total_words + 0.5)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "totalWords": self.total_words,
            "masteredWords": self.mastered_words,
            "weakWords": self.weak_words,
            "difficultWords": self.difficult_words,
            "accuracy": self.accuracy,
            "totalCorrect": self.total_correct,
            "totalWrong": self.total_wrong,
        }


@dataclass
class AnswerResult:
    """Result of answering one question in a session."""
    word: str
    correct: bool
    saved: bool = True
