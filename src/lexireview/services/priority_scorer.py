"""Review priority scoring for saved words."""
from datetime import date, datetime
from typing import Optional, Union

from lexireview.config import LearningSettings, settings
from lexireview.models.review_models import Difficulty, WordEntry


def _as_date(value: Union[date, datetime]) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def days_since_review(word: WordEntry, now: Union[date, datetime],
                      learning: Optional[LearningSettings] = None) -> int:
    """Whole days since the word was last reviewed.

    Words that were never reviewed count as ``never_reviewed_days`` old.
    """
    learning = learning or settings.learning
    if word.last_reviewed is None:
        return learning.never_reviewed_days
    return (_as_date(now) - _as_date(word.last_reviewed)).days


def score(word: WordEntry, now: Union[date, datetime],
          learning: Optional[LearningSettings] = None) -> int:
    """Compute the review priority of a word. Higher means review sooner.

    The manual difficult flag adds a fixed bonus, wrong answers raise the
    priority faster than correct answers lower it, and the time since the
    last review contributes up to ``recency_cap_days``.
    """
    learning = learning or settings.learning
    result = 0
    if word.difficulty == Difficulty.DIFFICULT:
        result += learning.difficult_bonus
    result += learning.wrong_weight * word.wrong_count
    result -= learning.correct_weight * word.correct_count
    result += min(days_since_review(word, now, learning), learning.recency_cap_days)
    return result
