"""Mastery state updates for quiz answers and difficulty changes."""
from dataclasses import replace
from datetime import date, datetime
from typing import Union

from lexireview.models.review_models import Difficulty, WordEntry


def answer_counter(was_correct: bool) -> str:
    """Name of the counter an answer increments."""
    return "correct_count" if was_correct else "wrong_count"


def review_date(now: Union[date, datetime]) -> date:
    """Calendar day an answer given at ``now`` is recorded on."""
    return now.date() if isinstance(now, datetime) else now


def apply_answer(word: WordEntry, was_correct: bool, now: Union[date, datetime]) -> WordEntry:
    """Return ``word`` updated with one more recorded answer.

    Exactly one counter grows by one and ``last_reviewed`` becomes the
    calendar date of ``now``. Nothing else changes.
    """
    counter = answer_counter(was_correct)
    return replace(word, **{counter: getattr(word, counter) + 1}, last_reviewed=review_date(now))


def apply_difficulty(word: WordEntry, value: Difficulty) -> WordEntry:
    """Return ``word`` with a new difficulty flag; counters are kept."""
    return replace(word, difficulty=value)


def toggle_difficulty(value: Difficulty) -> Difficulty:
    """Flip between normal and difficult."""
    if value == Difficulty.DIFFICULT:
        return Difficulty.NORMAL
    return Difficulty.DIFFICULT
