"""Progress statistics over a user's vocabulary."""
import math
from typing import List, Optional, Sequence

from lexireview.config import LearningSettings, settings
from lexireview.models.review_models import Difficulty, ProgressSnapshot, WordEntry


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up."""
    return int(math.floor(value + 0.5))


def is_mastered(word: WordEntry, learning: Optional[LearningSettings] = None) -> bool:
    """A word is mastered with enough correct answers at a high enough accuracy."""
    learning = learning or settings.learning
    if word.attempts == 0:
        return False
    return (
        word.correct_count >= learning.mastery_min_correct
        and word.correct_count / word.attempts >= learning.mastery_min_accuracy
    )


def is_weak(word: WordEntry) -> bool:
    """A word is weak when flagged difficult or answered wrong more than right."""
    return word.is_difficult or word.wrong_count > word.correct_count


def summarize(all_words: Sequence[WordEntry],
              learning: Optional[LearningSettings] = None) -> ProgressSnapshot:
    """Compute progress statistics for a collection of words."""
    snapshot = ProgressSnapshot(total_words=len(all_words))
    for word in all_words:
        snapshot.total_correct += word.correct_count
        snapshot.total_wrong += word.wrong_count
        if is_mastered(word, learning):
            snapshot.mastered_words += 1
        if is_weak(word):
            snapshot.weak_words += 1
        if word.is_difficult:
            snapshot.difficult_words += 1

    total_attempts = snapshot.total_correct + snapshot.total_wrong
    if total_attempts > 0:
        snapshot.accuracy = round_half_up(100 * snapshot.total_correct / total_attempts)
    return snapshot


def filter_words(all_words: Sequence[WordEntry], query: str = "",
                 difficulty: Optional[Difficulty] = None) -> List[WordEntry]:
    """Words whose text or meaning contains ``query``, ignoring case.

    ``difficulty`` of None keeps every difficulty.
    """
    needle = query.lower()
    return [
        word for word in all_words
        if (needle in word.word.lower() or needle in word.meaning.lower())
        and (difficulty is None or word.difficulty == difficulty)
    ]
