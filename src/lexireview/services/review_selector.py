"""Selection of the words to test in a review session."""
import logging
import random
from datetime import date, datetime
from typing import List, Optional, Sequence, Union

from lexireview.config import LearningSettings, settings
from lexireview.models.review_models import WordEntry
from lexireview.services.priority_scorer import score

logger = logging.getLogger(__name__)


def select_for_review(
    all_words: Sequence[WordEntry],
    count: int,
    now: Union[date, datetime],
    rng: Optional[random.Random] = None,
    learning: Optional[LearningSettings] = None,
) -> List[WordEntry]:
    """Pick up to ``count`` words that most need re-testing.

    Each word's priority score gets a small random jitter so near-tied words
    reorder between sessions while urgent words still come first.
    """
    learning = learning or settings.learning
    rng = rng or random.Random()
    if not all_words or count <= 0:
        return []

    amplitude = learning.jitter_amplitude
    scored = [
        (score(word, now, learning) + (rng.random() - 0.5) * amplitude, index)
        for index, word in enumerate(all_words)
    ]
    scored.sort(key=lambda item: item[0], reverse=True)

    selected = [all_words[index] for _, index in scored[:count]]
    logger.debug(f"Selected {len(selected)} of {len(all_words)} words for review")
    return selected
