"""Multiple-choice question construction."""
import logging
import random
from typing import List, Optional, Sequence

from lexireview.config import LearningSettings, settings
from lexireview.models.review_models import Question, WordEntry

logger = logging.getLogger(__name__)


def distractor_candidates(target: WordEntry, pool: Sequence[WordEntry]) -> List[str]:
    """Distinct meanings from ``pool`` that differ from the target's meaning."""
    seen = set()
    candidates = []
    for word in pool:
        if word.meaning == target.meaning or word.meaning in seen:
            continue
        seen.add(word.meaning)
        candidates.append(word.meaning)
    return candidates


def build_question(
    target: WordEntry,
    pool: Sequence[WordEntry],
    rng: Optional[random.Random] = None,
    learning: Optional[LearningSettings] = None,
) -> Optional[Question]:
    """Build a question asking for the meaning of ``target``.

    Returns None when the pool does not hold enough other meanings to make
    the wrong options.
    """
    learning = learning or settings.learning
    rng = rng or random.Random()
    needed = learning.options_per_question - 1

    candidates = distractor_candidates(target, pool)
    if len(candidates) < needed:
        logger.debug(f"Not enough distractors for '{target.word}': {len(candidates)} < {needed}")
        return None

    rng.shuffle(candidates)
    options = candidates[:needed] + [target.meaning]
    rng.shuffle(options)
    return Question(word=target, options=options, correct_answer=target.meaning)


def build_questions(
    selected: Sequence[WordEntry],
    pool: Sequence[WordEntry],
    rng: Optional[random.Random] = None,
    learning: Optional[LearningSettings] = None,
) -> List[Question]:
    """Build one question per selected word, keeping selection order.

    Words for which no question can be built are left out.
    """
    rng = rng or random.Random()
    questions = []
    for word in selected:
        question = build_question(word, pool, rng, learning)
        if question is None:
            logger.info(f"Skipping '{word.word}': question could not be built")
            continue
        questions.append(question)
    return questions
