"""Plain-language rewriting of dictionary definitions."""
import re
from datetime import date
from typing import List, Optional, Pattern, Tuple

from lexireview.models.review_models import Difficulty, WordEntry, canonical_word

MAX_MEANING_LENGTH = 120


def _rule(words: str, replacement: str) -> Tuple[Pattern[str], str]:
    return re.compile(rf"\b({words})\b", re.IGNORECASE), replacement


# Applied in order
SIMPLIFY_RULES: List[Tuple[Pattern[str], str]] = [
    _rule("pertaining to|relating to|characterized by", "about"),
    _rule("utilize|employ", "use"),
    _rule("commence|initiate", "start"),
    _rule("terminate|conclude", "end"),
    _rule("sufficient", "enough"),
    _rule("subsequently", "then"),
    _rule("approximately", "about"),
    _rule("numerous", "many"),
    _rule("obtain|acquire", "get"),
    _rule("possess", "have"),
]

PART_OF_SPEECH_PREFIXES = {
    "noun": "This is a thing or idea.",
    "verb": "This is something you do.",
    "adjective": "This describes how something is.",
    "adverb": "This tells you more about how something happens.",
}

EXAMPLE_TEMPLATES = {
    "adjective": [
        "She feels {word} today.",
        "The {word} children are playing outside.",
        "I am {word} when I see my friends.",
    ],
    "noun": [
        "The {word} is very important.",
        "I saw a {word} yesterday.",
        "Everyone needs {word} in their life.",
    ],
    "verb": [
        "I {word} every day.",
        "She likes to {word}.",
        "They {word} together.",
    ],
}

DEFAULT_EXAMPLE_TEMPLATES = [
    "I learned about {word}.",
    "{Word} is interesting.",
    "People often talk about {word}.",
]

FALLBACK_EXAMPLE_TEMPLATE = "This is an example with {word}."


def simplify(definition: str) -> str:
    """Rewrite a definition with simpler words, keeping only the first sentence if long."""
    simple = definition
    for pattern, replacement in SIMPLIFY_RULES:
        simple = pattern.sub(replacement, simple)

    if len(simple) > MAX_MEANING_LENGTH:
        simple = re.split(r"[.!?]+", simple)[0].strip() + "."
    return simple


def explain_simply(definition: str, part_of_speech: str = "") -> str:
    simple = simplify(definition)
    prefix = PART_OF_SPEECH_PREFIXES.get(part_of_speech.lower())
    if prefix is None:
        return simple
    return f"{prefix} {simple}"


def example_sentences(word: str, api_example: Optional[str] = None,
                      part_of_speech: str = "", count: int = 3) -> List[str]:
    """Example sentences for a word, starting with the dictionary's own example."""
    examples = [api_example] if api_example else []
    templates = EXAMPLE_TEMPLATES.get(part_of_speech.lower(), DEFAULT_EXAMPLE_TEMPLATES)
    # Each slot uses the template at its own position
    while len(examples) < count:
        index = len(examples)
        template = templates[index] if index < len(templates) else FALLBACK_EXAMPLE_TEMPLATE
        examples.append(template.format(word=word, Word=canonical_word(word)))
    return examples[:count]


def make_entry(word: str, definition: str, part_of_speech: str = "",
               example: Optional[str] = None, today: Optional[date] = None) -> WordEntry:
    """Create a fresh vocabulary entry from a dictionary lookup."""
    return WordEntry(
        word=canonical_word(word),
        meaning=simplify(definition),
        eli5=explain_simply(definition, part_of_speech),
        example_sentence=example_sentences(word, example, part_of_speech)[0],
        difficulty=Difficulty.NORMAL,
        correct_count=0,
        wrong_count=0,
        last_reviewed=None,
        date_added=today or date.today(),
    )
