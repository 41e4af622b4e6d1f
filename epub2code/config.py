"""
config.py
Tunables for the codeifier and loading of the locale lexicons.
"""

import json
import re
from dataclasses import dataclass
from pathlib import Path

LEXICON_DIR = Path(__file__).parent / "lexicons"
DEFAULT_LOCALE = "en"

# Paragraph segmentation
CHUNK_THRESHOLD = 300
CHUNK_TARGET = 200
CHUNK_MIN_FLUSH = 50
PRESERVATION_RATIO = 0.9

# Line wrapping inside renderers
WRAP_WIDTH = 80
WRAP_THRESHOLD = 0.7

# Anti-repetition
HISTORY_SIZE = 10
HISTORY_WINDOW = 5

# File-like scaffolding
IMPORT_PROBABILITY = 0.3
EXPORT_PROBABILITY = 0.5
EXPORT_MIN_LINES = 10

SENTENCE_GROUPS = 2
MAX_LIST_ITEMS = 3


@dataclass
class CodeifierSettings:
    locale: str = DEFAULT_LOCALE
    chunk_threshold: int = CHUNK_THRESHOLD
    chunk_target: int = CHUNK_TARGET
    chunk_min_flush: int = CHUNK_MIN_FLUSH
    preservation_ratio: float = PRESERVATION_RATIO
    wrap_width: int = WRAP_WIDTH
    wrap_threshold: float = WRAP_THRESHOLD
    history_size: int = HISTORY_SIZE
    history_window: int = HISTORY_WINDOW
    import_probability: float = IMPORT_PROBABILITY
    export_probability: float = EXPORT_PROBABILITY
    export_min_lines: int = EXPORT_MIN_LINES
    sentence_groups: int = SENTENCE_GROUPS
    max_list_items: int = MAX_LIST_ITEMS


class Lexicon:
    """
    Compiled word lists for one locale.
    verbs / nouns are regex fragments matched against whole lowercase words,
    interrogatives against the start of a chunk, conjunctions after , or ;
    """

    def __init__(self, verbs, nouns, interrogatives, conjunctions, locale=None):
        self.locale = locale
        self.verb_re = _whole_word(verbs)
        self.noun_re = _whole_word(nouns)
        self.interrogative_re = re.compile(
            r"^(?:" + "|".join(interrogatives) + r")\b", re.IGNORECASE
        ) if interrogatives else None
        self.conjunction_re = re.compile(
            r"[,;]\s+(?:" + "|".join(conjunctions) + r")\s", re.IGNORECASE
        ) if conjunctions else None

    def is_verb(self, word: str) -> bool:
        return bool(self.verb_re and self.verb_re.match(word))

    def is_noun(self, word: str) -> bool:
        return bool(self.noun_re and self.noun_re.match(word))

    @classmethod
    def from_dict(cls, data: dict, locale=None) -> "Lexicon":
        return cls(
            verbs=data.get("verbs", []),
            nouns=data.get("nouns", []),
            interrogatives=data.get("interrogatives", []),
            conjunctions=data.get("conjunctions", []),
            locale=locale,
        )


def _whole_word(patterns):
    if not patterns:
        return None
    return re.compile(r"^(?:" + "|".join(patterns) + r")$")


_LEXICON_CACHE = {}


def load_lexicon(locale: str = DEFAULT_LOCALE, path=None) -> Lexicon:
    """Load a lexicon by locale name, or from an explicit JSON file path."""
    if path is not None:
        with open(path, "r", encoding="utf-8") as f:
            return Lexicon.from_dict(json.load(f), locale=locale)

    if locale not in _LEXICON_CACHE:
        lex_path = LEXICON_DIR / f"{locale}.json"
        if not lex_path.is_file():
            raise ValueError(f"No lexicon for locale: {locale}")
        with open(lex_path, "r", encoding="utf-8") as f:
            _LEXICON_CACHE[locale] = Lexicon.from_dict(json.load(f), locale=locale)
    return _LEXICON_CACHE[locale]


def available_locales() -> list:
    return sorted(p.stem for p in LEXICON_DIR.glob("*.json"))
