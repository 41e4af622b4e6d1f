"""
keywords.py
Pulls candidate identifier words out of a chunk of prose.
"""

import re
from dataclasses import dataclass, field

from .config import Lexicon, load_lexicon

MAX_NOUNS = 5
MAX_VERBS = 5
MAX_PROPER_NOUNS = 3
MAX_WORDS = 10

NON_WORD_RE = re.compile(r"[^\w]+")


@dataclass
class Keywords:
    nouns: list = field(default_factory=list)
    verbs: list = field(default_factory=list)
    proper_nouns: list = field(default_factory=list)
    all_words: list = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.nouns or self.verbs or self.proper_nouns or self.all_words)


def _add_unique(bucket: list, word: str, limit: int):
    if len(bucket) < limit and word not in bucket:
        bucket.append(word)


def extract_keywords(text: str, lexicon: Lexicon = None) -> Keywords:
    lexicon = lexicon or load_lexicon()
    kw = Keywords()

    for token in text.split():
        cleaned = NON_WORD_RE.sub("", token).strip("_")
        cleaned = cleaned.lstrip("0123456789")
        if len(cleaned) <= 2:
            continue
        word = cleaned.lower()

        if len(kw.all_words) < MAX_WORDS:
            kw.all_words.append(word)

        if cleaned[0].isupper():
            _add_unique(kw.proper_nouns, cleaned, MAX_PROPER_NOUNS)
        elif lexicon.is_verb(word):
            _add_unique(kw.verbs, word, MAX_VERBS)
        elif lexicon.is_noun(word) or len(word) > 4:
            _add_unique(kw.nouns, word, MAX_NOUNS)

    return kw
