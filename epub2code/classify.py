import re

from .config import Lexicon, load_lexicon

DIALOGUE = "dialogue"
LIST = "list"
QUESTION = "question"
NARRATIVE = "narrative"

TEXT_TYPES = (DIALOGUE, LIST, QUESTION, NARRATIVE)

DIALOGUE_START_RE = re.compile(r"^[\"“„«\-—]")
LIST_START_RE = re.compile(r"^(?:\d+[.)]\s|[•·▪◦*]\s?|[–\-]\s)")


def classify_text(text: str, lexicon: Lexicon = None) -> str:
    """Classify a chunk; checked in order dialogue, list, question, narrative."""
    lexicon = lexicon or load_lexicon()
    t = text.strip()
    if not t:
        return NARRATIVE

    if DIALOGUE_START_RE.match(t):
        return DIALOGUE

    if LIST_START_RE.match(t):
        return LIST
    if lexicon.conjunction_re is not None and lexicon.conjunction_re.search(t):
        return LIST

    if t.endswith(("?", "!")):
        return QUESTION
    if lexicon.interrogative_re is not None and lexicon.interrogative_re.match(t):
        return QUESTION

    return NARRATIVE
