"""
text.py
Text utilities shared by the codeifier: cleaning, sentence splitting,
escaping, line wrapping and paragraph segmentation.
"""

import html
import math
import re

from .config import CodeifierSettings
from .log import get_logger

logger = get_logger(__name__)

# Private-use placeholder so masking never changes string length
ABR_DOT = "\ue000"

# A sentence ends at . ! or ? (plus closing quotes) only when whitespace or
# the end of text follows; anything left over is kept as the last run
SENT_RUN_RE = re.compile(r"\S.*?[.!?]+[\"'”’»)\]]*(?=\s|$)|\S.*$", re.S)
SENTENCE_BREAK_RE = re.compile(r"[.!?][\"'”’»)\]]* ")
COMMA_BREAK_RE = re.compile(r", ")
NEWLINE_RE = re.compile(r"\s*\n\s*")


def mask_abbrev_periods(text: str) -> str:
    t = text
    t = re.sub(r"\b(?:Mr|Mrs|Ms|Dr|Prof|Sr|Jr|St|vs|etc)\.", lambda m: m.group(0).replace(".", ABR_DOT), t)
    t = re.sub(r"\b(?:e\.g|i\.e)\.", lambda m: m.group(0).replace(".", ABR_DOT), t)
    t = re.sub(r"\b(?:Ph\.D|M\.Sc|B\.Sc|M\.A|B\.A)\.", lambda m: m.group(0).replace(".", ABR_DOT), t)
    t = re.sub(r"\bU\.S\.(?:A\.)?", lambda m: m.group(0).replace(".", ABR_DOT), t)
    t = re.sub(r"\b(?:[A-Z]\.){2,3}", lambda m: m.group(0).replace(".", ABR_DOT), t)
    return t


def clean_whitespace(s: str) -> str:
    s = s.replace('\r', ' ')
    s = re.sub(r'\s+', ' ', s).strip()
    return s


def split_sentence_runs(text: str) -> list:
    """Split text into runs ending in . ! or ? (plus any closing quote) that
    are followed by whitespace; "3.50" or "a.b.c" never end a sentence.
    Trailing text without terminal punctuation is kept as a final run, so
    joining the runs back together only loses surrounding whitespace."""
    masked = mask_abbrev_periods(text)
    runs = [m.group(0).replace(ABR_DOT, ".").strip() for m in SENT_RUN_RE.finditer(masked)]
    return [r for r in runs if r]


def split_by_sentences(text: str, groups: int = 2) -> list:
    sentences = split_sentence_runs(text) or [text.strip()]
    if len(sentences) <= groups:
        return sentences

    per_group = math.ceil(len(sentences) / groups)
    result = []
    for i in range(groups):
        part = sentences[i * per_group:(i + 1) * per_group]
        if part:
            result.append(" ".join(part))
    return result


def escape_string(text: str) -> str:
    """Escape text for embedding inside a string or template literal."""
    escaped = html.escape(text, quote=False)
    escaped = escaped.replace('"', '\\"')
    return escaped.replace("\r\n", "\\n").replace("\n", "\\n").replace("\r", "\\n")


def escape_comment(text: str) -> str:
    """Escape text for a comment body: markup-safe, newlines collapsed."""
    return NEWLINE_RE.sub(" ", html.escape(text, quote=False))


def _last_break(pattern, window: str, floor: int):
    cut = None
    for m in pattern.finditer(window):
        pos = m.end() - 1
        if pos >= floor and pos > 0:
            cut = pos
    return cut


def wrap_line(text: str, max_width: int = 80, threshold: float = 0.7) -> list:
    """
    Break text into pieces no longer than max_width.
    Every break consumes exactly one space, so " ".join(result) == text.
    Preference: after a sentence end, after a comma, then the last space that
    fits. Punctuation breaks only count past max_width * threshold. A word
    longer than max_width is left whole on its own piece.
    """
    parts = []
    rest = text
    floor = int(max_width * threshold)

    while len(rest) > max_width:
        window = rest[:max_width + 1]
        cut = _last_break(SENTENCE_BREAK_RE, window, floor)
        if cut is None:
            cut = _last_break(COMMA_BREAK_RE, window, floor)
        if cut is None:
            pos = window.rfind(" ", 1)
            cut = pos if pos > 0 else None
        if cut is None:
            pos = rest.find(" ", max_width + 1)
            if pos == -1:
                break
            cut = pos
        parts.append(rest[:cut])
        rest = rest[cut + 1:]

    parts.append(rest)
    return parts


def segment_paragraph(text: str, settings: CodeifierSettings = None) -> list:
    """
    Carve a long paragraph into chunks at sentence boundaries.
    Paragraphs at or under the threshold come back whole. If the chunks would
    reconstruct less than the preservation ratio of the paragraph, the split
    is discarded and the whole paragraph is returned as one chunk.
    """
    settings = settings or CodeifierSettings()
    if len(text) <= settings.chunk_threshold:
        return [text]

    chunks = []
    buf = ""
    for sentence in split_sentence_runs(text):
        if buf and len(buf) + 1 + len(sentence) > settings.chunk_target and len(buf) > settings.chunk_min_flush:
            chunks.append(buf)
            buf = sentence
        else:
            buf = f"{buf} {sentence}" if buf else sentence
    if buf:
        chunks.append(buf)

    kept = sum(len(c) for c in chunks)
    if kept < settings.preservation_ratio * len(text):
        logger.warning(
            "Chunking kept %d of %d characters, using whole paragraph", kept, len(text)
        )
        return [text]
    return chunks
