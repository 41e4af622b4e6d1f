"""
engine.py
The codeifier: turns one chapter of plain text into numbered lines of
highlighted pseudocode.
"""

import html
import random
import re
from collections import deque
from dataclasses import dataclass

from .classify import classify_text
from .config import CodeifierSettings, load_lexicon
from .keywords import extract_keywords
from .log import get_logger
from .markup import comment, kw, string, var
from .names import NameSynthesizer
from .renderers import RenderContext, render, scaffold_export, scaffold_import
from .selector import EngineState, StructureSelector
from .text import escape_comment, escape_string, segment_paragraph

logger = get_logger(__name__)

# [IMAGE:|src|alt] or [IMAGE:|alt]; IMAGEM is what Portuguese books carry
IMAGE_RE = re.compile(r"\[IMAGEM?:(?:\|([^|\]]*))?\|([^\]]*)\]")


@dataclass(frozen=True)
class OutputLine:
    line_number: int
    content: str

    def to_dict(self) -> dict:
        return {"ln": self.line_number, "content": self.content}


def split_image_markers(text: str) -> list:
    """Return ("text", run) and ("image", src, alt, raw) pieces in order."""
    pieces = []
    pos = 0
    for m in IMAGE_RE.finditer(text):
        if m.start() > pos:
            pieces.append(("text", text[pos:m.start()]))
        pieces.append(("image", (m.group(1) or "").strip(), m.group(2).strip(), m.group(0)))
        pos = m.end()
    if pos < len(text):
        pieces.append(("text", text[pos:]))
    return pieces


class NextSource:
    """Wraps a source whose only method is next() -> float in [0, 1)."""

    def __init__(self, source):
        self.source = source

    def random(self) -> float:
        return self.source.next()


class Codeifier:
    """
    One instance per chapter being transformed; call reset() before reusing
    it for the next chapter. Instances are not safe to share between threads.

    rng is anything with a random() method returning floats in [0, 1), the
    same method random.Random has. A source that only offers next() is
    wrapped in NextSource.
    """

    def __init__(self, settings: CodeifierSettings = None, rng=None, seed=None, lexicon=None):
        self.settings = settings or CodeifierSettings()
        self.lexicon = lexicon or load_lexicon(self.settings.locale)
        self.seed = seed
        if rng is not None and not hasattr(rng, "random") and hasattr(rng, "next"):
            rng = NextSource(rng)
        self.rng = rng if rng is not None else random.Random(seed)
        self.names = NameSynthesizer(self.rng)
        self.reset()

    def reset(self, seed=None):
        """Zero the line counter and all per-chapter state."""
        if seed is not None:
            self.seed = seed
        if self.seed is not None and hasattr(self.rng, "seed"):
            self.rng.seed(self.seed)
        self.state = EngineState(history=deque(maxlen=self.settings.history_size))
        self.selections = []
        self.selector = StructureSelector(self.state, self.rng, window=self.settings.history_window)
        self._last_blank = True
        self._last_text = None

    def transform(self, text: str) -> list:
        lines = list(self.iter_lines(text))
        logger.debug("Transformed %d characters into %d lines", len(text or ""), len(lines))
        return lines

    def iter_lines(self, text: str):
        """Yield OutputLines one at a time, in the same order transform returns them."""
        if not text or not text.strip():
            return

        yield from self._maybe_import(text)

        for piece in split_image_markers(text):
            if piece[0] == "image":
                yield from self._image_lines(*piece[1:])
            else:
                yield from self._text_lines(piece[1])

        yield from self._maybe_export()

    # -----------------------
    # Emission
    # -----------------------

    def _emit(self, content: str) -> OutputLine:
        assert self.state.line_number >= 1, "line counter corrupted"
        line = OutputLine(self.state.line_number, content)
        self.state.line_number += 1
        self._last_blank = content == ""
        return line

    def _blank(self):
        if not self._last_blank:
            yield self._emit("")

    def _context(self, text: str) -> RenderContext:
        return RenderContext(extract_keywords(text, self.lexicon), self.names, self.settings)

    # -----------------------
    # Pieces
    # -----------------------

    def _text_lines(self, run: str):
        for raw in run.split("\n"):
            line = raw.strip()
            if not line:
                yield from self._blank()
                continue
            try:
                chunks = segment_paragraph(line, self.settings)
            except Exception:
                logger.warning("Could not segment paragraph, keeping it whole", exc_info=True)
                chunks = [line]
            for chunk in chunks:
                yield from self._chunk_lines(chunk)

    def _chunk_lines(self, chunk: str):
        try:
            text_type = classify_text(chunk, self.lexicon)
            kind = self.selector.select(len(chunk), text_type)
            contents = render(kind, chunk, self._context(chunk))
            self.selections.append(kind)
        except Exception:
            logger.warning("Could not disguise chunk, keeping it as a comment", exc_info=True)
            contents = [comment("// " + escape_comment(chunk))]

        for content in contents:
            yield self._emit(content)
        self._last_text = chunk
        yield from self._blank()

    def _image_lines(self, src: str, alt: str, raw: str):
        try:
            contents = [comment("// Image: " + escape_comment(alt))]
            if src:
                contents.append(
                    f'<img src="{html.escape(src, quote=True)}" alt="{html.escape(alt, quote=True)}" class="code-image">'
                )
            else:
                contents.append(f"{kw('const')} {var('image')} = " + string('"' + escape_string(f"[Image: {alt}]") + '"') + ";")
        except Exception:
            logger.warning("Could not render image marker", exc_info=True)
            contents = [comment("// " + escape_comment(raw))]

        for content in contents:
            yield self._emit(content)
        yield from self._blank()

    def _maybe_import(self, text: str):
        if self.state.has_emitted_import or self.state.line_number != 1:
            return
        if self.rng.random() >= self.settings.import_probability:
            return
        try:
            first = next(
                (ln.strip() for ln in IMAGE_RE.sub("", text).split("\n") if ln.strip()), ""
            )
            content = scaffold_import(self._context(first))
        except Exception:
            logger.warning("Could not build import line", exc_info=True)
            return
        self.state.has_emitted_import = True
        yield self._emit(content)
        yield from self._blank()

    def _maybe_export(self):
        if self.state.has_emitted_export or self._last_text is None:
            return
        if self.state.line_number - 1 < self.settings.export_min_lines:
            return
        if self.rng.random() >= self.settings.export_probability:
            return
        try:
            content = scaffold_export(self._context(self._last_text))
        except Exception:
            logger.warning("Could not build export line", exc_info=True)
            return
        self.state.has_emitted_export = True
        yield self._emit(content)
        yield from self._blank()
