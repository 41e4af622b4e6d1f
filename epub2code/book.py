"""
book.py
EPUB reading: table of contents, chapter text with image markers, metadata
and full-text search.
"""

import hashlib
import os
import re
import tempfile
from dataclasses import dataclass

import ebooklib
from ebooklib import epub
from bs4 import BeautifulSoup

from .log import get_logger
from .text import clean_whitespace

logger = get_logger(__name__)

BLOCK_TAGS = [
    "p", "div", "section", "article", "blockquote", "pre", "li", "tr",
    "h1", "h2", "h3", "h4", "h5", "h6",
]
# stands in for <br> until whitespace has been cleaned
LINE_BREAK = "\ue001"
PARAGRAPH_SPLIT_RE = re.compile(r"\n\s*\n")
MARKER_UNSAFE_RE = re.compile(r"[|\]\[]")


class BookLoadError(RuntimeError):
    pass


@dataclass
class Chapter:
    id: str
    label: str
    href: str


@dataclass
class SearchResult:
    chapter_id: str
    chapter_title: str
    line_number: int
    line_content: str
    match_start: int
    match_end: int


def _strip_fragment(href: str) -> str:
    return (href or "").split("#", 1)[0]


def _image_marker(img) -> str:
    src = img.get("src") or img.get("data-src") or ""
    alt = img.get("alt") or img.get("title") or "Image"
    alt = MARKER_UNSAFE_RE.sub(" ", alt).strip() or "Image"
    src = MARKER_UNSAFE_RE.sub("", src).strip()
    return f"[IMAGE:|{src}|{alt}]" if src else f"[IMAGE:|{alt}]"


def extract_text(markup) -> str:
    """
    Visible text of one XHTML document.
    Paragraphs are separated by blank lines, <br> becomes a single newline and
    every <img> becomes an [IMAGE:|src|alt] marker on its own paragraph.
    """
    soup = BeautifulSoup(markup, "html.parser")

    for tag in soup(["script", "style", "head"]):
        tag.decompose()

    for img in soup.find_all("img"):
        img.replace_with(f"\n\n{_image_marker(img)}\n\n")
    for br in soup.find_all("br"):
        br.replace_with(LINE_BREAK)
    for tag in soup.find_all(BLOCK_TAGS):
        tag.append("\n\n")

    paragraphs = []
    for block in PARAGRAPH_SPLIT_RE.split(soup.get_text()):
        lines = [clean_whitespace(part) for part in block.split(LINE_BREAK)]
        para = "\n".join(line for line in lines if line)
        if para:
            paragraphs.append(para)
    return "\n\n".join(paragraphs)


class EpubBookSource:
    def __init__(self):
        self.book = None
        self.book_id = None
        self._chapters = None

    @classmethod
    def from_path(cls, path: str) -> "EpubBookSource":
        source = cls()
        with open(path, "rb") as f:
            source.load_book(f.read())
        return source

    def load_book(self, data: bytes):
        fd, path = tempfile.mkstemp(suffix=".epub")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            self.book = epub.read_epub(path)
        except Exception as e:
            self.book = None
            raise BookLoadError(f"Not a readable EPUB: {e}") from e
        finally:
            os.remove(path)

        self.book_id = hashlib.sha1(data).hexdigest()
        self._chapters = None
        logger.debug("Loaded book %s", self.book_id)

    def _require_book(self):
        if self.book is None:
            raise BookLoadError("No book loaded")

    def get_metadata(self) -> dict:
        self._require_book()

        def first(name):
            values = self.book.get_metadata("DC", name)
            return values[0][0] if values else ""

        return {"title": first("title"), "author": first("creator")}

    # -----------------------
    # Chapters
    # -----------------------

    def _spine_documents(self) -> list:
        docs = []
        for idref, _ in self.book.spine:
            item = self.book.get_item_with_id(idref)
            if item is None or item.get_type() != ebooklib.ITEM_DOCUMENT:
                continue
            docs.append(item)
        return docs

    def _flatten_toc(self, entries, out: list):
        for entry in entries:
            if isinstance(entry, (tuple, list)):
                section, children = entry[0], entry[1]
                if getattr(section, "href", None):
                    out.append(self._chapter_from(section, len(out)))
                self._flatten_toc(children, out)
            elif getattr(entry, "href", None):
                out.append(self._chapter_from(entry, len(out)))

    @staticmethod
    def _chapter_from(entry, index: int) -> Chapter:
        label = (getattr(entry, "title", "") or "").strip() or "Untitled"
        uid = getattr(entry, "uid", None) or f"chapter-{index + 1}"
        return Chapter(id=uid, label=label, href=entry.href)

    def get_chapters(self) -> list:
        self._require_book()
        if self._chapters is None:
            chapters = []
            self._flatten_toc(self.book.toc, chapters)
            if not chapters:
                for item in self._spine_documents():
                    chapters.append(Chapter(id=item.get_id(), label=item.get_name(), href=item.get_name()))
            self._chapters = chapters
        return list(self._chapters)

    def _find_chapter(self, chapter_id: str) -> Chapter:
        for chapter in self.get_chapters():
            if chapter.id == chapter_id:
                return chapter
        raise BookLoadError(f"Unknown chapter: {chapter_id}")

    def get_chapter_text(self, chapter_id: str) -> str:
        """
        Text of a chapter: its own spine document plus the following ones up to
        the next document that starts another chapter.
        """
        chapter = self._find_chapter(chapter_id)
        start_href = _strip_fragment(chapter.href)
        docs = self._spine_documents()
        names = [item.get_name() for item in docs]

        if start_href not in names:
            item = self.book.get_item_with_href(start_href)
            return extract_text(item.get_content()) if item is not None else ""

        start = names.index(start_href)
        chapter_starts = {_strip_fragment(c.href) for c in self.get_chapters()}
        end = next((i for i in range(start + 1, len(docs)) if names[i] in chapter_starts), len(docs))

        texts = []
        for item in docs[start:end]:
            try:
                text = extract_text(item.get_content())
            except Exception:
                logger.warning("Failed to read spine item %s", item.get_name(), exc_info=True)
                continue
            if text.strip():
                texts.append(text)
        return "\n\n".join(texts)

    # -----------------------
    # Search
    # -----------------------

    def search(self, query: str) -> list:
        self._require_book()
        if not query.strip():
            return []

        needle = query.lower()
        results = []
        for chapter in self.get_chapters():
            try:
                text = self.get_chapter_text(chapter.id)
            except Exception:
                logger.warning("Failed to search in chapter %s", chapter.label, exc_info=True)
                continue
            for index, line in enumerate(text.split("\n"), start=1):
                pos = line.lower().find(needle)
                if pos != -1:
                    results.append(SearchResult(
                        chapter_id=chapter.id,
                        chapter_title=chapter.label,
                        line_number=index,
                        line_content=line.strip(),
                        match_start=pos,
                        match_end=pos + len(query),
                    ))
        return results
