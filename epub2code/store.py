"""
store.py
Per-book reading state kept in a single JSON file.
"""

import json
import time
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Optional

from .log import get_logger

logger = get_logger(__name__)


@dataclass
class BookRecord:
    id: str
    title: str = ""
    author: str = ""
    source_path: str = ""
    current_chapter_id: Optional[str] = None
    chapter_progress: dict = field(default_factory=dict)
    chapter_word_counts: dict = field(default_factory=dict)
    total_words: int = 0
    last_read: float = 0.0

    @classmethod
    def from_dict(cls, data: dict) -> "BookRecord":
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


class BookStore:
    def __init__(self, path):
        self.path = Path(path)

    def all_books(self) -> list:
        if not self.path.is_file():
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return [BookRecord.from_dict(d) for d in json.load(f)]
        except (OSError, ValueError, TypeError):
            logger.error("Failed to load books from %s", self.path, exc_info=True)
            return []

    def _write(self, books: list):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump([asdict(b) for b in books], f, ensure_ascii=False, indent=2)

    def get(self, book_id: str) -> Optional[BookRecord]:
        return next((b for b in self.all_books() if b.id == book_id), None)

    def put(self, record: BookRecord):
        books = [b for b in self.all_books() if b.id != record.id]
        books.append(record)
        self._write(books)

    def delete(self, book_id: str):
        self._write([b for b in self.all_books() if b.id != book_id])

    def update_chapter_progress(self, book_id: str, chapter_id: str, progress: float):
        book = self.get(book_id)
        if book is None:
            return
        book.chapter_progress[chapter_id] = max(0.0, min(1.0, float(progress)))
        book.last_read = time.time()
        self.put(book)

    def update_current_chapter(self, book_id: str, chapter_id: str):
        book = self.get(book_id)
        if book is None:
            return
        book.current_chapter_id = chapter_id
        book.last_read = time.time()
        self.put(book)

    def record_word_count(self, book_id: str, chapter_id: str, words: int):
        book = self.get(book_id)
        if book is None:
            return
        book.chapter_word_counts[chapter_id] = int(words)
        book.total_words = sum(book.chapter_word_counts.values())
        self.put(book)
