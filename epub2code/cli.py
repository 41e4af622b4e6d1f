"""
cli.py
Open an EPUB and write one chapter out as fake source code.
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from .book import BookLoadError, EpubBookSource
from .config import CodeifierSettings, available_locales
from .engine import Codeifier
from .export import render_html, render_plain
from .log import set_level
from .store import BookRecord, BookStore

DEFAULT_STORE = Path.home() / ".epub2code" / "books.json"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Read an EPUB chapter disguised as source code.")
    parser.add_argument("epub", help="Path to input .epub file")
    parser.add_argument("-o", "--output", help="Output file path (default: stdout)", default=None)
    parser.add_argument("--chapter", help="Chapter number (1-based) to render", type=int, default=None)
    parser.add_argument("--list", help="List chapters and exit", action="store_true")
    parser.add_argument("--search", help="Search the book for a phrase and exit", default=None)
    parser.add_argument("--format", help="Output format", choices=["html", "text"], default="html")
    parser.add_argument("--seed", help="Optional random seed (int) for reproducible layout", type=int, default=None)
    parser.add_argument("--font-size", help="Font size in px for html output", type=int, default=14)
    parser.add_argument("--no-wrap", help="Disable word wrap in html output", action="store_true")
    parser.add_argument("--locale", help="Lexicon for keyword extraction", choices=available_locales(), default="en")
    parser.add_argument("--store", help="Reading progress file", default=str(DEFAULT_STORE))
    parser.add_argument("--progress", help="How far through the rendered chapter you have read (0..1); 1 moves the next resume on", type=float, default=None)
    parser.add_argument("--verbose", help="Debug logging", action="store_true")
    return parser


def _resume_index(store: BookStore, book_id: str, chapters: list) -> int:
    """Stored current chapter, or the one after it once it has been read to the end."""
    record = store.get(book_id)
    if record and record.current_chapter_id:
        for i, chapter in enumerate(chapters):
            if chapter.id == record.current_chapter_id:
                if record.chapter_progress.get(chapter.id, 0.0) >= 1.0 and i + 1 < len(chapters):
                    return i + 1
                return i
    return 0


def run(args) -> int:
    if not os.path.isfile(args.epub):
        print("ERROR: epub file not found:", args.epub)
        return 1

    try:
        source = EpubBookSource.from_path(args.epub)
        chapters = source.get_chapters()
    except BookLoadError as e:
        print("ERROR:", e)
        return 1

    if not chapters:
        print("ERROR: no chapters found in", args.epub)
        return 1

    if args.list:
        for i, chapter in enumerate(chapters, start=1):
            print(f"{i:>4}  {chapter.label}")
        return 0

    if args.search:
        for hit in source.search(args.search):
            print(f"{hit.chapter_title}:{hit.line_number}: {hit.line_content}")
        return 0

    store = BookStore(args.store)
    if store.get(source.book_id) is None:
        meta = source.get_metadata()
        store.put(BookRecord(
            id=source.book_id,
            title=meta["title"],
            author=meta["author"],
            source_path=os.path.abspath(args.epub),
        ))

    if args.chapter is None:
        index = _resume_index(store, source.book_id, chapters)
    elif 1 <= args.chapter <= len(chapters):
        index = args.chapter - 1
    else:
        print(f"ERROR: chapter must be between 1 and {len(chapters)}")
        return 1
    chapter = chapters[index]

    try:
        text = source.get_chapter_text(chapter.id)
    except BookLoadError as e:
        print("ERROR:", e)
        return 1

    codeifier = Codeifier(CodeifierSettings(locale=args.locale), seed=args.seed)
    lines = codeifier.transform(text)

    if args.format == "text":
        rendered = render_plain(lines)
    else:
        rendered = render_html(lines, title=f"chapter_{index + 1}.ts", font_size=args.font_size, word_wrap=not args.no_wrap)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(rendered)
        print(f"[+] Wrote chapter {index + 1} ({chapter.label}) to: {args.output}")
    else:
        sys.stdout.write(rendered)

    store.update_current_chapter(source.book_id, chapter.id)
    store.record_word_count(source.book_id, chapter.id, len(text.split()))
    if args.progress is not None:
        store.update_chapter_progress(source.book_id, chapter.id, args.progress)
    return 0


def main(argv=None):
    args = build_parser().parse_args(argv)
    if args.verbose:
        set_level(logging.DEBUG)
    sys.exit(run(args))


if __name__ == "__main__":
    main()
