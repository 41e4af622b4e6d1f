"""
Shared fixtures for epub2code tests.
"""
import random

import pytest
from ebooklib import epub

from epub2code.config import CodeifierSettings
from epub2code.engine import Codeifier


class FixedRng:
    """Replays a fixed list of floats, then repeats the last one."""

    def __init__(self, values):
        self.values = list(values)
        self.index = 0

    def random(self):
        value = self.values[min(self.index, len(self.values) - 1)]
        self.index += 1
        return value


@pytest.fixture
def quiet_settings():
    """Settings with the probabilistic import/export scaffolding switched off."""
    return CodeifierSettings(import_probability=0.0, export_probability=0.0)


@pytest.fixture
def engine(quiet_settings):
    return Codeifier(quiet_settings, seed=1234)


@pytest.fixture
def fixed_rng():
    return FixedRng


def make_prose(seed: int, length: int) -> str:
    """Pseudo-prose with quotes, markup characters, inner punctuation, odd
    whitespace and long words."""
    rng = random.Random(seed)
    vocab = [
        "the", "night", "was", "dark", "Alice", "walked", "slowly", "into", "garden",
        '"Hello,"', 'she said.', "it's", "&", "<b>", "a>b", "x" * 95, "Why?", "No!",
        "and", "or", "then,", "silence;", "Dr.", "Smith", "U.S.A.", "quietly.", "—",
        "3.14", "$3.50", "a.b.c", "no?yes", "stop!go", "Wait...what", "www.example.com",
        '"Really?"she', "end.)",
    ]
    separators = [" "] * 10 + ["\t", "\r"]
    text = rng.choice(vocab)
    while len(text) < length:
        text += rng.choice(separators) + rng.choice(vocab)
    return text


@pytest.fixture
def prose():
    return make_prose


@pytest.fixture
def sample_epub(tmp_path):
    """A three-document EPUB; the third document continues chapter two."""
    book = epub.EpubBook()
    book.set_identifier("sample-book-001")
    book.set_title("Sample Book")
    book.set_language("en")
    book.add_author("Jane Doe")

    c1 = epub.EpubHtml(title="Chapter One", file_name="chap_01.xhtml", lang="en")
    c1.content = (
        "<h1>Chapter One</h1>"
        "<p>It was a dark night.</p>"
        "<p>Line one<br/>Line two</p>"
        '<p><img src="images/cat.png" alt="A cat"/></p>'
    )
    c2 = epub.EpubHtml(title="Chapter Two", file_name="chap_02.xhtml", lang="en")
    c2.content = "<h1>Chapter Two</h1><p>Morning came at last.</p>"
    c3 = epub.EpubHtml(title="Interlude", file_name="chap_03.xhtml", lang="en")
    c3.content = "<p>The birds were singing.</p>"

    for item in (c1, c2, c3):
        book.add_item(item)

    book.toc = (
        epub.Link("chap_01.xhtml", "Chapter One", "ch1"),
        epub.Link("chap_02.xhtml", "Chapter Two", "ch2"),
    )
    book.add_item(epub.EpubNcx())
    book.add_item(epub.EpubNav())
    book.spine = ["nav", c1, c2, c3]

    path = tmp_path / "sample.epub"
    epub.write_epub(str(path), book)
    return path
