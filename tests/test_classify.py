import pytest

from epub2code.classify import DIALOGUE, LIST, NARRATIVE, QUESTION, classify_text
from epub2code.config import load_lexicon


@pytest.mark.parametrize("text,expected", [
    ('"Come here," she said.', DIALOGUE),
    ("“Come here,” she said.", DIALOGUE),
    ("— Who goes there?", DIALOGUE),
    ("- Is this true?", DIALOGUE),
    ("1. Buy bread", LIST),
    ("• eggs", LIST),
    ("– milk and honey", LIST),
    ("She bought apples, pears, and plums.", LIST),
    ("Tea; or coffee.", LIST),
    ("Is this the end?", QUESTION),
    ("It burns!", QUESTION),
    ("Where the river bends the town begins.", QUESTION),
    ("The night was dark.", NARRATIVE),
    ("", NARRATIVE),
])
def test_classify(text, expected):
    assert classify_text(text) == expected


def test_dialogue_checked_before_question():
    assert classify_text("- Why not?") == DIALOGUE


def test_interrogative_must_be_a_whole_word():
    assert classify_text("Whosoever enters shall stay.") == NARRATIVE


def test_portuguese_lexicon():
    pt = load_lexicon("pt")
    assert classify_text("Quando ela chegou, a casa estava vazia.", pt) == QUESTION
    assert classify_text("Comprou pão, e leite.", pt) == LIST
