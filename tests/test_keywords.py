from epub2code.config import Lexicon, load_lexicon
from epub2code.keywords import Keywords, extract_keywords


def test_categories():
    kw = extract_keywords("Alice walked into the garden quietly.")
    assert kw.proper_nouns == ["Alice"]
    assert kw.verbs == ["walked"]
    assert kw.nouns == ["garden", "quietly"]
    assert kw.all_words == ["alice", "walked", "into", "the", "garden", "quietly"]


def test_short_words_dropped():
    kw = extract_keywords("I am at it, ok?")
    assert kw.is_empty()


def test_punctuation_stripped():
    kw = extract_keywords('"Hello," world!')
    assert kw.proper_nouns == ["Hello"]
    assert kw.nouns == ["world"]


def test_caps_and_dedupe():
    text = " ".join(["mountain"] * 3 + [f"river{i}x" for i in range(8)] + ["Ann", "Bob", "Cid", "Dee"])
    kw = extract_keywords(text)
    assert kw.nouns[0] == "mountain"
    assert len(kw.nouns) == 5
    assert len(set(kw.nouns)) == 5
    assert kw.proper_nouns == ["Ann", "Bob", "Cid"]
    assert len(kw.all_words) == 10


def test_swappable_lexicon():
    lexicon = Lexicon.from_dict({"verbs": ["blorp"], "nouns": ["zig"]})
    kw = extract_keywords("they blorp the zig", lexicon)
    assert kw.verbs == ["blorp"]
    assert kw.nouns == ["zig"]


def test_portuguese_verbs():
    kw = extract_keywords("ela caminhava pela cidade", load_lexicon("pt"))
    assert "caminhava" in kw.verbs
    assert "cidade" in kw.nouns


def test_empty_keywords():
    assert Keywords().is_empty()
