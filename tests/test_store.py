import pytest

from epub2code.store import BookRecord, BookStore


@pytest.fixture
def store(tmp_path):
    return BookStore(tmp_path / "state" / "books.json")


def test_missing_file_is_empty(store):
    assert store.all_books() == []
    assert store.get("nope") is None


def test_put_and_get(store):
    store.put(BookRecord(id="b1", title="Book"))
    record = store.get("b1")
    assert record.title == "Book"
    assert record.chapter_progress == {}


def test_put_replaces(store):
    store.put(BookRecord(id="b1", title="Old"))
    store.put(BookRecord(id="b1", title="New"))
    assert [b.title for b in store.all_books()] == ["New"]


def test_delete(store):
    store.put(BookRecord(id="b1"))
    store.put(BookRecord(id="b2"))
    store.delete("b1")
    assert [b.id for b in store.all_books()] == ["b2"]


def test_progress_is_clamped(store):
    store.put(BookRecord(id="b1"))
    store.update_chapter_progress("b1", "ch1", 1.7)
    store.update_chapter_progress("b1", "ch2", -0.2)
    record = store.get("b1")
    assert record.chapter_progress == {"ch1": 1.0, "ch2": 0.0}
    assert record.last_read > 0


def test_current_chapter_and_word_counts(store):
    store.put(BookRecord(id="b1"))
    store.update_current_chapter("b1", "ch2")
    store.record_word_count("b1", "ch1", 100)
    store.record_word_count("b1", "ch2", 50)
    record = store.get("b1")
    assert record.current_chapter_id == "ch2"
    assert record.total_words == 150


def test_updates_on_unknown_book_are_ignored(store):
    store.update_chapter_progress("ghost", "ch1", 0.5)
    assert store.all_books() == []


def test_corrupt_file_reads_as_empty(store):
    store.path.parent.mkdir(parents=True)
    store.path.write_text("{not json", encoding="utf-8")
    assert store.all_books() == []


def test_unknown_fields_ignored():
    record = BookRecord.from_dict({"id": "b1", "epubData": "xyz"})
    assert record.id == "b1"
