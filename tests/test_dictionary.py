import pytest

from fuzzcore.dictionary import Dictionary, DictionaryEntry, Word


def test_word_max_size_is_64():
    assert Word.MAX_SIZE == 64
    assert len(Word(b"x" * 64)) == 64


def test_word_too_long_rejected():
    with pytest.raises(ValueError):
        Word(b"x" * 65)


def test_word_equality_by_content():
    assert Word(bytearray(b"abc")) == Word(b"abc")
    assert Word(b"abc") != Word(b"abd")
    assert bytes(Word(b"abc")) == b"abc"


def test_entry_position_hint():
    plain = DictionaryEntry(Word(b"a"))
    hinted = DictionaryEntry(Word(b"a"), position_hint=3)
    assert not plain.has_position_hint()
    assert hinted.has_position_hint()
    assert hinted.position_hint == 3


def test_entry_counters():
    entry = DictionaryEntry(Word(b"a"))
    entry.inc_use_count()
    entry.inc_use_count()
    entry.inc_success_count()
    assert (entry.use_count, entry.success_count) == (2, 1)


def test_contains_word_and_iteration():
    d = Dictionary()
    d.append(DictionaryEntry(Word(b"\xaa\xbb\xcc\xdd")))
    d.append(DictionaryEntry(Word(b"\xff\xee\xef")))
    assert d.contains_word(Word(b"\xff\xee\xef"))
    assert not d.contains_word(Word(b"\xff\xee"))
    assert [bytes(e.word) for e in d] == [b"\xaa\xbb\xcc\xdd", b"\xff\xee\xef"]
    assert len(d) == 2


def test_append_stores_copy():
    d = Dictionary()
    entry = DictionaryEntry(Word(b"a"))
    d.append(entry)
    entry.inc_use_count()
    assert d[0].use_count == 0
    d[0].inc_use_count()
    assert d[0].use_count == 1


def test_append_beyond_capacity_is_dropped():
    d = Dictionary()
    for i in range(Dictionary.MAX_DICT_SIZE + 5):
        d.append(DictionaryEntry(Word(i.to_bytes(4, "little"))))
    assert len(d) == Dictionary.MAX_DICT_SIZE
    assert not d.contains_word(Word((Dictionary.MAX_DICT_SIZE).to_bytes(4, "little")))


def test_clear_and_index_errors():
    d = Dictionary()
    d.append(DictionaryEntry(Word(b"a")))
    d.clear()
    assert len(d) == 0
    with pytest.raises(IndexError):
        d[0]