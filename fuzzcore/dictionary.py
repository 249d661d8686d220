"""Dictionary words and a bounded dictionary of mutation tokens."""

from collections.abc import Iterator
from dataclasses import dataclass, field, replace
from typing import Optional


@dataclass(frozen=True)
class Word:
    """An immutable byte string of at most ``MAX_SIZE`` bytes."""

    data: bytes
    MAX_SIZE = 64

    def __post_init__(self) -> None:
        data = bytes(self.data)
        if len(data) > self.MAX_SIZE:
            raise ValueError(
                f"word of {len(data)} bytes exceeds the maximum of {self.MAX_SIZE}"
            )
        object.__setattr__(self, "data", data)

    def __len__(self) -> int:
        return len(self.data)

    def __bytes__(self) -> bytes:
        return self.data


@dataclass
class DictionaryEntry:
    """A word with an optional insertion position and usage statistics."""

    word: Word = field(default_factory=lambda: Word(b""))
    position_hint: Optional[int] = None
    use_count: int = 0
    success_count: int = 0

    def has_position_hint(self) -> bool:
        return self.position_hint is not None

    def inc_use_count(self) -> None:
        self.use_count += 1

    def inc_success_count(self) -> None:
        self.success_count += 1


class Dictionary:
    """An ordered collection of at most ``MAX_DICT_SIZE`` entries.

    Entries appended once the dictionary is full are silently dropped.
    """

    MAX_DICT_SIZE = 1 << 14

    def __init__(self) -> None:
        self._entries: list[DictionaryEntry] = []

    def contains_word(self, word: Word) -> bool:
        return any(entry.word == word for entry in self._entries)

    def append(self, entry: DictionaryEntry) -> None:
        """Store a copy of ``entry`` unless the dictionary is full."""
        if len(self._entries) < self.MAX_DICT_SIZE:
            self._entries.append(replace(entry))

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, idx: int) -> DictionaryEntry:
        return self._entries[idx]

    def __iter__(self) -> Iterator[DictionaryEntry]:
        return iter(self._entries)