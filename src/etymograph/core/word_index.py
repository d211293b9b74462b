# src/etymograph/core/word_index.py
"""
Word index: canonical word -> entry.

Loaded once from the lexical dataset, a JSON object of the form

    {"word": {"definition": "...", "relatedWords": ["other", ...]}, ...}

and never mutated afterwards, so it can be shared by concurrent readers
without locking.
"""

import json
import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, TypeAdapter, ValidationError

from etymograph.core.errors import DataFormatError, DataUnavailableError


logger = logging.getLogger(__name__)


def normalize(word: str) -> str:
    """Canonical form used for index keys and lookups."""
    return word.strip().lower()


@dataclass(frozen=True)
class WordEntry:
    definition: str
    related_words: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "definition": self.definition,
            "relatedWords": list(self.related_words),
        }


class _EntrySchema(BaseModel):
    definition: str
    relatedWords: list[str]


_dataset_adapter = TypeAdapter(dict[str, _EntrySchema])


class WordIndex(Mapping):
    """Read-only mapping of canonical word to WordEntry."""

    def __init__(self, entries: Mapping[str, WordEntry] | None = None):
        self._entries: dict[str, WordEntry] = dict(entries or {})

    def __getitem__(self, word: str) -> WordEntry:
        return self._entries[word]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, word: object) -> bool:
        return word in self._entries

    def get(self, word: str, default: WordEntry | None = None) -> WordEntry | None:
        """Look up a word after normalizing it."""
        return self._entries.get(normalize(word), default)

    def lookup(self, word: str) -> WordEntry | None:
        return self.get(word)

    @classmethod
    def from_dict(cls, data: Mapping) -> "WordIndex":
        """Validate a parsed dataset and build the index."""
        try:
            parsed = _dataset_adapter.validate_python(data)
        except ValidationError as e:
            raise DataFormatError(f"Invalid dataset: {e.error_count()} error(s): {e}") from e

        entries: dict[str, WordEntry] = {}
        for raw_word, entry in parsed.items():
            word = normalize(raw_word)
            if word in entries:
                raise DataFormatError(f"Duplicate word after normalization: {raw_word!r}")
            entries[word] = WordEntry(
                definition=entry.definition,
                related_words=tuple(entry.relatedWords),
            )
        return cls(entries)


def load_index(source: str | Path | Mapping) -> WordIndex:
    """
    Load a WordIndex from a JSON file path or an already parsed mapping.

    Raises DataUnavailableError if the file cannot be read and
    DataFormatError if its contents are not a valid dataset.
    """
    if isinstance(source, Mapping):
        index = WordIndex.from_dict(source)
        logger.info("Loaded %d words from mapping", len(index))
        return index

    path = Path(source)
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise DataUnavailableError(f"Cannot read dataset {path}: {e}") from e

    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise DataFormatError(f"Dataset {path} is not valid JSON: {e}") from e

    index = WordIndex.from_dict(data)
    logger.info("Loaded %d words from %s", len(index), path)
    return index
