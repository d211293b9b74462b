# src/etymograph/core/sampling.py
"""
Weighted random word selection.

The table is built offline (see etymograph.core.stats) and stored as JSON:

    {"totalWeight": 4,
     "words": [{"word": "a", "numConnections": 1, "graphSize": 2, "cumulativeWeight": 1},
               {"word": "b", "numConnections": 3, "graphSize": 5, "cumulativeWeight": 4}]}

A word is picked with probability numConnections / totalWeight by binary
search over the cumulative weights.
"""

import json
import logging
from bisect import bisect_left
from dataclasses import dataclass
from pathlib import Path

import redis
from pydantic import BaseModel, ValidationError

from etymograph.core.config import Settings
from etymograph.core.errors import DataFormatError, DataUnavailableError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SamplingEntry:
    word: str
    num_connections: int
    graph_size: int
    cumulative_weight: int

    def to_dict(self) -> dict:
        return {
            "word": self.word,
            "numConnections": self.num_connections,
            "graphSize": self.graph_size,
            "cumulativeWeight": self.cumulative_weight,
        }


class _EntrySchema(BaseModel):
    word: str
    numConnections: int
    graphSize: int
    cumulativeWeight: int


class _TableSchema(BaseModel):
    totalWeight: int
    words: list[_EntrySchema]


class SamplingTable:
    """Immutable cumulative-weight table."""

    def __init__(self, entries: list[SamplingEntry] | tuple[SamplingEntry, ...] = ()):
        self.entries: tuple[SamplingEntry, ...] = tuple(entries)
        self._cumulative = [e.cumulative_weight for e in self.entries]
        self._check()

    def _check(self) -> None:
        running = 0
        for entry in self.entries:
            if entry.num_connections <= 0:
                raise DataFormatError(f"Non-positive weight for {entry.word!r}")
            running += entry.num_connections
            if entry.cumulative_weight != running:
                raise DataFormatError(
                    f"Cumulative weight mismatch at {entry.word!r}: "
                    f"expected {running}, got {entry.cumulative_weight}"
                )

    @property
    def total_weight(self) -> int:
        return self._cumulative[-1] if self._cumulative else 0

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def is_empty(self) -> bool:
        return not self.entries

    @classmethod
    def from_weights(cls, items) -> "SamplingTable":
        """Build from (word, num_connections, graph_size) triples, in order."""
        entries = []
        cumulative = 0
        for word, num_connections, graph_size in items:
            cumulative += num_connections
            entries.append(SamplingEntry(word, num_connections, graph_size, cumulative))
        return cls(entries)

    def sample(self, random_unit: float) -> str | None:
        """
        Map a uniform number in [0, 1) to a word.

        Returns None for an empty table.
        """
        if not 0.0 <= random_unit < 1.0:
            raise ValueError(f"random_unit must be in [0, 1), got {random_unit}")
        if not self.entries:
            return None

        target = random_unit * self.total_weight
        i = bisect_left(self._cumulative, target)
        return self.entries[i].word

    def to_dict(self) -> dict:
        return {
            "totalWeight": self.total_weight,
            "words": [e.to_dict() for e in self.entries],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SamplingTable":
        try:
            parsed = _TableSchema.model_validate(data)
        except ValidationError as e:
            raise DataFormatError(f"Invalid sampling table: {e}") from e

        table = cls([
            SamplingEntry(w.word, w.numConnections, w.graphSize, w.cumulativeWeight)
            for w in parsed.words
        ])
        if table.total_weight != parsed.totalWeight:
            raise DataFormatError(
                f"totalWeight {parsed.totalWeight} does not match entries ({table.total_weight})"
            )
        return table

    @classmethod
    def from_json(cls, text: str | bytes) -> "SamplingTable":
        try:
            if isinstance(text, bytes):
                text = text.decode("utf-8")
            data = json.loads(text)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DataFormatError(f"Sampling table is not valid JSON: {e}") from e
        return cls.from_dict(data)

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def save(self, path: str | Path) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json(indent=2), encoding="utf-8")
        logger.info("Saved sampling table (%d words) to %s", len(self), path)


def load_table(path: str | Path) -> SamplingTable:
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise DataUnavailableError(f"Cannot read sampling table {path}: {e}") from e

    table = SamplingTable.from_json(raw)
    logger.info(
        "Loaded sampling table for %d words (total weight: %d)",
        len(table), table.total_weight,
    )
    return table


class SamplingTableStore:
    """Stores the sampling table in Redis so serving processes can pick it up."""

    def __init__(self, client: redis.Redis, prefix: str = "etymograph"):
        self.client = client
        self.prefix = prefix

    @classmethod
    def from_settings(cls, settings: Settings) -> "SamplingTableStore":
        client = redis.Redis(host=settings.redis_host, port=settings.redis_port, db=settings.redis_db)
        return cls(client)

    def _table_key(self) -> str:
        return f"{self.prefix}:sampling:table"

    def save(self, table: SamplingTable) -> None:
        try:
            self.client.set(self._table_key(), table.to_json())
        except redis.RedisError as e:
            raise DataUnavailableError(f"Cannot write sampling table to Redis: {e}") from e

    def load(self) -> SamplingTable | None:
        try:
            data = self.client.get(self._table_key())
        except redis.RedisError as e:
            raise DataUnavailableError(f"Cannot read sampling table from Redis: {e}") from e
        if data is None:
            return None
        return SamplingTable.from_json(data)

    def clear(self) -> None:
        """Remove the stored table. Useful for tests."""
        self.client.delete(self._table_key())
