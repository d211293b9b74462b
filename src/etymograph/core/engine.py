# src/etymograph/core/engine.py
"""
Query engine: word graphs, entries and random words over a loaded index.

The process-wide engine is built once on first use by get_engine(); the
index and table it holds are never mutated, so request handlers share it
without locking.
"""

import logging
import random
import threading
from pathlib import Path

from etymograph.core import stats
from etymograph.core.config import Settings, get_settings
from etymograph.core.errors import DataFormatError, DataUnavailableError, InvalidDepthError
from etymograph.core.graph import WordGraph, build_graph
from etymograph.core.hubs import prune
from etymograph.core.sampling import SamplingTable, SamplingTableStore, load_table
from etymograph.core.word_index import WordEntry, WordIndex, load_index


logger = logging.getLogger(__name__)


class Engine:
    def __init__(
        self,
        index: WordIndex,
        table: SamplingTable | None = None,
        max_depth: int = 3,
    ):
        self.index = index
        self.table = table if table is not None else SamplingTable()
        self.max_depth = max_depth

    def get_graph(self, word: str, depth: int) -> WordGraph:
        """Pruned graph around `word`. Empty if the word is unknown."""
        if not 1 <= depth <= self.max_depth:
            raise InvalidDepthError(
                f"Invalid depth {depth}. Must be a number between 1 and {self.max_depth}."
            )
        graph = build_graph(self.index, word, depth)
        if graph.is_empty:
            return graph
        return prune(graph)

    def get_entry(self, word: str) -> WordEntry | None:
        return self.index.lookup(word)

    def get_random_word(self, rng: random.Random | None = None) -> str | None:
        """
        Weighted pick from the sampling table.

        Without a table, returns the first word that has any related words.
        """
        if not self.table.is_empty:
            unit = (rng or random).random()
            return self.table.sample(unit)

        for word in self.index:
            if self.index[word].related_words:
                return word
        return None

    def rebuild_sampling_table(
        self,
        path: str | Path | None = None,
        store: SamplingTableStore | None = None,
        max_depth_for_sizing: int = stats.SIZING_DEPTH,
        node_cap: int = stats.NODE_CAP,
    ) -> SamplingTable:
        """
        Recompute the table from this engine's index and persist it.

        The engine keeps serving the table it was created with.
        """
        table = stats.compute(self.index, max_depth_for_sizing, node_cap)
        if path is not None:
            table.save(path)
        if store is not None:
            store.save(table)
        return table


def _load_table(settings: Settings, store: SamplingTableStore | None) -> SamplingTable | None:
    if store is not None:
        try:
            table = store.load()
        except (DataUnavailableError, DataFormatError) as e:
            logger.warning("Could not load sampling table from Redis: %s", e)
        else:
            if table is not None:
                return table

    try:
        return load_table(settings.stats_path)
    except (DataUnavailableError, DataFormatError) as e:
        logger.warning("Could not load %s, random words use fallback: %s", settings.stats_path, e)
        return None


def create_engine(
    settings: Settings | None = None,
    store: SamplingTableStore | None = None,
) -> Engine:
    """Load the dataset and sampling table. Dataset errors propagate."""
    settings = settings or get_settings()
    index = load_index(settings.data_path)
    table = _load_table(settings, store)
    return Engine(index, table, max_depth=settings.max_depth)


_engine: Engine | None = None
_engine_lock = threading.Lock()


def get_engine(
    settings: Settings | None = None,
    store: SamplingTableStore | None = None,
) -> Engine:
    """Process-wide engine; concurrent first callers share a single load."""
    global _engine
    if _engine is not None:
        return _engine
    with _engine_lock:
        if _engine is None:
            _engine = create_engine(settings, store)
        return _engine


def set_engine(engine: Engine | None) -> None:
    """Install a prebuilt engine (or clear it)."""
    global _engine
    with _engine_lock:
        _engine = engine


def reset_engine() -> None:
    set_engine(None)
