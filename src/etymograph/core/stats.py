# src/etymograph/core/stats.py
"""
Offline precompute of the sampling table.

For every word we count how many words its graph would show at sizing
depth (no hub pruning) and how many related words it lists. Words whose
graph is trivial or too large to display are left out of random
selection.
"""

import logging
from dataclasses import dataclass

from etymograph.core.graph import reachable_count
from etymograph.core.sampling import SamplingTable
from etymograph.core.word_index import WordIndex


logger = logging.getLogger(__name__)

SIZING_DEPTH = 3
NODE_CAP = 850
PROGRESS_EVERY = 1000


@dataclass(frozen=True)
class WordStats:
    word: str
    num_connections: int
    graph_size: int

    def is_eligible(self, node_cap: int = NODE_CAP) -> bool:
        return (
            self.graph_size > 1
            and self.num_connections > 0
            and self.graph_size <= node_cap
        )


def word_stats(index: WordIndex, max_depth_for_sizing: int = SIZING_DEPTH) -> list[WordStats]:
    """Stats for every word, in index order."""
    stats = []
    total = len(index)
    for i, word in enumerate(index, start=1):
        stats.append(WordStats(
            word=word,
            num_connections=len(index[word].related_words),
            graph_size=reachable_count(index, word, max_depth_for_sizing),
        ))
        if i % PROGRESS_EVERY == 0:
            logger.info("Processed %d/%d words...", i, total)
    return stats


def compute(
    index: WordIndex,
    max_depth_for_sizing: int = SIZING_DEPTH,
    node_cap: int = NODE_CAP,
) -> SamplingTable:
    """Build the sampling table from eligible words, smallest graphs first."""
    stats = word_stats(index, max_depth_for_sizing)
    eligible = [s for s in stats if s.is_eligible(node_cap)]
    eligible.sort(key=lambda s: s.graph_size)

    table = SamplingTable.from_weights(
        (s.word, s.num_connections, s.graph_size) for s in eligible
    )
    logger.info(
        "Sampling table: %d of %d words eligible, total weight %d",
        len(table), len(index), table.total_weight,
    )
    return table


def summarize(table: SamplingTable, index: WordIndex, limit: int = 10) -> dict:
    """Diagnostics for a freshly built table."""
    with_connections = sum(1 for w in index if index[w].related_words)
    entries = [e.to_dict() for e in table.entries]
    return {
        "total_words": len(index),
        "words_with_connections": with_connections,
        "eligible_words": len(table),
        "total_weight": table.total_weight,
        "smallest": entries[:limit],
        "largest": entries[-limit:] if entries else [],
    }
