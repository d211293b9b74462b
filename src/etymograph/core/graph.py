# src/etymograph/core/graph.py
"""
Word graph built by breadth-first traversal from a root word.

Nodes carry their minimum hop distance from the root. The graph is not a
tree: a node reached from several parents gets an edge from each of them,
but at most one edge per unordered pair of words.
"""

from collections import deque
from dataclasses import dataclass, field

from etymograph.core.errors import InvalidDepthError
from etymograph.core.word_index import WordIndex, normalize


@dataclass(frozen=True)
class GraphNode:
    word: str
    definition: str
    depth: int
    related_words: tuple[str, ...] = ()

    @property
    def id(self) -> str:
        return self.word

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "word": self.word,
            "definition": self.definition,
            "depth": self.depth,
            "relatedWords": list(self.related_words),
        }


@dataclass(frozen=True)
class GraphEdge:
    source: str
    target: str

    @property
    def pair(self) -> frozenset[str]:
        """Unordered key for this edge."""
        return frozenset((self.source, self.target))

    def to_dict(self) -> dict:
        return {"from": self.source, "to": self.target}


@dataclass
class WordGraph:
    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def depths(self) -> dict[str, int]:
        return {node.id: node.depth for node in self.nodes}

    def to_dict(self) -> dict:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }


def _neighbors(index: WordIndex, word: str):
    """Related words of `word` that resolve to index entries, normalized."""
    for related in index[word].related_words:
        key = normalize(related)
        if key in index:
            yield key


def build_graph(index: WordIndex, root: str, max_depth: int) -> WordGraph:
    """
    BFS from `root` down to `max_depth` hops.

    Returns an empty graph if the root is not in the index. An edge is
    recorded for every indexed related word of an emitted node, so a node
    at `max_depth` may have edges to words that are not themselves nodes.
    """
    if max_depth < 0:
        raise InvalidDepthError(f"max_depth must be >= 0, got {max_depth}")

    root = normalize(root)
    if root not in index:
        return WordGraph()

    graph = WordGraph()
    seen_pairs: set[frozenset[str]] = set()
    visited = {root}
    queue = deque([(root, 0)])

    while queue:
        word, depth = queue.popleft()
        if depth > max_depth:
            continue

        entry = index[word]
        graph.nodes.append(GraphNode(
            word=word,
            definition=entry.definition,
            depth=depth,
            related_words=entry.related_words,
        ))

        for related in _neighbors(index, word):
            pair = frozenset((word, related))
            if pair not in seen_pairs:
                seen_pairs.add(pair)
                graph.edges.append(GraphEdge(word, related))

            if related not in visited and depth + 1 <= max_depth:
                visited.add(related)
                queue.append((related, depth + 1))

    return graph


def reachable_count(index: WordIndex, root: str, max_depth: int) -> int:
    """Number of distinct words within `max_depth` hops of `root`, root included."""
    root = normalize(root)
    if root not in index:
        return 0

    visited = {root}
    queue = deque([(root, 0)])
    while queue:
        word, depth = queue.popleft()
        if depth >= max_depth:
            continue
        for related in _neighbors(index, word):
            if related not in visited:
                visited.add(related)
                queue.append((related, depth + 1))

    return len(visited)
