# src/etymograph/core/hubs.py
"""
Hub pruning.

A hub is a non-root node with at least HUB_THRESHOLD children. Children
are derived from edges by depth: of two endpoints with different depths,
the shallower one is the parent. This is not the BFS discovery parent; any
edge across depths counts.

Every child of a hub is removed, along with everything below it.
"""

import logging

from etymograph.core.graph import WordGraph


logger = logging.getLogger(__name__)

HUB_THRESHOLD = 80


def derive_children(graph: WordGraph) -> dict[str, set[str]]:
    """Parent -> children relation inferred from endpoint depths."""
    depths = graph.depths()
    children: dict[str, set[str]] = {}

    for edge in graph.edges:
        source_depth = depths.get(edge.source)
        target_depth = depths.get(edge.target)
        # Frontier edges point at words outside the graph
        if source_depth is None or target_depth is None:
            continue

        if source_depth < target_depth:
            children.setdefault(edge.source, set()).add(edge.target)
        elif target_depth < source_depth:
            children.setdefault(edge.target, set()).add(edge.source)

    return children


def find_hubs(graph: WordGraph, threshold: int = HUB_THRESHOLD) -> list[str]:
    depths = graph.depths()
    return [
        node_id
        for node_id, kids in derive_children(graph).items()
        if depths[node_id] >= 1 and len(kids) >= threshold
    ]


def prune(graph: WordGraph, threshold: int = HUB_THRESHOLD) -> WordGraph:
    """Return a copy of `graph` without hub subtrees."""
    children = derive_children(graph)
    hubs = find_hubs(graph, threshold)
    if not hubs:
        return WordGraph(nodes=list(graph.nodes), edges=list(graph.edges))

    removed: set[str] = set()
    for hub in hubs:
        removed.update(children[hub])

    changed = True
    while changed:
        changed = False
        for parent, kids in children.items():
            if parent not in removed:
                continue
            new = kids - removed
            if new:
                removed.update(new)
                changed = True

    logger.debug("Pruned %d nodes below hubs %s", len(removed), hubs)

    return WordGraph(
        nodes=[n for n in graph.nodes if n.id not in removed],
        edges=[
            e for e in graph.edges
            if e.source not in removed and e.target not in removed
        ],
    )
