"""
Local graph inspection, straight from a dataset file.
"""

import sys

from rich import print_json
from rich.console import Console

from etymograph.core.config import get_settings
from etymograph.core.errors import EtymographError, InvalidDepthError
from etymograph.core.graph import build_graph
from etymograph.core.hubs import find_hubs, prune
from etymograph.core.word_index import load_index


console = Console()


def add_subparser(subparsers):
    parser = subparsers.add_parser("graph", help="Build graphs locally")
    graph_sub = parser.add_subparsers(dest="graph_command", required=True)

    show_p = graph_sub.add_parser("show", help="Show the graph for a word")
    show_p.add_argument("word", help="Root word")
    show_p.add_argument("--depth", type=int, default=3, help="Depth (default: 3)")
    show_p.add_argument("--data", help="Dataset path (default: ETYMOGRAPH_DATA_PATH)")
    show_p.add_argument("--json", action="store_true", help="Print as JSON")
    show_p.set_defaults(func=graph_show)


def graph_show(args):
    settings = get_settings()
    try:
        if not 1 <= args.depth <= settings.max_depth:
            raise InvalidDepthError(f"Depth must be between 1 and {settings.max_depth}")
        index = load_index(args.data or settings.data_path)
        built = build_graph(index, args.word, args.depth)
    except (EtymographError, ValueError) as e:
        print(f"✗ Error: {e}")
        sys.exit(1)

    graph = prune(built)
    if graph.is_empty:
        print(f"✗ Word '{args.word}' not found")
        sys.exit(1)

    if args.json:
        print_json(data=graph.to_dict())
        return

    hubs = find_hubs(built)
    by_depth: dict[int, list[str]] = {}
    for node in graph.nodes:
        by_depth.setdefault(node.depth, []).append(node.word)

    for depth in sorted(by_depth):
        console.print(f"[bold]depth {depth}[/bold] ({len(by_depth[depth])})")
        console.print("  " + ", ".join(by_depth[depth]))

    console.print(f"\n{len(graph.nodes)} nodes, {len(graph.edges)} edges")
    if hubs:
        console.print(f"[yellow]pruned below hubs:[/yellow] {', '.join(hubs)}")
