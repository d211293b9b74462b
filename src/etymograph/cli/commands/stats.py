"""
Sampling table precompute.
"""

import sys

from rich.console import Console
from rich.table import Table

from etymograph.core import stats
from etymograph.core.config import get_settings
from etymograph.core.engine import Engine
from etymograph.core.errors import EtymographError
from etymograph.core.sampling import SamplingTableStore
from etymograph.core.word_index import load_index


console = Console()


def add_subparser(subparsers):
    parser = subparsers.add_parser("stats", help="Sampling table management")
    stats_sub = parser.add_subparsers(dest="stats_command", required=True)

    build_p = stats_sub.add_parser("build", help="Precompute the random-word sampling table")
    build_p.add_argument("--data", help="Dataset path (default: ETYMOGRAPH_DATA_PATH)")
    build_p.add_argument("--out", help="Output path (default: ETYMOGRAPH_STATS_PATH)")
    build_p.add_argument("--depth", type=int, default=stats.SIZING_DEPTH,
                         help=f"Sizing depth (default: {stats.SIZING_DEPTH})")
    build_p.add_argument("--cap", type=int, default=stats.NODE_CAP,
                         help=f"Max graph size for eligible words (default: {stats.NODE_CAP})")
    build_p.add_argument("--publish", action="store_true", help="Also store the table in Redis")
    build_p.set_defaults(func=stats_build)


def _entries_table(title: str, entries: list[dict]) -> Table:
    table = Table(title=title)
    table.add_column("word")
    table.add_column("nodes", justify="right")
    table.add_column("connections", justify="right")
    for e in entries:
        table.add_row(e["word"], str(e["graphSize"]), str(e["numConnections"]))
    return table


def stats_build(args):
    settings = get_settings()
    out = args.out or settings.stats_path
    store = SamplingTableStore.from_settings(settings) if args.publish else None

    try:
        index = load_index(args.data or settings.data_path)
        engine = Engine(index, max_depth=settings.max_depth)
        table = engine.rebuild_sampling_table(
            path=out,
            store=store,
            max_depth_for_sizing=args.depth,
            node_cap=args.cap,
        )
    except (EtymographError, OSError) as e:
        print(f"✗ Error: {e}")
        sys.exit(1)

    summary = stats.summarize(table, index)
    print(f"✓ Saved statistics to {out}")
    if store is not None:
        print("✓ Published to Redis")
    print(f"  total words: {summary['total_words']}")
    print(f"  words with connections: {summary['words_with_connections']}")
    print(f"  eligible words: {summary['eligible_words']}")
    print(f"  total weight: {summary['total_weight']}")
    console.print(_entries_table("Smallest graphs", summary["smallest"]))
    console.print(_entries_table("Largest graphs", summary["largest"]))
