"""
Etymograph CLI.
"""

import argparse
import logging

from etymograph.cli.commands import graph, stats, word


def main():
    parser = argparse.ArgumentParser(prog="etymograph", description="Etymology graph CLI")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    subparsers = parser.add_subparsers(dest="command")

    word.add_subparser(subparsers)
    graph.add_subparser(subparsers)
    stats.add_subparser(subparsers)

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s [%(name)s] %(message)s",
    )

    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
