"""
Word commands (talk to a running server).
"""

import sys

from rich import print_json

from etymograph.cli import client


def add_subparser(subparsers):
    parser = subparsers.add_parser("word", help="Query a running server")
    word_sub = parser.add_subparsers(dest="word_command", required=True)

    # graph
    graph_p = word_sub.add_parser("graph", help="Fetch the graph for a word")
    graph_p.add_argument("word", help="Root word")
    graph_p.add_argument("--depth", type=int, help="Depth (1-3, default: server max)")
    graph_p.set_defaults(func=word_graph)

    # entry
    entry_p = word_sub.add_parser("entry", help="Show a word's definition and related words")
    entry_p.add_argument("word", help="Word")
    entry_p.set_defaults(func=word_entry)

    # random
    random_p = word_sub.add_parser("random", help="Pick a random word")
    random_p.set_defaults(func=word_random)


def word_graph(args):
    try:
        result = client.get_graph(args.word, args.depth)
        print_json(data=result)
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)


def word_entry(args):
    try:
        entry = client.get_entry(args.word)
        print(f"Word: {entry['word']}")
        print(f"Definition: {entry['definition']}")
        if entry["relatedWords"]:
            print(f"Related: {', '.join(entry['relatedWords'])}")
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)


def word_random(args):
    try:
        print(client.get_random())
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)
