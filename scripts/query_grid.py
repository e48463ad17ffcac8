"""
Query a character grid from the command line.

Usage:
    python -m scripts.query_grid [input_file] [--prefix P] [--dump PATH] [--max-length N]

Input format (file or stdin):
    line 1: queries separated by spaces
    line 2: "m n" grid dimensions
    next m lines: n space-separated cell tokens

Examples:
    printf 'ab abdc aba\\n2 2\\na b\\nc d\\n' | python -m scripts.query_grid
    python -m scripts.query_grid board.txt --prefix ab
    python -m scripts.query_grid board.txt --dump words.json

Matched queries are printed one per line, in query order.
"""
import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

# Ensure project root is on path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from gridtrie.paths import GridError
from gridtrie.query import parse_input, solve_grid
from gridtrie.settings import settings


def main(argv=None):
    parser = argparse.ArgumentParser(description="Grid path dictionary query tool")
    parser.add_argument("input", nargs="?", default=None,
                        help="Path to an input file (default: read stdin)")
    parser.add_argument("--prefix", type=str, default=None,
                        help="Also print every grid string starting with this prefix")
    parser.add_argument("--dump", type=str, default=None,
                        help="Write the full word list as JSON to this path")
    parser.add_argument("--max-length", type=int, default=settings.MAX_PATH_LENGTH,
                        help=f"Max cells per path, 0 for unlimited (default: {settings.MAX_PATH_LENGTH})")
    parser.add_argument("--max-cells", type=int, default=settings.MAX_GRID_CELLS,
                        help=f"Refuse grids larger than this (default: {settings.MAX_GRID_CELLS})")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log stage timings")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.input:
        in_path = Path(args.input)
        if not in_path.exists():
            print(f"Error: {in_path} does not exist", file=sys.stderr)
            return 1
        text = in_path.read_text(encoding="utf-8")
    else:
        text = sys.stdin.read()

    cfg = replace(settings, MAX_PATH_LENGTH=args.max_length, MAX_GRID_CELLS=args.max_cells)

    try:
        queries, grid = parse_input(text)
        result, trie = solve_grid(grid, queries, cfg)
    except GridError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for match in result.matches:
        print(match)

    if args.prefix is not None:
        print(f"\n--- Words with prefix '{args.prefix}' ---")
        for word in trie.find_words_with_prefix(args.prefix):
            print(word)

    if args.dump:
        trie.dump(args.dump)
        print(f"\n{trie.count} words saved to {args.dump}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
