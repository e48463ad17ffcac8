from __future__ import annotations

import logging
from dataclasses import dataclass, field

from gridtrie.metrics import StageTimer
from gridtrie.paths import GridError, enumerate_paths, validate_grid
from gridtrie.settings import Settings, settings
from gridtrie.trie import Trie

logger = logging.getLogger("gridtrie")


@dataclass
class QueryResult:
    grid: list[list[str]]
    queries: list[str]
    matches: list[str]
    word_count: int
    timings: dict = field(default_factory=dict)


def parse_input(text: str) -> tuple[list[str], list[list[str]]]:
    """Parse the plain-text format into (queries, grid).

    Line 1: whitespace-separated queries. Line 2: "m n". Then m rows of
    exactly n whitespace-separated tokens. Trailing blank lines are ignored.
    """
    lines = text.rstrip().splitlines()
    if len(lines) < 2:
        raise GridError("Expected a query line and a dimensions line")

    queries = lines[0].split()

    dims = lines[1].split()
    if len(dims) != 2:
        raise GridError(f"Dimensions line must be 'm n', got {lines[1]!r}")
    try:
        m, n = int(dims[0]), int(dims[1])
    except ValueError:
        raise GridError(f"Dimensions must be integers, got {lines[1]!r}") from None
    if m < 1 or n < 1:
        raise GridError(f"Dimensions must be positive, got {m}x{n}")

    row_lines = lines[2:2 + m]
    if len(row_lines) < m:
        raise GridError(f"Expected {m} grid rows, got {len(row_lines)}")

    grid = []
    for r, line in enumerate(row_lines):
        row = line.split()
        if len(row) != n:
            raise GridError(f"Row {r} has {len(row)} cells, expected {n}")
        grid.append(row)
    return queries, grid


def build_trie(grid: list[list[str]], cfg: Settings = settings) -> Trie:
    rows, cols = validate_grid(grid)
    if rows * cols > cfg.MAX_GRID_CELLS:
        raise GridError(
            f"Grid {rows}x{cols} has {rows * cols} cells, limit is {cfg.MAX_GRID_CELLS}"
        )
    trie = Trie()
    enumerate_paths(grid, trie, cfg.MAX_PATH_LENGTH)
    logger.info("Built trie for %dx%d grid: %d strings", rows, cols, trie.count)
    return trie


def run_queries(queries: list[str], trie: Trie) -> list[str]:
    """Queries found in the trie, in input order, duplicates kept."""
    return [q for q in queries if trie.contains(q)]


def solve_grid(
    grid: list[list[str]],
    queries: list[str],
    cfg: Settings = settings,
    timer: StageTimer | None = None,
) -> tuple[QueryResult, Trie]:
    timer = timer or StageTimer()
    if len(queries) > cfg.MAX_QUERIES:
        raise GridError(f"{len(queries)} queries given, limit is {cfg.MAX_QUERIES}")

    with timer.stage("enumerate"):
        trie = build_trie(grid, cfg)
    timer.record("word_count", trie.count)

    with timer.stage("query"):
        matches = run_queries(queries, trie)
    logger.info("Matched %d of %d queries", len(matches), len(queries))

    result = QueryResult(
        grid=grid,
        queries=queries,
        matches=matches,
        word_count=trie.count,
        timings=timer.summary(),
    )
    return result, trie


def solve_text(text: str, cfg: Settings = settings) -> QueryResult:
    timer = StageTimer()
    with timer.stage("parse"):
        queries, grid = parse_input(text)
    result, _ = solve_grid(grid, queries, cfg, timer)
    return result
