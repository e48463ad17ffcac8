from __future__ import annotations

import logging

from gridtrie.trie import Trie

logger = logging.getLogger("gridtrie")


class GridError(ValueError):
    """Raised for malformed grids, unparseable input, or grids over the size limit."""


def validate_grid(grid: list[list[str]]) -> tuple[int, int]:
    """Check that the grid is a non-empty rectangle of non-empty string tokens.

    Returns (rows, cols). Ragged rows are rejected rather than truncated.
    """
    if not grid or not grid[0]:
        raise GridError("Grid must have at least one row and one column")
    cols = len(grid[0])
    for r, row in enumerate(grid):
        if len(row) != cols:
            raise GridError(f"Row {r} has {len(row)} cells, expected {cols}")
        for c, cell in enumerate(row):
            if not isinstance(cell, str) or not cell:
                raise GridError(f"Cell ({r},{c}) must be a non-empty string, got {cell!r}")
    return len(grid), cols


def neighbors(rows: int, cols: int) -> list[list[int]]:
    """Adjacency lists over flat cell indices, 8 directions, clipped at the edges."""
    adj_lists: list[list[int]] = []
    for idx in range(rows * cols):
        r, c = divmod(idx, cols)
        adj = []
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                if dr == 0 and dc == 0:
                    continue
                nr, nc = r + dr, c + dc
                if 0 <= nr < rows and 0 <= nc < cols:
                    adj.append(nr * cols + nc)
        adj_lists.append(adj)
    return adj_lists


def enumerate_paths(grid: list[list[str]], trie: Trie, max_length: int = 0):
    """Insert the string of every simple path in the grid into the trie.

    Paths start at every cell and extend through the 8-connected neighbours
    without revisiting a cell. The visited set is an int bitmask passed by
    value, so sibling branches never see each other's marks. If max_length
    is positive, paths stop growing once they span that many cells.

    The number of simple paths grows exponentially with grid size; callers
    must keep grids small.
    """
    rows, cols = validate_grid(grid)
    cells = [grid[r][c] for r in range(rows) for c in range(cols)]
    adj_lists = neighbors(rows, cols)

    def dfs(idx: int, path: str, visited: int, length: int):
        trie.insert(path)
        if max_length and length >= max_length:
            return
        for nidx in adj_lists[idx]:
            if not (visited & (1 << nidx)):
                dfs(nidx, path + cells[nidx], visited | (1 << nidx), length + 1)

    for start in range(rows * cols):
        dfs(start, cells[start], 1 << start, 1)

    logger.debug("Enumerated %dx%d grid into %d distinct strings", rows, cols, trie.count)
