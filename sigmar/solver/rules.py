"""
Rules Module - Which marbles may be played, and which positions are lost.
"""

from typing import List, Mapping, Optional, Sequence

from .board import BoardState
from .move import Marble
from .tiles import Tile, ELEMENTS
from .topology import neighbors

# Consecutive free neighbors needed to pick a marble up
MIN_FREE_ARC = 3


def longest_free_arc(free: Sequence[bool]) -> int:
    """
    Length of the longest run of free neighbors around the hex ring.

    The ring is circular: a run ending on the last neighbor continues
    with the run starting on the first one.

    Args:
        free: One flag per neighbor, in ring order

    Returns:
        Longest circular run length (len(free) if every neighbor is free)
    """
    size = len(free)
    if all(free):
        return size

    # Start just after a blocked neighbor so no run straddles the seam
    start = next(i for i, is_free in enumerate(free) if not is_free) + 1
    longest = current = 0
    for offset in range(size):
        if free[(start + offset) % size]:
            current += 1
            longest = max(longest, current)
        else:
            current = 0
    return longest


def free_neighbors(board: BoardState, x: int, y: int) -> List[bool]:
    """Free flag of each neighbor of (x, y), in ring order."""
    return [board.is_free(nx, ny) for nx, ny in neighbors(x, y)]


def is_open(board: BoardState, x: int, y: int) -> bool:
    """True if (x, y) has at least MIN_FREE_ARC contiguous free neighbors."""
    return longest_free_arc(free_neighbors(board, x, y)) >= MIN_FREE_ARC


def is_playable(board: BoardState, x: int, y: int,
                first_metal: Optional[Tile] = None) -> bool:
    """
    Decide whether the marble at (x, y) may be removed now.

    Args:
        board: Current board
        x: Column
        y: Row
        first_metal: Earliest metal still on the board; computed when omitted

    Returns:
        False for empty cells, gated metals and enclosed marbles
    """
    tile = board.get_cell(x, y)
    if tile is Tile.EMPTY:
        return False
    if tile.is_metal:
        if first_metal is None:
            first_metal = board.first_metal_remaining()
        if tile is not first_metal:
            return False
    return is_open(board, x, y)


def playable_marbles(board: BoardState) -> List[Marble]:
    """
    List the marbles that can be played, in scan order (x outer, y inner).
    """
    first_metal = board.first_metal_remaining()
    playable = []
    for (x, y), tile in board.marbles():
        if tile.is_metal and tile is not first_metal:
            continue
        if is_open(board, x, y):
            playable.append(Marble(x, y, tile))
    return playable


def odd_element_count(counts: Mapping[Tile, int]) -> int:
    """Number of elements with an odd number of marbles left."""
    return sum(1 for element in ELEMENTS if counts.get(element, 0) % 2 == 1)


def is_dead_end(board: BoardState) -> bool:
    """
    Cheap test for positions that can never be cleared.

    Each element left with an odd count needs a Salt to absorb its last
    marble. More odd elements than Salts means the board is lost. Passing
    this test does not prove the board is solvable.
    """
    counts = board.tile_counts()
    return odd_element_count(counts) > counts.get(Tile.SALT, 0)
