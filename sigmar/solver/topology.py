"""
Topology Module - Hexagonal board geometry.

The board is stored as an 11x11 grid addressed by (x, y). Rows use an
offset layout: even rows sit half a cell to the left of odd rows. Grid
coordinates outside the 91-cell hexagon are "dead spots".
"""

from typing import FrozenSet, Iterator, Tuple

Coord = Tuple[int, int]

BOARD_SIZE = 11

# Grid coordinates that fall outside the playable hexagon
DEAD_SPOTS: FrozenSet[Coord] = frozenset([
    # Top-left corner
    (0, 0), (1, 0), (2, 0), (0, 1), (1, 1), (0, 2), (1, 2), (0, 3), (0, 4),
    # Bottom-left corner
    (0, 6), (0, 7), (0, 8), (1, 8), (0, 9), (1, 9), (0, 10), (1, 10), (2, 10),
    # Top-right corner
    (9, 0), (10, 0), (9, 1), (10, 1), (10, 2), (10, 3),
    # Bottom-right corner
    (10, 7), (10, 8), (9, 9), (10, 9), (9, 10), (10, 10),
])


def in_grid(x: int, y: int) -> bool:
    """True if (x, y) lies inside the 11x11 storage grid."""
    return 0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE


def is_valid_coordinate(x: int, y: int) -> bool:
    """True if (x, y) is a playable cell of the hexagon."""
    return in_grid(x, y) and (x, y) not in DEAD_SPOTS


def grid_coords() -> Iterator[Coord]:
    """All storage coordinates in scan order (x outer, y inner)."""
    for x in range(BOARD_SIZE):
        for y in range(BOARD_SIZE):
            yield (x, y)


def playable_coords() -> Iterator[Coord]:
    """Playable coordinates in scan order (x outer, y inner)."""
    for x, y in grid_coords():
        if (x, y) not in DEAD_SPOTS:
            yield (x, y)


def neighbors(x: int, y: int) -> Tuple[Coord, ...]:
    """
    The 6 neighbors of (x, y), clockwise from the west: W, NW, NE, E, SE, SW.

    Coordinates may fall outside the grid; callers treat those as free.

    Args:
        x: Column on the board
        y: Row on the board

    Returns:
        Tuple of exactly 6 (x, y) coordinates
    """
    if y % 2 == 0:
        return (
            (x - 1, y), (x - 1, y - 1), (x, y - 1),
            (x + 1, y), (x, y + 1), (x - 1, y + 1),
        )
    return (
        (x - 1, y), (x, y - 1), (x + 1, y - 1),
        (x + 1, y), (x + 1, y + 1), (x, y + 1),
    )
