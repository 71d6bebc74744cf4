"""
Board State Module - Immutable board representation for Sigmar's Garden.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple, TYPE_CHECKING

from .tiles import Tile, METAL_RANK, STARTING_COUNTS, tile_from_symbol
from .topology import (
    BOARD_SIZE, DEAD_SPOTS, Coord, in_grid, is_valid_coordinate, playable_coords,
)

if TYPE_CHECKING:
    from .move import Move

DEAD_SPOT_SYMBOL = "#"


@dataclass(frozen=True)
class BoardState:
    """
    Immutable board state representation.

    Uses tuple-of-tuples for hashability and immutability. The grid is
    indexed column first, ``grid[x][y]``, matching board coordinates.
    Dead spots always read as empty, whatever is stored there.

    Attributes:
        grid: BOARD_SIZE columns of BOARD_SIZE tiles
    """
    grid: Tuple[Tuple[Tile, ...], ...]

    @classmethod
    def empty(cls) -> 'BoardState':
        """Create a board with no marbles."""
        column = (Tile.EMPTY,) * BOARD_SIZE
        return cls(grid=(column,) * BOARD_SIZE)

    @classmethod
    def from_placements(cls, placements: Dict[Coord, Tile]) -> 'BoardState':
        """
        Create a board from a mapping of (x, y) to tile.

        Args:
            placements: Marbles to place; every other cell is empty

        Returns:
            BoardState instance
        """
        columns = [[Tile.EMPTY] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        for (x, y), tile in placements.items():
            columns[x][y] = tile
        return cls(grid=tuple(tuple(col) for col in columns))

    @classmethod
    def from_text(cls, text: str) -> 'BoardState':
        """
        Parse a board written one row (y) per line.

        Each non-blank line holds BOARD_SIZE whitespace-separated symbols
        (see Tile values). Dead spots may be written as '#' or '.'.

        Raises:
            ValueError: If the text is malformed
        """
        lines = [line.split() for line in text.strip().splitlines() if line.strip()]
        if len(lines) != BOARD_SIZE:
            raise ValueError(f"Expected {BOARD_SIZE} rows, got {len(lines)}")

        placements: Dict[Coord, Tile] = {}
        for y, tokens in enumerate(lines):
            if len(tokens) != BOARD_SIZE:
                raise ValueError(f"Row {y}: expected {BOARD_SIZE} cells, got {len(tokens)}")
            for x, token in enumerate(tokens):
                if (x, y) in DEAD_SPOTS:
                    if token not in (DEAD_SPOT_SYMBOL, Tile.EMPTY.symbol):
                        raise ValueError(f"Marble {token!r} on dead spot ({x}, {y})")
                    continue
                tile = tile_from_symbol(token)
                if tile is not Tile.EMPTY:
                    placements[(x, y)] = tile
        return cls.from_placements(placements)

    def to_text(self) -> str:
        """Render the board in the format accepted by from_text."""
        rows = []
        for y in range(BOARD_SIZE):
            row = []
            for x in range(BOARD_SIZE):
                if (x, y) in DEAD_SPOTS:
                    row.append(DEAD_SPOT_SYMBOL)
                else:
                    row.append(self.grid[x][y].symbol)
            rows.append(" ".join(row))
        return "\n".join(rows)

    def pretty(self) -> str:
        """Hexagon-shaped rendering for logs (odd rows indented)."""
        lines = []
        for y in range(BOARD_SIZE):
            cells = [
                self.grid[x][y].symbol if (x, y) not in DEAD_SPOTS else " "
                for x in range(BOARD_SIZE)
            ]
            indent = " " if y % 2 == 1 else ""
            lines.append((indent + " ".join(cells)).rstrip())
        return "\n".join(lines)

    def get_cell(self, x: int, y: int) -> Tile:
        """
        Get the tile at a board position.

        Args:
            x: Column
            y: Row

        Returns:
            The tile, or Tile.EMPTY for dead spots and off-board positions
        """
        if not is_valid_coordinate(x, y):
            return Tile.EMPTY
        return self.grid[x][y]

    def is_free(self, x: int, y: int) -> bool:
        """True if nothing blocks (x, y): off-board, dead spot or empty."""
        return self.get_cell(x, y) is Tile.EMPTY

    def with_cell(self, x: int, y: int, tile: Tile) -> 'BoardState':
        """
        Create a new board with one cell replaced.

        Raises:
            IndexError: If (x, y) is outside the grid
        """
        if not in_grid(x, y):
            raise IndexError(f"Cell ({x}, {y}) is outside the board")
        column = list(self.grid[x])
        column[y] = tile
        return BoardState(grid=self.grid[:x] + (tuple(column),) + self.grid[x + 1:])

    def apply_move(self, move: 'Move') -> 'BoardState':
        """
        Apply a move to create a new board state.

        Both cells of the move are cleared. Original board is unchanged.
        """
        columns = list(self.grid)
        for x, y in move.cells:
            column = list(columns[x])
            column[y] = Tile.EMPTY
            columns[x] = tuple(column)
        return BoardState(grid=tuple(columns))

    def find_tiles(self, tile: Tile) -> Iterator[Coord]:
        """Lazily yield playable coordinates holding the given tile."""
        for x, y in playable_coords():
            if self.grid[x][y] is tile:
                yield (x, y)

    def marbles(self) -> Iterator[Tuple[Coord, Tile]]:
        """Yield ((x, y), tile) for every marble in scan order."""
        for x, y in playable_coords():
            tile = self.grid[x][y]
            if tile is not Tile.EMPTY:
                yield (x, y), tile

    def count_marbles(self) -> int:
        """Number of non-empty playable cells."""
        return sum(1 for _ in self.marbles())

    def is_empty(self) -> bool:
        """True once every marble has been removed."""
        return next(self.marbles(), None) is None

    def tile_counts(self) -> Counter:
        """Count of each marble kind on the board (Empty excluded)."""
        return Counter(tile for _, tile in self.marbles())

    def first_metal_remaining(self) -> Optional[Tile]:
        """
        Get the earliest metal of the sequence still on the board.

        Returns:
            The lowest-ranked metal present, or None if no metal remains
        """
        best: Optional[Tile] = None
        for _, tile in self.marbles():
            rank = METAL_RANK.get(tile)
            if rank is not None and (best is None or rank < METAL_RANK[best]):
                best = tile
        return best

    def starting_count_errors(self) -> List[str]:
        """
        Compare marble counts with a freshly dealt board.

        Returns:
            One message per mismatching kind; empty if the board is valid
        """
        counts = self.tile_counts()
        errors = []
        for tile, expected in STARTING_COUNTS.items():
            found = counts.get(tile, 0)
            if found != expected:
                errors.append(f"{tile.name.lower()}: expected {expected}, found {found}")
        return errors

    def is_valid_start(self) -> bool:
        """True if the board has exactly the marbles of a new game."""
        return not self.starting_count_errors()

    def diff(self, other: 'BoardState') -> List[Coord]:
        """
        Find playable cells that differ between this board and another.

        Returns:
            List of (x, y) tuples where cells differ
        """
        if not isinstance(other, BoardState):
            raise TypeError("Can only diff against another BoardState")
        return [
            (x, y) for x, y in playable_coords()
            if self.grid[x][y] is not other.grid[x][y]
        ]
