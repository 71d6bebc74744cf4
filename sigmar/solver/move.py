"""
Move Module - A pair of marbles to remove from the board.
"""

from dataclasses import dataclass
from typing import Tuple

from .tiles import Tile
from .topology import Coord


@dataclass(frozen=True)
class Marble:
    """
    A non-empty cell seen during a board scan.

    Attributes:
        x: Column on the board
        y: Row on the board
        tile: Kind of marble in the cell
    """
    x: int
    y: int
    tile: Tile

    @property
    def position(self) -> Coord:
        return (self.x, self.y)


@dataclass(frozen=True)
class Move:
    """
    Removal of two marbles (or of Gold on its own).

    A Gold solo move names the same cell twice.

    Attributes:
        first: (x, y) of the first marble to click
        second: (x, y) of the second marble to click
        priority: Ordering score, lower is tried first
    """
    first: Coord
    second: Coord
    priority: int

    @classmethod
    def create(cls, a: Marble, b: Marble, priority: int) -> 'Move':
        """Build a Move from two scanned marbles."""
        return cls(first=a.position, second=b.position, priority=priority)

    @property
    def is_solo(self) -> bool:
        """True for the single-marble Gold move."""
        return self.first == self.second

    @property
    def cells(self) -> Tuple[Coord, ...]:
        """Distinct cells cleared by this move."""
        if self.is_solo:
            return (self.first,)
        return (self.first, self.second)

    def __str__(self) -> str:
        return f"{self.first}+{self.second} (p{self.priority})"
