"""
Tile Module - Marble kinds for the Sigmar's Garden board.

Each kind carries the single-character symbol used by the text board format.
Membership tests go through the explicit collections below, never through
the enum values themselves.
"""

from enum import Enum
from typing import Dict, Tuple


class Tile(Enum):
    """
    Contents of one board cell.

    Values are the symbols used when a board is written as text.
    """
    EMPTY = "."
    SALT = "S"
    AIR = "A"
    FIRE = "F"
    WATER = "W"
    EARTH = "E"
    QUICKSILVER = "Q"
    LEAD = "1"
    TIN = "2"
    IRON = "3"
    COPPER = "4"
    SILVER = "5"
    GOLD = "6"
    VITAE = "V"
    MORS = "M"

    @property
    def symbol(self) -> str:
        """Single-character text symbol."""
        return self.value

    @property
    def is_metal(self) -> bool:
        return self in METAL_RANK

    @property
    def is_elemental(self) -> bool:
        return self in ELEMENTS

    @property
    def is_elemental_compatible(self) -> bool:
        """True for the four elements and Salt."""
        return self is Tile.SALT or self in ELEMENTS


# Mandatory consumption order of the metals (first must be played first)
METAL_SEQUENCE: Tuple[Tile, ...] = (
    Tile.LEAD,
    Tile.TIN,
    Tile.IRON,
    Tile.COPPER,
    Tile.SILVER,
    Tile.GOLD,
)

METAL_RANK: Dict[Tile, int] = {tile: rank for rank, tile in enumerate(METAL_SEQUENCE)}

ELEMENTS: Tuple[Tile, ...] = (Tile.AIR, Tile.FIRE, Tile.WATER, Tile.EARTH)

# Marble counts of a freshly dealt board
STARTING_COUNTS: Dict[Tile, int] = {
    Tile.SALT: 4,
    Tile.AIR: 8,
    Tile.FIRE: 8,
    Tile.WATER: 8,
    Tile.EARTH: 8,
    Tile.QUICKSILVER: 5,
    Tile.LEAD: 1,
    Tile.TIN: 1,
    Tile.IRON: 1,
    Tile.COPPER: 1,
    Tile.SILVER: 1,
    Tile.GOLD: 1,
    Tile.VITAE: 4,
    Tile.MORS: 4,
}


def tile_from_symbol(symbol: str) -> Tile:
    """
    Parse a text symbol into a Tile.

    Raises:
        ValueError: If the symbol is unknown
    """
    try:
        return Tile(symbol)
    except ValueError:
        valid = " ".join(t.symbol for t in Tile)
        raise ValueError(f"Unknown tile symbol: {symbol!r}. Valid: {valid}") from None
