"""
Move Enumeration Module - Legal pairs among the playable marbles.
"""

from typing import List, Optional

from .board import BoardState
from .move import Marble, Move
from .rules import playable_marbles
from .tiles import Tile

# Priority scores, lower is tried first
GOLD_PRIORITY = 0
QUICKSILVER_PRIORITY = 1
VITAE_MORS_PRIORITY = 2
ELEMENT_PRIORITY = 3


def pair_priority(a: Marble, b: Marble) -> Optional[int]:
    """
    Classify a pair of playable marbles.

    Args:
        a: First marble
        b: Second marble (the same marble for a Gold solo)

    Returns:
        Priority of the move, or None if the pair cannot be removed
    """
    if a == b:
        return GOLD_PRIORITY if a.tile is Tile.GOLD else None

    kinds = {a.tile, b.tile}

    if Tile.QUICKSILVER in kinds and (a.tile.is_metal or b.tile.is_metal):
        return QUICKSILVER_PRIORITY

    if kinds == {Tile.VITAE, Tile.MORS}:
        return VITAE_MORS_PRIORITY

    if a.tile.is_elemental_compatible and b.tile.is_elemental_compatible:
        if Tile.SALT in kinds or a.tile is b.tile:
            # Salt is scarce; pairs that spend it are tried later
            salts = (a.tile is Tile.SALT) + (b.tile is Tile.SALT)
            return ELEMENT_PRIORITY + salts

    return None


def find_moves(playable: List[Marble]) -> List[Move]:
    """
    Generate every legal move among the given playable marbles.

    Pairs are visited as (i, j) with i <= j over the input order, so
    each unordered pair appears at most once.

    Args:
        playable: Playable marbles in scan order

    Returns:
        Moves in generation order
    """
    moves = []
    for i, a in enumerate(playable):
        for b in playable[i:]:
            priority = pair_priority(a, b)
            if priority is not None:
                moves.append(Move.create(a, b, priority))
    return moves


def ordered_moves(board: BoardState) -> List[Move]:
    """
    Legal moves on a board, best first.

    The sort is stable: equal priorities keep generation order.
    """
    return sorted(find_moves(playable_marbles(board)), key=lambda m: m.priority)
