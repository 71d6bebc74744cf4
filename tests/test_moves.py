"""
Tests for pair classification and move ordering.

Usage:
    pytest tests/test_moves.py
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sigmar.solver import BoardState, Marble, Move, Tile, find_moves, ordered_moves
from sigmar.solver.moves import pair_priority


def pair(a: Tile, b: Tile):
    return pair_priority(Marble(2, 5, a), Marble(8, 5, b))


def test_gold_alone():
    gold = Marble(5, 5, Tile.GOLD)
    assert pair_priority(gold, gold) == 0
    air = Marble(5, 5, Tile.AIR)
    assert pair_priority(air, air) is None


def test_quicksilver_with_metal():
    assert pair(Tile.QUICKSILVER, Tile.LEAD) == 1
    assert pair(Tile.SILVER, Tile.QUICKSILVER) == 1
    assert pair(Tile.QUICKSILVER, Tile.QUICKSILVER) is None
    assert pair(Tile.QUICKSILVER, Tile.AIR) is None
    assert pair(Tile.LEAD, Tile.TIN) is None


def test_vitae_with_mors():
    assert pair(Tile.VITAE, Tile.MORS) == 2
    assert pair(Tile.MORS, Tile.VITAE) == 2
    assert pair(Tile.VITAE, Tile.VITAE) is None
    assert pair(Tile.MORS, Tile.SALT) is None


def test_elements_and_salt():
    assert pair(Tile.AIR, Tile.AIR) == 3
    assert pair(Tile.EARTH, Tile.SALT) == 4
    assert pair(Tile.SALT, Tile.WATER) == 4
    assert pair(Tile.SALT, Tile.SALT) == 5
    assert pair(Tile.AIR, Tile.FIRE) is None
    assert pair(Tile.SALT, Tile.QUICKSILVER) is None


def test_find_moves_visits_each_pair_once():
    playable = [
        Marble(2, 5, Tile.AIR),
        Marble(5, 5, Tile.SALT),
        Marble(8, 5, Tile.AIR),
    ]
    moves = find_moves(playable)
    assert moves == [
        Move((2, 5), (5, 5), 4),
        Move((2, 5), (8, 5), 3),
        Move((5, 5), (8, 5), 4),
    ]


def test_ordered_moves_is_stable():
    board = BoardState.from_placements({
        (2, 5): Tile.AIR, (5, 5): Tile.SALT, (8, 5): Tile.AIR, (5, 8): Tile.GOLD,
    })
    moves = ordered_moves(board)
    assert moves == [
        Move((5, 8), (5, 8), 0),
        Move((2, 5), (8, 5), 3),
        Move((2, 5), (5, 5), 4),
        Move((5, 5), (8, 5), 4),
    ]


def test_enumeration_is_repeatable():
    board = BoardState.from_placements({
        (2, 5): Tile.VITAE, (5, 5): Tile.MORS, (8, 5): Tile.FIRE, (5, 2): Tile.FIRE,
        (3, 8): Tile.LEAD, (6, 8): Tile.QUICKSILVER,
    })
    first = ordered_moves(board)
    repeats = [ordered_moves(board) for _ in range(3)]
    assert all(moves == first for moves in repeats)
    assert {m.priority for m in first} == {1, 2, 3}


def test_move_cells():
    assert Move((5, 5), (5, 5), 0).cells == ((5, 5),)
    assert Move((5, 5), (5, 5), 0).is_solo
    assert Move((2, 5), (8, 5), 3).cells == ((2, 5), (8, 5))
