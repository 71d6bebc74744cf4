"""
Tests for playability and dead-end rules.

Usage:
    pytest tests/test_rules.py
    python tests/test_rules.py
"""

import sys
from itertools import product
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sigmar.solver import BoardState, Tile, is_dead_end, is_playable, playable_marbles
from sigmar.solver.rules import longest_free_arc, odd_element_count
from sigmar.solver.topology import neighbors


CENTER = (5, 5)


def three_in_a_row(free):
    """At least 3 consecutive free neighbors, wrapping around the ring."""
    return any(all(free[(i + k) % 6] for k in range(3)) for i in range(6))


def board_around(center, free, tile=Tile.AIR):
    """Marble at center; each neighbor blocked by Fire unless free."""
    placements = {center: tile}
    for cell, is_free in zip(neighbors(*center), free):
        if not is_free:
            placements[cell] = Tile.FIRE
    return BoardState.from_placements(placements)


def test_all_ring_patterns():
    """Every one of the 64 occupancy patterns matches the wrapped rule."""
    for free in product([False, True], repeat=6):
        expected = three_in_a_row(free)
        assert (longest_free_arc(free) >= 3) == expected, free
        board = board_around(CENTER, free)
        assert is_playable(board, *CENTER) == expected, free


def test_longest_free_arc_wraps():
    # Free on E, SE, SW and W: the run crosses the end of the ring
    assert longest_free_arc([True, False, False, True, True, True]) == 4
    assert longest_free_arc([True, True, False, False, False, True]) == 3
    assert longest_free_arc([True, False, True, False, True, False]) == 1
    assert longest_free_arc([True] * 6) == 6
    assert longest_free_arc([False] * 6) == 0


def test_surrounded_marble_is_not_playable():
    board = board_around(CENTER, [False] * 6)
    assert not is_playable(board, *CENTER)


def test_isolated_marble_is_playable():
    board = BoardState.from_placements({CENTER: Tile.SALT})
    assert is_playable(board, *CENTER)


def test_empty_cell_is_not_playable():
    assert not is_playable(BoardState.empty(), *CENTER)


def test_off_board_neighbors_count_as_free():
    # (3, 0) sits on the top edge next to a dead spot
    board = BoardState.from_placements({
        (3, 0): Tile.WATER, (4, 0): Tile.FIRE, (3, 1): Tile.FIRE,
    })
    assert is_playable(board, 3, 0)


def test_metal_gating():
    board = BoardState.from_placements({
        (2, 2): Tile.TIN, (5, 5): Tile.LEAD, (8, 5): Tile.QUICKSILVER,
    })
    assert is_playable(board, 5, 5)
    assert not is_playable(board, 2, 2)
    assert [m.tile for m in playable_marbles(board)] == [Tile.LEAD, Tile.QUICKSILVER]

    without_lead = board.with_cell(5, 5, Tile.EMPTY)
    assert is_playable(without_lead, 2, 2)


def test_metal_gating_with_known_first_metal():
    board = BoardState.from_placements({(5, 5): Tile.IRON})
    assert is_playable(board, 5, 5, first_metal=Tile.IRON)
    assert not is_playable(board, 5, 5, first_metal=Tile.TIN)


def test_playable_marbles_scan_order():
    # Column first, then row
    board = BoardState.from_placements({
        (5, 2): Tile.AIR, (2, 8): Tile.FIRE, (5, 1): Tile.WATER,
    })
    assert [m.position for m in playable_marbles(board)] == [(2, 8), (5, 1), (5, 2)]


def test_dead_end():
    assert is_dead_end(BoardState.from_placements({CENTER: Tile.AIR}))
    assert not is_dead_end(BoardState.from_placements({CENTER: Tile.AIR, (2, 5): Tile.SALT}))
    assert is_dead_end(BoardState.from_placements({
        CENTER: Tile.AIR, (2, 5): Tile.FIRE, (8, 5): Tile.SALT,
    }))
    assert not is_dead_end(BoardState.empty())


def test_odd_element_count():
    counts = {Tile.AIR: 3, Tile.FIRE: 2, Tile.WATER: 1, Tile.SALT: 7}
    assert odd_element_count(counts) == 2


def main():
    """Run all tests without pytest."""
    tests = [obj for name, obj in sorted(globals().items())
             if name.startswith("test_") and callable(obj)]
    failed = 0
    for test in tests:
        try:
            test()
            print(f"  {test.__name__}: [PASS]")
        except AssertionError as e:
            failed += 1
            print(f"  {test.__name__}: [FAIL] {e}")
    print()
    print("All tests PASSED!" if not failed else f"{failed} test(s) FAILED!")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
