"""
Test script for solver validation

Covers:
1. Small boards with known solutions
2. A complete starting board
3. Unsolvable boards and dead-end pruning
4. Cancellation, timeouts and progress reporting
5. Search observer events
6. Strategy factory

Usage:
    pytest tests/test_solver.py
    python tests/test_solver.py
"""

import logging
import sys
import threading
import time
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sigmar.solver import (
    BoardState,
    LoggingObserver,
    Move,
    RecordingObserver,
    SolutionContext,
    Tile,
    create_strategy,
    get_default_strategy_name,
    get_strategy_names,
    is_valid_solution,
)

STRATEGIES = ["backtracking", "iterative"]


def line_board() -> BoardState:
    """W A F F A W on row 5; only the two ends are ever open."""
    row = [Tile.WATER, Tile.AIR, Tile.FIRE, Tile.FIRE, Tile.AIR, Tile.WATER]
    return BoardState.from_placements({(2 + i, 5): tile for i, tile in enumerate(row)})


def metal_board() -> BoardState:
    return BoardState.from_placements({
        (2, 2): Tile.TIN, (5, 5): Tile.LEAD,
        (5, 8): Tile.QUICKSILVER, (8, 5): Tile.QUICKSILVER,
    })


def salt_board() -> BoardState:
    """Two Air, one Fire and one Salt to absorb it."""
    return BoardState.from_placements({
        (2, 5): Tile.AIR, (4, 2): Tile.AIR, (6, 8): Tile.FIRE, (8, 5): Tile.SALT,
    })


def stranded_salt_board() -> BoardState:
    """Air, Salt, Air: pairing the Airs strands the Salt, any other pair strands an Air."""
    return BoardState.from_placements({
        (2, 5): Tile.AIR, (5, 5): Tile.SALT, (8, 5): Tile.AIR,
    })


def lost_sibling_board() -> BoardState:
    """Air Air Fire on row 5 with a lone Salt; only Fire + Salt leads anywhere."""
    return BoardState.from_placements({
        (2, 5): Tile.AIR, (3, 5): Tile.AIR, (4, 5): Tile.FIRE, (7, 7): Tile.SALT,
    })


def full_board() -> BoardState:
    """
    A complete deal laid out so the search never has to back up.

    Rows 1, 3, 7 and 9 hold the elements and open only at their ends.
    Row 5 holds Quicksilver and the metals, kept closed by the four Salts
    beside it until every element is gone. Vitae and Mors sit along the
    top and bottom edges where they are always free.
    """
    placements = {}
    for x in range(2, 9):
        placements[(x, 1)] = Tile.WATER
        placements[(x, 9)] = Tile.EARTH
    for x in range(1, 9):
        placements[(x, 3)] = Tile.AIR
        placements[(x, 7)] = Tile.FIRE
    placements[(9, 3)] = Tile.WATER
    placements[(9, 7)] = Tile.EARTH

    row = [Tile.QUICKSILVER] * 5 + [
        Tile.GOLD, Tile.SILVER, Tile.COPPER, Tile.IRON, Tile.TIN, Tile.LEAD,
    ]
    for x, tile in enumerate(row):
        placements[(x, 5)] = tile

    for cell in [(1, 4), (1, 6), (10, 4), (10, 6)]:
        placements[cell] = Tile.SALT
    for y in (0, 10):
        placements[(3, y)] = Tile.VITAE
        placements[(4, y)] = Tile.MORS
        placements[(6, y)] = Tile.VITAE
        placements[(7, y)] = Tile.MORS
    return BoardState.from_placements(placements)


def solve(name: str, board: BoardState, **kwargs):
    context = SolutionContext(board=board, **kwargs)
    return create_strategy(name).solve(context)


@pytest.mark.parametrize("name", STRATEGIES)
def test_single_gold(name):
    board = BoardState.from_placements({(5, 5): Tile.GOLD})
    solution = solve(name, board)
    assert solution.is_solved
    assert solution.moves == [Move((5, 5), (5, 5), 0)]
    assert solution.board_states[-1].is_empty()


@pytest.mark.parametrize("name", STRATEGIES)
def test_quicksilver_and_lead(name):
    board = BoardState.from_placements({(3, 3): Tile.QUICKSILVER, (7, 7): Tile.LEAD})
    solution = solve(name, board)
    assert solution.is_solved
    assert solution.moves == [Move((3, 3), (7, 7), 1)]


@pytest.mark.parametrize("name", STRATEGIES)
def test_two_air(name):
    board = BoardState.from_placements({(3, 3): Tile.AIR, (7, 7): Tile.AIR})
    solution = solve(name, board)
    assert solution.is_solved
    assert solution.moves == [Move((3, 3), (7, 7), 3)]


@pytest.mark.parametrize("name", STRATEGIES)
def test_single_air_is_rejected_before_search(name):
    observer = RecordingObserver()
    board = BoardState.from_placements({(5, 5): Tile.AIR})
    solution = solve(name, board, observer=observer)
    assert not solution.is_solved
    assert not solution.was_cancelled
    assert solution.moves == []
    assert solution.metrics.states_explored == 0
    assert solution.metrics.pruned_branches == 1
    assert observer.names() == ["started", "dead_end", "exhausted"]


@pytest.mark.parametrize("name", STRATEGIES)
def test_empty_board_is_solved(name):
    solution = solve(name, BoardState.empty())
    assert solution.is_solved
    assert solution.moves == []


@pytest.mark.parametrize("name", STRATEGIES)
def test_line_is_cleared_from_the_ends(name):
    board = line_board()
    solution = solve(name, board)
    assert solution.is_solved
    assert solution.moves == [
        Move((2, 5), (7, 5), 3),
        Move((3, 5), (6, 5), 3),
        Move((4, 5), (5, 5), 3),
    ]
    assert is_valid_solution(board, solution.moves)
    assert len(solution.board_states) == 4
    assert solution.get_board_after_move(0).count_marbles() == 4


@pytest.mark.parametrize("name", STRATEGIES)
def test_metals_in_sequence(name):
    solution = solve(name, metal_board())
    assert solution.is_solved
    assert solution.moves == [
        Move((5, 5), (5, 8), 1),
        Move((2, 2), (8, 5), 1),
    ]


@pytest.mark.parametrize("name", STRATEGIES)
def test_salt_absorbs_odd_element(name):
    solution = solve(name, salt_board())
    assert solution.is_solved
    assert solution.moves == [
        Move((2, 5), (4, 2), 3),
        Move((6, 8), (8, 5), 4),
    ]


@pytest.mark.parametrize("name", STRATEGIES)
def test_full_board_is_solved(name):
    board = full_board()
    assert board.is_valid_start()
    solution = solve(name, board)
    assert solution.is_solved
    assert len(solution.moves) == 28
    assert is_valid_solution(board, solution.moves)
    # Lead goes first, Gold last
    assert solution.moves[0] == Move((0, 5), (10, 5), 1)
    assert solution.moves[-1] == Move((5, 5), (5, 5), 0)
    assert solution.metrics.states_explored == 28
    assert solution.metrics.max_depth == 28


@pytest.mark.parametrize("name", STRATEGIES)
def test_dead_end_child_stops_its_node(name):
    observer = RecordingObserver()
    solution = solve(name, stranded_salt_board(), observer=observer)
    assert not solution.is_solved
    assert not solution.was_cancelled
    # Salt + the second Air is never tried
    assert solution.metrics.states_explored == 2
    assert solution.metrics.pruned_branches == 1
    assert observer.names() == [
        "started",
        "move", "backtrack",
        "move", "dead_end",
        "exhausted",
    ]


@pytest.mark.parametrize("name", STRATEGIES)
def test_dead_end_child_fails_its_node(name):
    board = lost_sibling_board()
    observer = RecordingObserver()
    solution = solve(name, board, observer=observer)

    # Air + Salt comes first and strands Fire and Air, so Fire + Salt is skipped
    assert not solution.is_solved
    assert solution.metrics.states_explored == 1
    assert observer.names() == ["started", "move", "dead_end", "exhausted"]

    after_fire = board.apply_move(Move((4, 5), (7, 7), 4))
    assert solve(name, after_fire).moves == [Move((2, 5), (3, 5), 3)]


def test_strategies_agree():
    for board in [line_board(), metal_board(), salt_board(), stranded_salt_board(),
                  lost_sibling_board(), full_board()]:
        results = [solve(name, board) for name in STRATEGIES]
        assert results[0].moves == results[1].moves
        assert results[0].is_solved == results[1].is_solved


@pytest.mark.parametrize("name", STRATEGIES)
def test_cancel_flag(name):
    cancel = threading.Event()
    cancel.set()
    observer = RecordingObserver()
    solution = solve(name, line_board(), cancel_flag=cancel, observer=observer)
    assert solution.was_cancelled
    assert not solution.is_solved
    assert solution.moves == []
    assert observer.names() == ["started", "cancelled"]


@pytest.mark.parametrize("name", STRATEGIES)
def test_timeout(name):
    solution = solve(name, line_board(), timeout_sec=1.0, start_time=time.time() - 10)
    assert solution.was_cancelled


@pytest.mark.parametrize("name", STRATEGIES)
def test_progress_and_metrics(name):
    reports = []
    solution = solve(
        name, line_board(),
        progress_callback=lambda percent, message: reports.append(percent),
    )
    metrics = solution.metrics
    assert metrics.strategy_name == name
    assert metrics.states_explored == 3
    assert metrics.max_depth == 3
    assert metrics.computation_time_ms >= 0
    assert len(reports) == 3
    assert reports[-1] == pytest.approx(0.99)


@pytest.mark.parametrize("name", STRATEGIES)
def test_observer_sees_solution(name):
    observer = RecordingObserver()
    solve(name, line_board(), observer=observer)
    assert observer.events[0] == ("started", 6)
    assert observer.events[-1] == ("solved", 3)
    assert [e[2] for e in observer.events if e[0] == "move"] == [0, 1, 2]


def test_logging_observer_messages(caplog):
    caplog.set_level(logging.DEBUG, logger="sigmar.solver.observer")
    solve("backtracking", line_board(), observer=LoggingObserver())
    assert "Search started: 6 marbles" in caplog.text
    assert "Board:\n" in caplog.text
    assert "try (2, 5)+(7, 5) (p3)" in caplog.text
    assert "Solution found: 3 moves" in caplog.text


def test_factory():
    assert set(STRATEGIES) <= set(get_strategy_names())
    assert get_default_strategy_name() == "backtracking"
    with pytest.raises(ValueError):
        create_strategy("no_such_strategy")


def test_invalid_solution_detected():
    board = line_board()
    # The middle Fire pair is listed first; replaying still empties the board
    assert is_valid_solution(board, [
        Move((4, 5), (5, 5), 3), Move((3, 5), (6, 5), 3), Move((2, 5), (7, 5), 3),
    ])
    # Clearing an already empty cell is not
    assert not is_valid_solution(board, [
        Move((2, 5), (7, 5), 3), Move((2, 5), (7, 5), 3),
    ])
    # Leftover marbles
    assert not is_valid_solution(board, [Move((2, 5), (7, 5), 3)])


def main():
    """Run the tests with pytest."""
    return pytest.main([__file__, "-v"])


if __name__ == "__main__":
    sys.exit(main())
