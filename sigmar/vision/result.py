"""
Board Read Result Dataclasses

Shared data structures for board reader results.
"""

from dataclasses import dataclass, field
from typing import Dict, List

from PIL import Image

from sigmar.solver import BoardState


@dataclass
class ReadResult:
    """Complete result of one board read."""
    board: BoardState                 # Marbles as read
    errors: List[str] = field(default_factory=list)  # Starting count mismatches
    captures: Dict[str, Image.Image] = field(default_factory=dict)  # Capture per scan pass
    processing_time_ms: float = 0.0

    @property
    def is_valid(self) -> bool:
        """True if the board holds exactly the marbles of a new game."""
        return not self.errors

    @property
    def marble_count(self) -> int:
        return self.board.count_marbles()
