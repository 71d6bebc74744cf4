"""
Board Reader Base Interface

Abstract base class defining the board acquisition contract.
"""

from abc import ABC, abstractmethod
from typing import List

from .result import ReadResult


class CaptureError(RuntimeError):
    """The game window could not be captured."""


class InvalidBoardError(ValueError):
    """
    The board read does not match a freshly dealt game.

    Attributes:
        errors: One message per mismatching marble kind
        result: The read that failed validation
    """

    def __init__(self, errors: List[str], result: ReadResult):
        super().__init__("Invalid board: " + "; ".join(errors))
        self.errors = errors
        self.result = result


class BoardReader(ABC):
    """
    Abstract base class for board readers.

    A reader hands the solver a starting board. Readers are responsible for
    checking marble counts before the board reaches the solver.
    """

    @abstractmethod
    def read(self) -> ReadResult:
        """
        Acquire the current board.

        Returns:
            ReadResult with the board and its validation errors

        Raises:
            CaptureError: If the source could not be read
            InvalidBoardError: If validation is enabled and counts are wrong
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Reader identifier (e.g., "highlight", "file")."""
        pass
