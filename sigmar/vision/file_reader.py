"""
File Board Reader

Reads a board saved in the text format of BoardState.to_text().
Used by the headless tools and for replaying boards captured earlier.
"""

import time
from pathlib import Path
from typing import Union

from sigmar.solver import BoardState

from .base import BoardReader, InvalidBoardError
from .result import ReadResult


class FileBoardReader(BoardReader):
    """Board reader backed by a text file."""

    def __init__(self, path: Union[str, Path], validate: bool = False):
        """
        Args:
            path: Text board file
            validate: Raise InvalidBoardError unless the board is a fresh deal
        """
        self.path = Path(path)
        self.validate = validate

    @property
    def name(self) -> str:
        return "file"

    def read(self) -> ReadResult:
        start_time = time.perf_counter()
        board = BoardState.from_text(self.path.read_text(encoding="utf-8"))
        result = ReadResult(
            board=board,
            errors=board.starting_count_errors(),
            processing_time_ms=(time.perf_counter() - start_time) * 1000,
        )
        if self.validate and not result.is_valid:
            raise InvalidBoardError(result.errors, result)
        return result
