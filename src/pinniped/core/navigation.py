"""Cell navigation and lookup for parsed tables.

Positions are logical: when a table has a header, row 0 is the header and
row 1 is the first row below the separator, so the separator row is never
addressable.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Union

from pinniped.formatting.ir import Document, Table, TableBlock


class TableLookupError(Exception):
    """A table query that cannot be answered."""

    pass


class BlockIndexError(TableLookupError):
    pass


class NotATableError(TableLookupError):
    pass


class CellPositionError(TableLookupError):
    pass


class Direction(IntEnum):
    """Movement directions, numbered as host bindings pass them."""

    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3

    @classmethod
    def parse(cls, value: Union[str, int]) -> "Direction":
        """Get a direction from its name ("up") or number (0)."""
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(f"Unknown direction: {value!r}") from None
        return cls(value)


_MOVES: dict[int, tuple[int, int]] = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}


@dataclass(frozen=True)
class CellPosition:
    """Result of a navigation step.

    Attributes:
        row: Logical row after the move (unchanged if invalid)
        col: Column after the move (unchanged if invalid)
        valid: Whether the move stayed inside the table
    """

    row: int
    col: int
    valid: bool

    def to_dict(self) -> dict:
        return {"row": self.row, "col": self.col, "valid": self.valid}


def max_row(table: Table) -> int:
    """Get the last addressable logical row."""
    if table.has_header:
        return len(table.rows) - 2
    return len(table.rows) - 1


def max_col(table: Table) -> int:
    """Get the last addressable column, based on the first row."""
    if not table.rows:
        return 0
    return len(table.rows[0]) - 1


def navigate(table: Table, row: int, col: int, direction: int) -> CellPosition:
    """Move one cell in ``direction`` from (row, col).

    Unknown directions leave the target unchanged. A target outside
    ``[0, max_row] x [0, max_col]`` reports an invalid move and returns the
    starting position.
    """
    row_step, col_step = _MOVES.get(direction, (0, 0))
    new_row = row + row_step
    new_col = col + col_step

    if 0 <= new_row <= max_row(table) and 0 <= new_col <= max_col(table):
        return CellPosition(row=new_row, col=new_col, valid=True)
    return CellPosition(row=row, col=col, valid=False)


def get_cell(table: Table, row: int, col: int) -> str:
    """Get the content of the cell at a logical position.

    Raises:
        CellPositionError: If the position is outside the table
    """
    if row < 0 or col < 0:
        raise CellPositionError("Cell position out of range")
    actual_row = row + 1 if table.has_header and row > 0 else row
    if actual_row >= len(table.rows) or col >= len(table.rows[actual_row]):
        raise CellPositionError("Cell position out of range")
    return table.rows[actual_row][col]


def table_at(doc: Document, block_index: int) -> Table:
    """Get the table stored at a block index.

    Raises:
        BlockIndexError: If the index does not name a block
        NotATableError: If the block is not a table
    """
    if block_index < 0 or block_index >= len(doc.blocks):
        raise BlockIndexError("Block index out of range")
    block = doc.blocks[block_index]
    if not isinstance(block, TableBlock):
        raise NotATableError("Block is not a table")
    return block.table
