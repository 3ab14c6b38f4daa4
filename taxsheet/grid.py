"""In-memory table model.

Row 1 is the header row, rows 2..N hold data. Rows and columns are 1-indexed,
the same way they appear in Excel, so a cell address read off the sheet can be
used here unchanged.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional

from taxsheet.errors import OutOfRange

logger = logging.getLogger(__name__)


@dataclass
class Cell:
    """A value plus the presentation hints the codec writes out."""

    value: Any = None
    bold: bool = False
    fill: Optional[str] = None  # RGB hex, e.g. "90EE90"
    number_format: Optional[str] = None

    def has_hints(self):
        return self.bold or self.fill is not None or self.number_format is not None


class Grid:
    def __init__(self, rows: Iterable[Iterable[Any]] = (), title: str = "Sheet1"):
        self.title = title
        # Set by the calculators so later steps know which column/row they appended
        self.derived_column: Optional[int] = None
        self.totals_row: Optional[int] = None

        raw_rows = [list(row) for row in rows]
        width = max((len(row) for row in raw_rows), default=0)
        # Pad shorter rows with None so every row has the same number of columns
        self._rows: List[List[Cell]] = [
            [Cell(v) for v in row + [None] * (width - len(row))]
            for row in raw_rows
        ]

    def __repr__(self):
        return f"<Grid {self.title!r} {self.row_count()}x{self.width()}>"

    # --- Dimensions ---
    def width(self) -> int:
        return len(self._rows[0]) if self._rows else 0

    def height(self) -> int:
        """Number of data rows, header excluded."""
        return max(len(self._rows) - 1, 0)

    def row_count(self) -> int:
        return len(self._rows)

    def contains(self, row: int, col: int) -> bool:
        return 1 <= row <= self.row_count() and 1 <= col <= self.width()

    def data_rows(self):
        """Row numbers of the data rows, skipping an appended totals row."""
        last = self.row_count()
        if self.totals_row is not None:
            last = self.totals_row - 1
        return range(2, last + 1)

    # --- Cell access ---
    def cell(self, row: int, col: int) -> Cell:
        if not self.contains(row, col):
            raise OutOfRange(row, col, self.row_count(), self.width())
        return self._rows[row - 1][col - 1]

    def get(self, row: int, col: int) -> Any:
        return self.cell(row, col).value

    def set(self, row: int, col: int, value: Any) -> None:
        self.cell(row, col).value = value

    def header(self) -> List[Any]:
        return [c.value for c in self._rows[0]] if self._rows else []

    def values(self) -> List[List[Any]]:
        return [[c.value for c in row] for row in self._rows]

    def cells(self) -> List[List[Cell]]:
        return [list(row) for row in self._rows]

    # --- Structural mutators ---
    def append_column(self, label: Any, values_by_row: Mapping[int, Any], **hints) -> int:
        """Append one column to every row and return its index.

        ``values_by_row`` maps data row numbers to values; rows not in it stay empty.
        ``hints`` (bold, fill, number_format) apply to the data cells, not the header.
        """
        if not self._rows:
            raise OutOfRange(1, 1, 0, 0)
        unknown = [r for r in values_by_row if not 2 <= r <= self.row_count()]
        if unknown:
            raise OutOfRange(unknown[0], self.width() + 1, self.row_count(), self.width())

        # Build the whole column first so a failure leaves the grid untouched
        column = [Cell(label)]
        for row in range(2, self.row_count() + 1):
            column.append(Cell(values_by_row.get(row), **hints))
        for row_cells, new_cell in zip(self._rows, column):
            row_cells.append(new_cell)

        col = self.width()
        logger.debug("Appended column %d (%r) to %r", col, label, self)
        return col

    def append_row(
        self,
        values_by_col: Mapping[int, Any],
        hints_by_col: Optional[Mapping[int, Dict[str, Any]]] = None,
    ) -> int:
        """Append one row and return its index. Columns not given stay empty."""
        hints_by_col = hints_by_col or {}
        width = self.width()
        for col in list(values_by_col) + list(hints_by_col):
            if not 1 <= col <= width:
                raise OutOfRange(self.row_count() + 1, col, self.row_count(), width)

        new_row = [
            Cell(values_by_col.get(col), **hints_by_col.get(col, {}))
            for col in range(1, width + 1)
        ]
        self._rows.append(new_row)

        row = self.row_count()
        logger.debug("Appended row %d to %r", row, self)
        return row
