"""Turn a Grid into an editable surface: one named field per data cell."""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from typing import List, Optional

import pandas as pd

from taxsheet import config


@dataclass
class Field:
    """One input box. Read-only fields have no name, so they are never posted back."""

    row: int
    col: int
    value: str
    name: Optional[str] = None
    editable: bool = True
    bold: bool = False
    fill: Optional[str] = None

    @property
    def key(self):
        # Widget key: the posted name for editable fields, something that never
        # matches the cell pattern for read-only ones
        return self.name or f"{config.READONLY_FIELD_PREFIX}{self.row}-{self.col}"


@dataclass
class Surface:
    headers: List[str] = field(default_factory=list)
    rows: List[List[Field]] = field(default_factory=list)
    file_name: str = ""
    sheet_name: str = ""

    def fields(self):
        return [f for row in self.rows for f in row]

    def editable_fields(self):
        return [f for f in self.fields() if f.editable]

    def hidden_fields(self):
        return {config.FILE_NAME_FIELD: self.file_name}

    def initial_values(self):
        """Field name -> pre-filled value, the same shape as a posted form."""
        values = {f.name: f.value for f in self.editable_fields()}
        values.update(self.hidden_fields())
        return values


def cell_field_name(row, col):
    return f"{config.CELL_FIELD_PREFIX}{row}-{col}"


def display_value(value) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, Decimal):
        # Keep what was computed, but never fall into scientific notation
        return format(value, "f")
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


def render(grid, file_name="") -> Surface:
    """Build the editable surface for a grid.

    The header row becomes column titles. The derived column is read-only,
    every other data cell is an editable field named ``cell-{row}-{col}``.
    """
    surface = Surface(file_name=file_name or "", sheet_name=grid.title)
    if grid.row_count() == 0 or grid.width() == 0:
        return surface

    surface.headers = [display_value(v) for v in grid.header()]
    cells = grid.cells()
    for row in range(2, grid.row_count() + 1):
        fields = []
        for col in range(1, grid.width() + 1):
            cell = cells[row - 1][col - 1]
            editable = col != grid.derived_column
            fields.append(Field(
                row=row,
                col=col,
                value=display_value(cell.value),
                name=cell_field_name(row, col) if editable else None,
                editable=editable,
                bold=cell.bold,
                fill=cell.fill,
            ))
        surface.rows.append(fields)
    return surface


def unique_headers(raw_headers):
    """Column titles safe for a DataFrame: blanks become "Unnamed", repeats get a counter."""
    headers = []
    seen = {}
    for h in raw_headers:
        h_str = str(h) if h is not None and str(h).strip() != "" else "Unnamed"
        if h_str in seen:
            seen[h_str] += 1
            h_str = f"{h_str}_{seen[h_str]}"
        else:
            seen[h_str] = 0
        headers.append(h_str)
    return headers


def preview_frame(grid) -> pd.DataFrame:
    """Read-only DataFrame view of a grid, every cell shown as text."""
    if grid.row_count() == 0 or grid.width() == 0:
        return pd.DataFrame()
    values = grid.values()
    rows = [[display_value(v) for v in row] for row in values[1:]]
    return pd.DataFrame(rows, columns=unique_headers(values[0]))
