"""Upload a spreadsheet, add the pre-tax column and totals row, edit it, download it again."""

from taxsheet.errors import (
    InvalidUpload,
    MissingColumn,
    OutOfRange,
    TaxSheetError,
    UnreadableFormat,
)
from taxsheet.grid import Cell, Grid

__version__ = "0.1.0"

__all__ = [
    "Cell",
    "Grid",
    "InvalidUpload",
    "MissingColumn",
    "OutOfRange",
    "TaxSheetError",
    "UnreadableFormat",
]
