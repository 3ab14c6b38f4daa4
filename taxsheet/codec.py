"""openpyxl-backed reading and writing of .xlsx bytes (first worksheet only)."""

import logging
import zipfile
from io import BytesIO

import openpyxl
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Font, PatternFill
from openpyxl.utils.exceptions import InvalidFileException

from taxsheet.errors import UnreadableFormat
from taxsheet.grid import Grid

logger = logging.getLogger(__name__)


def decode(data: bytes) -> Grid:
    """Read the first worksheet of an .xlsx payload into a Grid."""
    if not data:
        raise UnreadableFormat("The uploaded file is empty.")
    try:
        wb = openpyxl.load_workbook(BytesIO(data), data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, ValueError, OSError) as e:
        logger.warning("Could not read workbook: %s", e)
        raise UnreadableFormat(f"Could not read the file as an Excel workbook: {e}") from e

    try:
        ws = wb.worksheets[0]
        rows = [
            list(row)
            for row in ws.iter_rows(
                min_row=1, max_row=ws.max_row, min_col=1, max_col=ws.max_column, values_only=True
            )
        ]
    finally:
        wb.close()

    grid = Grid(rows, title=ws.title)
    logger.info("Decoded worksheet %r: %d row(s), %d column(s)", ws.title, grid.row_count(), grid.width())
    return grid


def encode(grid: Grid) -> bytes:
    """Write a Grid, values and presentation hints, to .xlsx bytes."""
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = grid.title

    for r, row_cells in enumerate(grid.cells(), start=1):
        for c, cell in enumerate(row_cells, start=1):
            value = cell.value
            if isinstance(value, str):
                # Control characters are not allowed in worksheet XML
                value = ILLEGAL_CHARACTERS_RE.sub("", value)
            empty = value is None or value == ""
            if empty and not cell.has_hints():
                continue
            target = ws.cell(row=r, column=c)
            if not empty:
                target.value = value
                if isinstance(value, str):
                    # Text stays text, even when it starts with "="
                    target.data_type = "s"
            if cell.bold:
                target.font = Font(bold=True)
            if cell.fill:
                target.fill = PatternFill(fill_type="solid", start_color=cell.fill, end_color=cell.fill)
            if cell.number_format:
                target.number_format = cell.number_format

    output = BytesIO()
    wb.save(output)
    output.seek(0)
    data = output.getvalue()
    logger.info("Encoded %r to %d byte(s)", grid, len(data))
    return data
