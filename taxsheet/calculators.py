"""The two computed additions: the pre-tax column and the totals row."""

import logging
from decimal import Decimal

from taxsheet import config
from taxsheet.coercion import ZERO, coerce_decimal
from taxsheet.errors import MissingColumn

logger = logging.getLogger(__name__)


def _require_columns(grid, *columns):
    for col in columns:
        if grid.width() < col:
            raise MissingColumn(col, grid.width())


def add_derived_column(
    grid,
    col_a=config.SOURCE_COLUMN_A,
    col_b=config.SOURCE_COLUMN_B,
    label=config.DERIVED_COLUMN_LABEL,
) -> int:
    """Append "Total Value before Taxing" = col_a + col_b for every data row.

    Returns the index of the derived column. If the grid already carries one,
    its values are recomputed in place instead of appending a second column.
    """
    _require_columns(grid, col_a, col_b)

    derived = {
        row: coerce_decimal(grid.get(row, col_a)) + coerce_decimal(grid.get(row, col_b))
        for row in grid.data_rows()
    }

    if grid.derived_column is not None:
        for row, value in derived.items():
            grid.set(row, grid.derived_column, value)
        logger.info("Recomputed derived column %d over %d row(s)", grid.derived_column, len(derived))
        return grid.derived_column

    grid.derived_column = grid.append_column(
        label,
        derived,
        fill=config.DERIVED_FILL,
        number_format=config.DERIVED_NUMBER_FORMAT,
    )
    logger.info("Added derived column %d over %d row(s)", grid.derived_column, len(derived))
    return grid.derived_column


def column_total(grid, col=config.SOURCE_COLUMN_A) -> Decimal:
    """Sum of a column over the data rows, never counting an appended totals row."""
    _require_columns(grid, col)
    return sum((coerce_decimal(grid.get(row, col)) for row in grid.data_rows()), ZERO)


def add_totals_row(grid, col=config.SOURCE_COLUMN_A, label=config.TOTALS_LABEL) -> Decimal:
    """Append a bold "Total" row holding the sum of ``col``, and return the sum.

    Running it again on the same grid refreshes the existing totals row.
    """
    total = column_total(grid, col)

    if grid.totals_row is not None:
        grid.set(grid.totals_row, col, total)
        logger.info("Recomputed totals row %d: %s", grid.totals_row, total)
        return total

    values = {col: total}
    hints = {col: {"bold": True, "fill": config.TOTALS_FILL}}
    # Label the row in column 1 unless the total itself lives there
    if col != 1:
        values[1] = label
        hints[1] = {"bold": True}

    grid.totals_row = grid.append_row(values, hints)
    logger.info("Added totals row %d: %s", grid.totals_row, total)
    return total
