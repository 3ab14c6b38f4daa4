"""Error kinds raised by the table pipeline."""


class TaxSheetError(Exception):
    """Base class for every error the pipeline raises on purpose."""


class InvalidUpload(TaxSheetError):
    """Nothing usable was uploaded, or the session holds no upload to save against."""


class UnreadableFormat(TaxSheetError):
    """The uploaded bytes are not a spreadsheet the codec can read."""


class MissingColumn(TaxSheetError):
    """The table lacks a column one of the calculators depends on."""

    def __init__(self, column, width):
        self.column = column
        self.width = width
        super().__init__(
            f"Column {column} is required but the table only has {width} column(s)."
        )


class OutOfRange(TaxSheetError, IndexError):
    """A cell address falls outside the grid."""

    def __init__(self, row, col, rows, width):
        self.row = row
        self.col = col
        super().__init__(
            f"Cell ({row}, {col}) is outside the grid ({rows} row(s) x {width} column(s))."
        )
