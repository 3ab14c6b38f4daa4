from io import BytesIO

import openpyxl
import pytest

from taxsheet.grid import Grid

HEADER = ["Name", "Qty", "Unit", "Code", "X", "Y", "Amount", "Tax"]


def make_xlsx(rows, title="Invoice"):
    """Build .xlsx bytes from a list of rows, the way a user's upload would look."""
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = title
    for row in rows:
        ws.append(row)
    output = BytesIO()
    wb.save(output)
    return output.getvalue()


@pytest.fixture
def header():
    return list(HEADER)


@pytest.fixture
def sample_rows():
    return [
        list(HEADER),
        ["A", 1, "u", "c", "x", "y", 100, 10],
    ]


@pytest.fixture
def multi_rows():
    return [
        list(HEADER),
        ["A", 1, "u", "c", "x", "y", 100, 10],
        ["B", 2, "u", "c", "x", "y", "12.5", "abc"],
        ["C", 3, "u", "c", "x", "y", None, 4],
    ]


@pytest.fixture
def sample_grid(sample_rows):
    return Grid(sample_rows, title="Invoice")


@pytest.fixture
def multi_grid(multi_rows):
    return Grid(multi_rows, title="Invoice")


@pytest.fixture
def sample_xlsx(sample_rows):
    return make_xlsx(sample_rows)


@pytest.fixture
def multi_xlsx(multi_rows):
    return make_xlsx(multi_rows)
