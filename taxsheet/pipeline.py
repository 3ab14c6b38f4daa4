"""Upload and save paths.

Both paths start again from the canonical uploaded bytes. The derived column
and totals row are never read back from a previous render, so column indices
stay stable across any number of saves.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Mapping

from taxsheet import codec, config
from taxsheet.calculators import add_derived_column, add_totals_row
from taxsheet.edits import apply_edits
from taxsheet.errors import InvalidUpload
from taxsheet.grid import Grid
from taxsheet.render import Surface, render

logger = logging.getLogger(__name__)


@dataclass
class UploadView:
    grid: Grid
    surface: Surface
    total: Decimal


@dataclass
class SavedFile:
    data: bytes
    file_name: str
    grid: Grid
    surface: Surface
    content_type: str = config.XLSX_MIME


def accept_upload(store, payload, file_name):
    """Store an upload as the session's canonical bytes."""
    if not payload:
        raise InvalidUpload(config.FILE_NOT_SELECTED)
    store.put(payload)
    store.put_file_name(file_name)
    logger.info("Stored upload %r (%d bytes)", file_name, len(payload))


def build_upload_view(data: bytes, file_name="") -> UploadView:
    """decode -> derived column -> totals row -> render."""
    grid = codec.decode(data)
    add_derived_column(grid)
    total = add_totals_row(grid)
    return UploadView(grid=grid, surface=render(grid, file_name), total=total)


def build_saved_grid(data: bytes, posted: Mapping[str, str]):
    """decode canonical bytes -> apply edits -> derived column.

    Returns the grid and the posted fields that were not cell edits.
    """
    grid = codec.decode(data)
    other = apply_edits(grid, posted)
    add_derived_column(grid)
    return grid, other


def save(store, posted: Mapping[str, str]) -> SavedFile:
    data = store.get()
    if not data:
        raise InvalidUpload(config.NO_FILE_UPLOADED)

    grid, other = build_saved_grid(data, posted)
    file_name = (
        str(other.get(config.FILE_NAME_FIELD) or "").strip()
        or store.get_file_name()
        or config.DEFAULT_DOWNLOAD_NAME
    )
    saved = SavedFile(
        data=codec.encode(grid),
        file_name=file_name,
        grid=grid,
        surface=render(grid, file_name),
    )
    logger.info("Saved %r (%d bytes)", file_name, len(saved.data))
    return saved
