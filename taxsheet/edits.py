import logging
import re
from typing import Dict, Mapping, Optional, Tuple

from taxsheet import config

logger = logging.getLogger(__name__)

_CELL_FIELD = re.compile(config.CELL_FIELD_PATTERN)


def parse_cell_field(name) -> Optional[Tuple[int, int]]:
    """``"cell-3-7"`` -> ``(3, 7)``; anything else -> None."""
    match = _CELL_FIELD.match(str(name))
    if not match:
        return None
    row, col = int(match.group(1)), int(match.group(2))
    if row < 1 or col < 1:
        return None
    return row, col


def apply_edits(grid, posted: Mapping[str, str]) -> Dict[str, str]:
    """Write posted ``cell-{row}-{col}`` values into the grid as strings.

    Malformed names and addresses outside the grid are skipped. Returns the
    posted fields that are not cell fields (e.g. ``fileName``) for the caller.
    """
    other = {}
    applied = skipped = 0
    for name, value in posted.items():
        if not str(name).startswith(config.CELL_FIELD_PREFIX):
            other[name] = value
            continue

        address = parse_cell_field(name)
        if address is None or not grid.contains(*address):
            logger.debug("Skipping posted field %r", name)
            skipped += 1
            continue

        # Stored as text; the calculators coerce lazily
        grid.set(*address, "" if value is None else str(value))
        applied += 1

    logger.info("Applied %d edit(s), skipped %d field(s)", applied, skipped)
    return other
