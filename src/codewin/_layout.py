"""Visual row estimation for the line-number gutter."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sized


def wrapped_rows(length: int, max_chars: int) -> int:
    """Return the number of rows a line of *length* chars wraps into."""
    return max(1, math.ceil(length / max_chars))


def rows_for_height(height: float, row_height: float) -> int:
    return max(1, math.ceil(height / row_height))


def measure_current_height(text: str, max_chars: int, row_height: float = 1) -> float:
    """Height of the current line as the widget draws it.

    The line is wrapped every *max_chars* characters with a one-cell
    cursor after the last character, so a full-width line spills the
    cursor onto a new row.
    """
    return wrapped_rows(len(text) + 1, max_chars) * row_height


def estimate_rows(
    prologue_count: int,
    committed: Iterable[Sized],
    measured_height: float,
    row_height: float,
    max_chars: int,
) -> int:
    """Total visual rows: prologue, wrapped committed lines, current line."""
    committed_rows = sum(wrapped_rows(len(line), max_chars) for line in committed)
    return prologue_count + committed_rows + rows_for_height(measured_height, row_height)
