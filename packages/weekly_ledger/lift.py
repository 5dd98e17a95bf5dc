"""Value lifter: compact sparse rows by moving values into blank slots above.

For each column the rows are scanned bottom to top. When a row and the row
directly above it share a category, and the lower value is nonzero while the
upper one is zero, the value moves up. Within one pass a value can climb
several rows, because the scan continues upward from the slot it landed in.
Passes repeat until one makes no move.

Every move places a value strictly higher, so the number of passes is
bounded by ``rows * columns``; the loop is capped at that bound plus one
confirming pass.
"""

from __future__ import annotations

from collections.abc import Sequence

from .logging_setup import get_logger
from .models import ZERO, Row

_logger = get_logger("weekly_ledger.lift")


def _lift_pass(rows: Sequence[Row], n_cols: int) -> int:
    moves = 0
    for col in range(n_cols):
        for r in range(len(rows) - 1, 0, -1):
            below, above = rows[r], rows[r - 1]
            if below.category is not above.category:
                continue
            if below.values[col] != 0 and above.values[col] == 0:
                above.values[col] = below.values[col]
                below.values[col] = ZERO
                moves += 1
    return moves


def lift_up(rows: Sequence[Row]) -> None:
    """Lift values upward across adjacent same-category rows, in place.

    Row order is never changed and values never cross a category boundary,
    so each row's category group keeps its per-column totals.
    """

    if not rows:
        return
    n_cols = len(rows[0].values)
    assert all(len(r.values) == n_cols for r in rows), "rows must share one column count"

    max_passes = len(rows) * n_cols + 1
    total_moves = 0
    for passes in range(1, max_passes + 1):
        moves = _lift_pass(rows, n_cols)
        total_moves += moves
        if moves == 0:
            _logger.debug(
                "lift_up:converged rows=%d columns=%d passes=%d moves=%d",
                len(rows),
                n_cols,
                passes,
                total_moves,
            )
            return
    raise RuntimeError(
        f"lift_up did not converge within {max_passes} passes "
        f"(rows={len(rows)}, columns={n_cols})"
    )


__all__ = ["lift_up"]
