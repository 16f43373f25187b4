"""Selection from standardised component catalogs."""

from __future__ import annotations

from collections.abc import Sequence


def select_from_catalog(required: float, catalog: Sequence[float]) -> float | None:
    """Return the smallest catalog entry >= *required*, or None if none fits.

    *catalog* must be sorted ascending.
    """
    for value in catalog:
        if value >= required:
            return value
    return None
