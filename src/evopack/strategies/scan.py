"""
Scan helpers shared by the strategies.

A scan order is a permutation of grid axes, outermost first.  For example
``(1, 0, 2)`` walks y, then x, then z (z varies fastest).  Given the
feasible-anchor field from ``OccupancyGrid.feasible_anchors`` these helpers
return the first anchor in that order, optionally starting from a given
position (lexicographic in scan order) or with some axes walked downward.
"""

from typing import Optional, Sequence, Tuple

import numpy as np

X, Y, Z = 0, 1, 2


def _oriented(feasible: np.ndarray, order: Sequence[int], descending: Sequence[int]) -> np.ndarray:
    view = feasible
    for axis in descending:
        view = np.flip(view, axis=axis)
    return np.transpose(view, order)


def _to_grid(coords: Sequence[int], feasible: np.ndarray, order: Sequence[int],
             descending: Sequence[int]) -> Tuple[int, ...]:
    anchor = [0] * feasible.ndim
    for pos, axis in enumerate(order):
        value = int(coords[pos])
        if axis in descending:
            value = feasible.shape[axis] - 1 - value
        anchor[axis] = value
    return tuple(anchor)


def first_in_order(
    feasible: Optional[np.ndarray],
    order: Sequence[int],
    descending: Sequence[int] = (),
) -> Optional[Tuple[int, ...]]:
    """First feasible anchor when walking the axes in *order*."""
    if feasible is None:
        return None
    view = _oriented(feasible, order, descending)
    hits = np.flatnonzero(view)
    if hits.size == 0:
        return None
    coords = np.unravel_index(int(hits[0]), view.shape)
    return _to_grid(coords, feasible, order, descending)


def first_from(
    feasible: Optional[np.ndarray],
    order: Sequence[int],
    start: Sequence[int],
) -> Optional[Tuple[int, ...]]:
    """
    First feasible anchor at or after *start* in scan order.

    *start* is given in grid axis order and may lie outside the feasible
    field (e.g. a hint past the last valid x); positions are compared
    lexicographically in scan order, so such a start simply resumes on the
    next row or layer.
    """
    if feasible is None:
        return None
    view = np.transpose(feasible, order)
    hits = np.flatnonzero(view)
    if hits.size == 0:
        return None

    coords = np.unravel_index(hits, view.shape)
    # Mixed-radix key, radix larger than any coordinate or start value.
    radix = max(max(view.shape), max(int(s) for s in start) if start else 0) + 1
    keys = np.zeros(hits.shape, dtype=np.int64)
    start_key = 0
    for pos, axis in enumerate(order):
        keys = keys * radix + coords[pos]
        start_key = start_key * radix + max(int(start[axis]), 0)

    idx = int(np.searchsorted(keys, start_key, side="left"))
    if idx >= hits.size:
        return None
    return _to_grid([c[idx] for c in coords], feasible, order, ())


def nearest_to_origin(
    feasible: Optional[np.ndarray],
    order: Sequence[int],
) -> Optional[Tuple[int, ...]]:
    """
    Feasible anchor with the smallest Euclidean distance to the origin.

    Ties resolve to the first such anchor in scan *order*.
    """
    if feasible is None:
        return None
    view = np.transpose(feasible, order)
    hits = np.flatnonzero(view)
    if hits.size == 0:
        return None
    coords = np.unravel_index(hits, view.shape)
    dist2 = np.zeros(hits.shape, dtype=np.int64)
    for c in coords:
        dist2 += c.astype(np.int64) ** 2
    best = int(np.argmin(dist2))
    return _to_grid([c[best] for c in coords], feasible, order, ())
