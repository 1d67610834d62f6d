"""Arc-length tables and the inverse ``u -> t`` mapping.

The table is a piecewise-linear approximation of the cumulative length of a
curve sampled at equal parameter steps: entry ``i`` is the sum of chord
lengths from ``point_fn(0)`` to ``point_fn(i / divisions)``.  Its error is
bounded by curvature times step size and vanishes as ``divisions`` grows.
"""

from __future__ import annotations

import logging
import math
from typing import Callable

import numpy as np

from .. import settings
from ..linalg import Vec3, points_to_array

log = logging.getLogger("curveframe.geom")


def check_divisions(divisions: int, name: str = "divisions") -> int:
    divisions = int(divisions)
    if divisions < 1:
        raise ValueError(f"{name} must be >= 1, got {divisions}")
    return divisions


def check_unit_parameter(value: float, name: str) -> float:
    """Clamp a curve parameter into [0, 1]; non-finite values are rejected."""
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value}")
    return min(1.0, max(0.0, value))


def build_arc_length_table(point_fn: Callable[[float], Vec3], divisions: int) -> np.ndarray:
    """Return ``divisions + 1`` cumulative chord lengths, starting at 0."""
    divisions = check_divisions(divisions)
    pts = points_to_array(point_fn(p / divisions) for p in range(divisions + 1))
    seg = np.linalg.norm(np.diff(pts, axis=0), axis=1)
    table = np.concatenate(([0.0], np.cumsum(seg)))
    table.flags.writeable = False
    return table


def u_to_t(table: np.ndarray, u: float) -> float:
    """Map the arc-length fraction ``u`` to a curve parameter ``t``.

    Finds the largest index ``i`` with ``table[i] <= u * total`` and
    interpolates linearly towards ``table[i + 1]``.
    """
    u = check_unit_parameter(u, "u")
    last = len(table) - 1
    total = float(table[last])
    if u <= 0.0:
        return 0.0
    if u >= 1.0:
        return 1.0
    if total <= 0.0:
        # No length information; parameter and arc-length space coincide.
        return u

    target = u * total
    i = int(np.searchsorted(table, target, side="right")) - 1
    i = min(max(i, 0), last)

    before = float(table[i])
    if i == last or math.isclose(before, target, rel_tol=settings.ARC_LENGTH_RTOL):
        return i / last

    after = float(table[i + 1])
    segment_length = after - before
    if segment_length <= 0.0:
        log.debug("zero-length arc segment at index %d", i)
        return i / last

    fraction = (target - before) / segment_length
    return (i + fraction) / last


__all__ = [
    "build_arc_length_table",
    "u_to_t",
    "check_divisions",
    "check_unit_parameter",
]
