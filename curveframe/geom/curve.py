from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Tuple

import numpy as np

from .. import settings
from ..linalg import Vec3, points_to_array
from .arclength import build_arc_length_table, check_divisions, check_unit_parameter, u_to_t
from .frames import FrenetFrame, compute_frenet_frames

log = logging.getLogger("curveframe.geom")


class Curve(ABC):
    """Abstract parametric curve over ``t`` in [0,1].

    Subclasses implement :meth:`get_point`.  Arc-length queries go through a
    cached table that is rebuilt whenever the requested resolution changes or
    :meth:`mark_dirty` has been called since it was built.
    """

    def __init__(self, points: Iterable[Vec3] = (), closed: bool = False) -> None:
        self._points: Tuple[Vec3, ...] = tuple(points)
        self._closed = bool(closed)
        self._version = 0
        # (version, divisions, table), replaced in a single assignment
        self._arc_cache: Optional[Tuple[int, int, np.ndarray]] = None

    @property
    def points(self) -> Tuple[Vec3, ...]:
        return self._points

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def version(self) -> int:
        return self._version

    def mark_dirty(self) -> None:
        """Invalidate derived data after the control data changed."""
        self._version += 1
        log.debug("%s marked dirty (version %d)", type(self).__name__, self._version)

    def set_points(self, points: Iterable[Vec3]) -> None:
        self._points = tuple(points)
        self.mark_dirty()

    @abstractmethod
    def get_point(self, t: float) -> Vec3:
        """Return point on curve for parameter ``t`` in [0,1]."""
        raise NotImplementedError

    def get_tangent(self, t: float) -> Vec3:
        """Unit tangent at ``t`` by finite difference, clamped at the ends.

        Returns the zero vector where the two probe points coincide.
        """
        t = check_unit_parameter(t, "t")
        t1 = max(0.0, t - settings.TANGENT_DELTA)
        t2 = min(1.0, t + settings.TANGENT_DELTA)
        return (self.get_point(t2) - self.get_point(t1)).normalize()

    def get_point_at(self, u: float) -> Vec3:
        """Point at arc-length fraction ``u``."""
        return self.get_point(self.get_u_to_t_mapping(u))

    def get_tangent_at(self, u: float) -> Vec3:
        """Tangent at arc-length fraction ``u``."""
        return self.get_tangent(self.get_u_to_t_mapping(u))

    def get_lengths(self, divisions: int | None = None) -> np.ndarray:
        """Cumulative arc lengths at ``divisions + 1`` equal parameter steps."""
        if divisions is None:
            divisions = settings.ARC_LENGTH_DIVISIONS
        divisions = check_divisions(divisions)

        cache = self._arc_cache
        if cache is not None and cache[0] == self._version and cache[1] == divisions:
            return cache[2]

        version = self._version
        table = build_arc_length_table(self.get_point, divisions)
        self._arc_cache = (version, divisions, table)
        log.debug(
            "%s: built arc-length table (%d divisions, length %.6g)",
            type(self).__name__,
            divisions,
            table[-1],
        )
        return table

    def get_length(self, divisions: int | None = None) -> float:
        return float(self.get_lengths(divisions)[-1])

    def get_u_to_t_mapping(self, u: float) -> float:
        """Curve parameter ``t`` whose arc length is ``u`` times the total."""
        return u_to_t(self.get_lengths(), u)

    def get_points(self, divisions: int = 5) -> np.ndarray:
        """``divisions + 1`` points at equal parameter steps, shape (n, 3)."""
        divisions = check_divisions(divisions)
        return points_to_array(self.get_point(d / divisions) for d in range(divisions + 1))

    def get_spaced_points(self, divisions: int = 5) -> np.ndarray:
        """``divisions + 1`` points at equal arc-length steps, shape (n, 3)."""
        divisions = check_divisions(divisions)
        return points_to_array(self.get_point_at(d / divisions) for d in range(divisions + 1))

    def compute_frenet_frames(self, segments: int, closed: bool | None = None) -> List[FrenetFrame]:
        """``segments + 1`` frames at equal arc-length steps.

        ``closed`` defaults to the curve's own flag.
        """
        segments = check_divisions(segments, "segments")
        if closed is None:
            closed = self._closed
        tangents = [self.get_tangent_at(i / segments) for i in range(segments + 1)]
        return compute_frenet_frames(tangents, closed=closed)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(points={len(self._points)}, closed={self._closed})"
