"""Circular arcs."""

from __future__ import annotations

import math

from ..linalg import Vec3
from .curve import Curve

_PLANES = {
    "z": (Vec3(1.0, 0.0, 0.0), Vec3(0.0, 1.0, 0.0)),
    "x": (Vec3(0.0, 1.0, 0.0), Vec3(0.0, 0.0, 1.0)),
    "y": (Vec3(0.0, 0.0, 1.0), Vec3(1.0, 0.0, 0.0)),
}


class ArcCurve(Curve):
    """Arc of ``radius`` around ``center`` in the plane normal to ``normal_axis``.

    Angles are in radians, measured counter-clockwise about the normal axis.
    The arc is closed when it sweeps a full turn.
    """

    def __init__(
        self,
        center: Vec3,
        radius: float,
        start_angle: float = 0.0,
        end_angle: float = 2 * math.pi,
        normal_axis: str = "z",
    ) -> None:
        if radius <= 0:
            raise ValueError(f"radius must be positive, got {radius}")
        if normal_axis not in _PLANES:
            raise ValueError(f"normal_axis must be one of x, y, z, got {normal_axis!r}")
        self.center = center
        self.radius = float(radius)
        self.start_angle = float(start_angle)
        self.end_angle = float(end_angle)
        self.normal_axis = normal_axis
        closed = math.isclose(abs(self.end_angle - self.start_angle), 2 * math.pi)
        super().__init__([center], closed=closed)

    def get_point(self, t: float) -> Vec3:
        e1, e2 = _PLANES[self.normal_axis]
        angle = self.start_angle + (self.end_angle - self.start_angle) * t
        return self.center + e1 * (self.radius * math.cos(angle)) + e2 * (self.radius * math.sin(angle))


class CircleCurve(ArcCurve):
    def __init__(self, center: Vec3, radius: float, normal_axis: str = "z") -> None:
        super().__init__(center, radius, 0.0, 2 * math.pi, normal_axis)
