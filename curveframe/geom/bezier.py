"""Bezier curve utilities."""

from __future__ import annotations

from typing import Iterable

from ..linalg import Vec3
from .curve import Curve


class BezierCurve(Curve):
    """Bezier curve of any degree over its control points."""

    def __init__(self, control_points: Iterable[Vec3], closed: bool = False) -> None:
        control_points = list(control_points)
        if not control_points:
            raise ValueError("BezierCurve needs at least one control point")
        super().__init__(control_points, closed=closed)

    @property
    def control_points(self) -> tuple[Vec3, ...]:
        return self.points

    def set_control_point(self, index: int, point: Vec3) -> None:
        pts = list(self.points)
        pts[index] = point
        self.set_points(pts)

    def get_point(self, t: float) -> Vec3:
        """Evaluate the curve at parameter t using de Casteljau."""
        tmp = list(self.points)
        n = len(tmp)
        for r in range(1, n):
            for i in range(n - r):
                tmp[i] = tmp[i] * (1 - t) + tmp[i + 1] * t
        return tmp[0]

    def derivative(self, t: float) -> Vec3:
        pts = self.points
        n = len(pts) - 1
        if n <= 0:
            return Vec3(0.0, 0.0, 0.0)
        tmp = [n * (pts[i + 1] - pts[i]) for i in range(n)]
        for r in range(1, n):
            for i in range(n - r):
                tmp[i] = tmp[i] * (1 - t) + tmp[i + 1] * t
        return tmp[0]
