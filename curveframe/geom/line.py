"""Straight line segment."""

from __future__ import annotations

from ..linalg import Vec3
from .curve import Curve


class LineCurve(Curve):
    def __init__(self, start: Vec3, end: Vec3) -> None:
        super().__init__([start, end], closed=False)

    @property
    def start(self) -> Vec3:
        return self.points[0]

    @property
    def end(self) -> Vec3:
        return self.points[1]

    def get_point(self, t: float) -> Vec3:
        return self.start + (self.end - self.start) * t
