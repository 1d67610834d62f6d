"""Adapter turning any callable ``t -> point`` into a :class:`Curve`."""

from __future__ import annotations

from typing import Callable, Sequence, Union

from ..linalg import Vec3
from .curve import Curve

PointLike = Union[Vec3, Sequence[float]]


class FunctionCurve(Curve):
    def __init__(self, fn: Callable[[float], PointLike], closed: bool = False) -> None:
        super().__init__((), closed=closed)
        self._fn = fn

    def get_point(self, t: float) -> Vec3:
        p = self._fn(t)
        if isinstance(p, Vec3):
            return p
        return Vec3.from_iterable(p)
