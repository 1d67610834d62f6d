"""Basic linear algebra utilities for curveframe.

This module includes small value classes for 3D vectors and quaternions.
It is intentionally lightweight so the curve code can work point by point
without building arrays; conversions to numpy are provided where batches of
points are needed.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

import numpy as np


@dataclass(frozen=True)
class Vec3:
    x: float
    y: float
    z: float

    @staticmethod
    def zero() -> "Vec3":
        return Vec3(0.0, 0.0, 0.0)

    @staticmethod
    def from_iterable(values: Iterable[float]) -> "Vec3":
        """Build a vector from any length-3 sequence (tuple, list, ndarray)."""
        coords = [float(v) for v in values]
        if len(coords) != 3:
            raise ValueError(f"Vec3 expects 3 values, got {len(coords)}")
        return Vec3(*coords)

    def __add__(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> "Vec3":
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "Vec3":
        return Vec3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> "Vec3":
        return Vec3(-self.x, -self.y, -self.z)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def cross(self, other: "Vec3") -> "Vec3":
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def normalize(self) -> "Vec3":
        n = self.norm()
        if n == 0:
            return Vec3(0.0, 0.0, 0.0)
        return self / n

    def dot(self, other: "Vec3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def norm(self) -> float:
        return math.sqrt(self.dot(self))

    def distance_to(self, other: "Vec3") -> float:
        return (self - other).norm()

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)


@dataclass(frozen=True)
class Quaternion:
    w: float
    x: float
    y: float
    z: float

    @staticmethod
    def from_axis_angle(axis: Vec3, angle_rad: float) -> "Quaternion":
        """Rotation of ``angle_rad`` about the unit vector ``axis`` (right-handed)."""
        half = angle_rad / 2.0
        s = math.sin(half)
        return Quaternion(math.cos(half), axis.x * s, axis.y * s, axis.z * s)

    def conjugate(self) -> "Quaternion":
        return Quaternion(self.w, -self.x, -self.y, -self.z)

    def __mul__(self, other: "Quaternion") -> "Quaternion":
        w1, x1, y1, z1 = self.w, self.x, self.y, self.z
        w2, x2, y2, z2 = other.w, other.x, other.y, other.z
        return Quaternion(
            w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
            w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
            w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
            w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
        )

    def rotate(self, v: Vec3) -> Vec3:
        qv = Quaternion(0, v.x, v.y, v.z)
        qres = self * qv * self.conjugate()
        return Vec3(qres.x, qres.y, qres.z)

    def __repr__(self) -> str:
        return f"Quaternion(w={self.w:.3f}, x={self.x:.3f}, y={self.y:.3f}, z={self.z:.3f})"


def rotate_about_axis(v: Vec3, axis: Vec3, angle_rad: float) -> Vec3:
    """Rotate ``v`` by ``angle_rad`` about the unit vector ``axis``."""
    return Quaternion.from_axis_angle(axis, angle_rad).rotate(v)


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def angle_between(a: Vec3, b: Vec3) -> float:
    """Angle in radians between two unit vectors, safe against rounding."""
    return math.acos(clamp(a.dot(b), -1.0, 1.0))


def points_to_array(points: Iterable[Vec3]) -> np.ndarray:
    """Stack vectors into an ``(n, 3)`` float array."""
    arr = np.array([p.to_tuple() for p in points], dtype=float)
    return arr.reshape(-1, 3)


X_AXIS = Vec3(1.0, 0.0, 0.0)
Y_AXIS = Vec3(0.0, 1.0, 0.0)
Z_AXIS = Vec3(0.0, 0.0, 1.0)


__all__ = [
    "Vec3",
    "Quaternion",
    "rotate_about_axis",
    "clamp",
    "angle_between",
    "points_to_array",
    "X_AXIS",
    "Y_AXIS",
    "Z_AXIS",
]
