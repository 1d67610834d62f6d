"""Rotation-minimizing Frenet frames along a sampled tangent sequence.

Frames are built by parallel transport: the first normal is chosen
perpendicular to the first tangent, and each following normal is the
previous one rotated by the same rotation that carries the previous tangent
onto the current one.  For closed curves the residual angle between the
first and last normal is spread evenly over all samples so the sequence
meets itself at the seam.

See Hanson & Ma, "Parallel Transport Approach to Curve Framing" (1995).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from itertools import accumulate
from typing import Iterable, List, Sequence

import numpy as np

from .. import settings
from ..linalg import X_AXIS, Y_AXIS, Z_AXIS, Vec3, angle_between, rotate_about_axis

log = logging.getLogger("curveframe.geom")


@dataclass(frozen=True)
class FrenetFrame:
    """Orthonormal (tangent, normal, binormal) triple at one curve sample."""

    tangent: Vec3
    normal: Vec3
    binormal: Vec3

    def to_matrix(self) -> np.ndarray:
        """3x3 matrix with columns T, N, B."""
        return np.column_stack(
            [self.tangent.to_array(), self.normal.to_array(), self.binormal.to_array()]
        )


def initial_normal_axis(tangent: Vec3) -> Vec3:
    """World axis along which ``tangent`` has the smallest absolute component.

    Axes are checked in x, y, z order with ``<=`` so a later axis wins ties.
    """
    smallest = math.inf
    axis = X_AXIS
    tx, ty, tz = abs(tangent.x), abs(tangent.y), abs(tangent.z)
    if tx <= smallest:
        smallest = tx
        axis = X_AXIS
    if ty <= smallest:
        smallest = ty
        axis = Y_AXIS
    if tz <= smallest:
        axis = Z_AXIS
    return axis


def initial_frame(tangent: Vec3) -> FrenetFrame:
    axis = initial_normal_axis(tangent)
    vec = tangent.cross(axis).normalize()
    normal = tangent.cross(vec)
    binormal = tangent.cross(normal)
    return FrenetFrame(tangent, normal, binormal)


def propagate_frame(prev: FrenetFrame, tangent: Vec3) -> FrenetFrame:
    """Transport ``prev`` onto the next unit ``tangent``."""
    normal = prev.normal
    axis = prev.tangent.cross(tangent)
    if axis.norm() > settings.ROTATION_AXIS_EPSILON:
        theta = angle_between(prev.tangent, tangent)
        normal = rotate_about_axis(normal, axis.normalize(), theta)
    binormal = tangent.cross(normal).normalize()
    return FrenetFrame(tangent, normal, binormal)


def close_frames(frames: Sequence[FrenetFrame]) -> List[FrenetFrame]:
    """Twist ``frames`` uniformly so the last normal matches the first."""
    segments = len(frames) - 1
    if segments < 1:
        return list(frames)
    first, last = frames[0], frames[-1]
    theta = angle_between(first.normal, last.normal) / segments
    if first.tangent.dot(first.normal.cross(last.normal)) > 0:
        theta = -theta
    log.debug("closing frame seam: %.6g rad per segment", theta)

    closed = [first]
    for i, frame in enumerate(frames[1:], start=1):
        normal = rotate_about_axis(frame.normal, frame.tangent, theta * i)
        binormal = frame.tangent.cross(normal).normalize()
        closed.append(FrenetFrame(frame.tangent, normal, binormal))
    return closed


def sanitize_tangents(tangents: Iterable[Vec3]) -> List[Vec3]:
    """Normalize tangents, replacing undefined ones by a neighbouring valid one.

    A tangent shorter than ``DEGENERATE_TANGENT_EPSILON`` takes the previous
    valid tangent; leading undefined tangents take the first valid one.
    """
    raw = list(tangents)
    valid = [t.norm() > settings.DEGENERATE_TANGENT_EPSILON for t in raw]
    if not any(valid):
        log.warning("curve has no defined tangent; falling back to the x axis")
        return [X_AXIS] * len(raw)

    previous = raw[valid.index(True)].normalize()
    result = []
    for t, ok in zip(raw, valid):
        if ok:
            previous = t.normalize()
        result.append(previous)
    if not all(valid):
        log.warning("replaced %d undefined tangent(s)", valid.count(False))
    return result


def compute_frenet_frames(tangents: Sequence[Vec3], closed: bool = False) -> List[FrenetFrame]:
    """Frames for a sequence of ``segments + 1`` sampled tangents."""
    if len(tangents) < 2:
        raise ValueError("at least two tangents (one segment) are required")
    unit = sanitize_tangents(tangents)
    frames = list(accumulate(unit[1:], propagate_frame, initial=initial_frame(unit[0])))
    if closed:
        frames = close_frames(frames)
    return frames


__all__ = [
    "FrenetFrame",
    "initial_normal_axis",
    "initial_frame",
    "propagate_frame",
    "close_frames",
    "sanitize_tangents",
    "compute_frenet_frames",
]
