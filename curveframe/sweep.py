"""
Tube and ribbon meshes swept along a curve.

Mathematical model:
  C(u) = curve point at arc-length fraction u ∈ [0, 1]
  (T, N, B) = rotation-minimizing frame at u
  Tube:   S(u, a) = C(u) + r·(cos(a)·N(u) + sin(a)·B(u)),  a ∈ [0, 2π)
  Ribbon: S(u, w) = C(u) + w·(cos(φ(u))·N(u) + sin(φ(u))·B(u)),  w ∈ [-width, width]
  φ(u) = twist_offset + 2π·twist_turns·u
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .geom.curve import Curve
from .geom.frames import FrenetFrame
from .linalg import points_to_array

log = logging.getLogger("curveframe.sweep")


@dataclass(frozen=True)
class TubeConfig:
    """Configuration for a circular tube around a curve."""

    radius: float = 0.1
    segments: int = 64         # samples along the curve
    radial_segments: int = 8   # samples around the cross-section
    closed: bool | None = None  # None: use the curve's own flag


@dataclass(frozen=True)
class RibbonConfig:
    """Configuration for a flat, optionally twisted band along a curve."""

    width: float = 0.2          # half-width either side of the centerline
    segments: int = 64
    width_segments: int = 2
    twist_offset: float = 0.0   # φ₀, radians
    twist_turns: float = 0.0    # full twists from start to end
    closed: bool | None = None


def frames_to_arrays(frames: Sequence[FrenetFrame]) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Split frames into (n, 3) arrays T, N, B."""
    T = points_to_array(f.tangent for f in frames)
    N = points_to_array(f.normal for f in frames)
    B = points_to_array(f.binormal for f in frames)
    return T, N, B


def _grid_faces(rows: int, cols: int, wrap_rows: bool, wrap_cols: bool) -> np.ndarray:
    """Triangulate a (rows x cols) vertex grid, two triangles per quad."""
    faces = []
    row_count = rows if wrap_rows else rows - 1
    col_count = cols if wrap_cols else cols - 1
    for i in range(row_count):
        i_next = (i + 1) % rows
        for j in range(col_count):
            j_next = (j + 1) % cols
            v00 = i * cols + j
            v01 = i * cols + j_next
            v10 = i_next * cols + j
            v11 = i_next * cols + j_next
            faces.append([v00, v10, v11])
            faces.append([v00, v11, v01])
    return np.array(faces, dtype=np.int32).reshape(-1, 3)


def _sample(curve: Curve, segments: int, closed: bool | None):
    if closed is None:
        closed = curve.closed
    frames = curve.compute_frenet_frames(segments, closed)
    centers = curve.get_spaced_points(segments)
    _, N, B = frames_to_arrays(frames)
    if closed:
        # Last sample coincides with the first; the grid wraps instead.
        centers, N, B = centers[:-1], N[:-1], B[:-1]
    return centers, N, B, closed


def generate_tube_mesh(curve: Curve, cfg: TubeConfig = TubeConfig()) -> tuple[np.ndarray, np.ndarray]:
    """
    Generate a tube mesh around ``curve``.

    Returns:
        vertices: (rings * radial_segments, 3)
        faces: (M, 3) triangle indices
    """
    if cfg.radius <= 0:
        raise ValueError(f"radius must be positive, got {cfg.radius}")
    if cfg.radial_segments < 3:
        raise ValueError("radial_segments must be >= 3")
    centers, N, B, closed = _sample(curve, cfg.segments, cfg.closed)

    angles = np.linspace(0.0, 2 * np.pi, cfg.radial_segments, endpoint=False)
    # (rings, radial, 3)
    offsets = (
        np.cos(angles)[None, :, None] * N[:, None, :]
        + np.sin(angles)[None, :, None] * B[:, None, :]
    )
    vertices = centers[:, None, :] + cfg.radius * offsets
    vertices = vertices.reshape(-1, 3)

    faces = _grid_faces(len(centers), cfg.radial_segments, wrap_rows=closed, wrap_cols=True)
    log.debug("tube mesh: %d vertices, %d faces", len(vertices), len(faces))
    return vertices, faces


def generate_ribbon_mesh(curve: Curve, cfg: RibbonConfig = RibbonConfig()) -> tuple[np.ndarray, np.ndarray]:
    """
    Generate a (possibly twisted) ribbon along ``curve``.

    Returns:
        vertices: (rings * (width_segments + 1), 3)
        faces: (M, 3) triangle indices
    """
    if cfg.width <= 0:
        raise ValueError(f"width must be positive, got {cfg.width}")
    if cfg.width_segments < 1:
        raise ValueError("width_segments must be >= 1")
    centers, N, B, closed = _sample(curve, cfg.segments, cfg.closed)

    u_vals = np.linspace(0.0, 1.0, cfg.segments + 1)[: len(centers)]
    phi = cfg.twist_offset + 2 * np.pi * cfg.twist_turns * u_vals
    direction = np.cos(phi)[:, None] * N + np.sin(phi)[:, None] * B
    w_vals = np.linspace(-cfg.width, cfg.width, cfg.width_segments + 1)

    vertices = centers[:, None, :] + w_vals[None, :, None] * direction[:, None, :]
    vertices = vertices.reshape(-1, 3)

    faces = _grid_faces(len(centers), len(w_vals), wrap_rows=closed, wrap_cols=False)
    log.debug("ribbon mesh: %d vertices, %d faces", len(vertices), len(faces))
    return vertices, faces


__all__ = [
    "TubeConfig",
    "RibbonConfig",
    "frames_to_arrays",
    "generate_tube_mesh",
    "generate_ribbon_mesh",
]
