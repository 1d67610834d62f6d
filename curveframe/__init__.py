"""Top-level helpers for curveframe.

Arc-length reparametrization and rotation-minimizing frames for any
parametric curve over ``t`` in [0, 1].
"""

__all__ = [
    "Vec3",
    "Quaternion",
    # Curves
    "Curve",
    "FunctionCurve",
    "LineCurve",
    "BezierCurve",
    "ArcCurve",
    "CircleCurve",
    # Frames
    "FrenetFrame",
    "compute_frenet_frames",
    # Sweeps
    "TubeConfig",
    "RibbonConfig",
    "generate_tube_mesh",
    "generate_ribbon_mesh",
]

from .geom import (
    ArcCurve,
    BezierCurve,
    CircleCurve,
    Curve,
    FrenetFrame,
    FunctionCurve,
    LineCurve,
    compute_frenet_frames,
)
from .linalg import Quaternion, Vec3
from .sweep import RibbonConfig, TubeConfig, generate_ribbon_mesh, generate_tube_mesh
