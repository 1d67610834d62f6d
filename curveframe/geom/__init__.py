"""Curve geometry for curveframe."""

from .arc import ArcCurve, CircleCurve
from .arclength import build_arc_length_table, u_to_t
from .bezier import BezierCurve
from .curve import Curve
from .frames import FrenetFrame, compute_frenet_frames, propagate_frame
from .function import FunctionCurve
from .line import LineCurve

__all__ = [
    "ArcCurve",
    "BezierCurve",
    "CircleCurve",
    "Curve",
    "FrenetFrame",
    "FunctionCurve",
    "LineCurve",
    "build_arc_length_table",
    "compute_frenet_frames",
    "propagate_frame",
    "u_to_t",
]
