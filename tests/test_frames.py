import math

import numpy as np
import pytest

from curveframe.geom import ArcCurve, BezierCurve, CircleCurve, FunctionCurve, LineCurve
from curveframe.geom.frames import (
    FrenetFrame,
    close_frames,
    compute_frenet_frames,
    initial_frame,
    initial_normal_axis,
    propagate_frame,
    sanitize_tangents,
)
from curveframe.linalg import X_AXIS, Y_AXIS, Z_AXIS, Vec3, rotate_about_axis


def _helix(t):
    s = 4 * math.pi * t
    return (math.cos(s), math.sin(s), 0.5 * t)


def _saddle(t):
    s = 2 * math.pi * t
    return (math.cos(s), math.sin(s), 0.3 * math.cos(2 * s))


def _assert_orthonormal(frames, tol=1e-9):
    for f in frames:
        for v in (f.tangent, f.normal, f.binormal):
            assert v.norm() == pytest.approx(1.0, abs=tol)
        assert f.tangent.dot(f.normal) == pytest.approx(0.0, abs=tol)
        assert f.tangent.dot(f.binormal) == pytest.approx(0.0, abs=tol)
        assert f.normal.dot(f.binormal) == pytest.approx(0.0, abs=tol)


def _cone_tangents(segments, elevation=0.5):
    """Tangents sweeping a cone once; their start and end coincide exactly."""
    c, s = math.cos(elevation), math.sin(elevation)
    out = []
    for i in range(segments + 1):
        a = 2 * math.pi * (i % segments) / segments
        out.append(Vec3(c * math.cos(a), c * math.sin(a), s))
    return out


@pytest.mark.parametrize(
    "curve, closed",
    [
        (LineCurve(Vec3(0.0, 0.0, 0.0), Vec3(10.0, 0.0, 0.0)), False),
        (ArcCurve(Vec3(0.0, 0.0, 0.0), 1.0, 0.0, math.pi / 2), False),
        (BezierCurve([Vec3(0.0, 0.0, 0.0), Vec3(1.0, 3.0, 1.0), Vec3(2.0, -1.0, 2.0), Vec3(4.0, 0.0, 0.0)]), False),
        (FunctionCurve(_helix), False),
        (FunctionCurve(_saddle, closed=True), True),
        (CircleCurve(Vec3(0.0, 0.0, 0.0), 2.0, normal_axis="x"), True),
    ],
)
def test_frames_are_orthonormal(curve, closed):
    frames = curve.compute_frenet_frames(32, closed)
    assert len(frames) == 33
    _assert_orthonormal(frames)


def test_frames_default_to_curve_closed_flag():
    curve = FunctionCurve(_saddle, closed=True)
    assert curve.compute_frenet_frames(16) == curve.compute_frenet_frames(16, closed=True)


def test_line_frames_are_constant():
    frames = LineCurve(Vec3(0.0, 0.0, 0.0), Vec3(10.0, 0.0, 0.0)).compute_frenet_frames(4, False)
    for f in frames:
        assert f == FrenetFrame(Vec3(1.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0), Vec3(0.0, 1.0, 0.0))


def test_quarter_circle_frames():
    arc = ArcCurve(Vec3(0.0, 0.0, 0.0), 1.0, 0.0, math.pi / 2)
    frames = arc.compute_frenet_frames(segments=4, closed=False)

    first, last = frames[0].tangent, frames[-1].tangent
    assert (first.x, first.y, first.z) == pytest.approx((0.0, 1.0, 0.0), abs=1e-2)
    assert (last.x, last.y, last.z) == pytest.approx((-1.0, 0.0, 0.0), abs=1e-2)

    # Tangents turn monotonically counter-clockwise.
    angles = [math.atan2(f.tangent.y, f.tangent.x) for f in frames]
    assert all(b > a for a, b in zip(angles, angles[1:]))

    # Planar curve: the out-of-plane vector keeps its direction and sign.
    for f in frames:
        assert (f.normal.x, f.normal.y, f.normal.z) == pytest.approx((0.0, 0.0, -1.0), abs=1e-9)
        assert f.binormal.z == pytest.approx(0.0, abs=1e-9)
    crosses = [f.tangent.cross(f.binormal).z for f in frames]
    assert all(c > 0 for c in crosses)


@pytest.mark.parametrize(
    "tangent, expected",
    [
        (Vec3(1.0, 0.0, 0.0), Z_AXIS),
        (Vec3(0.0, 1.0, 0.0), Z_AXIS),
        (Vec3(0.0, 0.0, 1.0), Y_AXIS),
        (Vec3(1.0, 1.0, 1.0).normalize(), Z_AXIS),
        (Vec3(0.1, 0.5, 0.86), X_AXIS),
        (Vec3(-0.6, 0.1, -0.79), Y_AXIS),
    ],
)
def test_initial_normal_axis(tangent, expected):
    assert initial_normal_axis(tangent) == expected


def test_initial_frame_is_orthonormal():
    frame = initial_frame(Vec3(0.3, -0.4, 0.2).normalize())
    _assert_orthonormal([frame])


def test_propagate_single_step():
    prev = initial_frame(X_AXIS)
    step = propagate_frame(prev, Z_AXIS)
    assert step.tangent == Z_AXIS
    assert (step.normal.x, step.normal.y, step.normal.z) == pytest.approx((1.0, 0.0, 0.0), abs=1e-12)
    assert (step.binormal.x, step.binormal.y, step.binormal.z) == pytest.approx((0.0, 1.0, 0.0), abs=1e-12)


def test_propagate_parallel_tangent_keeps_normal():
    prev = initial_frame(X_AXIS)
    step = propagate_frame(prev, X_AXIS)
    assert step.normal == prev.normal


def test_close_frames_removes_uniform_twist():
    frames = []
    for i in range(5):
        n = rotate_about_axis(X_AXIS, Z_AXIS, 0.2 * i)
        frames.append(FrenetFrame(Z_AXIS, n, Z_AXIS.cross(n)))
    closed = close_frames(frames)
    for f in closed:
        assert (f.normal.x, f.normal.y, f.normal.z) == pytest.approx((1.0, 0.0, 0.0), abs=1e-12)
        assert (f.binormal.x, f.binormal.y, f.binormal.z) == pytest.approx((0.0, 1.0, 0.0), abs=1e-12)


@pytest.mark.parametrize("segments", [16, 64])
def test_closed_seam_matches(segments):
    tangents = _cone_tangents(segments)
    open_frames = compute_frenet_frames(tangents, closed=False)
    closed_frames = compute_frenet_frames(tangents, closed=True)

    open_gap = (open_frames[0].normal - open_frames[-1].normal).norm()
    closed_gap = (closed_frames[0].normal - closed_frames[-1].normal).norm()
    assert open_gap > 0.1
    assert closed_gap < 1e-9
    _assert_orthonormal(closed_frames)


def test_closed_curve_seam():
    curve = FunctionCurve(_saddle, closed=True)
    frames = curve.compute_frenet_frames(64)
    n0, n1 = frames[0].normal, frames[-1].normal
    np.testing.assert_allclose(n0.to_array(), n1.to_array(), atol=2e-2)


def test_degenerate_tangents_are_filled():
    zero = Vec3(0.0, 0.0, 0.0)
    filled = sanitize_tangents([zero, Vec3(0.0, 2.0, 0.0), zero, Vec3(3.0, 0.0, 0.0)])
    assert filled == [Y_AXIS, Y_AXIS, Y_AXIS, X_AXIS]


def test_fully_degenerate_curve_falls_back(caplog):
    point = FunctionCurve(lambda t: (1.0, 2.0, 3.0))
    with caplog.at_level("WARNING", logger="curveframe.geom"):
        frames = point.compute_frenet_frames(3)
    assert len(frames) == 4
    assert all(f.tangent == X_AXIS for f in frames)
    _assert_orthonormal(frames)
    assert "no defined tangent" in caplog.text


def test_frames_need_a_segment():
    with pytest.raises(ValueError):
        LineCurve(Vec3(0.0, 0.0, 0.0), Vec3(1.0, 0.0, 0.0)).compute_frenet_frames(0)
    with pytest.raises(ValueError):
        compute_frenet_frames([X_AXIS])


def test_frame_matrix_columns():
    frame = initial_frame(X_AXIS)
    m = frame.to_matrix()
    assert m.shape == (3, 3)
    np.testing.assert_allclose(m.T @ m, np.eye(3), atol=1e-12)
    np.testing.assert_allclose(m[:, 0], [1.0, 0.0, 0.0])
