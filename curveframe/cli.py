from __future__ import annotations

import argparse
import json
import logging
import math

from .geom import ArcCurve, BezierCurve, CircleCurve, Curve, LineCurve
from .linalg import Vec3

log = logging.getLogger("curveframe.cli")


def _parse_point(text: str) -> Vec3:
    try:
        return Vec3.from_iterable(float(v) for v in text.split(","))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected x,y,z but got {text!r}") from exc


def build_curve(args: argparse.Namespace) -> Curve:
    kind = args.curve
    points = args.points or []
    if kind == "line":
        if len(points) != 2:
            raise ValueError("line needs exactly two --points")
        return LineCurve(points[0], points[1])
    if kind == "bezier":
        return BezierCurve(points, closed=args.closed_curve)
    center = points[0] if points else Vec3(0.0, 0.0, 0.0)
    if kind == "circle":
        return CircleCurve(center, args.radius, normal_axis=args.axis)
    return ArcCurve(
        center,
        args.radius,
        math.radians(args.start_angle),
        math.radians(args.end_angle),
        normal_axis=args.axis,
    )


def _cmd_lengths(curve: Curve, args: argparse.Namespace) -> dict:
    table = curve.get_lengths(args.divisions)
    return {"divisions": args.divisions, "total": float(table[-1]), "lengths": table.tolist()}


def _cmd_map(curve: Curve, args: argparse.Namespace) -> dict:
    rows = []
    for u in args.u:
        t = curve.get_u_to_t_mapping(u)
        rows.append({"u": u, "t": t, "point": list(curve.get_point(t))})
    return {"mapping": rows}


def _cmd_frames(curve: Curve, args: argparse.Namespace) -> dict:
    closed = curve.closed if args.closed is None else args.closed
    frames = curve.compute_frenet_frames(args.segments, closed)
    rows = []
    for i, frame in enumerate(frames):
        u = i / args.segments
        rows.append(
            {
                "u": u,
                "point": list(curve.get_point_at(u)),
                "tangent": list(frame.tangent),
                "normal": list(frame.normal),
                "binormal": list(frame.binormal),
            }
        )
    return {"segments": args.segments, "closed": closed, "frames": rows}


def main(argv: list[str] | None = None) -> int:
    curve_args = argparse.ArgumentParser(add_help=False)
    curve_args.add_argument("--curve", choices=["line", "arc", "circle", "bezier"], default="line")
    curve_args.add_argument(
        "--points",
        type=_parse_point,
        nargs="+",
        default=None,
        help="Control points as x,y,z (line: start end; bezier: controls; arc/circle: center)",
    )
    curve_args.add_argument("--radius", type=float, default=1.0)
    curve_args.add_argument("--start-angle", type=float, default=0.0, help="Arc start, degrees")
    curve_args.add_argument("--end-angle", type=float, default=90.0, help="Arc end, degrees")
    curve_args.add_argument("--axis", choices=["x", "y", "z"], default="z", help="Arc plane normal")
    curve_args.add_argument("--closed-curve", action="store_true", help="Mark a bezier curve as closed")
    curve_args.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    p = argparse.ArgumentParser(prog="python -m curveframe.cli")
    sub = p.add_subparsers(dest="cmd", required=True)

    lengths = sub.add_parser("lengths", parents=[curve_args], help="Print the arc-length table")
    lengths.add_argument("--divisions", type=int, default=200)
    lengths.set_defaults(func=_cmd_lengths)

    mapping = sub.add_parser("map", parents=[curve_args], help="Map arc-length fractions u to parameters t")
    mapping.add_argument("u", type=float, nargs="+")
    mapping.set_defaults(func=_cmd_map)

    frames = sub.add_parser("frames", parents=[curve_args], help="Print Frenet frames at equal arc-length steps")
    frames.add_argument("--segments", type=int, default=16)
    frames.add_argument("--closed", dest="closed", action="store_true", default=None)
    frames.add_argument("--open", dest="closed", action="store_false")
    frames.set_defaults(func=_cmd_frames)

    ns = p.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if ns.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        curve = build_curve(ns)
        log.debug("built %r", curve)
        res = ns.func(curve, ns)
    except ValueError as exc:
        p.error(str(exc))
    print(json.dumps(res, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
