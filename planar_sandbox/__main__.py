import argparse
import logging
import sys
from typing import List, Optional, Sequence, Tuple

import numpy as np

from planar_sandbox import (
    GeometryConfig,
    LinkageConfigurationError,
    LinkageSolver,
    PartitionConfigurationError,
    PartitionSearch,
)
from planar_sandbox.config import PARTITION_POINT_COUNT

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _parse_point(value: str) -> Tuple[float, float]:
    parts = [part.strip() for part in value.split(",") if part.strip()]
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"expected 'x,y', got {value!r}")
    try:
        return float(parts[0]), float(parts[1])
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected 'x,y', got {value!r}") from exc


def _parse_points(value: str) -> List[Tuple[float, float]]:
    return [_parse_point(chunk) for chunk in value.split()]


def _parse_scroll(value: str) -> Tuple[int, float]:
    index, _, amount = value.partition(":")
    try:
        return int(index), float(amount)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected 'K:amount', got {value!r}") from exc


def _format_point(point: Sequence[float]) -> str:
    return f"({point[0]:.6f}, {point[1]:.6f})"


def _run_linkage(args: argparse.Namespace, config: GeometryConfig) -> None:
    try:
        solver = LinkageSolver(args.joints, config=config)
    except LinkageConfigurationError as exc:
        logger.error("Cannot build linkage: %s", exc)
        raise SystemExit(1)

    for index, amount in args.scroll:
        changed = solver.scroll_bar(solver.half_bar(index), amount)
        logger.info("Scroll of half-bar %d by %.3f applied=%s", index, amount, changed)

    if args.drag_bar is not None:
        half_bar = solver.half_bar(args.drag_bar)
        solver.begin_bar_drag(half_bar)
        print(f"Dragged half-bar {half_bar.index} (pivot {half_bar.pivot}):")
        for step, pointer in enumerate(args.pointer):
            result = solver.drag_bar(pointer)
            status = "accepted" if result.accepted else "rejected"
            print(f"  step {step} toward {_format_point(pointer)}: {status}")
        ranges = solver.compute_angular_range(half_bar)
        solver.end_bar_drag()
        print(f"Angular ranges at joint {ranges.pivot}:")
        for label, wedge in (("too far", ranges.too_far), ("too near", ranges.too_near)):
            print(
                f"  {label} ({wedge.color}): visible={wedge.visible} "
                f"center={wedge.center_degrees:.3f} width={wedge.width_degrees:.3f}"
            )
    elif args.pointer:
        logger.warning("--pointer given without --drag-bar; ignoring %d pointer(s)", len(args.pointer))

    print("Joints:")
    for index, point in enumerate(solver.positions):
        print(f"  {index}: {_format_point(point)}")
    print("Bar lengths:")
    for index, length in enumerate(solver.bar_lengths()):
        print(f"  {index}: {length:.6f}")


def _run_partition(args: argparse.Namespace, config: GeometryConfig) -> None:
    if args.random:
        rng = np.random.default_rng(args.seed)
        points = [tuple(row) for row in rng.uniform(-1.0, 1.0, size=(PARTITION_POINT_COUNT, 2))]
    else:
        points = args.points

    try:
        search = PartitionSearch(points, config=config)
    except PartitionConfigurationError as exc:
        logger.error("Cannot build partition search: %s", exc)
        raise SystemExit(1)

    print("Points:")
    for index, point in enumerate(search.points):
        print(f"  {index}: {_format_point(point)}")
    if search.collinear:
        print(f"Collinear: yes {search.collinear_triples}")
    else:
        print("Collinear: no")

    print(f"Qualifying lines ({len(search.qualifying)}):")
    for classification in search.qualifying:
        left, right = classification.split
        print(
            f"  {classification.line} split={left}-{right} on_line={classification.on_line} "
            f"mask={classification.signature_mask}"
        )

    print(f"Solutions ({len(search.solutions)}):")
    for number, triple in enumerate(search.solutions, start=1):
        lines = ", ".join(str(line) for line in triple.lines)
        print(f"  [{number}] {lines} codes={list(triple.codes)}")
    print(search.solution_summary())


def main(argv: Optional[Sequence[str]] = None) -> None:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    common.add_argument(
        "--epsilon",
        type=float,
        default=None,
        help="Tolerance for on-line, parallel and collinear tests (default: 1e-6)",
    )

    parser = argparse.ArgumentParser(description="Planar linkage and seven-point partition sandbox")
    commands = parser.add_subparsers(dest="command", required=True)

    linkage = commands.add_parser("linkage", parents=[common], help="Drive a closed-chain linkage")
    linkage.add_argument(
        "--joints",
        type=_parse_points,
        required=True,
        help='Joint positions, e.g. "0,0 1,0 1,1 0,1"',
    )
    linkage.add_argument("--drag-bar", type=int, help="Half-bar index to drag")
    linkage.add_argument(
        "--pointer",
        type=_parse_point,
        action="append",
        default=[],
        help="Pointer position for one drag step (repeatable)",
    )
    linkage.add_argument(
        "--scroll",
        type=_parse_scroll,
        action="append",
        default=[],
        help="Scroll a half-bar's length, e.g. 0:1.5 (repeatable)",
    )

    partition = commands.add_parser("partition", parents=[common], help="Search seven-point partitions")
    source = partition.add_mutually_exclusive_group(required=True)
    source.add_argument("--points", type=_parse_points, help='Point positions, e.g. "0,0 1,0 ..."')
    source.add_argument("--random", action="store_true", help="Use uniformly random points")
    partition.add_argument(
        "--seed",
        type=int,
        default=123,
        help="Random seed used with --random (default: 123)",
    )

    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    config = GeometryConfig() if args.epsilon is None else GeometryConfig(epsilon=args.epsilon)

    if args.command == "linkage":
        _run_linkage(args, config)
    else:
        _run_partition(args, config)


if __name__ == "__main__":
    main(sys.argv[1:])
