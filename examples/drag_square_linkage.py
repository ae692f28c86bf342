"""Swing one bar of a unit-square four-bar and watch the opposite joint follow."""

import math

from planar_sandbox import LinkageSolver


def main() -> None:
    solver = LinkageSolver([(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)])
    half_bar = solver.half_bar(0)
    solver.begin_bar_drag(half_bar)

    print("Angle  accepted  adjacent              opposite")
    for degrees in range(0, 181, 15):
        angle = math.radians(degrees)
        result = solver.drag_bar((math.cos(angle), math.sin(angle)))
        ax, ay = result.adjacent
        ox, oy = result.opposite
        print(f"{degrees:5d}  {str(result.accepted):8s}  ({ax:.4f}, {ay:.4f})  ({ox:.4f}, {oy:.4f})")
    solver.end_bar_drag()

    print("Bar lengths:", [round(length, 6) for length in solver.bar_lengths()])
    ranges = solver.compute_angular_range(half_bar)
    for wedge in (ranges.too_far, ranges.too_near):
        print(
            f"  {wedge.color}: visible={wedge.visible} "
            f"center={wedge.center_degrees:.2f} width={wedge.width_degrees:.2f}"
        )


if __name__ == "__main__":
    main()
