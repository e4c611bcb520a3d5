"""Example: intersections and crossings of two overlapping shapes."""

from pathkernel import Path


def main() -> None:
    square = Path.rectangle(0, 0, 100, 100)
    circle = Path.circle((100, 50), 40)

    print(f"Square: {square!r}, area={square.area:.2f}")
    print(f"Circle: {circle!r}, length={circle.length:.4f}")

    locations = square.get_intersections(circle)
    print(f"\nIntersections ({len(locations)}):")
    for location in locations:
        other = location.intersection
        print(
            f"  ({location.point.x:.4f}, {location.point.y:.4f})"
            f" square curve {location.index} t={location.time:.4f}"
            f" / circle curve {other.index} t={other.time:.4f}"
            f" crossing={location.is_crossing()}"
        )

    loop = Path([(0, 0), (100, 0)])
    loop.first_segment.handle_out = (300, 100)
    loop.last_segment.handle_in = (-300, 100)
    for location in loop.get_intersections():
        print(f"\nSelf-intersection at ({location.point.x:.4f}, {location.point.y:.4f})")


if __name__ == "__main__":
    main()
