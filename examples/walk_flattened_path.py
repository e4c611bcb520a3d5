"""Example: walk a curved path at fixed arc-length steps."""

from pathkernel import Path, PathFlattener


class SvgPathWriter:
    """Collects drawing commands as SVG path data."""

    def __init__(self) -> None:
        self.commands = []

    def move_to(self, x: float, y: float) -> None:
        self.commands.append(f"M{x:.2f},{y:.2f}")

    def line_to(self, x: float, y: float) -> None:
        self.commands.append(f"L{x:.2f},{y:.2f}")

    def bezier_curve_to(self, h1x: float, h1y: float, h2x: float, h2y: float, x: float, y: float) -> None:
        self.commands.append(f"C{h1x:.2f},{h1y:.2f} {h2x:.2f},{h2y:.2f} {x:.2f},{y:.2f}")

    def close_path(self) -> None:
        self.commands.append("Z")

    def __str__(self) -> str:
        return " ".join(self.commands)


def main() -> None:
    path = Path()
    path.move_to((0, 0))
    path.curve_to((50, -40), (100, 0))
    path.arc_to((150, 50), (200, 0))

    flattener = PathFlattener(path)
    print(f"Exact length: {path.length:.4f}, flattened: {flattener.length:.4f} ({len(flattener.parts)} parts)")

    step = flattener.length / 10
    for i in range(11):
        offset = min(i * step, flattener.length)
        point = flattener.get_point_at(offset)
        tangent = flattener.get_tangent_at(offset)
        print(f"  {offset:8.3f}: ({point.x:8.3f}, {point.y:8.3f}) angle={tangent.angle:7.2f}")

    svg = SvgPathWriter()
    path.draw(svg)
    print(f"\nFull path: {svg}")

    middle = SvgPathWriter()
    flattener.draw_part(middle, flattener.length / 3, 2 * flattener.length / 3)
    print(f"Middle third: {middle}")


if __name__ == "__main__":
    main()
