"""Example: fit smooth curves through a noisy polyline and smooth a zig-zag."""

import math

import numpy as np

from pathkernel import Path


def main() -> None:
    rng = np.random.default_rng(123)
    xs = np.linspace(0, 200, 81)
    ys = 40 * np.sin(xs / 30) + rng.normal(scale=0.5, size=xs.shape)
    path = Path.from_points(zip(xs.tolist(), ys.tolist()))
    before = len(path.segments)
    length = path.length

    path.simplify(2.5)
    print(f"Simplified {before} points into {len(path.segments)} segments")
    print(f"Length {length:.3f} -> {path.length:.3f}")
    for segment in path.segments:
        print(f"  {segment!r}")

    zigzag = Path.from_points([(i * 20, 0 if i % 2 else 20) for i in range(6)])
    for kind in ("asymmetric", "continuous", "catmull-rom", "geometric"):
        smoothed = zigzag.clone()
        smoothed.smooth(type=kind)
        print(f"{kind:>12}: length={smoothed.length:.3f} height={smoothed.bounds.height:.3f}")

    print(f"Unit circle area / pi: {Path.circle((0, 0), 1).area / math.pi:.6f}")


if __name__ == "__main__":
    main()
