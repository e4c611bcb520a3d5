"""Numerical helpers shared by the curve, location and fitting modules.

The root solvers favour numerical robustness over brevity: the quadratic solver
guards the discriminant against cancellation and the cubic solver follows
Kahan's deflation approach so that roots close to the parameter bounds are
reported reliably.
"""

from __future__ import annotations

import math
from functools import lru_cache
from typing import Callable, List, Optional, Tuple

import numpy as np
from scipy.special import roots_legendre

EPSILON = 1e-12
MACHINE_EPSILON = 1.12e-16
CURVETIME_EPSILON = 1e-8
GEOMETRIC_EPSILON = 1e-7
TRIGONOMETRIC_EPSILON = 1e-8
KAPPA = 4.0 * (math.sqrt(2.0) - 1.0) / 3.0

_SPLITTER = 134217729.0  # 2**27 + 1
_MAX_GAUSS_NODES = 16


def is_zero(value: float) -> bool:
    return -EPSILON <= value <= EPSILON


def is_machine_zero(value: float) -> bool:
    return -MACHINE_EPSILON <= value <= MACHINE_EPSILON


def clamp(value: float, lower: float, upper: float) -> float:
    if value < lower:
        return lower
    if value > upper:
        return upper
    return value


def _split(value: float) -> Tuple[float, float]:
    x = value * _SPLITTER
    y = value - x
    hi = y + x
    return hi, value - hi


def get_discriminant(a: float, b: float, c: float) -> float:
    """Return ``b*b - a*c`` with extra precision when the terms nearly cancel."""

    d = b * b - a * c
    e = b * b + a * c
    if abs(d) * 3 < e:
        ad = _split(a)
        bd = _split(b)
        cd = _split(c)
        p = b * b
        dp = bd[0] * bd[0] - p + 2 * bd[0] * bd[1] + bd[1] * bd[1]
        q = a * c
        dq = ad[0] * cd[0] - q + ad[0] * cd[1] + ad[1] * cd[0] + ad[1] * cd[1]
        d = p - q + (dp - dq)
    return d


def get_normalization_factor(*values: float) -> float:
    """Return a power of two that brings ``max(values)`` close to 1, or 0.

    The factor is only non-zero when the largest value is outside
    ``[1e-8, 1e8]``; multiplying by a power of two is exact.
    """

    norm = max(values) if values else 0.0
    if norm and (norm < 1e-8 or norm > 1e8):
        return 2.0 ** -math.floor(math.log2(norm) + 0.5)
    return 0.0


@lru_cache(maxsize=None)
def _gauss_legendre(n: int) -> Tuple[np.ndarray, np.ndarray]:
    nodes, weights = roots_legendre(n)
    return np.asarray(nodes, dtype=float), np.asarray(weights, dtype=float)


def integrate(f: Callable[[float], float], a: float, b: float, n: int) -> float:
    """Gauss–Legendre quadrature of ``f`` over ``[a, b]`` with ``n`` nodes (2..16)."""

    if not 2 <= n <= _MAX_GAUSS_NODES:
        raise ValueError(f"Gauss-Legendre order must be between 2 and {_MAX_GAUSS_NODES}, got {n}")
    nodes, weights = _gauss_legendre(n)
    half = (b - a) * 0.5
    mid = half + a
    total = 0.0
    for node, weight in zip(nodes, weights):
        total += weight * f(mid + half * node)
    return half * total


def find_root(
    f: Callable[[float], float],
    df: Callable[[float], float],
    x: float,
    a: float,
    b: float,
    n: int,
    tolerance: float,
) -> float:
    """Newton iteration on ``f`` bracketed by ``[a, b]`` with bisection fallback.

    ``f`` is assumed to be increasing on the bracket. The bracket shrinks with
    every step and the result is clamped into it.
    """

    for _ in range(n):
        fx = f(x)
        dfx = df(x)
        if dfx == 0:
            # Flat derivative: fall back to bisection of the current bracket.
            if fx > 0:
                b = x
            else:
                a = x
            x = (a + b) * 0.5
            continue
        dx = fx / dfx
        nx = x - dx
        if abs(dx) < tolerance:
            x = nx
            break
        if fx > 0:
            b = x
            x = (a + b) * 0.5 if nx <= a else nx
        else:
            a = x
            x = (a + b) * 0.5 if nx >= b else nx
    return clamp(x, a, b)


def _collect_root(
    roots: List[float], value: float, lower: Optional[float], upper: Optional[float]
) -> None:
    if not math.isfinite(value):
        return
    if lower is None or upper is None:
        roots.append(value)
    elif lower - EPSILON < value < upper + EPSILON:
        roots.append(clamp(value, lower, upper))


def solve_quadratic(
    a: float,
    b: float,
    c: float,
    lower: Optional[float] = None,
    upper: Optional[float] = None,
) -> List[float]:
    """Return the real roots of ``a*x^2 + b*x + c = 0``.

    When ``lower``/``upper`` are given, roots within ``EPSILON`` of the range
    are kept and clamped into it. An identity equation (infinite solutions)
    yields an empty list.
    """

    x1: float
    x2 = math.inf
    if abs(a) < EPSILON:
        if abs(b) < EPSILON:
            return []
        x1 = -c / b
    else:
        b *= -0.5
        d = get_discriminant(a, b, c)
        if d and abs(d) < MACHINE_EPSILON:
            factor = get_normalization_factor(abs(a), abs(b), abs(c))
            if factor:
                a *= factor
                b *= factor
                c *= factor
                d = get_discriminant(a, b, c)
        if d >= -MACHINE_EPSILON:
            q = 0.0 if d < 0 else math.sqrt(d)
            r = b + (-q if b < 0 else q)
            if r == 0:
                x1 = c / a
                x2 = -x1
            else:
                x1 = r / a
                x2 = c / r
        else:
            x1 = math.inf
    roots: List[float] = []
    _collect_root(roots, x1, lower, upper)
    if x2 != x1:
        _collect_root(roots, x2, lower, upper)
    return roots


def solve_cubic(
    a: float,
    b: float,
    c: float,
    d: float,
    lower: Optional[float] = None,
    upper: Optional[float] = None,
) -> List[float]:
    """Return the real roots of ``a*x^3 + b*x^2 + c*x + d = 0``.

    Uses Kahan's method: one real root is located with a Newton iteration
    started from a bound on the inflection point, then the cubic is deflated to
    a quadratic solved with :func:`solve_quadratic`.
    """

    factor = get_normalization_factor(abs(a), abs(b), abs(c), abs(d))
    if factor:
        a *= factor
        b *= factor
        c *= factor
        d *= factor

    x = 0.0
    b1 = 0.0
    c2 = 0.0
    qd = 0.0
    q = 0.0

    def evaluate(x0: float) -> Tuple[float, float, float, float]:
        tmp = a * x0
        eb1 = tmp + b
        ec2 = eb1 * x0 + c
        eqd = (tmp + eb1) * x0 + ec2
        eq = ec2 * x0 + d
        return eb1, ec2, eqd, eq

    if abs(a) < EPSILON:
        a, b1, c2 = b, c, d
        x = math.inf
    elif abs(d) < EPSILON:
        b1, c2 = b, c
        x = 0.0
    else:
        x = -(b / a) / 3
        b1, c2, qd, q = evaluate(x)
        t = q / a
        r = abs(t) ** (1.0 / 3.0)
        s = -1.0 if t < 0 else 1.0
        td = -qd / a
        rd = 1.324717957244746 * max(r, math.sqrt(td)) if td > 0 else r
        x0 = x - s * rd
        if x0 != x:
            while True:
                x = x0
                b1, c2, qd, q = evaluate(x)
                x0 = x if qd == 0 else x - q / qd / (1 + MACHINE_EPSILON)
                if not s * x0 > s * x:
                    break
            if abs(a) * x * x > abs(d / x):
                c2 = -d / x
                b1 = (c2 - c) / x

    roots = solve_quadratic(a, b1, c2, lower, upper)
    if math.isfinite(x) and x not in roots[:2]:
        if lower is None or upper is None:
            roots.append(x)
        elif lower - EPSILON < x < upper + EPSILON:
            roots.append(clamp(x, lower, upper))
    return roots


__all__ = [
    "CURVETIME_EPSILON",
    "EPSILON",
    "GEOMETRIC_EPSILON",
    "KAPPA",
    "MACHINE_EPSILON",
    "TRIGONOMETRIC_EPSILON",
    "clamp",
    "find_root",
    "get_discriminant",
    "get_normalization_factor",
    "integrate",
    "is_machine_zero",
    "is_zero",
    "solve_cubic",
    "solve_quadratic",
]
