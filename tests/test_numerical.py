import math

import pytest

from pathkernel import numerical


def _sorted_roots(roots):
    return sorted(roots)


@pytest.mark.parametrize(
    'coefficients, expected',
    [
        ((1.0, -3.0, 2.0), [1.0, 2.0]),
        ((0.0, 2.0, -4.0), [2.0]),
        ((1.0, 0.0, 1.0), []),
        ((2.0, -4.0, 2.0), [1.0]),
    ],
)
def test_solve_quadratic(coefficients, expected):
    roots = _sorted_roots(numerical.solve_quadratic(*coefficients))
    assert roots == pytest.approx(expected, abs=1e-9)


def test_solve_quadratic_degenerate_equations_have_no_roots():
    assert numerical.solve_quadratic(0.0, 0.0, 1.0) == []
    assert numerical.solve_quadratic(0.0, 0.0, 0.0) == []


def test_solve_quadratic_bounds_filter_and_clamp():
    assert numerical.solve_quadratic(1.0, -3.0, 2.0, 0.0, 1.5) == pytest.approx([1.0])
    roots = numerical.solve_quadratic(1.0, -3.0, 2.0 + 1e-13, 0.0, 1.0)
    assert roots and all(0.0 <= root <= 1.0 for root in roots)


def test_solve_cubic_three_real_roots():
    # (x - 1)(x - 2)(x - 3)
    roots = _sorted_roots(numerical.solve_cubic(1.0, -6.0, 11.0, -6.0))
    assert roots == pytest.approx([1.0, 2.0, 3.0], abs=1e-9)

    bounded = _sorted_roots(numerical.solve_cubic(1.0, -6.0, 11.0, -6.0, 0.0, 2.5))
    assert bounded == pytest.approx([1.0, 2.0], abs=1e-9)


def test_solve_cubic_degenerate_leading_coefficient():
    roots = _sorted_roots(numerical.solve_cubic(0.0, 1.0, -3.0, 2.0))
    assert roots == pytest.approx([1.0, 2.0], abs=1e-12)


def test_solve_cubic_zero_constant_term_reports_double_root_once():
    # x^3 - x^2 = x^2 (x - 1)
    roots = _sorted_roots(numerical.solve_cubic(1.0, -1.0, 0.0, 0.0))
    assert roots == pytest.approx([0.0, 1.0], abs=1e-12)


def test_get_discriminant_matches_plain_formula():
    assert numerical.get_discriminant(1.0, 2.0, 3.0) == pytest.approx(1.0)
    assert numerical.get_discriminant(1.0, 1.0, 1.0) == 0.0


def test_normalization_factor_is_power_of_two():
    factor = numerical.get_normalization_factor(1e10)
    assert factor == 2.0 ** -33
    assert 0.5 <= factor * 1e10 <= 2.0
    assert numerical.get_normalization_factor(1.0) == 0.0


def test_integrate_is_exact_for_low_degree_polynomials():
    assert numerical.integrate(lambda x: x * x, 0.0, 1.0, 4) == pytest.approx(1.0 / 3.0, abs=1e-14)
    assert numerical.integrate(math.sin, 0.0, math.pi, 16) == pytest.approx(2.0, abs=1e-12)


@pytest.mark.parametrize('order', [0, 1, 17])
def test_integrate_rejects_unsupported_orders(order):
    with pytest.raises(ValueError):
        numerical.integrate(lambda x: x, 0.0, 1.0, order)


def test_find_root_converges_inside_bracket():
    root = numerical.find_root(lambda x: x * x - 2.0, lambda x: 2.0 * x, 1.0, 0.0, 2.0, 32, 1e-12)
    assert root == pytest.approx(math.sqrt(2.0), abs=1e-10)


def test_find_root_is_clamped_to_bracket():
    root = numerical.find_root(lambda x: x + 5.0, lambda x: 1.0, 0.5, 0.0, 1.0, 32, 1e-12)
    assert 0.0 <= root <= 1.0


def test_epsilon_helpers():
    assert numerical.is_zero(1e-13)
    assert not numerical.is_zero(1e-11)
    assert numerical.is_machine_zero(1e-17)
    assert numerical.clamp(-1.0, 0.0, 1.0) == 0.0
    assert numerical.clamp(2.0, 0.0, 1.0) == 1.0
    assert numerical.KAPPA == pytest.approx(0.5522847498, abs=1e-10)
