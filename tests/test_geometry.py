import math

import pytest

from pathkernel import Line, Matrix, Point, Rectangle


def _assert_point(actual, expected, abs_tol=1e-9):
    assert actual.x == pytest.approx(expected[0], abs=abs_tol)
    assert actual.y == pytest.approx(expected[1], abs=abs_tol)


@pytest.mark.parametrize(
    'value, expected',
    [
        (None, Point(0.0, 0.0)),
        ((1, 2), Point(1.0, 2.0)),
        ([3.5, -1], Point(3.5, -1.0)),
        ({'x': 4, 'y': 5}, Point(4.0, 5.0)),
        (Point(7, 8), Point(7, 8)),
    ],
)
def test_point_read(value, expected):
    assert Point.read(value) == expected


@pytest.mark.parametrize('value', ['ab', {'x': 1}, (1, 2, 3)])
def test_point_read_rejects_garbage(value):
    with pytest.raises(ValueError):
        Point.read(value)


def test_point_arithmetic():
    p = Point(1, 2)
    assert p + (1, 1) == Point(2, 3)
    assert p - Point(1, 2) == Point(0, 0)
    assert p * 2 == Point(2, 4)
    assert 2 * p == Point(2, 4)
    assert p / 2 == Point(0.5, 1.0)
    assert -p == Point(-1, -2)
    assert tuple(p) == (1, 2)


def test_point_measures():
    v = Point(3, 4)
    assert v.length == 5
    assert v.dot((1, 0)) == 3
    assert v.cross((1, 0)) == -4
    assert v.get_distance((0, 0)) == 5
    assert v.get_distance((0, 0), squared=True) == 25
    assert Point(0, 1).angle == pytest.approx(90.0)
    assert Point(1, 0).get_directed_angle((0, 1)) == pytest.approx(90.0)
    assert Point(1, 0).get_directed_angle((0, -1)) == pytest.approx(-90.0)
    assert Point(1, 0).get_angle_between((-1, 0)) == pytest.approx(180.0)
    assert math.isnan(Point().get_angle_between((1, 0)))


def test_point_normalize_and_rotate():
    _assert_point(Point(3, 4).normalize(), (0.6, 0.8))
    _assert_point(Point(3, 4).normalize(10), (6, 8))
    assert Point().normalize() == Point()
    _assert_point(Point(1, 0).rotate(90), (0, 1))
    _assert_point(Point(2, 1).rotate(180, center=(1, 1)), (0, 1))
    _assert_point(Point.from_polar(2, 90), (0, 2))


def test_point_predicates():
    assert Point(1e-13, -1e-13).is_zero()
    assert Point(math.nan, 0).is_nan()
    assert not Point(math.inf, 0).is_finite()
    assert Point(1, 0).is_close((1, 1e-8), 1e-7)
    assert Point(2, 0).is_collinear((-4, 0))
    assert Point(2, 0).is_orthogonal((0, 3))
    assert Point(1, 2).equals((1, 2))
    assert not Point(1, 2).equals('nope')


def test_rectangle_edges_and_predicates():
    rect = Rectangle(0, 0, 10, 5)
    assert (rect.left, rect.top, rect.right, rect.bottom) == (0, 0, 10, 5)
    assert rect.center == Point(5, 2.5)
    assert rect.contains((10, 5))
    assert not rect.contains((10.1, 5))
    assert Rectangle(0, 0, 0, 5).is_empty()
    assert Rectangle.from_points((4, 3), (1, 1)) == Rectangle(1, 1, 3, 2)


def test_rectangle_intersects_is_strict_unless_padded():
    a = Rectangle(0, 0, 10, 10)
    assert a.intersects(Rectangle(5, 5, 10, 10))
    touching = Rectangle(10, 0, 5, 5)
    assert not a.intersects(touching)
    assert a.intersects(touching, epsilon=1e-9)


def test_rectangle_unite_include_expand():
    a = Rectangle(0, 0, 1, 1)
    assert a.unite(Rectangle(2, 3, 1, 1)) == Rectangle(0, 0, 3, 4)
    assert a.include((-1, 2)) == Rectangle(-1, 0, 2, 2)
    assert a.expand(2) == Rectangle(-1, -1, 3, 3)
    assert a.with_center((5, 5)) == Rectangle(4.5, 4.5, 1, 1)


def test_line_intersections():
    horizontal = Line((0, 0), (10, 0))
    vertical = Line((5, -5), (5, 5))
    _assert_point(horizontal.intersect(vertical), (5, 0))
    assert horizontal.intersect(Line((0, 1), (10, 1))) is None
    short = Line((20, -5), (20, 5))
    assert horizontal.intersect(short) is None
    _assert_point(horizontal.intersect(short, is_infinite=True), (20, 0))


def test_line_side_and_distance():
    line = Line((0, 0), (10, 0))
    assert line.get_side((5, 5)) == -1
    assert line.get_side((5, -5)) == 1
    assert line.get_side((5, 0)) == 0
    assert line.get_side((20, 0)) == 1
    assert line.get_distance((5, 5)) == 5
    assert Line((0, 0), (10, 10)).get_distance((10, 0)) == pytest.approx(math.sqrt(50))
    assert line.is_collinear(Line((3, 3), (1, 3)))
    assert line.is_orthogonal(Line((0, 0), (0, 1)))


def test_matrix_transforms():
    assert Matrix().is_identity()
    _assert_point(Matrix.translation(10, 20).transform_point((1, 2)), (11, 22))
    _assert_point(Matrix.rotation(90).transform_point((1, 0)), (0, 1))
    _assert_point(Matrix.scaling(2, center=(1, 1)).transform_point((2, 2)), (3, 3))
    _assert_point(Matrix.translation(5, 5).transform_vector((1, 0)), (1, 0))


def test_matrix_append_applies_argument_first():
    combined = Matrix.translation(10, 0).append(Matrix.scaling(2))
    _assert_point(combined.transform_point((1, 1)), (12, 2))
    prepended = Matrix.translation(10, 0).prepend(Matrix.scaling(2))
    _assert_point(prepended.transform_point((1, 1)), (22, 2))


def test_matrix_inverse_round_trip():
    matrix = Matrix.translation(3, -4).rotate(30).scale(2, 0.5)
    inverse = matrix.inverted()
    assert inverse is not None
    _assert_point(inverse.transform_point(matrix.transform_point((7, 9))), (7, 9))
    assert Matrix.scaling(0).inverted() is None


def test_matrix_transform_coordinates_and_equality():
    assert Matrix.translation(1, 1).transform_coordinates([1, 2, 3, 4]) == [2, 3, 4, 5]
    assert Matrix.translation(1, 2) == Matrix(1, 0, 0, 1, 1, 2)
    assert Matrix.translation(1, 2) != Matrix()
