import pytest

from pathkernel import CurveLocation, Path, Point, Segment


def _line_path(*xs):
    return Path.from_points([(x, 0) for x in xs])


def test_end_of_curve_moves_to_start_of_next():
    path = _line_path(0, 10, 20)
    curves = path.curves
    location = CurveLocation(curves[0], 1.0)
    assert location.curve is curves[1]
    assert location.time == 0
    assert location.index == 1
    assert location.point == Point(10, 0)


def test_end_of_open_path_stays_on_last_curve():
    path = _line_path(0, 10, 20)
    location = CurveLocation(path.last_curve, 1.0)
    assert location.index == 1
    assert location.time == 1.0


def test_offsets_and_segment():
    path = _line_path(0, 10, 20)
    location = path.get_location_at(13)
    assert location.offset == pytest.approx(13)
    assert location.curve_offset == pytest.approx(3)
    assert location.segment is path.segments[1]
    assert path.get_location_at(18).segment is path.segments[2]
    assert location.path is path
    assert 'index=1' in repr(location)


def test_derived_measures():
    location = _line_path(0, 10).get_location_at(5)
    assert location.tangent.x == pytest.approx(1)
    assert location.tangent.y == pytest.approx(0, abs=1e-12)
    assert location.normal.y == pytest.approx(-1)
    assert location.curvature == 0
    assert location.weighted_tangent.x == pytest.approx(15)
    assert location.distance is None
    assert not location.has_overlap()


def test_location_survives_structural_edit():
    path = _line_path(0, 10, 20)
    location = path.get_location_at(15)
    assert location.index == 1
    path.insert(1, Segment((5, 0)))
    assert location.index == 2
    assert location.time == pytest.approx(0.5)
    assert location.offset == pytest.approx(15)


def test_divide_moves_location_onto_new_segment():
    path = _line_path(0, 10)
    location = path.get_location_at(4)
    curve = location.divide()
    assert curve is not None
    assert len(path.segments) == 3
    assert location.segment is path.segments[1]
    assert location.index == 1
    assert location.time == 0


def test_split_keeps_location_at_end_of_first_part():
    path = _line_path(0, 10, 20)
    location = path.get_location_at(15)
    rest = location.split()
    assert rest is not None
    assert [tuple(round(c, 9) for c in s.point) for s in rest.segments] == [(15, 0), (20, 0)]
    assert location.path is path
    assert location.point.x == pytest.approx(15)


def test_equals_compares_offsets_on_same_path():
    path = _line_path(0, 10, 20)
    a = path.get_location_at(5)
    b = CurveLocation(path.curves[0], 0.5)
    c = path.get_location_at(6)
    assert a.equals(b)
    assert not a.equals(c)
    assert not a.equals(_line_path(0, 10).get_location_at(5))
    assert not a.equals('location')


def test_equals_wraps_around_closed_path():
    rect = Path.rectangle(0, 0, 10, 10)
    start = CurveLocation(rect.curves[0], 0.0)
    end = CurveLocation(rect.curves[3], 1.0 - 1e-12)
    assert start.equals(end)


def test_insert_keeps_order_and_merges_duplicates():
    path = _line_path(0, 10, 20, 30)
    curves = path.curves
    late = CurveLocation(curves[2], 0.5)
    early = CurveLocation(curves[0], 0.25)
    middle = CurveLocation(curves[1], 0.5)
    locations = []
    for location in (late, early, middle):
        assert CurveLocation.insert(locations, location) is location
    assert locations == [early, middle, late]

    duplicate = CurveLocation(curves[0], 0.25, overlap=True)
    assert CurveLocation.insert(locations, duplicate, merge=True) is early
    assert len(locations) == 3
    assert early.overlap


def test_expand_adds_paired_locations():
    a = _line_path(0, 10)
    b = Path.from_points([(5, -5), (5, 5)])
    locations = a.get_intersections(b)
    assert len(locations) == 1
    expanded = CurveLocation.expand(locations)
    assert len(expanded) == 2
    assert expanded[0] is locations[0]
    assert expanded[1] is locations[0].intersection
    assert expanded[1].path is b


def test_crossing_through_joint():
    horizontal = _line_path(0, 10, 20)
    vertical = Path.from_points([(10, -10), (10, 0), (10, 10)])
    locations = horizontal.get_intersections(vertical)
    assert len(locations) == 1
    assert locations[0].point.x == pytest.approx(10)
    assert locations[0].point.y == pytest.approx(0, abs=1e-9)
    assert locations[0].is_crossing()
    assert len(horizontal.get_crossings(vertical)) == 1


def test_touching_corner_is_not_a_crossing():
    horizontal = _line_path(0, 10, 20)
    corner = Path.from_points([(10, -10), (10, 0), (20, -10)])
    locations = horizontal.get_intersections(corner)
    assert len(locations) == 1
    assert not locations[0].is_crossing()
    assert horizontal.get_crossings(corner) == []
