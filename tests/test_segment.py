import pytest

from pathkernel import Matrix, Path, Point, Segment


def _triangle(closed=False):
    return Path.from_points([(0, 0), (10, 10), (20, 0)], closed=closed)


@pytest.mark.parametrize(
    'value, point, handle_in, handle_out',
    [
        ((1, 2), Point(1, 2), Point(), Point()),
        (Point(3, 4), Point(3, 4), Point(), Point()),
        ({'point': (1, 1), 'handle_out': (2, 0)}, Point(1, 1), Point(), Point(2, 0)),
    ],
)
def test_read(value, point, handle_in, handle_out):
    segment = Segment.read(value)
    assert segment.point == point
    assert segment.handle_in == handle_in
    assert segment.handle_out == handle_out


def test_read_passes_segments_through():
    segment = Segment((1, 1))
    assert Segment.read(segment) is segment


def test_free_segment_has_no_neighbours():
    segment = Segment((1, 1), (-1, 0), (1, 0))
    assert segment.path is None
    assert segment.index is None
    assert segment.curve is None
    assert segment.location is None
    assert segment.next is None
    assert segment.previous is None
    assert not segment.remove()


def test_handles_and_smoothness():
    segment = Segment((0, 0), (-1, 0), (2, 0))
    assert segment.has_handles()
    assert segment.is_smooth()
    assert not Segment((0, 0), (-1, 0), (0, 1)).is_smooth()
    assert not Segment((0, 0), None, (1, 0)).is_smooth()
    segment.clear_handles()
    assert not segment.has_handles()


def test_reverse_and_clone():
    segment = Segment((0, 0), (-1, 0), (2, 0))
    assert segment.reversed().handle_in == Point(2, 0)
    clone = segment.clone()
    assert clone is not segment
    assert clone.point == segment.point
    segment.reverse()
    assert segment.handle_in == Point(2, 0)
    assert segment.handle_out == Point(-1, 0)


def test_navigation_in_open_path():
    path = _triangle()
    first, middle, last = path.segments
    assert first.is_first() and last.is_last()
    assert first.previous is None
    assert last.next is None
    assert middle.next is last and middle.previous is first
    assert first.curve is path.curves[0]
    assert last.curve is path.curves[1]


def test_navigation_in_closed_path_wraps():
    path = _triangle(closed=True)
    first, _, last = path.segments
    assert first.previous is last
    assert last.next is first
    assert last.curve is path.curves[2]


def test_location_of_segment():
    path = _triangle()
    first, middle, last = path.segments
    assert first.location.time == 0
    assert middle.location.index == 1
    location = last.location
    assert location.index == 1
    assert location.point.x == pytest.approx(20)
    assert location.point.y == pytest.approx(0, abs=1e-12)
    assert location.offset == pytest.approx(path.length)


def test_remove_detaches_from_path():
    path = _triangle()
    middle = path.segments[1]
    assert middle.remove()
    assert middle.path is None
    assert [tuple(segment.point) for segment in path.segments] == [(0, 0), (20, 0)]


def test_handle_edit_invalidates_adjacent_curve():
    path = _triangle()
    curve = path.curves[0]
    before = curve.length
    path.segments[0].handle_out = (0, 10)
    assert curve._length is None
    assert curve.length > before


def test_transform_handles_as_vectors():
    segment = Segment((1, 1), (1, 0), (0, 1))
    segment.transform(Matrix.translation(5, 5).rotate(90))
    assert segment.point.x == pytest.approx(4)
    assert segment.point.y == pytest.approx(6)
    assert segment.handle_in.x == pytest.approx(0, abs=1e-12)
    assert segment.handle_in.y == pytest.approx(1)
    assert segment.handle_out.x == pytest.approx(-1)
    assert segment.handle_out.y == pytest.approx(0, abs=1e-12)


def test_catmull_rom_keeps_outer_handles_of_range():
    path = _triangle()
    first, middle, last = path.segments
    middle.smooth('catmull-rom', first=True)
    assert middle.handle_in.is_zero()
    assert middle.handle_out.x == pytest.approx(20 / 6)
    middle.smooth('catmull-rom', last=True)
    assert middle.handle_in.x == pytest.approx(-20 / 6)


def test_geometric_smoothing():
    middle = _triangle().segments[1]
    middle.smooth('geometric', 0.4)
    assert middle.handle_in.x == pytest.approx(-4)
    assert middle.handle_in.y == pytest.approx(0)
    assert middle.handle_out.x == pytest.approx(4)
    assert middle.handle_out.y == pytest.approx(0)


def test_geometric_smoothing_needs_both_neighbours():
    first = _triangle().segments[0]
    first.smooth('geometric')
    assert not first.has_handles()


def test_unknown_smoothing_type():
    with pytest.raises(ValueError):
        _triangle().segments[1].smooth('bogus')
