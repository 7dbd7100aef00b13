"""Unit tests for traversal protocols.

Tests cover:
- Depth-first leaf flattening with and without polygon holes
- has_more()/next() semantics and exhaustion errors
- Read-only views
- Segment enumeration with and without forced loop closing
"""

import pytest

from mapgeom.core.traversal import (
    ConstGeometryIterator,
    GeometryIterator,
    GeometryView,
    Segment,
    SegmentIterator,
)
from mapgeom.domain import (
    GeometryType,
    LineString,
    MultiGeometry,
    Orientation,
    Point,
    PointSet,
    Polygon,
    Ring,
)
from mapgeom.exceptions import ReadOnlyGeometryError, TraversalError


@pytest.fixture
def polygon_with_holes() -> Polygon:
    outer = [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)]
    hole1 = Ring([Point(1, 1), Point(1, 3), Point(3, 3), Point(3, 1)])
    hole2 = Ring([Point(5, 5), Point(5, 7), Point(7, 7), Point(7, 5)])
    return Polygon(outer, [hole1, hole2])


@pytest.fixture
def line() -> LineString:
    return LineString([Point(0, 0), Point(1, 1)])


@pytest.fixture
def multi(line: LineString, polygon_with_holes: Polygon) -> MultiGeometry:
    return MultiGeometry([line, polygon_with_holes])


class TestGeometryIterator:
    """Tests for depth-first leaf traversal."""

    def test_holes_enabled_yields_rings(self, multi, line, polygon_with_holes):
        leaves = list(GeometryIterator(multi, traverse_polygon_holes=True))
        assert len(leaves) == 4
        assert leaves[0] is line
        assert leaves[1] is polygon_with_holes.outer
        assert leaves[2] is polygon_with_holes.holes[0]
        assert leaves[3] is polygon_with_holes.holes[1]

    def test_holes_disabled_yields_polygon_unit(self, multi, line, polygon_with_holes):
        leaves = list(GeometryIterator(multi, traverse_polygon_holes=False))
        assert len(leaves) == 2
        assert leaves[0] is line
        assert leaves[1] is polygon_with_holes

    def test_never_yields_multi(self, multi):
        assert all(leaf.type != GeometryType.MULTI for leaf in GeometryIterator(multi))

    def test_leaf_root(self, line):
        assert list(GeometryIterator(line)) == [line]

    def test_empty_multi(self):
        iterator = GeometryIterator(MultiGeometry())
        assert not iterator.has_more()
        assert list(iterator) == []

    def test_has_more_next(self, multi):
        iterator = GeometryIterator(multi, traverse_polygon_holes=False)
        seen = []
        while iterator.has_more():
            seen.append(iterator.next())
        assert len(seen) == 2
        with pytest.raises(TraversalError):
            iterator.next()

    def test_single_pass(self, multi):
        iterator = GeometryIterator(multi)
        assert len(list(iterator)) == 4
        assert list(iterator) == []

    def test_leaves_are_mutable(self, polygon_with_holes):
        for ring in GeometryIterator(polygon_with_holes):
            ring.rewind(Orientation.CW)
        assert polygon_with_holes.orientation() is Orientation.CW

    def test_wide_collection(self):
        """Traversal depth does not depend on the recursion limit."""
        parts = [PointSet([Point(i, i)]) for i in range(5000)]
        assert sum(1 for _ in GeometryIterator(MultiGeometry(parts))) == 5000


class TestConstGeometryIterator:
    """Tests for read-only traversal."""

    def test_yields_views_in_order(self, multi, line, polygon_with_holes):
        views = list(ConstGeometryIterator(multi))
        assert len(views) == 4
        assert all(isinstance(v, GeometryView) for v in views)
        assert views[0].is_view_of(line)
        assert views[3].is_view_of(polygon_with_holes.holes[1])

    def test_queries_forwarded(self, polygon_with_holes):
        view = next(ConstGeometryIterator(polygon_with_holes, traverse_polygon_holes=False))
        assert view.type == GeometryType.POLYGON
        assert view.total_point_count() == 12
        assert view.contains_2d(2, 2)
        assert view.points == tuple(polygon_with_holes.points)

    def test_mutators_rejected(self, polygon_with_holes):
        view = next(ConstGeometryIterator(polygon_with_holes, traverse_polygon_holes=False))
        with pytest.raises(ReadOnlyGeometryError):
            view.rewind(Orientation.CW)
        with pytest.raises(ReadOnlyGeometryError):
            view.append(Point(0, 0))
        with pytest.raises(ReadOnlyGeometryError):
            view.outer.close()
        with pytest.raises(ReadOnlyGeometryError):
            view.holes = []

    def test_nested_attributes_are_views(self, polygon_with_holes):
        view = GeometryView(polygon_with_holes)
        assert isinstance(view.outer, GeometryView)
        assert isinstance(view.holes, tuple)
        assert all(isinstance(h, GeometryView) for h in view.holes)

    def test_clone_is_mutable_copy(self, polygon_with_holes):
        view = GeometryView(polygon_with_holes)
        copy = view.clone()
        assert isinstance(copy, Polygon)
        copy.append(Point(-1, -1))
        assert len(polygon_with_holes) == 4


class TestSegmentIterator:
    """Tests for consecutive point-pair enumeration."""

    def test_line_segments(self):
        line = LineString([Point(0, 0), Point(1, 0), Point(1, 1)])
        segments = list(SegmentIterator(line, force_closed_loop=False))
        assert segments == [
            Segment(Point(0, 0), Point(1, 0)),
            Segment(Point(1, 0), Point(1, 1)),
        ]

    def test_forced_closed_loop(self):
        line = LineString([Point(0, 0), Point(1, 0), Point(1, 1)])
        segments = list(SegmentIterator(line, force_closed_loop=True))
        assert len(segments) == 3
        assert segments[-1] == Segment(Point(1, 1), Point(0, 0))

    def test_ring_closes_automatically(self):
        ring = Ring([Point(0, 0), Point(1, 0), Point(1, 1)])
        assert len(list(SegmentIterator(ring))) == 3

    def test_physically_closed_ring_no_extra_pair(self):
        ring = Ring([Point(0, 0), Point(1, 0), Point(1, 1)])
        ring.close()
        segments = list(SegmentIterator(ring))
        assert len(segments) == 3
        assert segments[-1].length() == pytest.approx(2 ** 0.5)

    def test_short_sequences(self):
        assert list(SegmentIterator(LineString([Point(0, 0)]), force_closed_loop=True)) == []
        assert list(SegmentIterator(MultiGeometry([LineString([Point(0, 0), Point(1, 0)])]))) == []

    def test_has_more_next(self):
        iterator = SegmentIterator(LineString([Point(0, 0), Point(2, 0)]))
        assert iterator.has_more()
        assert iterator.next().length() == pytest.approx(2.0)
        assert not iterator.has_more()
        with pytest.raises(TraversalError):
            iterator.next()

    def test_accepts_views(self):
        view = GeometryView(Ring([Point(0, 0), Point(1, 0), Point(1, 1)]))
        assert len(list(SegmentIterator(view))) == 3
