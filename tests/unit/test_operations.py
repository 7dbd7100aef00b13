"""Unit tests for the spatial operation facade.

These tests inject a recording fake engine, so they exercise validation,
result interpretation and statistics without depending on shapely output.
"""

import math

import pytest

from mapgeom.config import BufferParameters, EngineBackend, EngineConfig, MapGeomSettings
from mapgeom.core import (
    EngineOperation,
    GeometryEngine,
    IntersectionResult,
    OperationResult,
    SpatialOperations,
    UnavailableEngine,
    bounds_to_polygon,
    create_engine,
)
from mapgeom.core.engine import ShapelyEngine
from mapgeom.domain import (
    Bounds,
    LineString,
    MultiGeometry,
    Orientation,
    Point,
    PointSet,
    Polygon,
    Ring,
)
from mapgeom.exceptions import EngineError, EngineUnavailableError


class FakeEngine(GeometryEngine):
    """Engine that records calls and returns a canned result."""

    name = "fake"

    def __init__(self, result=None, error: EngineError | None = None) -> None:
        self.result = result
        self.error = error
        self.calls: list[tuple] = []

    def execute(self, operation, subject, other=None, *, distance=0.0, params=None):
        self.calls.append((operation, subject, other, distance, params))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def square() -> Polygon:
    return Polygon([Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1)])


@pytest.fixture
def result_polygon() -> Polygon:
    return Polygon([Point(0, 0), Point(2, 0), Point(2, 2), Point(0, 2)])


class TestOperationResult:
    """Tests for result truthiness."""

    def test_success_truthy(self, square):
        result = OperationResult.success(square)
        assert result
        assert result.geometry is square
        assert result.reason is None

    def test_failure_falsy(self):
        result = OperationResult.failure("empty result")
        assert not result
        assert result.geometry is None
        assert result.reason == "empty result"

    def test_intersection_truthiness(self):
        assert IntersectionResult.INTERSECTS
        assert not IntersectionResult.DISJOINT
        assert not IntersectionResult.UNAVAILABLE
        assert not IntersectionResult.INVALID


class TestEngineSelection:
    """Tests for engine construction from configuration."""

    def test_default_is_shapely(self):
        assert isinstance(create_engine(), ShapelyEngine)
        assert SpatialOperations().is_available()

    def test_none_backend(self):
        engine = create_engine(EngineConfig(backend=EngineBackend.NONE))
        assert isinstance(engine, UnavailableEngine)
        assert not engine.available

    def test_unavailable_engine_raises(self, square):
        with pytest.raises(EngineUnavailableError):
            UnavailableEngine().execute(EngineOperation.BUFFER, square)

    def test_settings_select_engine(self):
        settings = MapGeomSettings(engine=EngineConfig(backend=EngineBackend.NONE))
        assert not SpatialOperations(settings=settings).is_available()


class TestUnavailableEngine:
    """Every operation fails cleanly without an engine."""

    @pytest.fixture
    def ops(self) -> SpatialOperations:
        return SpatialOperations(engine=UnavailableEngine())

    def test_buffer_fails(self, ops, square):
        result = ops.buffer(square, 1.0)
        assert not result
        assert result.reason == "engine unavailable"

    def test_all_operations_fail(self, ops, square):
        other = square.clone()
        assert not ops.crop(square, other)
        assert not ops.geounion(square, other)
        assert not ops.difference(square, other)
        assert ops.intersects(square, other) is IntersectionResult.UNAVAILABLE

    def test_failures_recorded(self, ops, square):
        ops.buffer(square, 1.0)
        ops.intersects(square, square)
        assert ops.stats.failed_count == 2
        assert ops.stats.succeeded_count == 0


class TestValidation:
    """Tests for operand validation before delegation."""

    def test_valid_polygon(self, square):
        assert SpatialOperations(engine=FakeEngine()).validate(square) is None

    def test_too_few_points(self):
        ops = SpatialOperations(engine=FakeEngine())
        reason = ops.validate(LineString([Point(0, 0)]))
        assert reason is not None
        assert "linestring" in reason

    def test_non_finite(self):
        ops = SpatialOperations(engine=FakeEngine())
        line = LineString([Point(0, 0), Point(math.nan, 1)])
        assert ops.validate(line) == "geometry has non-finite coordinates"

    def test_degenerate_ring(self):
        ops = SpatialOperations(engine=FakeEngine())
        ring = Ring([Point(0, 0), Point(1, 0), Point(2, 0)])
        assert ops.validate(ring) == "degenerate ring"

    def test_degenerate_hole(self, square):
        ops = SpatialOperations(engine=FakeEngine())
        square.add_hole(Ring([Point(0.1, 0.1), Point(0.2, 0.2), Point(0.3, 0.3)]))
        assert ops.validate(square) == "degenerate ring"

    def test_empty_multi(self):
        ops = SpatialOperations(engine=FakeEngine())
        assert ops.validate(MultiGeometry()) is not None

    def test_invalid_input_not_delegated(self):
        engine = FakeEngine(result=PointSet([Point(0, 0)]))
        ops = SpatialOperations(engine=engine)
        result = ops.buffer(LineString([Point(0, 0)]), 1.0)
        assert not result
        assert engine.calls == []

    def test_invalid_second_operand(self, square):
        engine = FakeEngine()
        ops = SpatialOperations(engine=engine)
        bad = Polygon([Point(0, 0), Point(1, 1)])
        assert not ops.geounion(square, bad)
        assert ops.intersects(square, bad) is IntersectionResult.INVALID
        assert engine.calls == []


class TestDelegation:
    """Tests for how operations reach the engine."""

    def test_buffer_passes_distance_and_params(self, square, result_polygon):
        engine = FakeEngine(result=result_polygon)
        ops = SpatialOperations(engine=engine)
        params = BufferParameters(corner_segs=4)

        result = ops.buffer(square, 0.5, params)

        assert result
        assert result.geometry is result_polygon
        operation, subject, other, distance, passed = engine.calls[0]
        assert operation is EngineOperation.BUFFER
        assert subject is square
        assert other is None
        assert distance == 0.5
        assert passed is params

    def test_buffer_uses_default_params(self, square, result_polygon):
        settings = MapGeomSettings(buffer=BufferParameters(mitre_limit=2.0))
        engine = FakeEngine(result=result_polygon)
        SpatialOperations(engine=engine, settings=settings).buffer(square, 1.0)
        assert engine.calls[0][4].mitre_limit == 2.0

    def test_operands_not_mutated(self, square, result_polygon):
        snapshot = square.clone()
        ops = SpatialOperations(engine=FakeEngine(result=result_polygon))
        ops.buffer(square, 1.0)
        ops.geounion(square, result_polygon)
        assert square == snapshot

    def test_union(self, square, result_polygon):
        engine = FakeEngine(result=result_polygon)
        result = SpatialOperations(engine=engine).geounion(square, result_polygon)
        assert result
        assert engine.calls[0][0] is EngineOperation.UNION
        assert engine.calls[0][2] is result_polygon

    def test_difference_requires_areal(self, square):
        engine = FakeEngine()
        line = LineString([Point(0, 0), Point(1, 1)])
        result = SpatialOperations(engine=engine).difference(square, line)
        assert not result
        assert result.reason == "difference operand must be areal"
        assert engine.calls == []

    def test_empty_result_is_failure(self, square):
        result = SpatialOperations(engine=FakeEngine(result=None)).buffer(square, -10.0)
        assert not result
        assert result.reason == "empty result"

    def test_engine_error_is_failure(self, square):
        engine = FakeEngine(error=EngineError("buffer", "topology exception"))
        result = SpatialOperations(engine=engine).buffer(square, 1.0)
        assert not result
        assert result.reason == "topology exception"

    def test_non_geometry_result_is_failure(self, square):
        result = SpatialOperations(engine=FakeEngine(result=True)).buffer(square, 1.0)
        assert not result


class TestCrop:
    """Tests for crop regions."""

    def test_crop_by_bounds_builds_rectangle(self, square, result_polygon):
        engine = FakeEngine(result=result_polygon)
        result = SpatialOperations(engine=engine).crop(square, Bounds.from_2d(0, 0, 0.5, 0.5))
        assert result
        region = engine.calls[0][2]
        assert isinstance(region, Polygon)
        assert region.points == [
            Point(0, 0), Point(0.5, 0), Point(0.5, 0.5), Point(0, 0.5),
        ]

    def test_empty_bounds(self, square):
        engine = FakeEngine()
        result = SpatialOperations(engine=engine).crop(square, Bounds())
        assert not result
        assert result.reason == "empty crop bounds"
        assert engine.calls == []

    def test_non_areal_region(self, square):
        line = LineString([Point(0, 0), Point(1, 1)])
        result = SpatialOperations(engine=FakeEngine()).crop(square, line)
        assert not result
        assert result.reason == "crop region must be areal"

    def test_multi_polygon_region(self, square, result_polygon):
        engine = FakeEngine(result=result_polygon)
        region = MultiGeometry([square.clone()])
        assert SpatialOperations(engine=engine).crop(square, region)

    def test_bounds_to_polygon_ccw(self):
        polygon = bounds_to_polygon(Bounds.from_2d(-1, -1, 1, 1))
        assert polygon.orientation() is Orientation.CCW
        assert polygon.signed_area_2d() == pytest.approx(4.0)


class TestIntersects:
    """Tests for the three-valued intersection test."""

    def test_intersects(self, square):
        ops = SpatialOperations(engine=FakeEngine(result=True))
        assert ops.intersects(square, square) is IntersectionResult.INTERSECTS

    def test_disjoint(self, square):
        ops = SpatialOperations(engine=FakeEngine(result=False))
        result = ops.intersects(square, square)
        assert result is IntersectionResult.DISJOINT
        assert not result

    def test_engine_error(self, square):
        ops = SpatialOperations(engine=FakeEngine(error=EngineError("intersects", "bad")))
        assert ops.intersects(square, square) is IntersectionResult.INVALID


class TestStatistics:
    """Tests for per-facade operation statistics."""

    def test_counts(self, square, result_polygon):
        ops = SpatialOperations(engine=FakeEngine(result=result_polygon))
        ops.buffer(square, 1.0)
        ops.geounion(square, result_polygon)
        ops.buffer(LineString(), 1.0)

        stats = ops.stats
        assert stats.succeeded_count == 2
        assert stats.failed_count == 1
        assert stats.total_count == 3
        assert stats.by_operation["buffer"] == 2
        assert stats.by_operation["union"] == 1
        assert stats.failures[0][0] == "buffer"
        assert stats.avg_duration_ms >= 0.0
