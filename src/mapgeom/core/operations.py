"""Spatial operation facade.

This module provides SpatialOperations, which wraps a GeometryEngine with
input validation, result interpretation and logging. Every operation follows
the same path:

1. Check that an engine is available
2. Validate operands (point counts, finite coordinates, non-degenerate rings)
3. Delegate to the engine
4. Report success with a new geometry, or failure with a reason

Operands are never mutated, so several threads may run operations against
the same shared input at once.
"""

import time
from dataclasses import dataclass
from enum import Enum

from mapgeom.config import BufferParameters, MapGeomSettings, get_default_settings
from mapgeom.core.engine import EngineOperation, GeometryEngine, create_engine
from mapgeom.core.traversal import GeometryIterator
from mapgeom.domain import (
    Bounds,
    Geometry,
    GeometryType,
    MultiGeometry,
    Orientation,
    Point,
    Polygon,
    Ring,
)
from mapgeom.domain.algorithms import is_finite_point
from mapgeom.exceptions import EngineError
from mapgeom.utils import OperationLogger, OperationStats

_AREAL_TYPES = (GeometryType.RING, GeometryType.POLYGON)


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a geometric spatial operation.

    Truthy exactly when the operation succeeded; ``geometry`` is only set on
    success and ``reason`` only on failure.

    Attributes:
        ok: Whether the operation produced a geometry
        geometry: New, independently owned output geometry
        reason: Why the operation failed
    """

    ok: bool
    geometry: Geometry | None = None
    reason: str | None = None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls, geometry: Geometry) -> "OperationResult":
        return cls(ok=True, geometry=geometry)

    @classmethod
    def failure(cls, reason: str) -> "OperationResult":
        return cls(ok=False, reason=reason)


class IntersectionResult(Enum):
    """Outcome of an intersection test.

    Keeps "no engine" and "bad input" apart from a genuine "no intersection".
    Only INTERSECTS is truthy.
    """

    INTERSECTS = "intersects"
    DISJOINT = "disjoint"
    UNAVAILABLE = "unavailable"
    INVALID = "invalid"

    def __bool__(self) -> bool:
        return self is IntersectionResult.INTERSECTS


def bounds_to_polygon(bounds: Bounds) -> Polygon:
    """Build a CCW rectangle polygon in the z=0 plane from a bounding box."""
    return Polygon(
        [
            Point(bounds.min_x, bounds.min_y),
            Point(bounds.max_x, bounds.min_y),
            Point(bounds.max_x, bounds.max_y),
            Point(bounds.min_x, bounds.max_y),
        ]
    )


def _is_areal(geometry: Geometry) -> bool:
    if isinstance(geometry, MultiGeometry):
        return bool(geometry.parts) and all(part.type in _AREAL_TYPES for part in geometry.parts)
    return geometry.type in _AREAL_TYPES


class SpatialOperations:
    """Buffer, crop, union, difference and intersects over domain geometries.

    Example:
        ops = SpatialOperations()
        result = ops.buffer(polygon, 10.0)
        if result:
            grown = result.geometry
    """

    def __init__(
        self,
        engine: GeometryEngine | None = None,
        settings: MapGeomSettings | None = None,
        logger: OperationLogger | None = None,
    ) -> None:
        """Initialize the facade.

        Args:
            engine: Engine to delegate to (default: built from settings)
            settings: Application settings (default: get_default_settings())
            logger: Operation logger (default: a new OperationLogger)
        """
        self._settings = settings or get_default_settings()
        self._engine = engine if engine is not None else create_engine(self._settings.engine)
        self._logger = logger or OperationLogger()

    @property
    def engine(self) -> GeometryEngine:
        return self._engine

    @property
    def stats(self) -> OperationStats:
        """Statistics of operations run through this facade."""
        return self._logger.stats

    def is_available(self) -> bool:
        """Whether an engine is available to run operations."""
        return self._engine.available

    def validate(self, geometry: Geometry) -> str | None:
        """Check that a geometry can be handed to the engine.

        Args:
            geometry: Operand to check

        Returns:
            None if the geometry is usable, otherwise the reason it is not
        """
        if not geometry.is_valid():
            return f"invalid {geometry.type.value} geometry"

        if not all(is_finite_point(p) for p in geometry.iter_points()):
            return "geometry has non-finite coordinates"

        epsilon = self._settings.geometry.orientation_epsilon
        for leaf in GeometryIterator(geometry):
            if isinstance(leaf, Ring) and leaf.orientation(epsilon) is Orientation.DEGENERATE:
                return "degenerate ring"

        return None

    def buffer(
        self,
        geometry: Geometry,
        distance: float,
        params: BufferParameters | None = None,
    ) -> OperationResult:
        """Grow (distance > 0) or shrink (distance < 0) a geometry.

        Args:
            geometry: Input geometry
            distance: Offset distance
            params: Cap/join/side options (default: settings.buffer)

        Returns:
            OperationResult with the buffered geometry
        """
        return self._run(
            EngineOperation.BUFFER,
            geometry,
            distance=distance,
            params=params or self._settings.buffer,
        )

    def crop(self, geometry: Geometry, region: Polygon | Ring | Bounds) -> OperationResult:
        """Keep the part of a geometry inside a clipping region.

        Args:
            geometry: Input geometry
            region: Clipping polygon or bounding box

        Returns:
            OperationResult with the cropped geometry
        """
        if isinstance(region, Bounds):
            if not region.is_valid():
                return self._fail(EngineOperation.CROP, geometry, "empty crop bounds")
            region = bounds_to_polygon(region)
        if not _is_areal(region):
            return self._fail(EngineOperation.CROP, geometry, "crop region must be areal")
        return self._run(EngineOperation.CROP, geometry, region)

    def geounion(self, geometry: Geometry, other: Geometry) -> OperationResult:
        """Areal/linear union of two geometries."""
        return self._run(EngineOperation.UNION, geometry, other)

    def difference(self, geometry: Geometry, polygon: Polygon | Ring) -> OperationResult:
        """Subtract a polygon from a geometry."""
        if not _is_areal(polygon):
            return self._fail(
                EngineOperation.DIFFERENCE, geometry, "difference operand must be areal"
            )
        return self._run(EngineOperation.DIFFERENCE, geometry, polygon)

    def intersects(self, geometry: Geometry, other: Geometry) -> IntersectionResult:
        """Test whether two geometries share any point.

        Returns:
            INTERSECTS or DISJOINT; UNAVAILABLE when there is no engine and
            INVALID when an operand fails validation or the engine errors
        """
        operation = EngineOperation.INTERSECTS.value
        input_type = geometry.type.value

        if not self.is_available():
            self._logger.log_operation_failed(operation, input_type, "engine unavailable")
            return IntersectionResult.UNAVAILABLE

        for operand in (geometry, other):
            reason = self.validate(operand)
            if reason is not None:
                self._logger.log_operation_failed(operation, input_type, reason)
                return IntersectionResult.INVALID

        start = time.perf_counter()
        try:
            hit = self._engine.execute(EngineOperation.INTERSECTS, geometry, other)
        except EngineError as e:
            self._logger.log_operation_failed(
                operation, input_type, e.reason, _elapsed_ms(start)
            )
            return IntersectionResult.INVALID

        result = IntersectionResult.INTERSECTS if hit else IntersectionResult.DISJOINT
        self._logger.log_operation_complete(
            operation, input_type, result.value, _elapsed_ms(start)
        )
        return result

    def _run(
        self,
        operation: EngineOperation,
        geometry: Geometry,
        other: Geometry | None = None,
        *,
        distance: float = 0.0,
        params: BufferParameters | None = None,
    ) -> OperationResult:
        if not self.is_available():
            return self._fail(operation, geometry, "engine unavailable")

        for operand in (geometry, other):
            if operand is None:
                continue
            reason = self.validate(operand)
            if reason is not None:
                return self._fail(operation, geometry, reason)

        input_type = geometry.type.value
        self._logger.log_operation_start(operation.value, input_type)
        start = time.perf_counter()

        try:
            output = self._engine.execute(
                operation, geometry, other, distance=distance, params=params
            )
        except EngineError as e:
            return self._fail(operation, geometry, e.reason, _elapsed_ms(start))

        if output is None:
            return self._fail(operation, geometry, "empty result", _elapsed_ms(start))
        if not isinstance(output, Geometry):
            return self._fail(
                operation, geometry, "engine returned a non-geometry result", _elapsed_ms(start)
            )

        self._logger.log_operation_complete(
            operation.value, input_type, output.type.value, _elapsed_ms(start)
        )
        return OperationResult.success(output)

    def _fail(
        self,
        operation: EngineOperation,
        geometry: Geometry,
        reason: str,
        duration_ms: float = 0.0,
    ) -> OperationResult:
        self._logger.log_operation_failed(
            operation.value, geometry.type.value, reason, duration_ms
        )
        return OperationResult.failure(reason)


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000
