"""Boolean/offset geometry engines.

The spatial operation facade never computes clipping or offsetting itself.
It delegates to a GeometryEngine through one dispatch method, so tests can
inject a fake engine and builds without an engine can report that cleanly.

Key classes:
- EngineOperation: Operation selector
- GeometryEngine: Abstract engine interface
- ShapelyEngine: Engine backed by shapely/GEOS
- UnavailableEngine: Placeholder for configurations without an engine
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import ClassVar

from shapely.errors import ShapelyError
from shapely.geometry.base import BaseGeometry

from mapgeom.config import BufferParameters, CapStyle, EngineBackend, EngineConfig
from mapgeom.domain import Geometry
from mapgeom.exceptions import EngineError, EngineUnavailableError
from mapgeom.io.converter import domain_to_shapely, shapely_to_domain


class EngineOperation(str, Enum):
    """Operation selector for GeometryEngine.execute()."""

    BUFFER = "buffer"
    CROP = "crop"
    UNION = "union"
    DIFFERENCE = "difference"
    INTERSECTS = "intersects"


class GeometryEngine(ABC):
    """Interface to a planar boolean/offset engine.

    Implementations receive validated domain geometries, never mutate them,
    and return freshly allocated results.
    """

    name: ClassVar[str] = "abstract"

    @property
    def available(self) -> bool:
        """Whether this engine can perform operations."""
        return True

    @abstractmethod
    def execute(
        self,
        operation: EngineOperation,
        subject: Geometry,
        other: Geometry | None = None,
        *,
        distance: float = 0.0,
        params: BufferParameters | None = None,
    ) -> Geometry | bool | None:
        """Run one operation.

        Args:
            operation: Operation to perform
            subject: First operand
            other: Second operand (crop region, union/difference operand,
                intersects operand); None for buffer
            distance: Buffer distance (buffer only)
            params: Buffer options (buffer only)

        Returns:
            A new geometry (None when the result is empty) for geometric
            operations; a bool for INTERSECTS

        Raises:
            EngineError: If the engine cannot compute the result
        """


class ShapelyEngine(GeometryEngine):
    """Engine backed by shapely.

    Result polygons are wound with CCW boundaries and CW holes, and every
    ring is returned in open form.
    """

    name: ClassVar[str] = "shapely"

    def execute(
        self,
        operation: EngineOperation,
        subject: Geometry,
        other: Geometry | None = None,
        *,
        distance: float = 0.0,
        params: BufferParameters | None = None,
    ) -> Geometry | bool | None:
        try:
            a = domain_to_shapely(subject)
            b = domain_to_shapely(other) if other is not None else None

            if operation == EngineOperation.BUFFER:
                result = self._buffer(a, distance, params or BufferParameters())
            else:
                if b is None:
                    raise ValueError("operation requires a second geometry")
                if operation == EngineOperation.INTERSECTS:
                    return bool(a.intersects(b))
                if operation == EngineOperation.CROP:
                    result = a.intersection(b)
                elif operation == EngineOperation.UNION:
                    result = a.union(b)
                elif operation == EngineOperation.DIFFERENCE:
                    result = a.difference(b)
                else:
                    raise ValueError(f"unsupported operation {operation!r}")
        except (ShapelyError, ValueError, TypeError) as e:
            raise EngineError(operation.value, str(e)) from e

        return shapely_to_domain(result, normalize_orientation=True)

    @staticmethod
    def _buffer(geom: BaseGeometry, distance: float, params: BufferParameters) -> BaseGeometry:
        kwargs: dict[str, object] = {
            "join_style": params.join_style.value,
            "mitre_limit": params.mitre_limit,
            "single_sided": params.single_sided,
        }
        if params.cap_style != CapStyle.DEFAULT:
            kwargs["cap_style"] = params.cap_style.value
        if params.corner_segs > 0:
            kwargs["quad_segs"] = params.corner_segs

        # shapely offsets single-sided buffers to the left for positive
        # distances and to the right for negative ones.
        if params.single_sided and not params.left_side:
            distance = -distance

        return geom.buffer(distance, **kwargs)


class UnavailableEngine(GeometryEngine):
    """Stand-in for a configuration with no boolean/offset engine."""

    name: ClassVar[str] = "none"

    @property
    def available(self) -> bool:
        return False

    def execute(
        self,
        operation: EngineOperation,
        subject: Geometry,
        other: Geometry | None = None,
        *,
        distance: float = 0.0,
        params: BufferParameters | None = None,
    ) -> Geometry | bool | None:
        raise EngineUnavailableError(operation.value)


def create_engine(config: EngineConfig | None = None) -> GeometryEngine:
    """Build the engine selected by configuration.

    Args:
        config: Engine configuration (defaults to shapely)

    Returns:
        Engine instance
    """
    config = config or EngineConfig()
    if config.backend == EngineBackend.NONE:
        return UnavailableEngine()
    return ShapelyEngine()
