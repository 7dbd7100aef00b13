"""Core algorithms for mapgeom.

This module contains the algorithms that operate on the domain models:

- Orientation and topology (signed area, winding, point-in-ring, cleanup)
- Traversal (leaf flattening, segment enumeration)
- Spatial operations (buffer, crop, union, difference, intersects)

Key functions:
- signed_area_2d: Calculate loop area using the shoelace formula
- classify_orientation: Map signed area to CCW / CW / DEGENERATE
- point_in_ring: Crossing-number containment test
- nearest_point_on_segment: Find closest point on a segment

Key classes:
- GeometryIterator / ConstGeometryIterator: Depth-first leaf traversal
- SegmentIterator: Consecutive point pairs
- GeometryEngine / ShapelyEngine / UnavailableEngine: Boolean engines
- SpatialOperations: Validating facade over an engine
"""

from mapgeom.core.engine import (
    EngineOperation,
    GeometryEngine,
    ShapelyEngine,
    UnavailableEngine,
    create_engine,
)
from mapgeom.core.operations import (
    IntersectionResult,
    OperationResult,
    SpatialOperations,
    bounds_to_polygon,
)
from mapgeom.core.traversal import (
    ConstGeometryIterator,
    GeometryIterator,
    GeometryView,
    Segment,
    SegmentIterator,
)
from mapgeom.domain.algorithms import (
    classify_orientation,
    nearest_point_on_segment,
    point_in_ring,
    signed_area_2d,
)

__all__ = [
    # Engine classes
    "EngineOperation",
    "GeometryEngine",
    "ShapelyEngine",
    "UnavailableEngine",
    "create_engine",
    # Facade
    "IntersectionResult",
    "OperationResult",
    "SpatialOperations",
    "bounds_to_polygon",
    # Traversal
    "ConstGeometryIterator",
    "GeometryIterator",
    "GeometryView",
    "Segment",
    "SegmentIterator",
    # Geometry functions
    "classify_orientation",
    "nearest_point_on_segment",
    "point_in_ring",
    "signed_area_2d",
]
