"""Domain models for mapgeom.

This module contains the geometry type hierarchy. All models are designed to be:

- Value-like: created fully formed, mutated in place by their owner
- Exclusively owning: polygons own their holes, multi-geometries their parts
- Serializable to plain dictionaries

Key classes:
- Point: An immutable 3D coordinate
- Bounds: An axis-aligned bounding box
- Geometry: Abstract vertex container
- PointSet, LineString, Ring, Polygon, MultiGeometry: Concrete variants
"""

from mapgeom.domain.algorithms import Orientation
from mapgeom.domain.geometry import Geometry, GeometryType
from mapgeom.domain.point import Bounds, Point
from mapgeom.domain.shapes import (
    LineString,
    MultiGeometry,
    PointSet,
    Polygon,
    Ring,
    create_geometry,
    geometry_from_dict,
)

__all__: list[str] = [
    # Enums
    "GeometryType",
    "Orientation",
    # Core types
    "Point",
    "Bounds",
    "Geometry",
    "PointSet",
    "LineString",
    "Ring",
    "Polygon",
    "MultiGeometry",
    # Factories
    "create_geometry",
    "geometry_from_dict",
]
