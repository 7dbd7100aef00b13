"""Geometry variants.

This module defines the closed family of concrete geometries:
- PointSet: Unordered collection of points
- LineString: Open path
- Ring: Closed loop stored without a duplicated closing vertex
- Polygon: Outer boundary ring plus hole rings
- MultiGeometry: Flat collection of heterogeneous non-multi parts

Also provides create_geometry() and geometry_from_dict() factories.
"""

from collections.abc import Iterable, Iterator
from itertools import chain, pairwise
from typing import Any, ClassVar

from mapgeom.domain.algorithms import (
    DEFAULT_COLINEAR_TOLERANCE,
    DEFAULT_ORIENTATION_EPSILON,
    Orientation,
    classify_orientation,
    point_in_ring,
    signed_area_2d,
)
from mapgeom.domain.geometry import Geometry, GeometryType
from mapgeom.domain.point import Bounds, Point
from mapgeom.exceptions import GeometryError, NestedGeometryError


def _closed_path(points: list[Point]) -> list[Point]:
    """Copy of a loop's points with the first point repeated at the end."""
    result = list(points)
    if result and result[0] != result[-1]:
        result.append(result[0])
    return result


class PointSet(Geometry):
    """A collection of points with no ordering semantics beyond storage order.

    Valid when it holds at least one point.
    """

    type: ClassVar[GeometryType] = GeometryType.POINTSET

    def is_valid(self) -> bool:
        return len(self.points) >= 1

    def clone(self) -> "PointSet":
        return PointSet(self.points)

    def clone_as(self, geometry_type: GeometryType) -> Geometry | None:
        if geometry_type == GeometryType.POINTSET:
            return self.clone()
        if geometry_type == GeometryType.MULTI:
            return MultiGeometry([self.clone()])
        return None


class LineString(Geometry):
    """An open path through its points, valid with at least two points."""

    type: ClassVar[GeometryType] = GeometryType.LINESTRING

    def is_valid(self) -> bool:
        return len(self.points) >= 2

    def interpolate(self, distance: float) -> Point | None:
        """Point at the given distance along the path.

        Distances are clamped to the path, so negative values give the first
        point and values past the end give the last point.

        Args:
            distance: Distance from the first point

        Returns:
            Interpolated point, or None for an empty path
        """
        if not self.points:
            return None
        if distance <= 0.0:
            return self.points[0]

        position = 0.0
        for start, end in pairwise(self.points):
            seg_length = start.distance_to(end)
            if seg_length > 0.0 and position + seg_length >= distance:
                t = (distance - position) / seg_length
                return Point(
                    start.x + t * (end.x - start.x),
                    start.y + t * (end.y - start.y),
                    start.z + t * (end.z - start.z),
                )
            position += seg_length

        return self.points[-1]

    def get_segment(self, distance: float) -> tuple[Point, Point] | None:
        """Find the segment containing the position ``distance`` along the path.

        Args:
            distance: Distance from the first point

        Returns:
            (start, end) of the containing segment, or None if the distance
            is outside the path
        """
        if distance < 0.0:
            return None

        position = 0.0
        for start, end in pairwise(self.points):
            seg_length = start.distance_to(end)
            if position <= distance <= position + seg_length:
                return start, end
            position += seg_length

        return None

    def extract(self, start: float, length: float) -> "LineString | None":
        """Extract a fixed-length piece of the path.

        Args:
            start: Distance along the path where the piece begins
            length: Length of the piece

        Returns:
            New LineString covering [start, start + length], or None if the
            range does not fit on the path
        """
        end = start + length
        if not self.is_valid() or start < 0.0 or length < 0.0 or end > self.length() + 1e-12:
            return None

        first = self.interpolate(start)
        last = self.interpolate(end)
        if first is None or last is None:
            return None

        result = [first]
        position = 0.0
        for a, b in pairwise(self.points):
            position += a.distance_to(b)
            if start < position < end:
                result.append(b)
        result.append(last)
        return LineString(result)

    def clone(self) -> "LineString":
        return LineString(self.points)

    def clone_as(self, geometry_type: GeometryType) -> Geometry | None:
        if geometry_type == GeometryType.LINESTRING:
            return self.clone()
        if geometry_type == GeometryType.POINTSET:
            return PointSet(self.points)
        if geometry_type == GeometryType.RING:
            ring = Ring(self.points)
            ring.open()
            return ring
        if geometry_type == GeometryType.MULTI:
            return MultiGeometry([self.clone()])
        return None


class Ring(Geometry):
    """A closed loop stored in open form.

    The last stored point connects back to the first; the canonical
    representation never duplicates the first point at the end. close() and
    open() convert to and from the duplicated-endpoint form for external
    consumers. Valid with at least three points.
    """

    type: ClassVar[GeometryType] = GeometryType.RING
    _closed_loop: ClassVar[bool] = True

    def is_valid(self) -> bool:
        return len(self.points) >= 3

    def is_closed(self) -> bool:
        """Check if the first point is physically repeated at the end."""
        return len(self.points) > 1 and self.points[0] == self.points[-1]

    def open(self) -> None:
        if self.is_closed():
            self.points.pop()

    def close(self) -> None:
        if self.points and self.points[0] != self.points[-1]:
            self.points.append(self.points[0])

    def signed_area_2d(self) -> float:
        """Signed XY area; positive when wound counter-clockwise."""
        return signed_area_2d(self.points)

    def orientation(self, epsilon: float = DEFAULT_ORIENTATION_EPSILON) -> Orientation:
        """Winding derived from the signed area."""
        return classify_orientation(self.signed_area_2d(), epsilon)

    def rewind(self, orientation: Orientation) -> None:
        """Reverse point order if the winding differs from ``orientation``.

        Degenerate rings have no winding to fix and are left unchanged.
        """
        current = self.orientation()
        if orientation is Orientation.DEGENERATE or current is Orientation.DEGENERATE:
            return
        if current is not orientation:
            self.points.reverse()

    def contains_2d(self, x: float, y: float) -> bool:
        """Crossing-number test against the closed loop in the XY plane."""
        return point_in_ring(x, y, self.points)

    def clone(self) -> "Ring":
        return Ring(self.points)

    def clone_as(self, geometry_type: GeometryType) -> Geometry | None:
        if geometry_type == GeometryType.RING:
            return self.clone()
        if geometry_type == GeometryType.POINTSET:
            return PointSet(self.points)
        if geometry_type == GeometryType.LINESTRING:
            return LineString(_closed_path(self.points))
        if geometry_type == GeometryType.POLYGON:
            return Polygon(self.points)
        if geometry_type == GeometryType.MULTI:
            return MultiGeometry([self.clone()])
        return None


class Polygon(Geometry):
    """An outer boundary ring with an ordered collection of hole rings.

    The outer ring conventionally winds CCW and holes CW; holes are expected
    to lie inside the boundary without overlapping. None of this is
    validated: violations only produce meaningless results downstream.

    The polygon's own vertex list is the outer ring's list.

    Attributes:
        outer: Boundary ring
        holes: Hole rings, owned by the polygon
    """

    type: ClassVar[GeometryType] = GeometryType.POLYGON
    _closed_loop: ClassVar[bool] = True

    def __init__(
        self,
        points: Iterable[Point] | None = None,
        holes: Iterable[Ring] | None = None,
    ) -> None:
        self.outer = Ring(points)
        self.holes: list[Ring] = list(holes) if holes is not None else []

    @property
    def points(self) -> list[Point]:
        return self.outer.points

    def __repr__(self) -> str:
        return f"Polygon({len(self.points)} points, {len(self.holes)} holes)"

    def rings(self) -> list[Ring]:
        """Outer ring followed by every hole."""
        return [self.outer, *self.holes]

    def add_hole(self, hole: Ring) -> None:
        """Append a hole ring (ownership passes to the polygon)."""
        self.holes.append(hole)

    def iter_points(self) -> Iterator[Point]:
        return chain.from_iterable(ring.points for ring in self.rings())

    def total_point_count(self) -> int:
        return sum(len(ring.points) for ring in self.rings())

    def num_geometries(self) -> int:
        return 1 + len(self.holes)

    def bounds(self) -> Bounds:
        result = self.outer.bounds()
        for hole in self.holes:
            result = result.union(hole.bounds())
        return result

    def length(self) -> float:
        """Perimeter of the outer boundary, closing segment included."""
        return self.outer.length()

    def is_valid(self) -> bool:
        return self.outer.is_valid() and all(hole.is_valid() for hole in self.holes)

    def signed_area_2d(self) -> float:
        """Signed XY area of the outer boundary."""
        return self.outer.signed_area_2d()

    def orientation(self, epsilon: float = DEFAULT_ORIENTATION_EPSILON) -> Orientation:
        """Winding of the outer boundary."""
        return self.outer.orientation(epsilon)

    def contains_2d(self, x: float, y: float) -> bool:
        """Test against the outer boundary only.

        A location inside a hole is still reported as contained. Use
        contains_2d_with_holes() for a hole-aware test.
        """
        return self.outer.contains_2d(x, y)

    def contains_2d_with_holes(self, x: float, y: float) -> bool:
        """Test against the boundary, excluding locations inside any hole."""
        if not self.outer.contains_2d(x, y):
            return False
        return not any(hole.contains_2d(x, y) for hole in self.holes)

    def translate(self, dx: float, dy: float, dz: float = 0.0) -> None:
        for ring in self.rings():
            ring.translate(dx, dy, dz)

    def open(self) -> None:
        for ring in self.rings():
            ring.open()

    def close(self) -> None:
        for ring in self.rings():
            ring.close()

    def remove_duplicates(self) -> None:
        for ring in self.rings():
            ring.remove_duplicates()

    def remove_colinear_points(self, tolerance: float = DEFAULT_COLINEAR_TOLERANCE) -> None:
        for ring in self.rings():
            ring.remove_colinear_points(tolerance)

    def rewind(self, orientation: Orientation) -> None:
        """Wind the boundary to ``orientation`` and every hole the opposite way."""
        self.outer.rewind(orientation)
        for hole in self.holes:
            hole.rewind(orientation.opposite())

    def clone(self) -> "Polygon":
        return Polygon(self.points, [hole.clone() for hole in self.holes])

    def clone_as(self, geometry_type: GeometryType) -> Geometry | None:
        if geometry_type == GeometryType.POLYGON:
            return self.clone()
        if geometry_type == GeometryType.RING:
            return self.outer.clone()
        if geometry_type == GeometryType.LINESTRING:
            return LineString(_closed_path(self.points))
        if geometry_type == GeometryType.POINTSET:
            return PointSet(self.points)
        if geometry_type == GeometryType.MULTI:
            return MultiGeometry([self.clone()])
        return None

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["holes"] = [[p.to_dict() for p in hole.points] for hole in self.holes]
        return data


class MultiGeometry(Geometry):
    """An ordered collection of non-multi parts, each owned exclusively.

    A MultiGeometry holds parts rather than vertices: its own vertex list is
    always empty, and len()/iteration/indexing refer to the parts.
    MultiGeometries never nest.

    Attributes:
        parts: Component geometries in document order
    """

    type: ClassVar[GeometryType] = GeometryType.MULTI

    def __init__(self, parts: Iterable[Geometry] | None = None) -> None:
        super().__init__()
        self.parts: list[Geometry] = []
        for part in parts or ():
            self.add(part)

    def __len__(self) -> int:
        return len(self.parts)

    def __iter__(self) -> Iterator[Geometry]:  # type: ignore[override]
        return iter(self.parts)

    def __getitem__(self, index: int) -> Geometry:  # type: ignore[override]
        return self.parts[index]

    def __repr__(self) -> str:
        return f"MultiGeometry({len(self.parts)} parts)"

    def add(self, part: Geometry) -> None:
        """Append a part (ownership passes to the collection).

        Raises:
            NestedGeometryError: If part is itself a MultiGeometry
        """
        if isinstance(part, MultiGeometry):
            raise NestedGeometryError()
        self.parts.append(part)

    def append(self, point: Point) -> None:
        raise GeometryError("MultiGeometry holds parts, not vertices; use add()")

    def extend(self, points: Iterable[Point]) -> None:
        raise GeometryError("MultiGeometry holds parts, not vertices; use add()")

    def iter_points(self) -> Iterator[Point]:
        return chain.from_iterable(part.iter_points() for part in self.parts)

    def total_point_count(self) -> int:
        return sum(part.total_point_count() for part in self.parts)

    def num_geometries(self) -> int:
        return sum(part.num_geometries() for part in self.parts)

    def component_type(self) -> GeometryType:
        """Shared type of all parts, or UNKNOWN if mixed or empty."""
        types = {part.type for part in self.parts}
        if len(types) == 1:
            return types.pop()
        return GeometryType.UNKNOWN

    def bounds(self) -> Bounds:
        result = Bounds()
        for part in self.parts:
            result = result.union(part.bounds())
        return result

    def length(self) -> float:
        return sum(part.length() for part in self.parts)

    def is_valid(self) -> bool:
        return bool(self.parts) and all(part.is_valid() for part in self.parts)

    def translate(self, dx: float, dy: float, dz: float = 0.0) -> None:
        for part in self.parts:
            part.translate(dx, dy, dz)

    def open(self) -> None:
        for part in self.parts:
            part.open()

    def close(self) -> None:
        for part in self.parts:
            part.close()

    def remove_duplicates(self) -> None:
        for part in self.parts:
            part.remove_duplicates()

    def remove_colinear_points(self, tolerance: float = DEFAULT_COLINEAR_TOLERANCE) -> None:
        for part in self.parts:
            part.remove_colinear_points(tolerance)

    def rewind(self, orientation: Orientation) -> None:
        for part in self.parts:
            part.rewind(orientation)

    def clone(self) -> "MultiGeometry":
        return MultiGeometry(part.clone() for part in self.parts)

    def clone_as(self, geometry_type: GeometryType) -> Geometry | None:
        if geometry_type == GeometryType.MULTI:
            return self.clone()
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "parts": [part.to_dict() for part in self.parts],
        }


_VARIANTS: dict[GeometryType, type[Geometry]] = {
    GeometryType.POINTSET: PointSet,
    GeometryType.LINESTRING: LineString,
    GeometryType.RING: Ring,
    GeometryType.POLYGON: Polygon,
}


def create_geometry(geometry_type: GeometryType, points: Iterable[Point]) -> Geometry | None:
    """Create a leaf geometry of the given type from a vertex list.

    Args:
        geometry_type: Target variant (MULTI and UNKNOWN are not vertex based)
        points: Vertices; for a Polygon they form the outer boundary

    Returns:
        New geometry, or None for MULTI/UNKNOWN
    """
    variant = _VARIANTS.get(geometry_type)
    if variant is None:
        return None
    return variant(points)


def geometry_from_dict(data: dict[str, Any]) -> Geometry:
    """Deserialize a geometry produced by ``Geometry.to_dict()``.

    Args:
        data: Dictionary representation

    Returns:
        Geometry instance

    Raises:
        GeometryError: If the type field is missing or unknown
    """
    try:
        geometry_type = GeometryType(data["type"])
    except (KeyError, ValueError) as e:
        raise GeometryError(f"Invalid geometry type in data: {e}") from e

    if geometry_type == GeometryType.MULTI:
        return MultiGeometry(geometry_from_dict(part) for part in data.get("parts", []))

    points = [Point.from_dict(p) for p in data.get("points", [])]
    if geometry_type == GeometryType.POLYGON:
        holes = [Ring(Point.from_dict(p) for p in hole) for hole in data.get("holes", [])]
        return Polygon(points, holes)

    geometry = create_geometry(geometry_type, points)
    if geometry is None:
        raise GeometryError(f"Cannot deserialize geometry of type '{geometry_type.value}'")
    return geometry
