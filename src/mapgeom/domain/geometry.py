"""Geometry base type and discriminants.

This module defines the vertex container every geometry variant is built on:
- GeometryType: Enum discriminating the closed set of variants
- Geometry: Abstract base owning an ordered, mutable list of 3D points

Concrete variants live in mapgeom.domain.shapes.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from enum import Enum
from typing import Any, ClassVar

import numpy as np
import numpy.typing as npt

from mapgeom.domain.algorithms import (
    DEFAULT_COLINEAR_TOLERANCE,
    Orientation,
    path_length,
    remove_colinear,
    remove_consecutive_duplicates,
)
from mapgeom.domain.point import Bounds, Point


class GeometryType(Enum):
    """Geometry variant discriminant.

    UNKNOWN is never the type of an instance; it is the sentinel returned by
    ``MultiGeometry.component_type()`` when parts are mixed or absent.
    """

    POINTSET = "pointset"
    LINESTRING = "linestring"
    RING = "ring"
    POLYGON = "polygon"
    MULTI = "multi"
    UNKNOWN = "unknown"


class Geometry(ABC):
    """An ordered sequence of 3D points tagged with a variant type.

    The geometry owns its vertex list exclusively. Mutating methods work in
    place and are not synchronized: callers sharing an instance across
    threads must hold a single writer.

    Attributes:
        type: Variant discriminant (class-level)
    """

    type: ClassVar[GeometryType] = GeometryType.UNKNOWN

    # Whether the stored sequence is logically a closed loop.
    _closed_loop: ClassVar[bool] = False

    def __init__(self, points: Iterable[Point] | None = None) -> None:
        self._points: list[Point] = list(points) if points is not None else []

    # -- vertex container -------------------------------------------------

    @property
    def points(self) -> list[Point]:
        """The live vertex list (mutations affect the geometry)."""
        return self._points

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    def __getitem__(self, index: int) -> Point:
        return self.points[index]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self.points)} points)"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Geometry):
            return NotImplemented
        return self.type == other.type and self.to_dict() == other.to_dict()

    __hash__ = None  # type: ignore[assignment]

    def append(self, point: Point) -> None:
        """Append a point to the vertex list."""
        self.points.append(point)

    def extend(self, points: Iterable[Point]) -> None:
        """Append several points to the vertex list."""
        self.points.extend(points)

    def iter_points(self) -> Iterator[Point]:
        """Iterate every vertex, including those of sub-parts."""
        return iter(self.points)

    # -- queries ----------------------------------------------------------

    def total_point_count(self) -> int:
        """Number of vertices, including those of sub-parts."""
        return len(self.points)

    def num_geometries(self) -> int:
        """Number of leaf geometries this instance represents."""
        return 1

    def component_type(self) -> GeometryType:
        """Type of the components (the variant itself for non-multi geometries)."""
        return self.type

    def bounds(self) -> Bounds:
        """Axis-aligned box over all vertices."""
        return Bounds.from_points(self.points)

    def length(self) -> float:
        """Sum of consecutive segment lengths."""
        return path_length(self.points, closed=self._closed_loop)

    @abstractmethod
    def is_valid(self) -> bool:
        """Check the variant's minimum point-count rule."""

    # -- export -----------------------------------------------------------

    def to_array(self, dtype: npt.DTypeLike = np.float64) -> npt.NDArray[Any]:
        """Export all vertices as an ``(N, 3)`` array.

        Args:
            dtype: numpy dtype of the result

        Returns:
            Freshly allocated array; later mutation of the geometry does not
            affect it
        """
        coords = [p.to_tuple() for p in self.iter_points()]
        return np.array(coords, dtype=dtype).reshape(len(coords), 3)

    def to_float32_array(self) -> npt.NDArray[np.float32]:
        """Export all vertices as single-precision ``(N, 3)`` array."""
        return self.to_array(np.float32)

    def to_float64_array(self) -> npt.NDArray[np.float64]:
        """Export all vertices as double-precision ``(N, 3)`` array."""
        return self.to_array(np.float64)

    # -- mutation ---------------------------------------------------------

    def translate(self, dx: float, dy: float, dz: float = 0.0) -> None:
        """Move every vertex by the given offset, in place."""
        self.points[:] = [p.translated(dx, dy, dz) for p in self.points]

    def localize(self) -> Point:
        """Translate the geometry so its bounds are centred on the origin.

        Returns:
            The offset that was subtracted; pass it to delocalize() to undo
        """
        offset = self.bounds().center()
        self.translate(-offset.x, -offset.y, -offset.z)
        return offset

    def delocalize(self, offset: Point) -> None:
        """Reverse a previous localize() call."""
        self.translate(offset.x, offset.y, offset.z)

    def remove_duplicates(self) -> None:
        """Collapse consecutive equal points, in place."""
        self.points[:] = remove_consecutive_duplicates(self.points, closed=self._closed_loop)

    def remove_colinear_points(self, tolerance: float = DEFAULT_COLINEAR_TOLERANCE) -> None:
        """Drop points lying on the segment between their neighbours, in place."""
        self.points[:] = remove_colinear(self.points, closed=self._closed_loop, tolerance=tolerance)

    def open(self) -> None:
        """Convert to the canonical open representation (no-op for non-rings)."""

    def close(self) -> None:
        """Convert to the duplicated-endpoint representation (no-op for non-rings)."""

    def rewind(self, orientation: Orientation) -> None:
        """Wind closed loops to the given orientation (no-op for non-rings)."""

    # -- copying ----------------------------------------------------------

    @abstractmethod
    def clone(self) -> "Geometry":
        """Deep copy of this geometry."""

    @abstractmethod
    def clone_as(self, geometry_type: GeometryType) -> "Geometry | None":
        """Convert to another variant.

        Args:
            geometry_type: Target variant

        Returns:
            A new geometry, or None when no sensible mapping exists
        """

    # -- serialization ----------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with type and points fields
        """
        return {
            "type": self.type.value,
            "points": [p.to_dict() for p in self.points],
        }
