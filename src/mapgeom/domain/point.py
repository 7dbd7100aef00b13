"""Coordinate and extent types.

This module defines the values every geometry is built from:
- Point: An immutable 3D coordinate
- Bounds: An axis-aligned 3D bounding box
"""

import math
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 3D space.

    Immutable and hashable for use in sets/dicts. Vertices have no identity
    beyond position, so equality is exact coordinate equality.

    Attributes:
        x: X coordinate
        y: Y coordinate
        z: Z coordinate (0.0 for 2D data)
    """

    x: float
    y: float
    z: float = 0.0

    def to_tuple(self) -> tuple[float, float, float]:
        """Convert to simple (x, y, z) tuple."""
        return (self.x, self.y, self.z)

    def to_tuple_2d(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)

    def translated(self, dx: float, dy: float, dz: float = 0.0) -> "Point":
        """Return a copy moved by the given offset."""
        return Point(self.x + dx, self.y + dy, self.z + dz)

    def distance_to(self, other: "Point") -> float:
        """Euclidean 3D distance to another point."""
        return math.dist(self.to_tuple(), other.to_tuple())

    def distance_to_2d(self, other: "Point") -> float:
        """Euclidean distance to another point in the XY plane."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with x, y and z fields
        """
        return {"x": self.x, "y": self.y, "z": self.z}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x, y and optional z fields

        Returns:
            Point instance
        """
        return cls(x=data["x"], y=data["y"], z=data.get("z", 0.0))


@dataclass(frozen=True, slots=True)
class Bounds:
    """Axis-aligned bounding box.

    A default-constructed Bounds is empty (min > max) and reports
    ``is_valid() == False`` until it is expanded by at least one point.
    """

    min_x: float = math.inf
    min_y: float = math.inf
    min_z: float = math.inf
    max_x: float = -math.inf
    max_y: float = -math.inf
    max_z: float = -math.inf

    @classmethod
    def from_points(cls, points: "list[Point]") -> "Bounds":
        """Build the tightest box around a list of points."""
        if not points:
            return cls()
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        zs = [p.z for p in points]
        return cls(min(xs), min(ys), min(zs), max(xs), max(ys), max(zs))

    @classmethod
    def from_2d(cls, min_x: float, min_y: float, max_x: float, max_y: float) -> "Bounds":
        """Build a flat box in the z=0 plane."""
        return cls(min_x, min_y, 0.0, max_x, max_y, 0.0)

    def is_valid(self) -> bool:
        """Check whether the box contains at least one point."""
        return self.min_x <= self.max_x and self.min_y <= self.max_y and self.min_z <= self.max_z

    def union(self, other: "Bounds") -> "Bounds":
        """Smallest box containing both boxes."""
        if not other.is_valid():
            return self
        if not self.is_valid():
            return other
        return Bounds(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            min(self.min_z, other.min_z),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y),
            max(self.max_z, other.max_z),
        )

    def center(self) -> Point:
        """Center of the box (origin for an empty box)."""
        if not self.is_valid():
            return Point(0.0, 0.0, 0.0)
        return Point(
            (self.min_x + self.max_x) / 2.0,
            (self.min_y + self.max_y) / 2.0,
            (self.min_z + self.max_z) / 2.0,
        )

    @property
    def width(self) -> float:
        return self.max_x - self.min_x if self.is_valid() else 0.0

    @property
    def height(self) -> float:
        return self.max_y - self.min_y if self.is_valid() else 0.0

    def contains_2d(self, x: float, y: float) -> bool:
        """Check if an XY location lies inside or on the box."""
        return self.is_valid() and self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y

    def intersects_2d(self, other: "Bounds") -> bool:
        """Check if two boxes overlap in the XY plane."""
        if not (self.is_valid() and other.is_valid()):
            return False
        return not (
            other.min_x > self.max_x
            or other.max_x < self.min_x
            or other.min_y > self.max_y
            or other.max_y < self.min_y
        )

    def to_tuple_2d(self) -> tuple[float, float, float, float]:
        """Convert to (min_x, min_y, max_x, max_y)."""
        return (self.min_x, self.min_y, self.max_x, self.max_y)
