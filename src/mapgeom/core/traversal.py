"""Traversal protocols over geometry trees.

This module provides single-pass, non-restartable iterators:
- GeometryIterator: Depth-first flattening to leaf geometries (live objects)
- ConstGeometryIterator: Same traversal yielding read-only GeometryView proxies
- SegmentIterator: Consecutive point pairs of a flat point sequence

Flattening uses an explicit pending-work stack, so nesting depth never
touches the interpreter's recursion limit. The tree must not be structurally
modified while a traversal is active.
"""

from collections.abc import Iterator
from typing import Any, NamedTuple

from mapgeom.domain import Geometry, GeometryType, MultiGeometry, Point, Polygon
from mapgeom.exceptions import ReadOnlyGeometryError, TraversalError

_MUTATORS = frozenset(
    {
        "add",
        "add_hole",
        "append",
        "close",
        "delocalize",
        "extend",
        "localize",
        "open",
        "remove_colinear_points",
        "remove_duplicates",
        "rewind",
        "translate",
    }
)

# Methods that already return independent copies.
_COPIES = frozenset({"clone", "clone_as", "extract"})


def _freeze(value: Any) -> Any:
    if isinstance(value, Geometry):
        return GeometryView(value)
    if isinstance(value, list):
        return tuple(_freeze(v) for v in value)
    return value


class GeometryView:
    """Read-only proxy over a geometry.

    Queries are forwarded to the wrapped geometry. Vertex lists come back as
    tuples and sub-geometries as further views. Mutators raise
    ReadOnlyGeometryError. clone() and clone_as() return ordinary, mutable
    copies.
    """

    __slots__ = ("_geometry",)

    def __init__(self, geometry: Geometry) -> None:
        object.__setattr__(self, "_geometry", geometry)

    @property
    def points(self) -> tuple[Point, ...]:
        return tuple(self._geometry.points)

    def __getattr__(self, name: str) -> Any:
        if name in _MUTATORS:
            raise ReadOnlyGeometryError(name)

        attr = getattr(self._geometry, name)
        if name in _COPIES:
            return attr
        if not callable(attr):
            return _freeze(attr)

        def query(*args: Any, **kwargs: Any) -> Any:
            return _freeze(attr(*args, **kwargs))

        return query

    def __setattr__(self, name: str, value: Any) -> None:
        raise ReadOnlyGeometryError(f"set {name}")

    def __len__(self) -> int:
        return len(self._geometry)

    def __iter__(self) -> Iterator[Any]:
        return (_freeze(item) for item in self._geometry)

    def __getitem__(self, index: int) -> Any:
        return _freeze(self._geometry[index])

    def __eq__(self, other: object) -> bool:
        if isinstance(other, GeometryView):
            return self.is_view_of(other._geometry)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"GeometryView({self._geometry!r})"

    def is_view_of(self, geometry: Geometry) -> bool:
        """Check whether this view wraps exactly ``geometry``."""
        return self._geometry is geometry


class GeometryIterator:
    """Depth-first iterator over the leaf geometries of a tree.

    - MultiGeometry parts are visited in order; the collection itself is
      never produced.
    - A Polygon produces its outer ring then each hole when hole traversal
      is enabled, or itself as a single unit otherwise.
    - Any other variant is produced directly.

    Example:
        it = GeometryIterator(multi)
        while it.has_more():
            leaf = it.next()

        for leaf in GeometryIterator(multi, traverse_polygon_holes=False):
            ...
    """

    def __init__(self, geometry: Geometry, traverse_polygon_holes: bool = True) -> None:
        """Initialize the traversal.

        Args:
            geometry: Root of the tree
            traverse_polygon_holes: Descend into polygon boundaries and holes
        """
        self._traverse_polygon_holes = traverse_polygon_holes
        self._stack: list[Geometry] = [geometry]
        self._next: Geometry | None = None
        self._fetch()

    def _fetch(self) -> None:
        self._next = None
        while self._stack:
            current = self._stack.pop()
            if isinstance(current, MultiGeometry):
                self._stack.extend(reversed(current.parts))
            elif isinstance(current, Polygon) and self._traverse_polygon_holes:
                self._stack.extend(reversed(current.holes))
                self._stack.append(current.outer)
            else:
                self._next = current
                return

    def _emit(self, geometry: Geometry) -> Any:
        return geometry

    def has_more(self) -> bool:
        """Check if next() will produce another leaf."""
        return self._next is not None

    def next(self) -> Any:
        """Return the next leaf and advance.

        Raises:
            TraversalError: If the traversal is exhausted
        """
        if self._next is None:
            raise TraversalError()
        current = self._next
        self._fetch()
        return self._emit(current)

    def __iter__(self) -> "GeometryIterator":
        return self

    def __next__(self) -> Any:
        if self._next is None:
            raise StopIteration
        return self.next()


class ConstGeometryIterator(GeometryIterator):
    """Depth-first leaf iterator producing read-only GeometryView proxies."""

    def _emit(self, geometry: Geometry) -> GeometryView:
        return GeometryView(geometry)


class Segment(NamedTuple):
    """A pair of consecutive points."""

    start: Point
    end: Point

    def length(self) -> float:
        return self.start.distance_to(self.end)


class SegmentIterator:
    """Iterator over consecutive point pairs of a geometry's own vertex list.

    Rings and polygons (outer boundary) also produce the closing pair from
    the last point back to the first; ``force_closed_loop`` does the same for
    any other variant. No closing pair is produced when the stored sequence
    already repeats its first point. A MultiGeometry has no vertices of its
    own; flatten it with GeometryIterator first.
    """

    def __init__(self, geometry: Geometry | GeometryView, force_closed_loop: bool = False) -> None:
        """Initialize the iterator.

        Args:
            geometry: Geometry whose vertices are paired
            force_closed_loop: Emit the closing pair for non-ring variants too
        """
        self._points = geometry.points
        self._index = 0
        count = len(self._points)
        closed = force_closed_loop or geometry.type in (GeometryType.RING, GeometryType.POLYGON)
        self._close_loop = closed and count >= 2 and self._points[0] != self._points[-1]
        self._total = max(count - 1, 0) + (1 if self._close_loop else 0)

    def has_more(self) -> bool:
        """Check if next() will produce another segment."""
        return self._index < self._total

    def next(self) -> Segment:
        """Return the next segment and advance.

        Raises:
            TraversalError: If the iterator is exhausted
        """
        if not self.has_more():
            raise TraversalError()
        i = self._index
        self._index += 1
        j = (i + 1) % len(self._points)
        return Segment(self._points[i], self._points[j])

    def __iter__(self) -> "SegmentIterator":
        return self

    def __next__(self) -> Segment:
        if not self.has_more():
            raise StopIteration
        return self.next()
