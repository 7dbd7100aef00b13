"""Orientation and topology algorithms over point sequences.

This module provides the pure functions the geometry variants are built on:
- Signed area calculation (shoelace formula)
- Orientation classification (CCW / CW / degenerate)
- Point-in-ring testing (crossing number)
- Nearest point on segment and colinearity tests
- Consecutive-duplicate and colinear-point removal
- Path length

All functions are pure and stateless. Point sequences are treated as "open":
when a function is asked to treat a sequence as a closed loop, the last
point is connected back to the first.
"""

import math
from collections.abc import Sequence
from enum import Enum

from mapgeom.domain.point import Point

DEFAULT_ORIENTATION_EPSILON = 1e-10
DEFAULT_COLINEAR_TOLERANCE = 1e-9


class Orientation(Enum):
    """Winding of a closed loop, derived from its signed area.

    Outer boundaries conventionally wind counter-clockwise and holes
    clockwise. A loop whose signed area is effectively zero has no
    orientation.
    """

    CCW = "ccw"
    CW = "cw"
    DEGENERATE = "degenerate"

    def opposite(self) -> "Orientation":
        """Return the reversed winding (DEGENERATE stays DEGENERATE)."""
        if self is Orientation.CCW:
            return Orientation.CW
        if self is Orientation.CW:
            return Orientation.CCW
        return self


def signed_area_2d(points: Sequence[Point]) -> float:
    """Calculate signed area of a closed loop using the shoelace formula.

    The sign of the area indicates winding direction:
    - Positive area: counter-clockwise winding
    - Negative area: clockwise winding

    Args:
        points: Open point sequence; the last point connects to the first

    Returns:
        Signed area in square units. Returns 0.0 for fewer than 3 points.

    Examples:
        >>> square = [Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1)]
        >>> signed_area_2d(square)
        1.0
        >>> signed_area_2d(square[::-1])
        -1.0
    """
    n = len(points)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += points[i].x * points[j].y
        area -= points[j].x * points[i].y

    return area / 2.0


def classify_orientation(
    signed_area: float, epsilon: float = DEFAULT_ORIENTATION_EPSILON
) -> Orientation:
    """Map a signed area to an orientation.

    Args:
        signed_area: Result of signed_area_2d
        epsilon: Magnitude below which the loop is degenerate

    Returns:
        CCW for positive area, CW for negative, DEGENERATE near zero
    """
    if abs(signed_area) < epsilon:
        return Orientation.DEGENERATE
    return Orientation.CCW if signed_area > 0 else Orientation.CW


def point_in_ring(x: float, y: float, points: Sequence[Point]) -> bool:
    """Determine if a location is inside a closed loop using ray casting.

    Casts a horizontal ray from the point to the right and counts crossings
    with the loop's edges, including the edge from the last point back to the
    first. Odd number of crossings = inside, even = outside. Locations exactly
    on the boundary may classify either way.

    Args:
        x: X coordinate to test
        y: Y coordinate to test
        points: Open point sequence forming the loop

    Returns:
        True if the location is inside the loop, False otherwise
    """
    n = len(points)
    if n < 3:
        return False

    inside = False
    j = n - 1

    for i in range(n):
        xi, yi = points[i].x, points[i].y
        xj, yj = points[j].x, points[j].y

        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside

        j = i

    return inside


def nearest_point_on_segment(point: Point, seg_start: Point, seg_end: Point) -> tuple[Point, float]:
    """Find the closest point on a segment to a given point (XY plane).

    Projects the point onto the infinite line, then clamps to the segment
    endpoints. The z value of the result is interpolated along the segment.

    Args:
        point: The point to project
        seg_start: Start point of line segment
        seg_end: End point of line segment

    Returns:
        Tuple of (nearest_point, distance)
    """
    dx = seg_end.x - seg_start.x
    dy = seg_end.y - seg_start.y

    segment_length_sq = dx * dx + dy * dy
    if segment_length_sq < 1e-20:
        return seg_start, point.distance_to_2d(seg_start)

    t = ((point.x - seg_start.x) * dx + (point.y - seg_start.y) * dy) / segment_length_sq
    t = max(0.0, min(1.0, t))

    nearest = Point(
        seg_start.x + t * dx,
        seg_start.y + t * dy,
        seg_start.z + t * (seg_end.z - seg_start.z),
    )
    return nearest, point.distance_to_2d(nearest)


def is_colinear(
    prev: Point, point: Point, nxt: Point, tolerance: float = DEFAULT_COLINEAR_TOLERANCE
) -> bool:
    """Check if ``point`` lies on the straight segment from ``prev`` to ``nxt``.

    Args:
        prev: Preceding neighbour
        point: Candidate point
        nxt: Following neighbour
        tolerance: Maximum distance from the segment

    Returns:
        True if the point can be dropped without changing the path shape
    """
    _, distance = nearest_point_on_segment(point, prev, nxt)
    return distance <= tolerance


def remove_consecutive_duplicates(points: Sequence[Point], closed: bool) -> list[Point]:
    """Collapse runs of equal consecutive points.

    Args:
        points: Point sequence
        closed: If True, the last/first wrap-around pair also counts as consecutive

    Returns:
        New list without consecutive duplicates
    """
    result: list[Point] = []
    for p in points:
        if not result or result[-1] != p:
            result.append(p)

    if closed:
        while len(result) > 1 and result[-1] == result[0]:
            result.pop()

    return result


def remove_colinear(
    points: Sequence[Point], closed: bool, tolerance: float = DEFAULT_COLINEAR_TOLERANCE
) -> list[Point]:
    """Drop points that lie on the segment between their neighbours.

    Open paths always keep their endpoints. For closed loops every point is a
    candidate, with neighbours taken across the wrap-around.

    Args:
        points: Point sequence
        closed: Treat the sequence as a closed loop
        tolerance: Maximum distance from the neighbour segment

    Returns:
        New list without colinear points
    """
    n = len(points)
    if n < 3:
        return list(points)

    kept: list[Point] = []
    for i, p in enumerate(points):
        if not closed and (i == 0 or i == n - 1):
            kept.append(p)
            continue
        prev = kept[-1] if kept else points[-1]
        nxt = points[(i + 1) % n]
        if is_colinear(prev, p, nxt, tolerance):
            continue
        kept.append(p)

    # The first point was tested against the original last point, which may
    # itself have been dropped.
    if closed and len(kept) >= 3 and is_colinear(kept[-1], kept[0], kept[1], tolerance):
        kept.pop(0)

    return kept


def path_length(points: Sequence[Point], closed: bool = False) -> float:
    """Sum of consecutive segment lengths.

    Args:
        points: Point sequence
        closed: Include the segment from the last point back to the first

    Returns:
        Total length in coordinate units
    """
    if len(points) < 2:
        return 0.0

    total = sum(points[i].distance_to(points[i + 1]) for i in range(len(points) - 1))
    if closed:
        total += points[-1].distance_to(points[0])
    return total


def is_finite_point(point: Point) -> bool:
    """Check that every coordinate is a finite number."""
    return math.isfinite(point.x) and math.isfinite(point.y) and math.isfinite(point.z)
