"""Converters between shapely and domain models.

This module handles the conversion between shapely geometries and our
domain models (PointSet, LineString, Ring, Polygon, MultiGeometry).

Rings and polygons are passed to shapely as areal Polygons; shapely closes
the coordinate loop itself. On the way back, closed coordinate sequences are
opened again so that every Ring is in canonical open form.
"""

from collections.abc import Iterable, Sequence

import shapely.geometry as sg
from shapely.geometry.base import BaseGeometry, BaseMultipartGeometry
from shapely.geometry.polygon import orient

from mapgeom.domain import (
    Geometry,
    LineString,
    MultiGeometry,
    Point,
    PointSet,
    Polygon,
    Ring,
)


def _coords(points: Iterable[Point], has_z: bool) -> list[tuple[float, ...]]:
    if has_z:
        return [p.to_tuple() for p in points]
    return [p.to_tuple_2d() for p in points]


def _point(coord: Sequence[float]) -> Point:
    return Point(float(coord[0]), float(coord[1]), float(coord[2]) if len(coord) > 2 else 0.0)


def _open_ring_points(coords: Iterable[Sequence[float]]) -> list[Point]:
    points = [_point(c) for c in coords]
    if len(points) > 1 and points[0] == points[-1]:
        points.pop()
    return points


def domain_to_shapely(geometry: Geometry) -> BaseGeometry:
    """Convert a domain geometry to its shapely equivalent.

    PointSet becomes Point or MultiPoint, LineString becomes LineString, Ring
    and Polygon become Polygon, and MultiGeometry becomes the matching
    homogeneous multi-type or a GeometryCollection when parts are mixed.

    Args:
        geometry: Domain geometry

    Returns:
        New shapely geometry

    Raises:
        TypeError: If the geometry variant is not recognised
    """
    return _to_shapely(geometry, any(p.z != 0.0 for p in geometry.iter_points()))


def _to_shapely(geometry: Geometry, has_z: bool) -> BaseGeometry:
    if isinstance(geometry, PointSet):
        if len(geometry.points) == 1:
            return sg.Point(_coords(geometry.points, has_z)[0])
        return sg.MultiPoint(_coords(geometry.points, has_z))

    if isinstance(geometry, LineString):
        return sg.LineString(_coords(geometry.points, has_z))

    if isinstance(geometry, Polygon):
        return sg.Polygon(
            _coords(geometry.outer.points, has_z),
            [_coords(hole.points, has_z) for hole in geometry.holes],
        )

    if isinstance(geometry, Ring):
        return sg.Polygon(_coords(geometry.points, has_z))

    if isinstance(geometry, MultiGeometry):
        parts = [_to_shapely(part, has_z) for part in geometry.parts]
        if parts and all(isinstance(p, sg.Polygon) for p in parts):
            return sg.MultiPolygon(parts)
        if parts and all(isinstance(p, sg.LineString) for p in parts):
            return sg.MultiLineString(parts)
        if parts and all(isinstance(p, (sg.Point, sg.MultiPoint)) for p in parts):
            points: list[sg.Point] = []
            for p in parts:
                points.extend(p.geoms if isinstance(p, sg.MultiPoint) else [p])
            return sg.MultiPoint(points)
        return sg.GeometryCollection(parts)

    raise TypeError(f"Unsupported geometry variant: {type(geometry).__name__}")


def shapely_to_domain(
    geom: BaseGeometry,
    normalize_orientation: bool = False,
    collapse_single: bool = True,
) -> Geometry | None:
    """Convert a shapely geometry to a domain geometry.

    Args:
        geom: Shapely geometry
        normalize_orientation: Wind polygon boundaries CCW and holes CW
        collapse_single: Return the only part of a one-part collection
            directly instead of a MultiGeometry

    Returns:
        Domain geometry, or None if the input is empty
    """
    if geom.is_empty:
        return None

    if isinstance(geom, sg.Point):
        return PointSet([_point(geom.coords[0])])

    if isinstance(geom, sg.MultiPoint):
        return PointSet(_point(p.coords[0]) for p in geom.geoms if not p.is_empty)

    if isinstance(geom, sg.LinearRing):
        return Ring(_open_ring_points(geom.coords))

    if isinstance(geom, sg.LineString):
        return LineString(_point(c) for c in geom.coords)

    if isinstance(geom, sg.Polygon):
        if normalize_orientation:
            geom = orient(geom, sign=1.0)
        return Polygon(
            _open_ring_points(geom.exterior.coords),
            [Ring(_open_ring_points(hole.coords)) for hole in geom.interiors],
        )

    if isinstance(geom, BaseMultipartGeometry):
        parts: list[Geometry] = []
        for sub in geom.geoms:
            converted = shapely_to_domain(sub, normalize_orientation, collapse_single=False)
            if isinstance(converted, MultiGeometry):
                parts.extend(converted.parts)
            elif converted is not None:
                parts.append(converted)
        if not parts:
            return None
        if collapse_single and len(parts) == 1:
            return parts[0]
        return MultiGeometry(parts)

    raise TypeError(f"Unsupported shapely geometry: {geom.geom_type}")
