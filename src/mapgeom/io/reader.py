"""Geometry reader for WKT and GeoJSON input.

This module loads geometry text through shapely and converts the result to
domain models.
"""

import json
from pathlib import Path

import shapely.wkt
from shapely.errors import ShapelyError
from shapely.geometry import shape
from shapely.geometry.base import BaseGeometry

from mapgeom.domain import Geometry
from mapgeom.exceptions import GeometryReadError
from mapgeom.io.converter import shapely_to_domain


def load_wkt(text: str, source: str = "<string>") -> Geometry:
    """Parse a WKT string.

    Args:
        text: Well-known text
        source: Name used in error messages

    Returns:
        Domain geometry (multi-types stay MultiGeometry)

    Raises:
        GeometryReadError: If the text cannot be parsed or is empty
    """
    try:
        geom = shapely.wkt.loads(text)
    except (ShapelyError, ValueError) as e:
        raise GeometryReadError(source, str(e)) from e
    return _to_domain(geom, source)


def load_geojson(text: str, source: str = "<string>") -> Geometry:
    """Parse a GeoJSON geometry, Feature, or single-feature FeatureCollection.

    Args:
        text: GeoJSON document
        source: Name used in error messages

    Returns:
        Domain geometry

    Raises:
        GeometryReadError: If the document cannot be parsed or is empty
    """
    try:
        data = json.loads(text)
        if data.get("type") == "FeatureCollection":
            features = data.get("features", [])
            if len(features) != 1:
                raise ValueError(f"expected exactly one feature, got {len(features)}")
            data = features[0]
        if data.get("type") == "Feature":
            data = data["geometry"]
        geom = shape(data)
    except (ShapelyError, ValueError, KeyError, TypeError, AttributeError) as e:
        raise GeometryReadError(source, str(e)) from e
    return _to_domain(geom, source)


def read_geometry(path: Path) -> Geometry:
    """Read a geometry file, choosing the format from its extension.

    Files ending in .json or .geojson are GeoJSON; anything else is WKT.

    Raises:
        FileNotFoundError: If the file does not exist
        GeometryReadError: If the content cannot be parsed
    """
    if not path.exists():
        raise FileNotFoundError(f"Geometry file not found: {path}")

    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in (".json", ".geojson"):
        return load_geojson(text, source=str(path))
    return load_wkt(text, source=str(path))


def _to_domain(geom: BaseGeometry, source: str) -> Geometry:
    geometry = shapely_to_domain(geom, collapse_single=False)
    if geometry is None:
        raise GeometryReadError(source, "geometry is empty")
    return geometry
