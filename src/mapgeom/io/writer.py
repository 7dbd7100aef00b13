"""Geometry writer for WKT and GeoJSON output."""

import json
from pathlib import Path

import shapely.wkt
from shapely.geometry import mapping

from mapgeom.domain import Geometry
from mapgeom.exceptions import GeometryWriteError
from mapgeom.io.converter import domain_to_shapely


def dump_wkt(geometry: Geometry, rounding_precision: int = -1) -> str:
    """Format a geometry as WKT.

    Args:
        geometry: Domain geometry
        rounding_precision: Decimal places, or -1 for full precision

    Returns:
        Well-known text
    """
    return shapely.wkt.dumps(
        domain_to_shapely(geometry),
        trim=True,
        rounding_precision=rounding_precision,
    )


def dump_geojson(geometry: Geometry) -> str:
    """Format a geometry as a GeoJSON geometry object."""
    return json.dumps(mapping(domain_to_shapely(geometry)))


def write_geometry(path: Path, geometry: Geometry) -> None:
    """Write a geometry file, choosing the format from its extension.

    Files ending in .json or .geojson get GeoJSON; anything else gets WKT.

    Raises:
        GeometryWriteError: If the file cannot be written
    """
    if path.suffix.lower() in (".json", ".geojson"):
        text = dump_geojson(geometry)
    else:
        text = dump_wkt(geometry)

    try:
        path.write_text(text + "\n", encoding="utf-8")
    except OSError as e:
        raise GeometryWriteError(str(path), str(e)) from e
