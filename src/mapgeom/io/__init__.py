"""Geometry I/O layer for mapgeom.

This module handles conversion between domain models and shapely, and
reading/writing geometry text formats through shapely.

Key responsibilities:
- Convert domain geometries to and from shapely
- Load WKT and GeoJSON
- Write WKT and GeoJSON

Key functions:
- domain_to_shapely / shapely_to_domain: Engine representation bridge
- read_geometry / load_wkt / load_geojson: Input
- write_geometry / dump_wkt / dump_geojson: Output
"""

from mapgeom.io.converter import domain_to_shapely, shapely_to_domain
from mapgeom.io.reader import load_geojson, load_wkt, read_geometry
from mapgeom.io.writer import dump_geojson, dump_wkt, write_geometry

__all__ = [
    "domain_to_shapely",
    "dump_geojson",
    "dump_wkt",
    "load_geojson",
    "load_wkt",
    "read_geometry",
    "shapely_to_domain",
    "write_geometry",
]
