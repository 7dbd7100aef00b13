"""mapgeom - Vector geometry model and spatial operations for mapping.

mapgeom provides typed vector geometries (point sets, lines, rings,
polygons with holes and multi-part collections) together with the algorithms
that manipulate them: winding analysis, point-in-region tests, vertex
cleanup, depth-first traversal, and buffer/crop/union/difference through a
pluggable boolean engine.

Example:
    >>> from mapgeom.domain import Point, Ring
    >>> ring = Ring([Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1)])
    >>> ring.signed_area_2d()
    1.0
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
