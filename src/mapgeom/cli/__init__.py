"""Command-line interface for mapgeom.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Geometry inspection (type, validity, orientation, bounds)
- Buffer, crop, union, difference and intersects on WKT/GeoJSON files
- Vertex cleanup and rewinding
"""

from mapgeom.cli.app import app, cli, main

__all__ = ["app", "cli", "main"]
