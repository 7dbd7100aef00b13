"""CLI application entry point for mapgeom.

This module provides the main CLI interface using Typer. Geometry is read
from WKT or GeoJSON files and results are printed as WKT or written with
--output.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import click
import typer

from mapgeom import __version__
from mapgeom.cli.output import (
    console,
    print_error,
    print_geometry_info,
    print_geometry_text,
    print_header,
    print_stats,
    print_step,
    print_success,
)
from mapgeom.config import (
    BufferParameters,
    CapStyle,
    EngineBackend,
    EngineConfig,
    JoinStyle,
    LoggingConfig,
    LogLevel,
    MapGeomSettings,
)
from mapgeom.core import IntersectionResult, OperationResult, SpatialOperations
from mapgeom.domain import Bounds, Geometry, Orientation
from mapgeom.exceptions import GeometryReadError, GeometryWriteError
from mapgeom.io import dump_wkt, read_geometry, write_geometry
from mapgeom.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="mapgeom",
    help="Inspect, clean and combine vector geometries stored as WKT or GeoJSON.",
    add_completion=False,
    no_args_is_help=True,
)

OutputOption = Annotated[
    Path | None,
    typer.Option(
        "--output",
        "-o",
        help="Write the result to a file (.wkt, .geojson) instead of printing WKT",
    ),
]


@dataclass
class CliState:
    """Options shared by every command."""

    settings: MapGeomSettings
    quiet: bool = False
    verbose: bool = False


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]mapgeom[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    engine: Annotated[
        EngineBackend,
        typer.Option(
            "--engine",
            help="Boolean/offset engine",
            case_sensitive=False,
        ),
    ] = EngineBackend.SHAPELY,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        LogLevel,
        typer.Option(
            "--log-level",
            help="Console logging level",
            case_sensitive=False,
        ),
    ] = LogLevel.WARNING,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Inspect, clean and combine vector geometries."""
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    settings = MapGeomSettings(
        engine=EngineConfig(backend=engine),
        logging=LoggingConfig(log_file=log_file, log_level=log_level),
    )
    configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level.value,
        file_level=settings.logging.file_log_level.value,
        quiet=quiet,
    )
    ctx.obj = CliState(settings=settings, quiet=quiet, verbose=verbose)


@app.command()
def info(
    ctx: typer.Context,
    input_file: Annotated[Path, typer.Argument(help="WKT or GeoJSON file", show_default=False)],
) -> None:
    """Describe a geometry: type, validity, counts, bounds and orientation."""
    state: CliState = ctx.obj
    geometry = _load(input_file)
    if not state.quiet:
        print_header(__version__)
    print_geometry_info(str(input_file), geometry)


@app.command()
def buffer(
    ctx: typer.Context,
    input_file: Annotated[Path, typer.Argument(help="WKT or GeoJSON file", show_default=False)],
    distance: Annotated[
        float,
        typer.Option("--distance", "-d", help="Offset distance (negative shrinks)"),
    ],
    cap: Annotated[
        CapStyle,
        typer.Option("--cap", help="Line end cap style", case_sensitive=False),
    ] = CapStyle.DEFAULT,
    join: Annotated[
        JoinStyle,
        typer.Option("--join", help="Corner join style", case_sensitive=False),
    ] = JoinStyle.ROUND,
    segments: Annotated[
        int,
        typer.Option("--segments", "-s", help="Segments per quarter circle (0 = default)", min=0),
    ] = 0,
    mitre_limit: Annotated[
        float,
        typer.Option("--mitre-limit", help="Mitre length ratio limit", click_type=click.FloatRange(min=0.0, min_open=True)),
    ] = 5.0,
    single_sided: Annotated[
        bool,
        typer.Option("--single-sided", help="Offset only one side of a line"),
    ] = False,
    right: Annotated[
        bool,
        typer.Option("--right", help="With --single-sided, offset the right side"),
    ] = False,
    output: OutputOption = None,
) -> None:
    """Grow or shrink a geometry by a distance."""
    state: CliState = ctx.obj
    geometry = _load(input_file)
    params = BufferParameters(
        cap_style=cap,
        join_style=join,
        corner_segs=segments,
        mitre_limit=mitre_limit,
        single_sided=single_sided,
        left_side=not right,
    )
    ops = _operations(state)
    if not state.quiet:
        print_step(f"Buffering by {distance:g}")
    _finish(state, ops, "Buffer", ops.buffer(geometry, distance, params), output)


@app.command()
def crop(
    ctx: typer.Context,
    input_file: Annotated[Path, typer.Argument(help="WKT or GeoJSON file", show_default=False)],
    polygon: Annotated[
        Path | None,
        typer.Option("--polygon", "-p", help="File holding the clipping polygon"),
    ] = None,
    bounds: Annotated[
        str | None,
        typer.Option("--bounds", "-b", help="Clipping box as min_x,min_y,max_x,max_y"),
    ] = None,
    output: OutputOption = None,
) -> None:
    """Keep the part of a geometry inside a polygon or box."""
    state: CliState = ctx.obj
    if (polygon is None) == (bounds is None):
        print_error("Provide exactly one of --polygon or --bounds")
        raise typer.Exit(code=1)

    geometry = _load(input_file)
    region = _load(polygon) if polygon is not None else _parse_bounds(bounds or "")
    ops = _operations(state)
    if not state.quiet:
        print_step("Cropping")
    _finish(state, ops, "Crop", ops.crop(geometry, region), output)  # type: ignore[arg-type]


@app.command()
def union(
    ctx: typer.Context,
    first: Annotated[Path, typer.Argument(help="First geometry file", show_default=False)],
    second: Annotated[Path, typer.Argument(help="Second geometry file", show_default=False)],
    output: OutputOption = None,
) -> None:
    """Union of two geometries."""
    state: CliState = ctx.obj
    a, b = _load(first), _load(second)
    ops = _operations(state)
    if not state.quiet:
        print_step("Computing union")
    _finish(state, ops, "Union", ops.geounion(a, b), output)


@app.command()
def difference(
    ctx: typer.Context,
    first: Annotated[Path, typer.Argument(help="Geometry file", show_default=False)],
    polygon: Annotated[Path, typer.Argument(help="Polygon to subtract", show_default=False)],
    output: OutputOption = None,
) -> None:
    """Subtract a polygon from a geometry."""
    state: CliState = ctx.obj
    a, b = _load(first), _load(polygon)
    ops = _operations(state)
    if not state.quiet:
        print_step("Computing difference")
    _finish(state, ops, "Difference", ops.difference(a, b), output)  # type: ignore[arg-type]


@app.command()
def intersects(
    ctx: typer.Context,
    first: Annotated[Path, typer.Argument(help="First geometry file", show_default=False)],
    second: Annotated[Path, typer.Argument(help="Second geometry file", show_default=False)],
) -> None:
    """Test whether two geometries intersect."""
    state: CliState = ctx.obj
    a, b = _load(first), _load(second)
    result = _operations(state).intersects(a, b)

    if result is IntersectionResult.UNAVAILABLE:
        print_error("Intersection test failed", "No geometry engine is available")
        raise typer.Exit(code=1)
    if result is IntersectionResult.INVALID:
        print_error("Intersection test failed", "An input geometry is invalid")
        raise typer.Exit(code=1)

    console.print(result.value)


@app.command()
def clean(
    ctx: typer.Context,
    input_file: Annotated[Path, typer.Argument(help="WKT or GeoJSON file", show_default=False)],
    tolerance: Annotated[
        float | None,
        typer.Option("--tolerance", "-t", help="Colinear point tolerance", min=0.0),
    ] = None,
    rewind: Annotated[
        bool,
        typer.Option("--rewind", help="Wind boundaries CCW and holes CW"),
    ] = False,
    output: OutputOption = None,
) -> None:
    """Remove duplicate and colinear points."""
    state: CliState = ctx.obj
    geometry = _load(input_file)
    before = geometry.total_point_count()

    if tolerance is None:
        tolerance = state.settings.geometry.colinear_tolerance
    geometry.remove_duplicates()
    geometry.remove_colinear_points(tolerance)
    if rewind:
        geometry.rewind(Orientation.CCW)

    if not state.quiet and state.verbose:
        console.print(f"  {before} → {geometry.total_point_count()} points")
    _emit(state, geometry, output)


def _operations(state: CliState) -> SpatialOperations:
    ops = SpatialOperations(settings=state.settings)
    if not ops.is_available():
        print_error("No geometry engine available", f"Engine backend: {ops.engine.name}")
        raise typer.Exit(code=1)
    return ops


def _load(path: Path) -> Geometry:
    try:
        return read_geometry(path)
    except FileNotFoundError:
        print_error(
            f"Input file not found: {path}",
            details=f"The file '{path}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1) from None
    except GeometryReadError as e:
        print_error(f"Could not read geometry: {e.reason}")
        raise typer.Exit(code=1) from None


def _parse_bounds(text: str) -> Bounds:
    try:
        min_x, min_y, max_x, max_y = (float(v) for v in text.split(","))
    except ValueError:
        print_error(f"Invalid bounds: {text}", details="Expected min_x,min_y,max_x,max_y")
        raise typer.Exit(code=1) from None
    return Bounds.from_2d(min_x, min_y, max_x, max_y)


def _finish(
    state: CliState,
    ops: SpatialOperations,
    name: str,
    result: OperationResult,
    output: Path | None,
) -> None:
    if not result or result.geometry is None:
        print_error(f"{name} failed", result.reason)
        raise typer.Exit(code=1)

    if state.verbose:
        print_stats(ops.stats)
    _emit(state, result.geometry, output)


def _emit(state: CliState, geometry: Geometry, output: Path | None) -> None:
    if output is None:
        print_geometry_text(dump_wkt(geometry))
        return

    try:
        write_geometry(output, geometry)
    except GeometryWriteError as e:
        print_error(f"Could not write geometry: {e.reason}")
        raise typer.Exit(code=1) from None

    if not state.quiet:
        print_success(f"{geometry.type.value} written", str(output))


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
