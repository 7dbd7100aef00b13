"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from mapgeom.domain import Geometry, Polygon, Ring
from mapgeom.utils import OperationStats

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]mapgeom[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_geometry_info(source: str, geometry: Geometry) -> None:
    """Print a summary table of a geometry.

    Args:
        source: Where the geometry came from
        geometry: Geometry to describe
    """
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold")
    table.add_column()

    bounds = geometry.bounds()
    table.add_row("Type", geometry.type.value)
    table.add_row("Component type", geometry.component_type().value)
    table.add_row("Valid", "yes" if geometry.is_valid() else "no")
    table.add_row("Points", f"{geometry.total_point_count():,}")
    table.add_row("Geometries", f"{geometry.num_geometries():,}")
    table.add_row("Length", f"{geometry.length():.6g}")
    if bounds.is_valid():
        table.add_row(
            "Bounds",
            f"({bounds.min_x:.6g}, {bounds.min_y:.6g}) {SYM_DOT} ({bounds.max_x:.6g}, {bounds.max_y:.6g})",
        )
    if isinstance(geometry, (Ring, Polygon)):
        table.add_row("Orientation", geometry.orientation().value)
        table.add_row("Signed area", f"{geometry.signed_area_2d():.6g}")
    if isinstance(geometry, Polygon):
        table.add_row("Holes", str(len(geometry.holes)))

    line = Text("  ")
    line.append(source, style="bold")
    console.print(line)
    console.print(table)


def print_geometry_text(text: str) -> None:
    """Print geometry text (WKT/GeoJSON) without markup processing."""
    console.print(text, markup=False, highlight=False, soft_wrap=True)


def print_success(message: str, output_path: str | None = None) -> None:
    """Print success message.

    Args:
        message: Summary of what succeeded
        output_path: File the result was written to, if any
    """
    console.print(f"\n[bold green]{SYM_OK} {message}[/bold green]")
    if output_path:
        line = Text("  ")
        line.append(output_path, style="bold")
        console.print(line)


def print_stats(stats: OperationStats) -> None:
    """Print operation statistics (verbose mode)."""
    console.print(
        f"  {stats.succeeded_count} succeeded {SYM_DOT} {stats.failed_count} failed "
        f"{SYM_DOT} {stats.avg_duration_ms:.1f}ms avg"
    )


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
