"""Unit tests for the command-line interface."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from mapgeom import __version__
from mapgeom.cli import app
from mapgeom.domain import Orientation, Polygon
from mapgeom.io import domain_to_shapely, read_geometry

runner = CliRunner()


def _write(tmp_path: Path, name: str, text: str) -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def square_a(tmp_path) -> Path:
    return _write(tmp_path, "a.wkt", "POLYGON ((0 0, 2 0, 2 2, 0 2, 0 0))")


@pytest.fixture
def square_b(tmp_path) -> Path:
    return _write(tmp_path, "b.wkt", "POLYGON ((1 1, 3 1, 3 3, 1 3, 1 1))")


@pytest.fixture
def far_square(tmp_path) -> Path:
    return _write(tmp_path, "far.wkt", "POLYGON ((10 10, 11 10, 11 11, 10 11, 10 10))")


def _area(path: Path) -> float:
    return domain_to_shapely(read_geometry(path)).area


class TestGlobalOptions:
    """Tests for options handled by the main callback."""

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_verbose_and_quiet_conflict(self, square_a):
        result = runner.invoke(app, ["-v", "-q", "info", str(square_a)])
        assert result.exit_code == 1
        assert "--verbose and --quiet" in result.output

    def test_log_level_case_insensitive(self, square_a):
        result = runner.invoke(app, ["--log-level", "error", "info", str(square_a)])
        assert result.exit_code == 0
        assert "polygon" in result.output

    def test_unknown_log_level_rejected(self, square_a):
        result = runner.invoke(app, ["--log-level", "LOUD", "info", str(square_a)])
        assert result.exit_code == 2
        assert not isinstance(result.exception, AttributeError)


class TestInfo:
    """Tests for the info command."""

    def test_polygon_summary(self, square_a):
        result = runner.invoke(app, ["info", str(square_a)])
        assert result.exit_code == 0
        assert "polygon" in result.output
        assert "ccw" in result.output

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["info", str(tmp_path / "missing.wkt")])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_unparseable_file(self, tmp_path):
        path = _write(tmp_path, "bad.wkt", "POLYGON ((0 0, 1")
        result = runner.invoke(app, ["info", str(path)])
        assert result.exit_code == 1
        assert "Could not read geometry" in result.output


class TestBuffer:
    """Tests for the buffer command."""

    def test_prints_wkt(self, tmp_path):
        point = _write(tmp_path, "p.wkt", "POINT (0 0)")
        result = runner.invoke(app, ["buffer", str(point), "--distance", "1"])
        assert result.exit_code == 0
        assert "POLYGON ((" in result.output

    def test_writes_output(self, tmp_path, square_a):
        out = tmp_path / "grown.wkt"
        result = runner.invoke(
            app, ["buffer", str(square_a), "-d", "1", "--join", "mitre", "-o", str(out)]
        )
        assert result.exit_code == 0
        assert _area(out) == pytest.approx(16.0)

    def test_shrink_to_nothing_fails(self, square_a):
        result = runner.invoke(app, ["buffer", str(square_a), "--distance=-5"])
        assert result.exit_code == 1
        assert "empty result" in result.output

    def test_no_engine(self, square_a):
        result = runner.invoke(app, ["--engine", "none", "buffer", str(square_a), "-d", "1"])
        assert result.exit_code == 1
        assert "No geometry engine available" in result.output

    def test_zero_mitre_limit_rejected(self, square_a):
        result = runner.invoke(app, ["buffer", str(square_a), "-d", "1", "--mitre-limit", "0"])
        assert result.exit_code == 2
        assert "ValidationError" not in result.output


class TestCrop:
    """Tests for the crop command."""

    def test_crop_by_bounds(self, tmp_path, square_a):
        out = tmp_path / "cropped.wkt"
        result = runner.invoke(app, ["crop", str(square_a), "-b", "0,0,1,1", "-o", str(out)])
        assert result.exit_code == 0
        assert _area(out) == pytest.approx(1.0)

    def test_crop_by_polygon(self, tmp_path, square_a, square_b):
        out = tmp_path / "cropped.geojson"
        result = runner.invoke(app, ["crop", str(square_a), "-p", str(square_b), "-o", str(out)])
        assert result.exit_code == 0
        assert _area(out) == pytest.approx(1.0)

    def test_requires_exactly_one_region(self, square_a, square_b):
        neither = runner.invoke(app, ["crop", str(square_a)])
        both = runner.invoke(app, ["crop", str(square_a), "-p", str(square_b), "-b", "0,0,1,1"])
        assert neither.exit_code == 1
        assert both.exit_code == 1

    def test_bad_bounds(self, square_a):
        result = runner.invoke(app, ["crop", str(square_a), "-b", "0,0,1"])
        assert result.exit_code == 1
        assert "Invalid bounds" in result.output


class TestBooleans:
    """Tests for union, difference and intersects."""

    def test_union(self, tmp_path, square_a, square_b):
        out = tmp_path / "union.wkt"
        result = runner.invoke(app, ["union", str(square_a), str(square_b), "-o", str(out)])
        assert result.exit_code == 0
        assert _area(out) == pytest.approx(7.0)

    def test_difference(self, tmp_path, square_a, square_b):
        out = tmp_path / "diff.wkt"
        result = runner.invoke(app, ["difference", str(square_a), str(square_b), "-o", str(out)])
        assert result.exit_code == 0
        assert _area(out) == pytest.approx(3.0)

    def test_intersects(self, square_a, square_b):
        result = runner.invoke(app, ["intersects", str(square_a), str(square_b)])
        assert result.exit_code == 0
        assert "intersects" in result.output

    def test_disjoint(self, square_a, far_square):
        result = runner.invoke(app, ["intersects", str(square_a), str(far_square)])
        assert result.exit_code == 0
        assert "disjoint" in result.output

    def test_intersects_no_engine(self, square_a, square_b):
        result = runner.invoke(app, ["--engine", "none", "intersects", str(square_a), str(square_b)])
        assert result.exit_code == 1


class TestClean:
    """Tests for the clean command."""

    def test_removes_duplicate_and_colinear_points(self, tmp_path):
        path = _write(tmp_path, "dirty.wkt", "POLYGON ((0 0, 0 4, 2 4, 4 4, 4 0, 4 0, 0 0))")
        out = tmp_path / "clean.wkt"
        result = runner.invoke(app, ["clean", str(path), "-o", str(out)])
        assert result.exit_code == 0

        polygon = read_geometry(out)
        assert isinstance(polygon, Polygon)
        assert len(polygon.points) == 4
        assert polygon.orientation() is Orientation.CW

    def test_rewind(self, tmp_path):
        path = _write(tmp_path, "cw.wkt", "POLYGON ((0 0, 0 4, 4 4, 4 0, 0 0))")
        out = tmp_path / "ccw.wkt"
        result = runner.invoke(app, ["-q", "clean", str(path), "--rewind", "-o", str(out)])
        assert result.exit_code == 0
        assert result.output.strip() == ""
        assert read_geometry(out).orientation() is Orientation.CCW
