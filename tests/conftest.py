"""
Root conftest.py - fixtures shared across all tests.

Puts ``src/`` on the path so the tests run from a source checkout, and
provides grid contexts and a factory for writing raster grid files.
"""

from pathlib import Path
import sys

import pytest

SRC_DIR = Path(__file__).parent.parent.resolve() / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from rastergrid.core.config import GridContext  # noqa: E402


EXAMPLE_GRID = (
    "test\n"
    "NCOLS 3 NROWS 2 XLLCORNER 0 YLLCORNER 0 CELLSIZE 10.0 NODATA -9999\n"
    "1.0 2.0 3.0 4.0 5.0 6.0\n"
)


@pytest.fixture
def grid_context():
    """2 rows x 3 columns, 10 m cells."""
    return GridContext(rows=2, columns=3, cell_size=10.0)


@pytest.fixture
def write_grid(tmp_path):
    """Factory writing grid text to a file under tmp_path and returning its path."""
    def _write(text: str, name: str = "grid.asc") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def example_grid(write_grid):
    """The 2x3 example grid holding 1.0 .. 6.0 row-major."""
    return write_grid(EXAMPLE_GRID, "skyview.asc")
