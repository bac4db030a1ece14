"""End-to-end tests for the rastergrid command-line interface."""

import pytest

from rastergrid.cli import main

pytestmark = pytest.mark.integration


@pytest.fixture
def config_file(tmp_path, example_grid):
    path = tmp_path / "run.yaml"
    path.write_text(
        "GRID_ROWS: 2\n"
        "GRID_COLUMNS: 3\n"
        "GRID_CELL_SIZE: 10.0\n"
        f"ECHO_FILE: {tmp_path / 'echo.out'}\n"
        f"SKYVIEW_FILE: {example_grid}\n"
    )
    return path


def test_load_with_flags(example_grid, tmp_path, capsys):
    echo = tmp_path / "echo.out"
    status = main(["load", str(example_grid), "--rows", "2", "--columns", "3",
                   "--cell-size", "10.0", "--echo-file", str(echo)])
    assert status == 0

    out = capsys.readouterr().out
    assert "Reading DEM Skyview File" in out
    assert "Loaded DEM Skyview grid: 2 rows x 3 columns" in out

    text = echo.read_text()
    assert "DEM Grid Cell Skyview (in Degrees)" in text
    assert "\ntest\n" in text
    assert "   Grid Rows =     2" in text
    assert "      4.0000      5.0000      6.0000" in text


def test_load_from_config(config_file, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main(["load", "--config", str(config_file)]) == 0
    assert "      1.0000      2.0000      3.0000" in (tmp_path / "echo.out").read_text()


def test_no_cell_echo(config_file, tmp_path):
    assert main(["load", "--config", str(config_file), "--no-cell-echo"]) == 0
    text = (tmp_path / "echo.out").read_text()
    assert "Characteristics" in text
    assert "1.0000" not in text


def test_dimension_mismatch_exits_1(config_file, example_grid, tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["load", str(example_grid), "--config", str(config_file), "--cell-size", "5.0"])
    assert excinfo.value.code == 1

    out = capsys.readouterr().out
    assert "DEM Skyview File Error:" in out
    assert "cell size =      10.0000" in out
    echo = (tmp_path / "echo.out").read_text()
    assert "  dx =       5.0000   dy =       5.0000   cell size =      10.0000" in echo


def test_missing_file_exits_1(tmp_path, capsys):
    missing = tmp_path / "missing.asc"
    with pytest.raises(SystemExit) as excinfo:
        main(["load", str(missing), "--rows", "2", "--columns", "3", "--cell-size", "10",
              "--echo-file", str(tmp_path / "echo.out")])
    assert excinfo.value.code == 1
    message = f"Error! Can't open DEM Skyview File : {missing}"
    assert message in capsys.readouterr().out
    assert message in (tmp_path / "echo.out").read_text()


def test_custom_title(example_grid, tmp_path, capsys):
    assert main(["load", str(example_grid), "--rows", "2", "--columns", "3", "--cell-size", "10",
                 "--echo-file", str(tmp_path / "echo.out"), "--title", "Canopy Skyview"]) == 0
    assert "Reading Canopy Skyview File" in capsys.readouterr().out


def test_missing_grid_context_is_usage_error(example_grid, capsys):
    assert main(["load", str(example_grid)]) == 2
    assert "Invalid configuration" in capsys.readouterr().err


def test_load_from_environment(example_grid, tmp_path, monkeypatch):
    monkeypatch.setenv("RASTERGRID_GRID_ROWS", "2")
    monkeypatch.setenv("RASTERGRID_GRID_COLUMNS", "3")
    monkeypatch.setenv("RASTERGRID_GRID_CELL_SIZE", "10.0")
    echo = tmp_path / "echo.out"
    assert main(["load", str(example_grid), "--echo-file", str(echo)]) == 0
    assert "   Grid Columns =     3" in echo.read_text()


def test_flags_override_environment(example_grid, tmp_path, monkeypatch):
    monkeypatch.setenv("RASTERGRID_GRID_ROWS", "5")
    assert main(["load", str(example_grid), "--rows", "2", "--columns", "3", "--cell-size", "10",
                 "--echo-file", str(tmp_path / "echo.out")]) == 0


def test_unusable_echo_file_is_usage_error(example_grid, tmp_path, capsys):
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    status = main(["load", str(example_grid), "--rows", "2", "--columns", "3", "--cell-size", "10",
                   "--echo-file", str(blocker / "echo.out")])
    assert status == 2
    assert "❌" in capsys.readouterr().err


def test_info(example_grid, capsys):
    assert main(["info", str(example_grid)]) == 0
    out = capsys.readouterr().out
    assert "Header:       test" in out
    assert "columns:      3  (NCOLS)" in out
    assert "cell_size:    10.0  (CELLSIZE)" in out
    assert "Cells:        6" in out


def test_info_missing_file(tmp_path, capsys):
    assert main(["info", str(tmp_path / "missing.asc")]) == 1
    assert "Can't open" in capsys.readouterr().err


def test_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])
    assert excinfo.value.code == 0
    assert "rastergrid" in capsys.readouterr().out
