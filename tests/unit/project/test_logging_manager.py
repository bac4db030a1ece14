"""Tests for LoggingManager sink wiring."""

import logging

import pytest

from rastergrid.core.config import LoaderConfig, RasterGridConfig
from rastergrid.core.exceptions import ConfigurationError
from rastergrid.project.logging_manager import LoggingManager


@pytest.fixture
def manager(tmp_path):
    lm = LoggingManager(LoaderConfig(ECHO_FILE=str(tmp_path / "run" / "echo.out")))
    yield lm
    lm.close()


def test_echo_file_created_in_missing_directory(manager, tmp_path):
    assert manager.echo_path == tmp_path / "run" / "echo.out"
    assert manager.echo_path.parent.is_dir()


def test_echo_messages_written_to_file(manager):
    manager.echo_writer().header("basin A skyview")
    for handler in manager.echo_logger.handlers:
        handler.flush()
    assert "basin A skyview" in manager.echo_path.read_text()


def test_echo_appends(tmp_path):
    path = tmp_path / "echo.out"
    path.write_text("previous run\n")
    with LoggingManager(echo_file=path) as lm:
        lm.echo_logger.info("this run")
    assert path.read_text() == "previous run\nthis run\n"


def test_console_goes_to_stdout(tmp_path, capsys):
    with LoggingManager(echo_file=tmp_path / "echo.out") as lm:
        lm.console_logger.info("banner")
    assert "banner" in capsys.readouterr().out


def test_fatal_error_on_both_sinks(tmp_path, capsys):
    exits = []
    with LoggingManager(echo_file=tmp_path / "echo.out") as lm:
        lm.error_reporter(exit_func=exits.append).report_fatal("Error! Can't open X File : x")
    assert exits == [1]
    assert capsys.readouterr().out.count("Error! Can't open X File : x") == 1
    assert (tmp_path / "echo.out").read_text() == "Error! Can't open X File : x\n"


def test_accepts_root_config(tmp_path):
    config = RasterGridConfig.from_flat({
        "GRID_ROWS": 1, "GRID_COLUMNS": 1, "GRID_CELL_SIZE": 1.0,
        "ECHO_FILE": str(tmp_path / "root_echo.out"),
    })
    with LoggingManager(config) as lm:
        assert lm.echo_path == tmp_path / "root_echo.out"


def test_debug_mode_level(tmp_path):
    with LoggingManager(echo_file=tmp_path / "echo.out", debug_mode=True) as lm:
        assert lm.logger.level == logging.DEBUG


def test_close_restores_loggers(tmp_path):
    echo_logger = logging.getLogger("rastergrid.echo")
    before_handlers = list(echo_logger.handlers)
    before_propagate = echo_logger.propagate

    lm = LoggingManager(echo_file=tmp_path / "echo.out")
    assert echo_logger.propagate is False
    lm.close()

    assert echo_logger.handlers == before_handlers
    assert echo_logger.propagate is before_propagate


def test_close_restores_levels(tmp_path):
    package_logger = logging.getLogger("rastergrid")
    echo_logger = logging.getLogger("rastergrid.echo")
    before = (package_logger.level, echo_logger.level)

    with LoggingManager(echo_file=tmp_path / "echo.out", debug_mode=True):
        assert package_logger.level == logging.DEBUG

    assert (package_logger.level, echo_logger.level) == before


def test_unusable_echo_file_is_configuration_error(tmp_path):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("")
    echo_logger = logging.getLogger("rastergrid.echo")
    before_handlers = list(echo_logger.handlers)
    before_propagate = echo_logger.propagate

    with pytest.raises(ConfigurationError, match="echo file"):
        LoggingManager(echo_file=blocker / "echo.out")

    assert echo_logger.handlers == before_handlers
    assert echo_logger.propagate is before_propagate
