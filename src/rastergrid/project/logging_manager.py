# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Logging setup for a raster loading run.

Three loggers are configured:

- ``rastergrid.echo``: the echo file, plain messages appended to disk
- ``rastergrid.console``: plain messages on stdout (banner, fatal errors)
- ``rastergrid``: package diagnostics on stderr

Echo and console do not propagate, so a fatal message appears exactly once on
each sink.
"""

import logging
import sys
from pathlib import Path
from typing import List, Tuple, Union

from rastergrid.core.config import LoaderConfig, RasterGridConfig
from rastergrid.core.exceptions import ConfigurationError, raster_error_handler
from rastergrid.reporting.echo import CONSOLE_LOGGER_NAME, ECHO_LOGGER_NAME, EchoWriter
from rastergrid.reporting.error_reporter import ErrorReporter

PACKAGE_LOGGER_NAME = "rastergrid"


class LoggingManager:
    """
    Attaches handlers for the echo file, console and diagnostics loggers.

    Args:
        config: RasterGridConfig or LoaderConfig providing ``echo_file``
        debug_mode: Emit package diagnostics at DEBUG instead of INFO
        echo_file: Explicit echo file path, overrides the configured one
    """

    def __init__(
        self,
        config: Union[RasterGridConfig, LoaderConfig, None] = None,
        debug_mode: bool = False,
        echo_file: Union[str, Path, None] = None,
    ):
        if isinstance(config, RasterGridConfig):
            config = config.loader
        settings = config if config is not None else LoaderConfig()
        self.debug_mode = debug_mode
        self.echo_path = Path(echo_file if echo_file is not None else settings.echo_file)
        self._installed: List[Tuple[logging.Logger, logging.Handler]] = []
        self._propagate: List[Tuple[logging.Logger, bool]] = []
        self._levels: List[Tuple[logging.Logger, int]] = []

        self.logger = logging.getLogger(PACKAGE_LOGGER_NAME)
        self.echo_logger = logging.getLogger(ECHO_LOGGER_NAME)
        self.console_logger = logging.getLogger(CONSOLE_LOGGER_NAME)
        self._setup()

    def _install(self, target: logging.Logger, handler: logging.Handler,
                 fmt: str, level: int) -> None:
        handler.setFormatter(logging.Formatter(fmt))
        handler.setLevel(level)
        target.addHandler(handler)
        self._levels.append((target, target.level))
        target.setLevel(level)
        self._installed.append((target, handler))

    def _isolate(self, target: logging.Logger) -> None:
        self._propagate.append((target, target.propagate))
        target.propagate = False

    def _setup(self) -> None:
        with raster_error_handler(f"opening echo file {self.echo_path}", error_type=ConfigurationError):
            self.echo_path.parent.mkdir(parents=True, exist_ok=True)
            echo_handler = logging.FileHandler(self.echo_path, mode='a', encoding='utf-8')

        self._isolate(self.echo_logger)
        self._install(
            self.echo_logger,
            echo_handler,
            '%(message)s',
            logging.INFO,
        )

        self._isolate(self.console_logger)
        self._install(self.console_logger, logging.StreamHandler(sys.stdout), '%(message)s', logging.INFO)

        level = logging.DEBUG if self.debug_mode else logging.INFO
        self._install(
            self.logger,
            logging.StreamHandler(sys.stderr),
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            level,
        )
        self.logger.debug(f"Echo file: {self.echo_path}")

    def echo_writer(self) -> EchoWriter:
        return EchoWriter(self.echo_logger)

    def error_reporter(self, exit_func=None) -> ErrorReporter:
        """ErrorReporter bound to this run's echo and console loggers."""
        if exit_func is None:
            return ErrorReporter(self.echo_logger, self.console_logger)
        return ErrorReporter(self.echo_logger, self.console_logger, exit_func=exit_func)

    def close(self) -> None:
        """Remove and close installed handlers, then restore propagation and levels."""
        for target, handler in reversed(self._installed):
            target.removeHandler(handler)
            handler.close()
        self._installed.clear()
        for target, propagate in self._propagate:
            target.propagate = propagate
        self._propagate.clear()
        for target, level in reversed(self._levels):
            target.setLevel(level)
        self._levels.clear()

    def __enter__(self) -> 'LoggingManager':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

