# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Dual-sink fatal error reporting.

A fatal input error is written, identically, to the persistent echo file and
to the interactive console, and then the run ends with ``EXIT_FAILURE``. The
exit function is injected so the contract can be exercised in tests without
ending the test process.

Usage::

    reporter = ErrorReporter()
    with reporter.fatal_on_error("reading skyview grid"):
        skyview = load_skyview(path, context)
"""

import logging
import sys
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from rastergrid.core.constants import EXIT_FAILURE
from rastergrid.core.exceptions import RasterInputError
from rastergrid.reporting.echo import CONSOLE_LOGGER_NAME, ECHO_LOGGER_NAME

logger = logging.getLogger(__name__)


def _flush(sink: logging.Logger) -> None:
    for handler in sink.handlers:
        handler.flush()


class ErrorReporter:
    """
    Writes fatal messages to the echo and console sinks, then exits.

    Args:
        echo: Persistent log sink (defaults to the ``rastergrid.echo`` logger)
        console: Interactive sink (defaults to the ``rastergrid.console`` logger)
        exit_func: Called with the exit status after reporting (default ``sys.exit``)
    """

    def __init__(
        self,
        echo: Optional[logging.Logger] = None,
        console: Optional[logging.Logger] = None,
        exit_func: Callable[[int], None] = sys.exit,
    ):
        self.echo = echo if echo is not None else logging.getLogger(ECHO_LOGGER_NAME)
        self.console = console if console is not None else logging.getLogger(CONSOLE_LOGGER_NAME)
        self.exit_func = exit_func

    def report_fatal(self, message: str) -> None:
        """Write ``message`` to both sinks and terminate the run."""
        for sink in (self.echo, self.console):
            sink.error(message)
            _flush(sink)
        self.exit_func(EXIT_FAILURE)

    def report_error(self, error: RasterInputError) -> None:
        """Report a raster input error through :meth:`report_fatal`."""
        self.report_fatal("\n".join(error.report_lines()))

    @contextmanager
    def fatal_on_error(self, operation: str) -> Iterator[None]:
        """
        Report any RasterInputError raised in the block as fatal.

        If the injected exit function returns, the error is re-raised.
        """
        try:
            yield
        except RasterInputError as exc:
            logger.debug(f"Fatal error during {operation}: {exc}")
            self.report_error(exc)
            raise
