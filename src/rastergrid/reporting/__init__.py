"""Echo file output and dual-sink fatal error reporting."""

from .echo import CONSOLE_LOGGER_NAME, ECHO_LOGGER_NAME, EchoWriter, format_banner
from .error_reporter import ErrorReporter

__all__ = [
    'CONSOLE_LOGGER_NAME',
    'ECHO_LOGGER_NAME',
    'EchoWriter',
    'ErrorReporter',
    'format_banner',
]
