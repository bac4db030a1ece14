"""
Configuration for rastergrid.

Type-safe, frozen pydantic models populated from flat upper-case keys
(``GRID_ROWS``, ``ECHO_FILE``, ``SKYVIEW_FILE``...) and a YAML loader that
layers environment variables and CLI overrides on top of the file.
"""

from .loader import config_from_dict, config_from_overrides, load_config
from .models import FROZEN_CONFIG, GridContext, LoaderConfig, RasterGridConfig

__all__ = [
    'FROZEN_CONFIG',
    'GridContext',
    'LoaderConfig',
    'RasterGridConfig',
    'config_from_dict',
    'config_from_overrides',
    'load_config',
]
