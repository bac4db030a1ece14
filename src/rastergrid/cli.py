# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
rastergrid command-line interface.

Commands:
    - load: Load a raster grid against the simulation grid, echoing to the echo file
    - info: Print the header and metadata record of a grid file without validating it

Exit status is 0 on success, 1 on any fatal input error and 2 on usage or
configuration errors.
"""

import argparse
import dataclasses
import sys
from typing import Any, Dict, List, Optional

from rastergrid.core.config import RasterGridConfig, config_from_overrides, load_config
from rastergrid.core.constants import EXIT_FAILURE, GridFileFormat
from rastergrid.core.exceptions import ConfigurationError, RasterInputError
from rastergrid.io.grid_file import GridFileReader
from rastergrid.io.loaders import RASTER_INPUTS, get_input_spec, load_or_exit
from rastergrid.project.logging_manager import LoggingManager

try:
    from rastergrid.rastergrid_version import __version__
except ImportError:
    __version__ = "0+unknown"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='rastergrid',
        description='Load raster grid inputs for the watershed simulation grid.',
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    subparsers = parser.add_subparsers(dest='command', required=True)

    load = subparsers.add_parser('load', help='Load and validate a raster grid file')
    load.add_argument('path', nargs='?', default=None,
                      help='Grid file (defaults to the configured <INPUT>_FILE)')
    load.add_argument('--config', '-c', default=None, help='YAML configuration file')
    load.add_argument('--rows', type=int, default=None, help='Simulation grid rows')
    load.add_argument('--columns', type=int, default=None, help='Simulation grid columns')
    load.add_argument('--cell-size', type=float, default=None, help='Simulation grid cell size (m)')
    load.add_argument('--echo-file', default=None, help='Echo file receiving the load record')
    load.add_argument('--input', default='skyview', choices=sorted(RASTER_INPUTS),
                      help='Kind of raster input (default: skyview)')
    load.add_argument('--title', default=None, help='Override the input title used in reports')
    load.add_argument('--no-cell-echo', action='store_true',
                      help='Do not echo every cell value to the echo file')
    load.add_argument('--debug', action='store_true', help='Enable debug diagnostics')

    info = subparsers.add_parser('info', help='Print a grid file header and metadata')
    info.add_argument('path', help='Grid file')

    return parser


def _overrides(args: argparse.Namespace) -> Dict[str, Any]:
    return {
        'GRID_ROWS': args.rows,
        'GRID_COLUMNS': args.columns,
        'GRID_CELL_SIZE': args.cell_size,
        'ECHO_FILE': args.echo_file,
        'ECHO_CELL_VALUES': False if args.no_cell_echo else None,
    }


def _resolve_config(args: argparse.Namespace) -> RasterGridConfig:
    overrides = _overrides(args)
    if args.config:
        return load_config(args.config, overrides)
    return config_from_overrides(overrides)


def _run_load(args: argparse.Namespace) -> int:
    try:
        config = _resolve_config(args)
        path = args.path if args.path is not None else config.input_path(args.input)
    except ConfigurationError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 2

    spec = get_input_spec(args.input)
    if args.title:
        spec = dataclasses.replace(spec, title=args.title)

    try:
        logging_manager = LoggingManager(config, debug_mode=args.debug)
    except ConfigurationError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 2

    with logging_manager:
        buffer = load_or_exit(
            path,
            config.grid,
            spec,
            config.loader,
            reporter=logging_manager.error_reporter(),
            echo=logging_manager.echo_writer(),
            console=logging_manager.console_logger,
        )
        logging_manager.console_logger.info(
            f"Loaded {spec.title} grid: {buffer.rows} rows x {buffer.cols} columns "
            f"(echo: {logging_manager.echo_path})"
        )
    return 0


def _run_info(args: argparse.Namespace) -> int:
    reader = GridFileReader(args.path)
    try:
        with reader:
            header = reader.read_header_line()
            metadata = reader.read_metadata()
    except RasterInputError as e:
        print(f"❌ {e}", file=sys.stderr)
        return EXIT_FAILURE

    print(f"Header:       {header}")
    for label, name in zip(metadata.labels, GridFileFormat.METADATA_FIELDS):
        print(f"{name + ':':<13} {getattr(metadata, name)}  ({label})")
    print(f"Cells:        {metadata.cell_count}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == 'load':
        return _run_load(args)
    return _run_info(args)


if __name__ == "__main__":
    sys.exit(main())
