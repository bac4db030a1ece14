# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Configuration models for rastergrid.

Contains the simulation grid context every raster input must match, the
loader settings, and the root RasterGridConfig that groups them. Models use
flat upper-case aliases so they can be populated straight from a flat YAML
file, and are frozen so a loaded context cannot change under a running load.
"""

from typing import Any, Dict, Mapping, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from rastergrid.core.constants import GridFileFormat

# Standard ConfigDict for all config models
FROZEN_CONFIG = ConfigDict(extra='allow', populate_by_name=True, frozen=True)


class GridContext(BaseModel):
    """Authoritative simulation grid: row count, column count and square cell size"""
    model_config = FROZEN_CONFIG

    rows: int = Field(alias='GRID_ROWS')
    columns: int = Field(alias='GRID_COLUMNS')
    cell_size: float = Field(alias='GRID_CELL_SIZE')

    @field_validator('rows', 'columns')
    @classmethod
    def validate_positive_counts(cls, v, info):
        """Ensure grid counts are positive"""
        if v <= 0:
            raise ValueError(f"{info.field_name} must be positive, got {v}")
        return v

    @field_validator('cell_size')
    @classmethod
    def validate_cell_size(cls, v):
        """Ensure cell size is positive"""
        if v <= 0:
            raise ValueError(f"GRID_CELL_SIZE must be positive, got {v}")
        return v

    @property
    def dx(self) -> float:
        return self.cell_size

    @property
    def dy(self) -> float:
        # Cells are square
        return self.cell_size

    def as_triple(self) -> Tuple[int, int, float]:
        """(rows, columns, cell_size) in the order used by dimension reports."""
        return (self.rows, self.columns, self.cell_size)


class LoaderConfig(BaseModel):
    """Raster loader settings: echo file and header handling"""
    model_config = FROZEN_CONFIG

    echo_file: str = Field(default='echo.out', alias='ECHO_FILE')
    echo_cell_values: bool = Field(default=True, alias='ECHO_CELL_VALUES')
    max_header_size: int = Field(default=GridFileFormat.MAX_HEADER_SIZE, alias='MAX_HEADER_SIZE')

    @field_validator('max_header_size')
    @classmethod
    def validate_header_size(cls, v):
        """Ensure at least one header character is kept"""
        if v < 1:
            raise ValueError(f"MAX_HEADER_SIZE must be at least 1, got {v}")
        return v


class RasterGridConfig(BaseModel):
    """Root configuration: grid context, loader settings and named raster inputs"""
    model_config = FROZEN_CONFIG

    grid: GridContext
    loader: LoaderConfig = Field(default_factory=LoaderConfig)
    inputs: Dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_flat(cls, flat: Mapping[str, Any]) -> 'RasterGridConfig':
        """
        Build the hierarchical config from a flat upper-case mapping.

        ``<NAME>_FILE`` keys (other than ``ECHO_FILE``) become named raster
        inputs, e.g. ``SKYVIEW_FILE`` is available as ``inputs['skyview']``.
        """
        inputs = {
            key[:-len('_FILE')].lower(): str(value)
            for key, value in flat.items()
            if key.endswith('_FILE') and key != 'ECHO_FILE' and value is not None
        }
        return cls(
            grid=GridContext.model_validate(flat),
            loader=LoaderConfig.model_validate(flat),
            inputs=inputs,
        )

    def input_path(self, name: str) -> str:
        """Path of a named raster input, e.g. ``input_path('skyview')``."""
        try:
            return self.inputs[name.lower()]
        except KeyError:
            from rastergrid.core.exceptions import ConfigurationError
            raise ConfigurationError(
                f"No path configured for raster input '{name}' "
                f"(expected key {name.upper()}_FILE)"
            ) from None
