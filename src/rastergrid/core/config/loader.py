# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
YAML configuration loading.

Loading precedence (highest to lowest):
1. Programmatic / CLI overrides
2. Environment variables (RASTERGRID_*)
3. Config file (YAML)
4. Model defaults
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import ValidationError

from rastergrid.core.config.models import RasterGridConfig
from rastergrid.core.exceptions import ConfigurationError, require

ENV_PREFIX = "RASTERGRID_"


def _normalize_key(key: str) -> str:
    return str(key).strip().upper()


def _load_env_overrides(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Collect ``RASTERGRID_<KEY>`` variables as flat config keys."""
    environ = os.environ if environ is None else environ
    return {
        _normalize_key(name[len(ENV_PREFIX):]): value
        for name, value in environ.items()
        if name.startswith(ENV_PREFIX) and len(name) > len(ENV_PREFIX)
    }


def _format_validation_error(error: ValidationError) -> str:
    lines = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ()))
        lines.append(f"  {location}: {item.get('msg')}")
    return "\n".join(lines)


def load_config(
    path: Path,
    overrides: Optional[Mapping[str, Any]] = None,
    *,
    use_env: bool = True,
) -> RasterGridConfig:
    """
    Load a flat YAML configuration file into a RasterGridConfig.

    Args:
        path: Path to configuration YAML file
        overrides: Flat key/value overrides (CLI flags), applied last
        use_env: Whether to apply RASTERGRID_* environment variables

    Returns:
        Validated, frozen RasterGridConfig

    Raises:
        ConfigurationError: If the file is missing, unreadable, not a mapping,
            or fails validation
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigurationError(f"Configuration file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            file_config = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Cannot parse configuration file {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigurationError(f"Cannot read configuration file {path}: {exc}") from exc

    require(
        isinstance(file_config, dict),
        f"Configuration file {path} must contain a mapping, got {type(file_config).__name__}",
    )

    config_dict = {_normalize_key(k): v for k, v in file_config.items()}
    if use_env:
        config_dict.update(_load_env_overrides())
    if overrides:
        config_dict.update({_normalize_key(k): v for k, v in overrides.items() if v is not None})

    return config_from_dict(config_dict, source=str(path))


def config_from_overrides(
    overrides: Optional[Mapping[str, Any]] = None,
    *,
    use_env: bool = True,
) -> RasterGridConfig:
    """Build a configuration without a file: environment variables, then overrides."""
    config_dict: Dict[str, Any] = _load_env_overrides() if use_env else {}
    if overrides:
        config_dict.update({_normalize_key(k): v for k, v in overrides.items() if v is not None})
    source = "environment and command line" if use_env else "command line"
    return config_from_dict(config_dict, source=source)


def config_from_dict(flat: Mapping[str, Any], source: str = "<dict>") -> RasterGridConfig:
    """Validate a flat mapping, converting pydantic errors to ConfigurationError."""
    try:
        return RasterGridConfig.from_flat({_normalize_key(k): v for k, v in flat.items()})
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid configuration in {source}:\n{_format_validation_error(exc)}"
        ) from exc
