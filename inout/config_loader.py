# inout/config_loader.py
"""
Load and validate YAML viewer configurations.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from cerberus import Validator

from core.exceptions import ConfigError
from frontend.utils import constants as C


def _optional_float(value: Any) -> Optional[float]:
    return None if value is None else float(value)


def _range_rule(default: List[float]) -> Dict[str, Any]:
    return {
        'type': 'list',
        'schema': {'type': 'float', 'coerce': float},
        'minlength': 2,
        'maxlength': 2,
        'default': list(default),
    }


# Cerberus schema for the viewer configuration
CONFIG_SCHEMA: Dict[str, Any] = {
    'server': {
        'type': 'dict',
        'schema': {
            'url': {'type': 'string', 'empty': False, 'default': C.DEFAULT_SERVER_URL},
            'path': {'type': 'string', 'default': C.DEFAULT_RPC_PATH},
            'timeout': {'type': 'float', 'coerce': _optional_float, 'min': 0.0, 'nullable': True, 'default': C.DEFAULT_TIMEOUT},
        }
    },
    'view': {
        'type': 'dict',
        'schema': {
            'width': {'type': 'integer', 'coerce': int, 'min': 100, 'default': C.CANVAS_WIDTH},
            'height': {'type': 'integer', 'coerce': int, 'min': 100, 'default': C.CANVAS_HEIGHT},
            'margin': {'type': 'integer', 'coerce': int, 'min': 0, 'default': C.CANVAS_MARGIN},
            'wavelength_range': _range_rule(C.WAVELENGTH_RANGE),
            'intensity_range': _range_rule(C.INTENSITY_RANGE),
            'band_reserve': {'type': 'integer', 'coerce': int, 'min': 0, 'default': C.BAND_RESERVE},
            'band_offset': {'type': 'integer', 'coerce': int, 'min': 0, 'default': C.BAND_OFFSET},
            'band_span': {'type': 'integer', 'coerce': int, 'min': 1, 'default': C.BAND_SPAN},
            'gamma': {'type': 'float', 'coerce': float, 'min': 0.0, 'default': C.SPECTRUM_GAMMA},
            'value_scale': {'type': 'float', 'coerce': float, 'default': C.VALUE_SCALE},
            'refresh_interval': {'type': 'float', 'coerce': float, 'min': 0.0, 'default': C.REFRESH_INTERVAL},
        }
    },
    'logging': {
        'type': 'dict',
        'schema': {
            'level': {'type': 'string', 'allowed': ['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                      'coerce': str.upper, 'default': 'INFO'},
            'file': {'type': 'string', 'nullable': True, 'default': None},
        }
    },
}


@dataclass
class ServerConfig:
    url: str = C.DEFAULT_SERVER_URL
    path: str = C.DEFAULT_RPC_PATH
    timeout: Optional[float] = C.DEFAULT_TIMEOUT


@dataclass
class ViewConfig:
    width: int = C.CANVAS_WIDTH
    height: int = C.CANVAS_HEIGHT
    margin: int = C.CANVAS_MARGIN
    wavelength_range: List[float] = field(default_factory=lambda: list(C.WAVELENGTH_RANGE))
    intensity_range: List[float] = field(default_factory=lambda: list(C.INTENSITY_RANGE))
    band_reserve: int = C.BAND_RESERVE
    band_offset: int = C.BAND_OFFSET
    band_span: int = C.BAND_SPAN
    gamma: float = C.SPECTRUM_GAMMA
    value_scale: float = C.VALUE_SCALE
    refresh_interval: float = C.REFRESH_INTERVAL


@dataclass
class LoggingConfig:
    level: str = 'INFO'
    file: Optional[str] = None


@dataclass
class ViewerConfig:
    server: ServerConfig = field(default_factory=ServerConfig)
    view: ViewConfig = field(default_factory=ViewConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def parse_config(raw: Optional[Dict[str, Any]]) -> ViewerConfig:
    """
    Validate a configuration mapping and fill in defaults.

    Raises:
        ConfigError: If schema validation fails.
    """
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Viewer config must be a mapping, got {type(raw).__name__}")
    raw = dict(raw)
    for section in CONFIG_SCHEMA:
        if raw.get(section) is None:
            raw[section] = {}

    validator = Validator(CONFIG_SCHEMA, allow_unknown=False)
    if not validator.validate(raw):
        raise ConfigError(f"Config schema validation errors: {validator.errors}")
    doc: Dict[str, Any] = validator.document

    view = ViewConfig(**doc['view'])
    if view.wavelength_range[0] >= view.wavelength_range[1]:
        raise ConfigError(f"wavelength_range must be increasing: {view.wavelength_range}")
    if view.intensity_range[0] >= view.intensity_range[1]:
        raise ConfigError(f"intensity_range must be increasing: {view.intensity_range}")
    return ViewerConfig(
        server=ServerConfig(**doc['server']),
        view=view,
        logging=LoggingConfig(**doc['logging']),
    )


def load_config(path: Optional[Path] = None) -> ViewerConfig:
    """
    Load a YAML viewer configuration file. With no path, return the defaults.

    Raises:
        ConfigError: If the file cannot be read or fails validation.
    """
    if path is None:
        return parse_config({})
    path = Path(path)
    try:
        raw = yaml.safe_load(path.read_text())
    except Exception as e:
        raise ConfigError(f"Failed to read config YAML '{path}': {e}")
    return parse_config(raw)
