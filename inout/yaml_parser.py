# inout/yaml_parser.py
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import yaml
from cerberus import Validator

from core.exceptions import ConfigError
from utils.logging_config import get_logger, parse_level, setup_logging

logger = get_logger(__name__)

# Schema for the solve configuration file.
CONFIG_SCHEMA: Dict[str, Any] = {
    'solve': {
        'type': 'dict',
        'required': False,
        'schema': {
            'tol': {
                'type': 'number',
                'min': 0,
                'required': False,
            },
            'method': {
                'type': 'string',
                'allowed': ['lu', 'cholesky'],
                'required': False,
            },
        },
    },
    'logging': {
        'type': 'dict',
        'required': False,
        'schema': {
            'level': {
                'type': ['string', 'integer'],
                'required': False,
            },
            'file': {
                'type': 'string',
                'nullable': True,
                'required': False,
            },
        },
    },
}

@dataclass
class SolveConfig:
    """Default solve options plus logging settings."""
    options: Dict[str, Any] = field(default_factory=dict)
    log_level: int = logging.INFO
    log_file: Optional[str] = None

    def apply_logging(self) -> None:
        setup_logging(level=self.log_level, log_file=self.log_file)

def parse_config(data: Optional[Dict[str, Any]]) -> SolveConfig:
    """
    Validate an in-memory configuration mapping and build a SolveConfig.

    Raises:
        ConfigError: If the mapping does not match CONFIG_SCHEMA.
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a mapping, got {type(data).__name__}")

    v = Validator(CONFIG_SCHEMA)
    if not v.validate(data):
        logger.error("Configuration validation errors: %s", v.errors)
        raise ConfigError(f"Invalid configuration: {v.errors}")

    logging_cfg = data.get('logging') or {}
    try:
        level = parse_level(logging_cfg.get('level', logging.INFO))
    except ValueError as e:
        raise ConfigError(str(e)) from e

    options = dict(data.get('solve') or {})
    if 'tol' in options:
        options['tol'] = float(options['tol'])
    return SolveConfig(options=options, log_level=level, log_file=logging_cfg.get('file'))

def load_config(path: str) -> SolveConfig:
    """
    Load and validate a YAML solve configuration.

    Raises:
        ConfigError: If the file cannot be read, parsed or validated.
    """
    try:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read configuration '{path}': {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Malformed YAML in '{path}': {e}") from e

    config = parse_config(data)
    logger.debug("Loaded solve configuration from %s: %s", path, config.options)
    return config
