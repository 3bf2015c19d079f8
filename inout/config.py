# inout/config.py
"""
Load and validate YAML render configurations.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from cerberus import Validator

from core.exceptions import ConfigError
from utils.logging_config import get_logger

logger = get_logger(__name__)


# Cerberus schema for render configuration
RENDER_SCHEMA = {
    'expression': {'type': 'string', 'required': False, 'nullable': True},
    'render': {
        'type': 'dict',
        'required': False,
        'default': {},
        'schema': {
            'size': {'type': 'integer', 'coerce': int, 'min': 1, 'default': 16},
            'start': {'type': 'float', 'coerce': float, 'default': 0.0},
            'fps': {'type': 'float', 'coerce': float, 'min': 1e-9, 'default': 60.0},
            'frames': {'type': 'integer', 'coerce': int, 'min': 1, 'default': 1},
            'clamp': {'type': 'boolean', 'default': True},
            'workers': {'type': 'integer', 'coerce': int, 'min': 1, 'default': 1},
        }
    }
}


@dataclass
class RenderConfig:
    size: int = 16
    start: float = 0.0
    fps: float = 60.0
    frames: int = 1
    clamp: bool = True
    workers: int = 1
    expression: Optional[str] = None

    @property
    def times(self):
        """Instants at which frames are rendered."""
        return [self.start + n / self.fps for n in range(self.frames)]

    @classmethod
    def from_dict(cls, raw: Optional[Dict[str, Any]]) -> "RenderConfig":
        """
        Validate an already parsed configuration mapping.

        Raises:
            ConfigError: If the mapping does not match RENDER_SCHEMA.
        """
        validator = Validator(RENDER_SCHEMA, allow_unknown=False)
        if not validator.validate(raw or {}):
            raise ConfigError(f"Render schema validation errors: {validator.errors}")
        doc: Dict[str, Any] = validator.document
        render = doc.get('render') or {}
        return cls(
            size=render.get('size', 16),
            start=render.get('start', 0.0),
            fps=render.get('fps', 60.0),
            frames=render.get('frames', 1),
            clamp=render.get('clamp', True),
            workers=render.get('workers', 1),
            expression=doc.get('expression'),
        )


def load_render_config(path: Union[str, Path]) -> RenderConfig:
    """
    Load a YAML render configuration file, validate its schema, and return a RenderConfig.

    Raises:
        ConfigError: If file read fails or schema validation fails.
    """
    path = Path(path)
    try:
        raw = yaml.safe_load(path.read_text())
    except Exception as e:
        raise ConfigError(f"Failed to read render YAML '{path}': {e}")

    if raw is not None and not isinstance(raw, dict):
        raise ConfigError(f"Render YAML '{path}' must contain a mapping, got {type(raw).__name__}")

    config = RenderConfig.from_dict(raw)
    logger.debug("Loaded render config from %s: %s", path, config)
    return config
