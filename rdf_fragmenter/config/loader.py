"""
Run configuration loading.

A run is described by a JSON object:

    {
        "quad_source": {"type": "file", "file_path": "dataset.nq"},
        "transformers": [
            {"type": "set_iri_extension", "extension": "nq"}
        ],
        "fragmentation_strategy": {"type": "subject"},
        "quad_sink": {"type": "file", "iri_to_path": {"http://example.org/": "out/"}},
        "logging": {"level": "INFO", "file": null}
    }

``transformers`` and ``logging`` are optional. Relative paths resolve
against the directory of the config file.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..exceptions import ConfigurationError
from ..fragmenter import Fragmenter
from . import components  # noqa: F401  registers the built-in components
from .registry import ComponentBuilder

logger = logging.getLogger(__name__)

REQUIRED_KEYS = ("quad_source", "fragmentation_strategy", "quad_sink")


def load_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a run configuration from a JSON file.

    Args:
        config_path: Path to the configuration file.

    Returns:
        Dictionary containing the configuration.

    Raises:
        ConfigurationError: If the path is empty, or the file holds invalid
            JSON or something other than a JSON object.
        FileNotFoundError: If the configuration file doesn't exist.
    """
    if not config_path:
        raise ConfigurationError("config_path cannot be empty")

    path = Path(config_path)
    if not path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Invalid JSON in configuration file {path} at line {e.lineno}, column {e.colno}: {e.msg}"
        ) from e
    except UnicodeDecodeError as e:
        raise ConfigurationError(f"File encoding error in {path}: {e}") from e

    if not isinstance(config, dict):
        raise ConfigurationError(
            f"Configuration file must contain a JSON object, got {type(config).__name__}"
        )

    return config


def build_fragmenter(
    config: Dict[str, Any],
    base_dir: Optional[Union[str, Path]] = None,
) -> Fragmenter:
    """
    Build a Fragmenter from a loaded configuration.

    Args:
        config: The run configuration.
        base_dir: Directory relative paths resolve against (defaults to cwd).

    Raises:
        ConfigurationError: If a required section is missing or a component is invalid.
    """
    missing = [key for key in REQUIRED_KEYS if key not in config]
    if missing:
        raise ConfigurationError(f"Configuration is missing: {', '.join(missing)}")

    builder = ComponentBuilder(base_dir)
    fragmenter = Fragmenter(
        quad_source=builder.build('source', config['quad_source']),
        fragmentation_strategy=builder.build('strategy', config['fragmentation_strategy']),
        quad_sink=builder.build('sink', config['quad_sink']),
        transformers=builder.build_list('transformer', config.get('transformers', [])),
    )
    logger.debug(f"Built fragmenter with {len(fragmenter.transformers)} transformer(s)")
    return fragmenter


def load_fragmenter(config_path: Union[str, Path]) -> Fragmenter:
    """Load a config file and build its Fragmenter, resolving paths next to the file."""
    config = load_config(config_path)
    return build_fragmenter(config, base_dir=Path(config_path).resolve().parent)
