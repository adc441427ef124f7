"""
Component registry.

Maps ``(kind, type)`` pairs from a config file to factories that build
sources, transformers, matchers, strategies and sinks. Factories receive
the component's options (its config object without the ``type`` key) and the
ComponentBuilder, which they use to build nested components and resolve
relative paths.

Kinds: source, transformer, matcher, strategy, sink.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)

COMPONENT_KINDS = ("source", "transformer", "matcher", "strategy", "sink")

ComponentFactory = Callable[[Dict[str, Any], "ComponentBuilder"], Any]

_FACTORIES: Dict[str, Dict[str, ComponentFactory]] = {kind: {} for kind in COMPONENT_KINDS}


def register_component(kind: str, type_name: str, factory: ComponentFactory) -> None:
    """
    Register a factory for a component type.

    Raises:
        ConfigurationError: If the kind is unknown.
    """
    if kind not in _FACTORIES:
        raise ConfigurationError(
            f"Unknown component kind '{kind}', expected one of {', '.join(COMPONENT_KINDS)}"
        )
    _FACTORIES[kind][type_name] = factory


def registered_types(kind: str) -> List[str]:
    """Return the registered type names of a component kind."""
    return sorted(_FACTORIES.get(kind, {}))


class ComponentBuilder:
    """
    Builds components from config specs.

    Args:
        base_dir: Directory that relative file paths are resolved against.
    """

    def __init__(self, base_dir: Optional[Union[str, Path]] = None):
        self.base_dir = Path(base_dir) if base_dir is not None else Path.cwd()

    def build(self, kind: str, spec: Any) -> Any:
        """
        Build one component from a ``{"type": ..., **options}`` mapping.

        Raises:
            ConfigurationError: On a malformed config object, unknown type, or invalid options.
        """
        if not isinstance(spec, dict):
            raise ConfigurationError(f"A {kind} must be a JSON object, got {type(spec).__name__}")
        if 'type' not in spec:
            raise ConfigurationError(f"A {kind} is missing its 'type'")

        type_name = spec['type']
        factory = _FACTORIES.get(kind, {}).get(type_name)
        if factory is None:
            raise ConfigurationError(
                f"Unknown {kind} type '{type_name}'. "
                f"Registered types: {', '.join(registered_types(kind))}"
            )

        options = {key: value for key, value in spec.items() if key != 'type'}
        try:
            component = factory(options, self)
        except KeyError as e:
            raise ConfigurationError(f"Missing option {e} for {kind} '{type_name}'") from e
        except TypeError as e:
            raise ConfigurationError(f"Invalid options for {kind} '{type_name}': {e}") from e
        logger.debug(f"Built {kind} '{type_name}': {type(component).__name__}")
        return component

    def build_list(self, kind: str, specs: Any) -> List[Any]:
        """Build a list of components of the same kind."""
        if not isinstance(specs, list):
            raise ConfigurationError(f"Expected a list of {kind} specs, got {type(specs).__name__}")
        return [self.build(kind, spec) for spec in specs]

    def resolve_path(self, path: str) -> str:
        """Resolve a path from the config against ``base_dir``."""
        candidate = Path(path)
        if not candidate.is_absolute():
            candidate = self.base_dir / candidate
        return str(candidate)
