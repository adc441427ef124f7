"""
Run configuration.

- loader: JSON config loading and Fragmenter construction
- registry: type-name to factory registry for all components
- components: built-in registrations
"""

from .loader import build_fragmenter, load_config, load_fragmenter
from .registry import ComponentBuilder, register_component, registered_types

__all__ = [
    'load_config',
    'build_fragmenter',
    'load_fragmenter',
    'ComponentBuilder',
    'register_component',
    'registered_types',
]
