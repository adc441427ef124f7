"""
CLI module for the RDF fragmenter.

- main.py: argument parsing and the run entry point
- helpers.py: logging setup and console output helpers
"""

from .helpers import setup_logging
from .main import EXIT_CONFIG_ERROR, EXIT_OK, EXIT_RUN_ERROR, create_argument_parser

__all__ = [
    'EXIT_OK',
    'EXIT_CONFIG_ERROR',
    'EXIT_RUN_ERROR',
    'create_argument_parser',
    'setup_logging',
]
