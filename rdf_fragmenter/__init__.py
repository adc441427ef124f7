"""RDF dataset fragmenter: streaming quad transformation, matching and fragmentation."""

__version__ = "1.0.0"

from .exceptions import (
    ConfigurationError,
    FragmentationError,
    FragmenterError,
    QuadSinkError,
    QuadSourceError,
)
from .fragmenter import Fragmenter
from .shared.models import Quad

__all__ = [
    "Fragmenter",
    "Quad",
    "FragmenterError",
    "ConfigurationError",
    "QuadSourceError",
    "QuadSinkError",
    "FragmentationError",
]
