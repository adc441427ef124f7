"""
Quad sink protocol.

A quad sink consumes quads addressed to document IRIs. The fragmenter
closes its sink exactly once per run.
"""

from abc import ABC, abstractmethod

from ..shared.models import Quad


class QuadSink(ABC):
    """Abstract base class for quad destinations."""

    @abstractmethod
    def push(self, iri: str, quad: Quad) -> None:
        """
        Push a quad into the given document IRI.

        Args:
            iri: The IRI of the document to push to.
            quad: An RDF quad.
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Release any open resources."""
        pass
