"""
Quad source protocol.

A quad source produces a fresh, single-pass iterator of quads on every
call to ``get_quads()``. Two calls never share iteration state.
"""

from abc import ABC, abstractmethod
from typing import Iterator

from ..shared.models import Quad


class QuadSource(ABC):
    """Abstract base class for anything that can produce quads."""

    @abstractmethod
    def get_quads(self) -> Iterator[Quad]:
        """
        Load an iterator of quads.

        This can be called multiple times; each call returns an
        independent iterator.
        """
        pass
