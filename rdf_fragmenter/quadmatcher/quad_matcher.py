"""Quad matcher protocol."""

from abc import ABC, abstractmethod

from ..shared.models import Quad


class QuadMatcher(ABC):
    """Returns True or False for a given quad."""

    @abstractmethod
    def matches(self, quad: Quad) -> bool:
        pass
