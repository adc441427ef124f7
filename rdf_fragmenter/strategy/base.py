"""
Fragmentation strategy protocol and the per-quad adapter.

A fragmentation strategy consumes the full quad iterator of a run and
pushes each quad into one or more document IRIs of a sink.
"""

import logging
from abc import ABC, abstractmethod
from typing import Iterable, List

from ..exceptions import ConfigurationError
from ..io.quad_sink import QuadSink
from ..shared.models import Quad

logger = logging.getLogger(__name__)


class FragmentationStrategy(ABC):
    """A fragmentation strategy fragments quads into different documents."""

    @abstractmethod
    def fragment(self, quads: Iterable[Quad], quad_sink: QuadSink) -> None:
        """
        Fragment all quads into different documents at the given sink.

        Returns once every quad has been handled; raises on failure.

        Args:
            quads: The quads to fragment, consumed once.
            quad_sink: The sink into which all fragmented quads are pushed.
        """
        pass


class StreamFragmentationStrategy(FragmentationStrategy):
    """
    A strategy that handles quads one at a time.

    Subclasses implement ``handle_quad`` and may override ``flush``, which
    runs once after the last quad.
    """

    def fragment(self, quads: Iterable[Quad], quad_sink: QuadSink) -> None:
        count = 0
        for quad in quads:
            self.handle_quad(quad, quad_sink)
            count += 1
        self.flush(quad_sink)
        logger.debug(f"{type(self).__name__} handled {count} quads")

    @abstractmethod
    def handle_quad(self, quad: Quad, quad_sink: QuadSink) -> None:
        pass

    def flush(self, quad_sink: QuadSink) -> None:
        pass


class ConstantStrategy(StreamFragmentationStrategy):
    """
    Places all quads into a single document.

    Args:
        location_iri: The IRI of the document receiving every quad.
    """

    def __init__(self, location_iri: str):
        self.location_iri = location_iri

    def handle_quad(self, quad: Quad, quad_sink: QuadSink) -> None:
        quad_sink.push(self.location_iri, quad)


def require_stream_strategies(
    strategies: Iterable[FragmentationStrategy], component: str
) -> List[StreamFragmentationStrategy]:
    """
    Check that delegates can be driven quad by quad on a shared iterator.

    Raises:
        ConfigurationError: If a delegate only implements ``fragment``.
    """
    delegates = list(strategies)
    for delegate in delegates:
        if not isinstance(delegate, StreamFragmentationStrategy):
            raise ConfigurationError(
                f"Delegate strategies must handle quads one at a time, "
                f"got {type(delegate).__name__}",
                component=component,
            )
    return delegates
