"""
Strategies that wrap other strategies.

- CompositeStrategy: runs several strategies over the same quads
- ProbabilityStrategy: hands a random share of the quads to a strategy
"""

import logging
import random
from typing import List, Optional, Sequence, Set
from urllib.parse import urlparse

from ..exceptions import ConfigurationError, FragmentationError
from ..io.quad_sink import QuadSink
from ..shared.models import Quad, is_blank_node
from .base import StreamFragmentationStrategy, require_stream_strategies
from .resource import SubjectStrategy

logger = logging.getLogger(__name__)


class CompositeStrategy(StreamFragmentationStrategy):
    """
    Combines multiple strategies on one quad stream.

    Each quad is handed to every delegate in the given order, and every
    delegate is flushed after the last quad, so a quad may end up in the
    documents of several strategies.
    """

    def __init__(self, strategies: Sequence[StreamFragmentationStrategy]):
        self.strategies: List[StreamFragmentationStrategy] = require_stream_strategies(
            strategies, "CompositeStrategy"
        )

    def handle_quad(self, quad: Quad, quad_sink: QuadSink) -> None:
        for strategy in self.strategies:
            strategy.handle_quad(quad, quad_sink)

    def flush(self, quad_sink: QuadSink) -> None:
        for strategy in self.strategies:
            strategy.flush(quad_sink)


class ProbabilityStrategy(StreamFragmentationStrategy):
    """
    Hands each quad to the wrapped strategy with a given probability.

    A draw is made per quad: an integer in ``[1, 100]`` that must not exceed
    ``probability``. With ``partition_by_resource_type``, skipping a quad of
    an IRI subject also skips every later quad in the same resource-type
    container, the first three path segments of the subject's document IRI
    (e.g. ``http://ex.org/pods/alice/posts`` for ``.../posts/1``).

    Args:
        strategy: The strategy that receives the selected quads.
        probability: Percentage between 0 and 100.
        partition_by_resource_type: Skip whole containers instead of single quads.
        relative_path: Document path for subjects, as in SubjectStrategy.
        random_seed: Seed for reproducible draws.
    """

    def __init__(
        self,
        strategy: StreamFragmentationStrategy,
        probability: float,
        partition_by_resource_type: bool = False,
        relative_path: Optional[str] = None,
        random_seed: Optional[int] = None,
    ):
        if not 0 <= probability <= 100:
            raise ConfigurationError(
                f"The probability must be between 0 and 100, got {probability}",
                component="ProbabilityStrategy",
            )
        self.strategy = require_stream_strategies([strategy], "ProbabilityStrategy")[0]
        self.probability = probability
        self.partition_by_resource_type = partition_by_resource_type
        self.relative_path = relative_path
        self.skipped_containers: Set[str] = set()
        self._random = random.Random(random_seed)

    def should_handle(self) -> bool:
        return self._random.randint(1, 100) <= self.probability

    def handle_quad(self, quad: Quad, quad_sink: QuadSink) -> None:
        selected = self.should_handle()

        if not self.partition_by_resource_type or is_blank_node(quad.subject):
            if selected:
                self.strategy.handle_quad(quad, quad_sink)
            return

        container = self.container_iri(SubjectStrategy.document_iri(str(quad.subject), self.relative_path))
        if not selected:
            self.skipped_containers.add(container)
        elif container not in self.skipped_containers:
            self.strategy.handle_quad(quad, quad_sink)

    @staticmethod
    def container_iri(iri: str) -> str:
        parsed = urlparse(iri)
        segments = parsed.path.split('/')
        if len(segments) < 4 or not segments[3]:
            raise FragmentationError(
                f"Cannot determine the resource type container of {iri}",
                component="ProbabilityStrategy",
            )
        return f"{parsed.scheme}://{parsed.netloc}{'/'.join(segments[:4])}"

    def flush(self, quad_sink: QuadSink) -> None:
        if self.skipped_containers:
            logger.debug(f"Skipped {len(self.skipped_containers)} resource type containers")
        self.strategy.flush(quad_sink)
