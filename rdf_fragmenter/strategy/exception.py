"""
Exception strategy.

Routes each quad to the strategy of the first matching exception entry,
and all other quads to a default strategy.
"""

import logging
from dataclasses import dataclass
from typing import List, Sequence

from ..io.quad_sink import QuadSink
from ..quadmatcher.quad_matcher import QuadMatcher
from ..shared.models import Quad
from .base import StreamFragmentationStrategy, require_stream_strategies

logger = logging.getLogger(__name__)


@dataclass
class ExceptionEntry:
    """A matcher and the strategy that handles the quads it matches."""
    matcher: QuadMatcher
    strategy: StreamFragmentationStrategy


class ExceptionStrategy(StreamFragmentationStrategy):
    """
    Delegates all but the listed exceptions to a given strategy.

    Delegates are driven quad by quad on the same iterator, so they must be
    StreamFragmentationStrategy instances. Every delegate is flushed once
    after the last quad, default strategy first, then exceptions in order.
    """

    def __init__(self, strategy: StreamFragmentationStrategy, exceptions: Sequence[ExceptionEntry]):
        require_stream_strategies([strategy] + [entry.strategy for entry in exceptions], "ExceptionStrategy")
        self.strategy = strategy
        self.exceptions: List[ExceptionEntry] = list(exceptions)
        logger.debug(
            f"ExceptionStrategy delegating to {type(strategy).__name__} "
            f"with {len(self.exceptions)} exception(s)"
        )

    def handle_quad(self, quad: Quad, quad_sink: QuadSink) -> None:
        for entry in self.exceptions:
            if entry.matcher.matches(quad):
                entry.strategy.handle_quad(quad, quad_sink)
                return
        self.strategy.handle_quad(quad, quad_sink)

    def flush(self, quad_sink: QuadSink) -> None:
        self.strategy.flush(quad_sink)
        for entry in self.exceptions:
            entry.strategy.flush(quad_sink)
