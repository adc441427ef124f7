"""Sinks that wrap other sinks: fan-out to several sinks, or filter by matcher."""

from typing import List, Sequence

from ..quadmatcher.quad_matcher import QuadMatcher
from ..shared.models import Quad
from .quad_sink import QuadSink


class CompositeQuadSink(QuadSink):
    """A quad sink that pushes every quad into each of its sinks, in order."""

    def __init__(self, sinks: Sequence[QuadSink]):
        self.sinks: List[QuadSink] = list(sinks)

    def push(self, iri: str, quad: Quad) -> None:
        for sink in self.sinks:
            sink.push(iri, quad)

    def close(self) -> None:
        for sink in self.sinks:
            sink.close()


class FilteredQuadSink(QuadSink):
    """
    A quad sink that only passes through the quads accepted by a matcher.

    Args:
        sink: The sink receiving the accepted quads.
        matcher: The filter applied to each pushed quad.
    """

    def __init__(self, sink: QuadSink, matcher: QuadMatcher):
        self.sink = sink
        self.matcher = matcher

    def push(self, iri: str, quad: Quad) -> None:
        if self.matcher.matches(quad):
            self.sink.push(iri, quad)

    def close(self) -> None:
        self.sink.close()
