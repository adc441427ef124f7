"""
Composite quad source.

Concatenates several sources into one iterator. Sources are consumed
strictly in order: source i is read to exhaustion before source i+1 is
even opened, so the merged order never depends on source speed.
"""

import logging
from typing import Iterator, List, Sequence

from ..shared.models import Quad
from .quad_source import QuadSource

logger = logging.getLogger(__name__)


class CompositeQuadSource(QuadSource):
    """
    A quad source that combines multiple quad sources.

    Errors raised by any underlying source propagate unchanged and end the
    merged iterator; later sources are never opened.

    Example:
        source = CompositeQuadSource([
            FileQuadSource("people.nq"),
            FileQuadSource("posts.nq"),
        ])
        for quad in source.get_quads():
            ...
    """

    def __init__(self, sources: Sequence[QuadSource]):
        self.sources: List[QuadSource] = list(sources)

    def get_quads(self) -> Iterator[Quad]:
        for index, source in enumerate(self.sources):
            logger.debug(f"Reading quad source {index + 1}/{len(self.sources)}: {source!r}")
            yield from source.get_quads()
