"""
Fragmenter: wires a quad source, an optional transformer chain, a
fragmentation strategy and a sink into one run.

Sink-close policy:
    The sink is closed exactly once per ``fragment()`` call, also when the
    strategy fails. When both the strategy and the close fail, the close
    failure is logged and the strategy failure is raised.
"""

import logging
import time
from typing import Iterator, Optional, Sequence, Tuple

from .io.quad_sink import QuadSink
from .io.quad_source import QuadSource
from .shared.models import Quad
from .strategy.base import FragmentationStrategy
from .transform.quad_transform_stream import QuadTransformStream
from .transform.quad_transformer import QuadTransformer

logger = logging.getLogger(__name__)


class Fragmenter:
    """
    Fragments quads from a given source into a given sink.

    Example:
        fragmenter = Fragmenter(
            quad_source=FileQuadSource("dataset.nq"),
            fragmentation_strategy=SubjectStrategy(),
            quad_sink=FileQuadSink({"http://example.org/": "out/"}),
            transformers=[SetIRIExtensionTransformer("nq")],
        )
        fragmenter.fragment()
    """

    def __init__(
        self,
        quad_source: QuadSource,
        fragmentation_strategy: FragmentationStrategy,
        quad_sink: QuadSink,
        transformers: Optional[Sequence[QuadTransformer]] = None,
    ):
        self.quad_source = quad_source
        self.fragmentation_strategy = fragmentation_strategy
        self.quad_sink = quad_sink
        self.transformers: Tuple[QuadTransformer, ...] = tuple(transformers or ())

    def get_quads(self) -> Iterator[Quad]:
        """The source quads, run through the transformer chain when one is configured."""
        quads = self.quad_source.get_quads()
        if not self.transformers:
            return quads
        return QuadTransformStream(self.transformers).transform(quads)

    def fragment(self) -> None:
        """
        Read quads from the source, fragment them into the sink, and close the sink.

        Raises:
            Exception: The first failure of the source, a transformer, the
                       strategy, or (when nothing else failed) the sink close.
        """
        start_time = time.time()
        logger.info(
            f"Fragmenting with {type(self.fragmentation_strategy).__name__} "
            f"and {len(self.transformers)} transformer(s)"
        )

        try:
            self.fragmentation_strategy.fragment(self.get_quads(), self.quad_sink)
        except Exception:
            try:
                self.quad_sink.close()
            except Exception as close_error:
                logger.error(f"Closing the quad sink failed after an earlier error: {close_error}")
            raise

        self.quad_sink.close()
        logger.info(f"Fragmentation finished in {time.time() - start_time:.2f}s")
