"""
Transform engine.

Runs each quad of an input iterator through an ordered transformer chain
and lazily yields the results.

Semantics:
    - Fan-out and drop: a transformer may return any number of quads; the
      chain is folded left to right (see ``run_transformers``).
    - No interleaving: the full contribution of quad k is yielded before
      quad k+1 is pulled from the input.
    - End of input: ``finalize()`` is called on each transformer in chain
      order. Finalize hooks never emit quads.
    - Fail-fast: an exception from the input or a transformer ends the
      iterator immediately; finalize hooks are then not called.
"""

import logging
import time
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence, Tuple

from ..shared.models import Quad
from .basic import run_transformers
from .quad_transformer import QuadTransformer

logger = logging.getLogger(__name__)


@dataclass
class TransformStats:
    """
    Statistics collected while transforming a quad iterator.

    Attributes:
        quads_in: Number of quads pulled from the input
        quads_out: Number of quads yielded
        quads_dropped: Input quads that produced no output
        duration_seconds: Time from first pull to end of input
    """
    quads_in: int = 0
    quads_out: int = 0
    quads_dropped: int = 0
    duration_seconds: float = 0.0

    def get_summary(self) -> str:
        """Get human-readable summary."""
        lines = [
            "Transform Statistics:",
            f"  Quads in: {self.quads_in:,}",
            f"  Quads out: {self.quads_out:,}",
            f"  Dropped inputs: {self.quads_dropped:,}",
        ]
        if self.duration_seconds > 0:
            rate = self.quads_in / self.duration_seconds
            lines.append(f"  Processing rate: {rate:.0f} quads/sec")
        return "\n".join(lines)


class QuadTransformStream:
    """
    Runs quads through a chain of transformers.

    Example:
        stream = QuadTransformStream([
            ReplaceIRITransformer("^http://old.org/", "http://new.org/"),
            SetIRIExtensionTransformer("nq"),
        ])
        for quad in stream.transform(source.get_quads()):
            ...
    """

    def __init__(self, transformers: Sequence[QuadTransformer]):
        self.transformers: Tuple[QuadTransformer, ...] = tuple(transformers)
        self.stats = TransformStats()

    def run_transformers(self, quad: Quad) -> List[Quad]:
        """Apply the whole chain to a single quad."""
        return run_transformers(self.transformers, quad)

    def transform(self, quads: Iterable[Quad]) -> Iterator[Quad]:
        """
        Lazily transform an iterable of quads.

        Args:
            quads: The input quads, consumed once.

        Yields:
            Transformed quads, in input order.
        """
        self.stats = TransformStats()
        start_time = time.time()

        for quad in quads:
            self.stats.quads_in += 1
            transformed = self.run_transformers(quad)
            if not transformed:
                self.stats.quads_dropped += 1
            for quad_out in transformed:
                self.stats.quads_out += 1
                yield quad_out

        for transformer in self.transformers:
            transformer.finalize()

        self.stats.duration_seconds = time.time() - start_time
        logger.info(self.stats.get_summary())
