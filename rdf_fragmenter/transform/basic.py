"""Structural transformers: identity, clone, distinct and sequential composition."""

import logging
from typing import List, Sequence, Set, Tuple

from ..shared.models import Quad
from .quad_transformer import QuadTransformer

logger = logging.getLogger(__name__)


class IdentityTransformer(QuadTransformer):
    """Transforms quads to themselves."""

    def transform(self, quad: Quad) -> List[Quad]:
        return [quad]


class CloneTransformer(QuadTransformer):
    """Transforms each quad into two copies of itself."""

    def transform(self, quad: Quad) -> List[Quad]:
        return [quad, quad]


class DistinctTransformer(QuadTransformer):
    """
    Wraps another transformer and removes duplicates among the quads it produces.

    Only produced quads that differ from the incoming quad are filtered;
    a quad equal to its input always passes. The set of seen quads grows
    for the lifetime of the instance.
    """

    def __init__(self, transformer: QuadTransformer):
        self.transformer = transformer
        self.passed_quads: Set[Quad] = set()

    def transform(self, quad: Quad) -> List[Quad]:
        result = []
        for quad_out in self.transformer.transform(quad):
            if quad_out == quad:
                result.append(quad_out)
            elif quad_out not in self.passed_quads:
                self.passed_quads.add(quad_out)
                result.append(quad_out)
        return result

    def finalize(self) -> None:
        logger.debug(f"DistinctTransformer saw {len(self.passed_quads)} distinct produced quads")
        self.transformer.finalize()


class SequentialTransformer(QuadTransformer):
    """Executes a chain of transformers in sequence, as one transformer."""

    def __init__(self, transformers: Sequence[QuadTransformer]):
        self.transformers: Tuple[QuadTransformer, ...] = tuple(transformers)

    def transform(self, quad: Quad) -> List[Quad]:
        return run_transformers(self.transformers, quad)

    def finalize(self) -> None:
        for transformer in self.transformers:
            transformer.finalize()


def run_transformers(transformers: Sequence[QuadTransformer], quad: Quad) -> List[Quad]:
    """
    Fold a quad through a transformer chain.

    Starting from ``[quad]``, each transformer replaces the current list by
    the in-order concatenation of its outputs for every quad in the list.
    An empty list stays empty through the rest of the chain.
    """
    quads = [quad]
    for transformer in transformers:
        quads = [quad_out for quad_in in quads for quad_out in transformer.transform(quad_in)]
    return quads
