"""
Term value matchers.

- TermValueMatcher: regex match on one quad position, with deterministic
  hash-based sampling.
- PredicateMatcher: regex match on the predicate IRI.

Sampling contract:
    The sampled text is the first capture group when the regex has one and
    it participated in the match, otherwise the whole matched substring.
    Its UTF-8 bytes are hashed with SHA-256, the 32-byte digest is read as a
    big-endian unsigned integer and divided by 2**256, giving a value in
    [0, 1). The quad is accepted iff that value is <= probability.

Because acceptance is a pure function of the sampled text, every quad that
shares it (for example all quads of one subject, with a regex capturing the
subject id) is accepted or rejected together, without any retained state.
"""

import hashlib
import logging
import re
from typing import Optional

from ..exceptions import ConfigurationError
from ..shared.models import QUAD_POSITIONS, Quad, get_term_value
from .quad_matcher import QuadMatcher

logger = logging.getLogger(__name__)

HASH_BITS = 256


def sample_value(text: str) -> float:
    """Map text to a deterministic value in [0, 1) through SHA-256."""
    digest = hashlib.sha256(text.encode('utf-8')).digest()
    return int.from_bytes(digest, 'big') / (1 << HASH_BITS)


class TermValueMatcher(QuadMatcher):
    """
    Matches a quad by a regex on one of its terms, with optional probability.

    Example:
        # Keep roughly 20% of all persons, with all of their quads
        matcher = TermValueMatcher("subject", r"/persons/([0-9]+)$", probability=0.2)
    """

    def __init__(self, term: str, regex: str, probability: Optional[float] = None):
        """
        Args:
            term: The quad position to run the regex on.
            regex: The regex searched in the term value.
            probability: Fraction of matching values to accept, in [0, 1].
                         Defaults to 1.0.

        Raises:
            ConfigurationError: On an unknown term position or out-of-range probability.
        """
        if term not in QUAD_POSITIONS:
            raise ConfigurationError(
                f"Unknown quad term '{term}', expected one of {', '.join(QUAD_POSITIONS)}",
                component="TermValueMatcher",
            )
        self.probability = 1.0 if probability is None else float(probability)
        if not 0.0 <= self.probability <= 1.0:
            raise ConfigurationError(
                f"probability must be between 0 and 1, got {self.probability}",
                component="TermValueMatcher",
            )
        self.term = term
        self.regex = re.compile(regex)

    def matches(self, quad: Quad) -> bool:
        match = self.regex.search(get_term_value(quad, self.term))
        if not match:
            return False
        if self.probability >= 1.0:
            return True

        sampled = match.group(1) if self.regex.groups and match.group(1) is not None else match.group(0)
        return sample_value(sampled) <= self.probability


class PredicateMatcher(QuadMatcher):
    """Matches a quad by the given predicate regex."""

    def __init__(self, predicate_regex: str):
        self.predicate = re.compile(predicate_regex)

    def matches(self, quad: Quad) -> bool:
        return self.predicate.search(str(quad.predicate)) is not None
