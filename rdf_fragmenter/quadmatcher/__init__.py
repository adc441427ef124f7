"""
Quad matchers.

Matchers decide whether a quad satisfies a criterion. They are used by
filtered sinks and the exception strategy to filter and branch quads.
"""

from .quad_matcher import QuadMatcher
from .resource_type import ResourceTypeMatcher
from .term_value import PredicateMatcher, TermValueMatcher, sample_value

__all__ = [
    'QuadMatcher',
    'ResourceTypeMatcher',
    'TermValueMatcher',
    'PredicateMatcher',
    'sample_value',
]
