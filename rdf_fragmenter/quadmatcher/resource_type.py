"""
Resource type matcher.

Matches the ``rdf:type`` quads of resources whose type IRI satisfies a
regular expression and, optionally, every later quad about those resources.
"""

import logging
import re
from typing import Set

from ..shared.models import RDF_TYPE, Quad, is_named_node
from .quad_matcher import QuadMatcher

logger = logging.getLogger(__name__)


class ResourceTypeMatcher(QuadMatcher):
    """
    A quad matcher that matches all resources of the given type.

    A quad is *type-defining* when its predicate is ``rdf:type`` and both
    its subject and object are IRIs, with the object matching ``type_regex``.
    Type-defining quads always match. With ``match_full_resource`` enabled,
    their subject is recorded in ``matching_subjects`` and every following
    quad with that IRI subject matches as well.

    Blank node subjects are not supported.

    The matcher relies on the type-defining quad of a resource being seen
    before the resource's other quads; earlier quads do not match
    retroactively. ``matching_subjects`` only grows, and is owned by this
    instance alone.

    Args:
        type_regex: Regular expression searched in the type IRI.
        match_full_resource: Also match the other quads of matched resources.
    """

    def __init__(self, type_regex: str, match_full_resource: bool = True):
        self.type = re.compile(type_regex)
        self.match_full_resource = match_full_resource
        self.matching_subjects: Set[str] = set()
        logger.debug(
            f"ResourceTypeMatcher on type /{type_regex}/ (full resource: {match_full_resource})"
        )

    def matches(self, quad: Quad) -> bool:
        if not is_named_node(quad.subject):
            return False

        if (quad.predicate == RDF_TYPE
                and is_named_node(quad.object)
                and self.type.search(str(quad.object))):
            if self.match_full_resource:
                self.matching_subjects.add(str(quad.subject))
            return True

        return self.match_full_resource and str(quad.subject) in self.matching_subjects
