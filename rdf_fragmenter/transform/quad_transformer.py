"""
Quad transformer protocol and the term-mapping base class.

A transformer turns one quad into zero, one or many quads. The optional
``finalize()`` hook runs once after the last quad, for side effects only.
"""

import re
from abc import ABC, abstractmethod
from typing import List

from rdflib.term import Node

from ..exceptions import ConfigurationError
from ..shared.models import Quad, map_terms

_DIGITS = "0123456789"


def compile_search_regex(pattern: str, component: str) -> "re.Pattern[str]":
    """Compile a configured search regex, reporting syntax errors as ConfigurationError."""
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ConfigurationError(f"Invalid regex '{pattern}': {e}", component=component) from e


def to_replacement_template(replacement: str, group_count: int) -> str:
    """
    Convert a ``$``-style replacement string to ``re.sub`` template syntax.

    ``$$`` is a literal dollar, ``$&`` the whole match, and ``$n``/``$nn``
    a capture group. A two-digit reference is only read as such when the
    regex has that many groups, otherwise it is ``$n`` followed by a digit.
    References to groups the regex does not have stay literal text, and
    backslashes are always literal.

    Args:
        replacement: The configured replacement string.
        group_count: Number of capture groups in the search regex.
    """
    parts = []
    i = 0
    while i < len(replacement):
        char = replacement[i]
        following = replacement[i + 1:i + 2]
        if char == '\\':
            parts.append('\\\\')
        elif char == '$' and following == '$':
            parts.append('$')
            i += 1
        elif char == '$' and following == '&':
            parts.append(r'\g<0>')
            i += 1
        elif char == '$' and following and following in _DIGITS:
            two_digits = replacement[i + 1:i + 3]
            if len(two_digits) == 2 and two_digits[1] in _DIGITS and 0 < int(two_digits) <= group_count:
                parts.append(rf'\g<{int(two_digits)}>')
                i += 2
            elif 0 < int(following) <= group_count:
                parts.append(rf'\g<{following}>')
                i += 1
            else:
                parts.append(char)
        else:
            parts.append(char)
        i += 1
    return ''.join(parts)


class QuadTransformer(ABC):
    """A quad transformer can transform a given quad into a list of other quads."""

    @abstractmethod
    def transform(self, quad: Quad) -> List[Quad]:
        """
        Transform the given quad into a list of quads.

        Args:
            quad: An RDF quad.

        Returns:
            Zero or more quads, in emission order.
        """
        pass

    def finalize(self) -> None:
        """Called once after all quads have been transformed."""
        pass


class TermsTransformer(QuadTransformer):
    """An abstract transformer that maps every term of a quad, one quad in, one quad out."""

    def transform(self, quad: Quad) -> List[Quad]:
        return [map_terms(quad, self.transform_term)]

    @abstractmethod
    def transform_term(self, term: Node, position: str) -> Node:
        pass
