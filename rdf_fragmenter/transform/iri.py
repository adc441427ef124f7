"""
Term rewriting transformers.

- ReplaceIRITransformer: regex search/replace on IRIs
- BlankToNamedTransformer: regex search/replace on blank node labels,
  promoting changed labels to IRIs
- SetIRIExtensionTransformer: enforce a file extension on IRIs
- DistributeIRITransformer: spread IRIs over several templates by a
  captured number

All of them produce exactly one quad per input. Replacement strings use
``$1``, ``$&`` and ``$$`` references with literal backslashes;
only the first occurrence of the search regex is replaced.
"""

import logging
import re
from typing import List, Optional, Sequence

from rdflib import BNode, URIRef
from rdflib.term import Node

from ..exceptions import ConfigurationError
from .quad_transformer import TermsTransformer, compile_search_regex, to_replacement_template

logger = logging.getLogger(__name__)

_IRI_EXTENSION = re.compile(r"\.[A-Za-z]*$")


class ReplaceIRITransformer(TermsTransformer):
    """A quad transformer that replaces (parts of) IRIs."""

    def __init__(self, search_regex: str, replacement: str):
        self.search = compile_search_regex(search_regex, "ReplaceIRITransformer")
        self.replacement = to_replacement_template(replacement, self.search.groups)

    def transform_term(self, term: Node, position: str) -> Node:
        if isinstance(term, URIRef):
            return URIRef(self.search.sub(self.replacement, str(term), count=1))
        return term


class BlankToNamedTransformer(TermsTransformer):
    """
    Replaces blank nodes by named nodes when search/replace changes their label.

    Blank nodes whose label is left unchanged are kept as blank nodes.
    """

    def __init__(self, search_regex: str, replacement: str):
        self.search = compile_search_regex(search_regex, "BlankToNamedTransformer")
        self.replacement = to_replacement_template(replacement, self.search.groups)

    def transform_term(self, term: Node, position: str) -> Node:
        if isinstance(term, BNode):
            value = self.search.sub(self.replacement, str(term), count=1)
            if value != str(term):
                return URIRef(value)
        return term


class SetIRIExtensionTransformer(TermsTransformer):
    """
    Enforces the configured extension on all IRIs.

    An existing trailing extension (``.`` followed by letters) is replaced,
    so applying the transformer twice gives the same IRI.

    Args:
        extension: Extension without leading dot, e.g. ``nq``.
        iri_pattern: Optional regex restricting which IRIs are changed.
    """

    def __init__(self, extension: str, iri_pattern: Optional[str] = None):
        if extension.startswith('.'):
            raise ConfigurationError(
                f"Extension '{extension}' must not start with '.'",
                component="SetIRIExtensionTransformer",
            )
        self.extension = extension
        self.iri_pattern = compile_search_regex(iri_pattern, "SetIRIExtensionTransformer") if iri_pattern else None

    def transform_term(self, term: Node, position: str) -> Node:
        if isinstance(term, URIRef) and (self.iri_pattern is None or self.iri_pattern.search(str(term))):
            value = _IRI_EXTENSION.sub('', str(term), count=1)
            return URIRef(f"{value}.{self.extension}")
        return term


class DistributeIRITransformer(TermsTransformer):
    """
    Distributes IRIs over multiple destination IRIs.

    The first capture group of ``search_regex`` is read as a base-10
    number n, and ``replacements[n % len(replacements)]`` is used as the
    substitution. The same number always lands on the same template.

    Example:
        DistributeIRITransformer(
            r"^http://www.ldbc.eu/data/pers([0-9]*)$",
            ["http://server1.ldbc.eu/pods/$1/profile/card#me",
             "http://server2.ldbc.eu/pods/$1/profile/card#me"],
        )

    Raises:
        ConfigurationError: At construction when the regex has no capture
            group or no replacement is given; during transformation when the
            first group does not capture a number.
    """

    def __init__(self, search_regex: str, replacements: Sequence[str]):
        self.search = compile_search_regex(search_regex, "DistributeIRITransformer")
        if self.search.groups < 1:
            raise ConfigurationError(
                f"The regex '{search_regex}' does not contain any groups, "
                f"while DistributeIRITransformer requires at least one",
                component="DistributeIRITransformer",
            )
        if not replacements:
            raise ConfigurationError(
                "At least one replacement is required",
                component="DistributeIRITransformer",
            )
        self.replacements: List[str] = [
            to_replacement_template(r, self.search.groups) for r in replacements
        ]

    def transform_term(self, term: Node, position: str) -> Node:
        if not isinstance(term, URIRef):
            return term

        match = self.search.search(str(term))
        if not match:
            return term

        captured = match.group(1)
        if captured is None or not captured.isdigit() or not captured.isascii():
            raise ConfigurationError(
                f"The first capture group in 'search_regex' must always match a number, "
                f"got '{captured}' for {term}",
                component="DistributeIRITransformer",
            )
        template = self.replacements[int(captured) % len(self.replacements)]
        return URIRef(self.search.sub(template, str(term), count=1))
