"""
Quad data model.

Quads are immutable named tuples over rdflib terms:
- URIRef: named node (IRI)
- BNode: blank node (local label)
- Literal: literal value with optional datatype or language

A quad with ``graph`` set to None lives in the default graph.

Usage:
    from rdflib import URIRef, Literal
    from rdf_fragmenter.shared.models import Quad, map_terms

    quad = Quad(URIRef("http://ex.org/s"), URIRef("http://ex.org/p"), Literal("o"))
    upper = map_terms(quad, lambda term, position: term)
"""

from typing import Callable, NamedTuple, Optional, Tuple

from rdflib import BNode, Literal, URIRef
from rdflib.term import Node

RDF_TYPE = URIRef("http://www.w3.org/1999/02/22-rdf-syntax-ns#type")

QUAD_POSITIONS: Tuple[str, ...] = ("subject", "predicate", "object", "graph")


class Quad(NamedTuple):
    """An RDF statement with an optional graph label."""
    subject: Node
    predicate: Node
    object: Node
    graph: Optional[Node] = None


def get_term(quad: Quad, position: str) -> Optional[Node]:
    """
    Read the term at a named quad position.

    Args:
        quad: The quad to read from.
        position: One of 'subject', 'predicate', 'object', 'graph'.

    Returns:
        The term, or None for an absent graph.

    Raises:
        ValueError: If the position name is unknown.
    """
    if position not in QUAD_POSITIONS:
        raise ValueError(
            f"Unknown quad position '{position}', expected one of {', '.join(QUAD_POSITIONS)}"
        )
    return getattr(quad, position)


def get_term_value(quad: Quad, position: str) -> str:
    """Return the string value of a term, with '' for the default graph."""
    term = get_term(quad, position)
    return "" if term is None else str(term)


def map_terms(quad: Quad, fn: Callable[[Node, str], Node]) -> Quad:
    """
    Build a new quad by passing every present term through ``fn``.

    The default graph (None) is left untouched.
    """
    return Quad(
        fn(quad.subject, "subject"),
        fn(quad.predicate, "predicate"),
        fn(quad.object, "object"),
        None if quad.graph is None else fn(quad.graph, "graph"),
    )


def is_named_node(term: Optional[Node]) -> bool:
    return isinstance(term, URIRef)


def is_blank_node(term: Optional[Node]) -> bool:
    return isinstance(term, BNode)


def is_literal(term: Optional[Node]) -> bool:
    return isinstance(term, Literal)


def quad_to_nquads(quad: Quad) -> str:
    """
    Serialize a single quad as one N-Quads line (with trailing newline).

    Terms are rendered with rdflib's N3 notation, which coincides with
    N-Quads for IRIs, blank nodes and literals.
    """
    parts = [quad.subject.n3(), quad.predicate.n3(), quad.object.n3()]
    if quad.graph is not None:
        parts.append(quad.graph.n3())
    return " ".join(parts) + " .\n"
