"""
Shared data models.

Exports the Quad value type and term helpers used across sources,
transformers, matchers, strategies and sinks.
"""

from .quad import (
    QUAD_POSITIONS,
    RDF_TYPE,
    Quad,
    get_term,
    get_term_value,
    is_blank_node,
    is_literal,
    is_named_node,
    map_terms,
    quad_to_nquads,
)

__all__ = [
    'QUAD_POSITIONS',
    'RDF_TYPE',
    'Quad',
    'get_term',
    'get_term_value',
    'is_blank_node',
    'is_literal',
    'is_named_node',
    'map_terms',
    'quad_to_nquads',
]
