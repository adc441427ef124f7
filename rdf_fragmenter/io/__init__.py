"""
Quad sources and sinks.

Sources:
- QuadSource: abstract producer of quad iterators
- CompositeQuadSource: strict sequential concatenation of sources
- FileQuadSource: rdflib-backed file loader

Sinks:
- QuadSink: abstract document-addressed consumer
- FileQuadSink: N-Quads files per document
- CompositeQuadSink, FilteredQuadSink: sink wrappers
"""

from .quad_sink import QuadSink
from .quad_sink_composite import CompositeQuadSink, FilteredQuadSink
from .quad_sink_file import FileQuadSink
from .quad_source import QuadSource
from .quad_source_composite import CompositeQuadSource
from .quad_source_file import FileQuadSource

__all__ = [
    'QuadSource',
    'CompositeQuadSource',
    'FileQuadSource',
    'QuadSink',
    'FileQuadSink',
    'CompositeQuadSink',
    'FilteredQuadSink',
]
