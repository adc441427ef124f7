"""
Fragmentation strategies.

- FragmentationStrategy: protocol consumed by the Fragmenter
- StreamFragmentationStrategy: per-quad adapter with a flush hook
- ConstantStrategy: everything into one document
- SubjectStrategy, ObjectStrategy: by subject or object IRI, with blank node buffering
- ResourceObjectStrategy: by the object of a subject's target predicate
- ExceptionStrategy: matcher-based routing between strategies
- CompositeStrategy, ProbabilityStrategy: wrappers around other strategies
"""

from .base import ConstantStrategy, FragmentationStrategy, StreamFragmentationStrategy
from .blank_node_buffer import BlankNodeBuffer
from .composite import CompositeStrategy, ProbabilityStrategy
from .exception import ExceptionEntry, ExceptionStrategy
from .resource import ObjectStrategy, ResourceObjectStrategy, SubjectStrategy

__all__ = [
    'FragmentationStrategy',
    'StreamFragmentationStrategy',
    'ConstantStrategy',
    'BlankNodeBuffer',
    'SubjectStrategy',
    'ObjectStrategy',
    'ResourceObjectStrategy',
    'ExceptionEntry',
    'ExceptionStrategy',
    'CompositeStrategy',
    'ProbabilityStrategy',
]
