"""
Quad transformers and the transform engine.

Transformers:
- IdentityTransformer, CloneTransformer
- ReplaceIRITransformer, BlankToNamedTransformer
- SetIRIExtensionTransformer, DistributeIRITransformer
- DistinctTransformer, SequentialTransformer
- BlankToSubjectFragmentTransformer, RemapResourceIdentifierTransformer
- CompositeVaryingResourceTransformer

Engine:
- QuadTransformStream: lazy fan-out capable chain runner
"""

from .basic import (
    CloneTransformer,
    DistinctTransformer,
    IdentityTransformer,
    SequentialTransformer,
    run_transformers,
)
from .iri import (
    BlankToNamedTransformer,
    DistributeIRITransformer,
    ReplaceIRITransformer,
    SetIRIExtensionTransformer,
)
from .quad_transform_stream import QuadTransformStream, TransformStats
from .quad_transformer import QuadTransformer, TermsTransformer, compile_search_regex, to_replacement_template
from .resource import (
    BlankToSubjectFragmentTransformer,
    CompositeVaryingResourceTransformer,
    RemapResourceIdentifierTransformer,
)
from .resource_identifier import BufferedResource, ResourceIdentifier

__all__ = [
    'QuadTransformer',
    'TermsTransformer',
    'compile_search_regex',
    'to_replacement_template',
    'IdentityTransformer',
    'CloneTransformer',
    'DistinctTransformer',
    'SequentialTransformer',
    'run_transformers',
    'ReplaceIRITransformer',
    'BlankToNamedTransformer',
    'SetIRIExtensionTransformer',
    'DistributeIRITransformer',
    'BlankToSubjectFragmentTransformer',
    'RemapResourceIdentifierTransformer',
    'CompositeVaryingResourceTransformer',
    'ResourceIdentifier',
    'BufferedResource',
    'QuadTransformStream',
    'TransformStats',
]
