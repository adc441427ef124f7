"""
Built-in component registrations.

Every source, transformer, matcher, strategy and sink of the package is
registered here under the type name used in config files.
"""

from typing import Any, Dict

from ..io import CompositeQuadSink, CompositeQuadSource, FileQuadSink, FileQuadSource, FilteredQuadSink
from ..quadmatcher import PredicateMatcher, ResourceTypeMatcher, TermValueMatcher
from ..strategy import (
    CompositeStrategy,
    ConstantStrategy,
    ExceptionEntry,
    ExceptionStrategy,
    ObjectStrategy,
    ProbabilityStrategy,
    ResourceObjectStrategy,
    SubjectStrategy,
)
from ..transform import (
    BlankToNamedTransformer,
    BlankToSubjectFragmentTransformer,
    CloneTransformer,
    CompositeVaryingResourceTransformer,
    DistinctTransformer,
    DistributeIRITransformer,
    IdentityTransformer,
    RemapResourceIdentifierTransformer,
    ReplaceIRITransformer,
    SequentialTransformer,
    SetIRIExtensionTransformer,
)
from .registry import ComponentBuilder, register_component

Options = Dict[str, Any]


# ---------------------------------------------------------------------------
# Sources
# ---------------------------------------------------------------------------

def _file_source(options: Options, builder: ComponentBuilder) -> FileQuadSource:
    options = dict(options)
    options['file_path'] = builder.resolve_path(options['file_path'])
    return FileQuadSource(**options)


def _composite_source(options: Options, builder: ComponentBuilder) -> CompositeQuadSource:
    return CompositeQuadSource(builder.build_list('source', options['sources']))


# ---------------------------------------------------------------------------
# Transformers
# ---------------------------------------------------------------------------

def _distinct_transformer(options: Options, builder: ComponentBuilder) -> DistinctTransformer:
    return DistinctTransformer(builder.build('transformer', options['transformer']))


def _sequential_transformer(options: Options, builder: ComponentBuilder) -> SequentialTransformer:
    return SequentialTransformer(builder.build_list('transformer', options['transformers']))


def _composite_varying_resource_transformer(
    options: Options, builder: ComponentBuilder
) -> CompositeVaryingResourceTransformer:
    options = dict(options)
    transformers = builder.build_list('transformer', options.pop('transformers'))
    return CompositeVaryingResourceTransformer(transformers=transformers, **options)


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

def _exception_strategy(options: Options, builder: ComponentBuilder) -> ExceptionStrategy:
    entries = [
        ExceptionEntry(
            matcher=builder.build('matcher', entry['matcher']),
            strategy=builder.build('strategy', entry['strategy']),
        )
        for entry in options.get('exceptions', [])
    ]
    return ExceptionStrategy(builder.build('strategy', options['strategy']), entries)


def _composite_strategy(options: Options, builder: ComponentBuilder) -> CompositeStrategy:
    return CompositeStrategy(builder.build_list('strategy', options['strategies']))


def _probability_strategy(options: Options, builder: ComponentBuilder) -> ProbabilityStrategy:
    options = dict(options)
    strategy = builder.build('strategy', options.pop('strategy'))
    return ProbabilityStrategy(strategy, **options)


# ---------------------------------------------------------------------------
# Sinks
# ---------------------------------------------------------------------------

def _file_sink(options: Options, builder: ComponentBuilder) -> FileQuadSink:
    options = dict(options)
    iri_to_path = {}
    for base_iri, base_path in options.pop('iri_to_path', {}).items():
        resolved = builder.resolve_path(base_path)
        if base_path.endswith(('/', '\\')):
            resolved += base_path[-1]
        iri_to_path[base_iri] = resolved
    return FileQuadSink(iri_to_path, **options)


def _filtered_sink(options: Options, builder: ComponentBuilder) -> FilteredQuadSink:
    return FilteredQuadSink(
        builder.build('sink', options['sink']),
        builder.build('matcher', options['matcher']),
    )


def _composite_sink(options: Options, builder: ComponentBuilder) -> CompositeQuadSink:
    return CompositeQuadSink(builder.build_list('sink', options['sinks']))


def _plain(cls):
    """Factory for components configured by keyword options only."""
    def factory(options: Options, builder: ComponentBuilder):
        return cls(**options)
    return factory


def register_defaults() -> None:
    """Register all built-in components."""
    register_component('source', 'file', _file_source)
    register_component('source', 'composite', _composite_source)

    register_component('transformer', 'identity', _plain(IdentityTransformer))
    register_component('transformer', 'clone', _plain(CloneTransformer))
    register_component('transformer', 'replace_iri', _plain(ReplaceIRITransformer))
    register_component('transformer', 'blank_to_named', _plain(BlankToNamedTransformer))
    register_component('transformer', 'set_iri_extension', _plain(SetIRIExtensionTransformer))
    register_component('transformer', 'distribute_iri', _plain(DistributeIRITransformer))
    register_component('transformer', 'distinct', _distinct_transformer)
    register_component('transformer', 'sequential', _sequential_transformer)
    register_component('transformer', 'blank_to_subject_fragment', _plain(BlankToSubjectFragmentTransformer))
    register_component('transformer', 'remap_resource_identifier', _plain(RemapResourceIdentifierTransformer))
    register_component('transformer', 'composite_varying_resource', _composite_varying_resource_transformer)

    register_component('matcher', 'resource_type', _plain(ResourceTypeMatcher))
    register_component('matcher', 'term_value', _plain(TermValueMatcher))
    register_component('matcher', 'predicate', _plain(PredicateMatcher))

    register_component('strategy', 'constant', _plain(ConstantStrategy))
    register_component('strategy', 'subject', _plain(SubjectStrategy))
    register_component('strategy', 'object', _plain(ObjectStrategy))
    register_component('strategy', 'resource_object', _plain(ResourceObjectStrategy))
    register_component('strategy', 'exception', _exception_strategy)
    register_component('strategy', 'composite', _composite_strategy)
    register_component('strategy', 'probability', _probability_strategy)

    register_component('sink', 'file', _file_sink)
    register_component('sink', 'filtered', _filtered_sink)
    register_component('sink', 'composite', _composite_sink)


register_defaults()
