"""
Transformers that rewrite whole resources.

- BlankToSubjectFragmentTransformer: blank nodes become fragments of the
  IRI subject that first refers to them
- RemapResourceIdentifierTransformer: typed resources move inside the
  document of a target resource
- CompositeVaryingResourceTransformer: typed resources are spread over
  several transformers by their target

These transformers keep state across quads and may hold quads back until
a resource is resolved; ``finalize()`` fails if a resource never is.
"""

import logging
import re
from typing import Dict, List, Sequence
from urllib.parse import urljoin

from rdflib import Literal, URIRef

from ..exceptions import ConfigurationError, FragmentationError
from ..shared.models import Quad, get_term, is_blank_node, is_named_node
from .quad_transformer import QuadTransformer, TermsTransformer
from .resource_identifier import ResourceIdentifier

logger = logging.getLogger(__name__)


class BlankToSubjectFragmentTransformer(QuadTransformer):
    """
    Maps blank nodes to fragments on the IRI of the first subject they appear with as object.

    ``<http://ex.org/a#me> <p> _:b1`` maps ``_:b1`` to ``<http://ex.org/a#b1>``,
    and every later quad with ``_:b1`` as subject or object uses that IRI.

    Raises:
        FragmentationError: When a blank node subject is seen before any
            IRI subject referred to it.
    """

    def __init__(self):
        self.mappings: Dict[str, URIRef] = {}

    def transform(self, quad: Quad) -> List[Quad]:
        if is_blank_node(quad.object):
            label = str(quad.object)
            if label not in self.mappings and is_named_node(quad.subject):
                subject_base = str(quad.subject).split('#', 1)[0]
                self.mappings[label] = URIRef(f"{subject_base}#{label.split(':', 1)[0]}")
            if label in self.mappings:
                quad = quad._replace(object=self.mappings[label])

        if is_blank_node(quad.subject):
            target = self.mappings.get(str(quad.subject))
            if target is None:
                raise FragmentationError(
                    f"Unmapped blank node: {quad.subject}",
                    component="BlankToSubjectFragmentTransformer",
                )
            quad = quad._replace(subject=target)
        return [quad]


class RemapResourceIdentifierTransformer(QuadTransformer):
    """
    Rewrites the IRI of typed resources so they become part of a target resource.

    A resource of a type matching ``type_regex`` is held back until both its
    identifier (a literal under ``identifier_predicate_regex``) and its target
    (an IRI under ``target_predicate_regex``) are known. Its IRI is then
    replaced by ``new_identifier_separator + id`` resolved against the
    target, in the held-back quads and in every later subject or object.

    Example:
        With separator ``#Post``, ``<ex:post1> a <Post>; <hasId> "1";
        <hasCreator> <http://ex.org/person1>`` becomes
        ``<http://ex.org/person1#Post1>`` for all three quads.
    """

    def __init__(
        self,
        new_identifier_separator: str,
        type_regex: str,
        identifier_predicate_regex: str,
        target_predicate_regex: str,
    ):
        self.new_identifier_separator = new_identifier_separator
        self.identifier_predicate = re.compile(identifier_predicate_regex)
        self.resource_identifier: ResourceIdentifier[URIRef] = ResourceIdentifier(
            type_regex, target_predicate_regex
        )

    def transform(self, quad: Quad) -> List[Quad]:
        mapped = self.resource_identifier.mapped_positions(quad)
        if mapped:
            return [quad._replace(**{position: iri for iri, position in mapped})]

        if self.resource_identifier.try_initializing_buffer(quad):
            return []

        resource = self.resource_identifier.buffered_resource(quad)
        if resource is None:
            return [quad]

        if self.identifier_predicate.search(str(quad.predicate)):
            if not isinstance(quad.object, Literal):
                raise FragmentationError(
                    f"Expected identifier value of type Literal on resource '{resource.iri}'",
                    component="RemapResourceIdentifierTransformer",
                )
            if resource.id is not None:
                raise FragmentationError(
                    f"Illegal overwrite of identifier value on resource '{resource.iri}'",
                    component="RemapResourceIdentifierTransformer",
                )
            resource.id = str(quad.object)

        self.resource_identifier.try_storing_target(resource, quad)
        if resource.id is None or resource.target is None:
            return []

        new_iri = URIRef(urljoin(str(resource.target), self.new_identifier_separator + resource.id))
        self.resource_identifier.apply_mapping(resource, new_iri)
        logger.debug(f"Remapped {resource.iri} to {new_iri}")
        return [
            buffered._replace(**{_resource_position(buffered, resource.iri): new_iri})
            for buffered in resource.quads
        ]

    def finalize(self) -> None:
        self.resource_identifier.check_resolved()


class CompositeVaryingResourceTransformer(QuadTransformer):
    """
    Spreads typed resources over several transformers.

    Resources of a type matching ``type_regex`` are held back until their
    target (under ``target_predicate_regex``) is known. The target IRI then
    picks one transformer, by the sum of its character codes modulo the
    number of transformers, and that transformer is applied to the resource
    in the held-back quads and in every later quad that mentions it. All
    quads of one resource therefore go through the same transformer.

    Term transformers only rewrite the position that holds the resource,
    so a quad linking two resources can be rewritten by two transformers.
    """

    def __init__(self, type_regex: str, target_predicate_regex: str, transformers: Sequence[QuadTransformer]):
        if not transformers:
            raise ConfigurationError(
                "At least one transformer is required",
                component="CompositeVaryingResourceTransformer",
            )
        self.transformers = list(transformers)
        self.resource_identifier: ResourceIdentifier[QuadTransformer] = ResourceIdentifier(
            type_regex, target_predicate_regex
        )

    def transform(self, quad: Quad) -> List[Quad]:
        resource = self.resource_identifier.buffered_resource(quad)
        if resource is None and self.resource_identifier.mapped_positions(quad):
            return self._apply_mapped(quad)

        if self.resource_identifier.try_initializing_buffer(quad):
            return []

        if resource is None:
            return [quad]

        self.resource_identifier.try_storing_target(resource, quad)
        if resource.target is None:
            return []

        transformer = self.transformers[sum(map(ord, str(resource.target))) % len(self.transformers)]
        self.resource_identifier.apply_mapping(resource, transformer)
        return [quad_out for buffered in resource.quads for quad_out in self._apply_mapped(buffered)]

    def _apply_mapped(self, quad: Quad) -> List[Quad]:
        quads = [quad]
        for transformer, position in self.resource_identifier.mapped_positions(quad):
            if isinstance(transformer, TermsTransformer):
                quads = [
                    q._replace(**{position: transformer.transform_term(get_term(q, position), position)})
                    for q in quads
                ]
            else:
                quads = [quad_out for q in quads for quad_out in transformer.transform(q)]
        return quads

    def finalize(self) -> None:
        self.resource_identifier.check_resolved()
        for transformer in self.transformers:
            transformer.finalize()


def _resource_position(quad: Quad, iri: str) -> str:
    return 'subject' if str(quad.subject) == iri else 'object'
