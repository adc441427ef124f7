"""
Tracking of typed resources across a quad stream.

Used by transformers that must see several quads of a resource (its type
and its target predicate) before they can decide how to rewrite it.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, Generic, List, Optional, Tuple, TypeVar

from rdflib import URIRef

from ..exceptions import FragmentationError
from ..shared.models import RDF_TYPE, Quad, is_named_node

T = TypeVar('T')


@dataclass
class BufferedResource:
    """Quads of a typed resource that has not been resolved yet."""
    iri: str
    type: URIRef
    quads: List[Quad] = field(default_factory=list)
    id: Optional[str] = None
    target: Optional[URIRef] = None


class ResourceIdentifier(Generic[T]):
    """
    Buffers resources of a given type until they are resolved, then maps them to a value.

    A resource starts buffering at its ``rdf:type`` quad, so that quad must
    come before any other quad of the resource.

    Args:
        type_regex: Regex for the type IRIs of tracked resources.
        target_predicate_regex: Regex for the predicate whose object IRI
            is the target of a resource.
    """

    def __init__(self, type_regex: str, target_predicate_regex: str):
        self.type = re.compile(type_regex)
        self.target_predicate = re.compile(target_predicate_regex)
        self.buffer: Dict[str, BufferedResource] = {}
        self.resource_mapping: Dict[str, T] = {}

    def buffered_resource(self, quad: Quad) -> Optional[BufferedResource]:
        """The buffered resource in the subject, else in the object position of the quad."""
        for term in (quad.subject, quad.object):
            if is_named_node(term) and str(term) in self.buffer:
                return self.buffer[str(term)]
        return None

    def try_initializing_buffer(self, quad: Quad) -> bool:
        """Start buffering the subject if the quad declares it to be of the tracked type."""
        if (
            is_named_node(quad.subject)
            and quad.predicate == RDF_TYPE
            and is_named_node(quad.object)
            and self.type.search(str(quad.object))
        ):
            self.buffer[str(quad.subject)] = BufferedResource(str(quad.subject), quad.object, [quad])
            return True
        return False

    def try_storing_target(self, resource: BufferedResource, quad: Quad) -> bool:
        """
        Append the quad to the resource, and take its object as target if the predicate matches.

        Raises:
            FragmentationError: If the target is not an IRI, or was already set.
        """
        resource.quads.append(quad)
        if not self.target_predicate.search(str(quad.predicate)):
            return False

        if not is_named_node(quad.object):
            raise FragmentationError(
                f"Expected target value of type IRI on resource '{resource.iri}'",
                component="ResourceIdentifier",
            )
        if resource.target is not None:
            raise FragmentationError(
                f"Illegal overwrite of target value on resource '{resource.iri}'",
                component="ResourceIdentifier",
            )
        resource.target = quad.object
        return True

    def mapped_positions(self, quad: Quad) -> List[Tuple[T, str]]:
        """Mappings of the resolved resources in the subject and object positions of the quad."""
        found = []
        for position in ('subject', 'object'):
            term = getattr(quad, position)
            if is_named_node(term) and str(term) in self.resource_mapping:
                found.append((self.resource_mapping[str(term)], position))
        return found

    def apply_mapping(self, resource: BufferedResource, mapping: T) -> None:
        del self.buffer[resource.iri]
        self.resource_mapping[resource.iri] = mapping

    def check_resolved(self) -> None:
        """
        Raises:
            FragmentationError: If resources are still buffered at the end of the stream.
        """
        if self.buffer:
            raise FragmentationError(
                f"Detected non-finalized resources in the buffer: {', '.join(self.buffer)}",
                component="ResourceIdentifier",
            )
