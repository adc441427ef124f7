"""Strategies that place quads into a document derived from one of their resources."""

import logging
import re
from typing import Dict, List, Optional, Union
from urllib.parse import urljoin

from rdflib import URIRef

from ..exceptions import FragmentationError
from ..io.quad_sink import QuadSink
from ..shared.models import Quad, is_named_node
from .base import StreamFragmentationStrategy
from .blank_node_buffer import BlankNodeBuffer

logger = logging.getLogger(__name__)


class SubjectStrategy(StreamFragmentationStrategy):
    """
    Places quads into their subject's document.

    Quads with a blank node subject are written to the document of every
    IRI subject that links to that blank node through its object position.

    Args:
        eager_flushing: Write buffered blank node quads as soon as they are linked.
        relative_path: Optional path resolved against the subject IRI, with a
            trailing slash added, to name the document. With ``"profile"``,
            quads of ``http://ex.org/alice`` go to ``http://ex.org/alice/profile``.
    """

    def __init__(self, eager_flushing: bool = True, relative_path: Optional[str] = None):
        self.relative_path = relative_path
        self.blank_node_buffer = BlankNodeBuffer('subject', 'object', eager_flushing)

    @staticmethod
    def document_iri(subject: str, relative_path: Optional[str] = None) -> str:
        if not relative_path:
            return subject
        base = subject if subject.endswith('/') else f"{subject}/"
        return urljoin(base, relative_path)

    def handle_quad(self, quad: Quad, quad_sink: QuadSink) -> None:
        if is_named_node(quad.subject):
            document = self.document_iri(str(quad.subject), self.relative_path)
            quad_sink.push(document, quad)
            self.blank_node_buffer.materialize_value_for_named_key(quad.object, URIRef(document), quad_sink)

        self.blank_node_buffer.push(quad, quad_sink)

    def flush(self, quad_sink: QuadSink) -> None:
        self.blank_node_buffer.flush(quad_sink)


class ObjectStrategy(StreamFragmentationStrategy):
    """Places quads into their object's document; the mirror of SubjectStrategy."""

    def __init__(self, eager_flushing: bool = True):
        self.blank_node_buffer = BlankNodeBuffer('object', 'subject', eager_flushing)

    def handle_quad(self, quad: Quad, quad_sink: QuadSink) -> None:
        if is_named_node(quad.object):
            quad_sink.push(str(quad.object), quad)
            self.blank_node_buffer.materialize_value_for_named_key(quad.subject, quad.object, quad_sink)

        self.blank_node_buffer.push(quad, quad_sink)

    def flush(self, quad_sink: QuadSink) -> None:
        self.blank_node_buffer.flush(quad_sink)


class ResourceObjectStrategy(StreamFragmentationStrategy):
    """
    Groups quads by subject and places them into the document named by a target predicate.

    Quads of a subject are buffered until a quad of that subject with a
    predicate matching ``target_predicate_regex`` is seen; its object IRI
    becomes the document for all earlier and later quads of the subject.
    Subjects that never get a target are reported at flush and not written.

    Example:
        ResourceObjectStrategy("vocabulary/hasCreator$") writes every post
        into the document of its creator.

    Raises:
        FragmentationError: When the target predicate has a non-IRI object.
    """

    def __init__(self, target_predicate_regex: str):
        self.target_predicate = re.compile(target_predicate_regex)
        self.resource_buffer: Dict[str, Union[List[Quad], URIRef]] = {}

    def handle_quad(self, quad: Quad, quad_sink: QuadSink) -> None:
        subject = str(quad.subject)
        buffered = self.resource_buffer.setdefault(subject, [])

        if isinstance(buffered, list):
            buffered.append(quad)
        else:
            quad_sink.push(str(buffered), quad)

        if self.target_predicate.search(str(quad.predicate)):
            if not is_named_node(quad.object):
                raise FragmentationError(
                    f"Expected target predicate value of type IRI on resource '{subject}', "
                    f"but got '{quad.object}' ({type(quad.object).__name__})",
                    component="ResourceObjectStrategy",
                )
            if isinstance(buffered, list):
                for buffered_quad in buffered:
                    quad_sink.push(str(quad.object), buffered_quad)
            self.resource_buffer[subject] = quad.object

    def flush(self, quad_sink: QuadSink) -> None:
        for subject, buffered in self.resource_buffer.items():
            if isinstance(buffered, list):
                logger.warning(f"Detected quads of the resource {subject} without a defined target predicate.")
