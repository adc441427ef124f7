"""
Blank node buffer.

Quads whose key position (e.g. subject) holds a blank node have no
document of their own. The buffer holds them until the blank node is
linked, through the value position (e.g. object) of a quad with a named
key, to one or more IRIs; the buffered quads are then written to the
documents of those IRIs.
"""

import logging
from typing import Dict, List

from rdflib import URIRef

from ..io.quad_sink import QuadSink
from ..shared.models import Quad, get_term, is_blank_node, quad_to_nquads

logger = logging.getLogger(__name__)


class BlankNodeBuffer:
    """
    Buffers quads with blank node keys and links them to named keys.

    Args:
        key_position: The quad position checked for blank nodes.
        value_position: The quad position that may link a key to a blank node.
        eager_flushing: Flush pending quads as soon as a link is known,
                        instead of waiting for ``flush()``.
    """

    def __init__(self, key_position: str, value_position: str, eager_flushing: bool = True):
        self.key_position = key_position
        self.value_position = value_position
        self.eager_flushing = eager_flushing
        self.value_key_links: Dict[str, List[URIRef]] = {}
        self.pending_blank_key_quads: Dict[str, List[Quad]] = {}

    def push(self, quad: Quad, quad_sink: QuadSink) -> None:
        """Buffer the quad if its key is a blank node."""
        key = get_term(quad, self.key_position)
        if is_blank_node(key):
            label = str(key)
            self.pending_blank_key_quads.setdefault(label, []).append(quad)
            if self.eager_flushing:
                self._attempt_flush_label(label, quad_sink)

    def materialize_value_for_named_key(self, value, key: URIRef, quad_sink: QuadSink) -> None:
        """Record that blank node ``value`` belongs to the document of ``key``."""
        if is_blank_node(value):
            label = str(value)
            keys = self.value_key_links.setdefault(label, [])
            if key in keys:
                return
            keys.append(key)
            if self.eager_flushing:
                self._attempt_flush_label(label, quad_sink)

    def _attempt_flush_label(self, label: str, quad_sink: QuadSink) -> bool:
        quads = self.pending_blank_key_quads.get(label)
        keys = self.value_key_links.get(label)
        if not quads or not keys:
            return False

        # Detach first: materializing a nested link may re-enter for the same label.
        del self.pending_blank_key_quads[label]
        for key in list(keys):
            for quad in quads:
                quad_sink.push(str(key), quad)
                self.materialize_value_for_named_key(get_term(quad, self.value_position), key, quad_sink)
        return True

    def flush(self, quad_sink: QuadSink) -> None:
        """Write every linkable pending quad; warn about the rest."""
        changed = True
        while changed:
            changed = False
            for label in list(self.pending_blank_key_quads):
                if self._attempt_flush_label(label, quad_sink):
                    changed = True

        if self.pending_blank_key_quads:
            logger.warning(
                f"Detected quads with blank node {self.key_position} "
                f"that have no link to an IRI {self.key_position}:"
            )
            for quads in self.pending_blank_key_quads.values():
                for quad in quads:
                    logger.warning(f"  {quad_to_nquads(quad).rstrip()}")
