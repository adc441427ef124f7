"""
Pytest configuration and fixtures for the test suite.

Defines markers for selective test execution:
    pytest -m unit          # Fast unit tests
    pytest -m integration   # Tests that read and write files
"""

import os
import sys
from typing import Iterator, List

import pytest
from rdflib import BNode, Literal, URIRef

# Make the package importable without installation
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from rdf_fragmenter.io import QuadSink, QuadSource
from rdf_fragmenter.shared.models import Quad


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "integration: Tests that read and write files")


def q(s, p, o, g=None) -> Quad:
    """Build a quad from short strings: '_:x' is a blank node, '"x"' a literal, anything else an IRI."""
    def term(value):
        if value is None:
            return None
        if value.startswith('_:'):
            return BNode(value[2:])
        if value.startswith('"') and value.endswith('"'):
            return Literal(value[1:-1])
        return URIRef(value)
    return Quad(term(s), term(p), term(o), term(g))


class ListQuadSource(QuadSource):
    """A quad source over a fixed list; counts how often it was opened."""

    def __init__(self, quads):
        self.quads = list(quads)
        self.opened = 0

    def get_quads(self) -> Iterator[Quad]:
        self.opened += 1
        return iter(list(self.quads))


class FailingQuadSource(QuadSource):
    """A quad source that yields some quads and then raises."""

    def __init__(self, quads=(), error=None):
        self.quads = list(quads)
        self.error = error or RuntimeError("Error in stream")

    def get_quads(self) -> Iterator[Quad]:
        yield from self.quads
        raise self.error


class RecordingQuadSink(QuadSink):
    """A quad sink that records pushes and closes."""

    def __init__(self):
        self.pushed: List[tuple] = []
        self.close_count = 0

    def push(self, iri: str, quad: Quad) -> None:
        self.pushed.append((iri, quad))

    def close(self) -> None:
        self.close_count += 1


@pytest.fixture
def make_quad():
    """Factory fixture for quads built from short strings."""
    return q


@pytest.fixture
def recording_sink():
    return RecordingQuadSink()


@pytest.fixture
def sample_nquads_file(tmp_path):
    """A small N-Quads file with one named graph."""
    content = (
        '<http://example.org/alice> <http://www.w3.org/1999/02/22-rdf-syntax-ns#type> '
        '<http://example.org/vocabulary/Person> .\n'
        '<http://example.org/alice> <http://example.org/name> "Alice" .\n'
        '<http://example.org/bob> <http://example.org/knows> <http://example.org/alice> '
        '<http://example.org/graph1> .\n'
    )
    file_path = tmp_path / "sample.nq"
    file_path.write_text(content, encoding='utf-8')
    return file_path
