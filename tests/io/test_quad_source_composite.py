"""
Tests for CompositeQuadSource.

Covers ordering across sources, empty inputs, error forwarding from any
source position, and that later sources are not opened after an error.
"""

import pytest

from conftest import FailingQuadSource, ListQuadSource, q
from rdf_fragmenter.io import CompositeQuadSource

A = q('ex:a', 'ex:p', 'ex:o')
B = q('ex:b', 'ex:p', 'ex:o')
C = q('ex:c', 'ex:p', 'ex:o')


@pytest.mark.unit
class TestCompositeQuadSource:
    """Tests for strict sequential concatenation."""

    def test_no_sources(self):
        """Zero sources produce an empty iterator."""
        source = CompositeQuadSource([])
        assert list(source.get_quads()) == []

    def test_empty_sources(self):
        source = CompositeQuadSource([ListQuadSource([]), ListQuadSource([]), ListQuadSource([])])
        assert list(source.get_quads()) == []

    def test_non_empty_sources_keep_order(self):
        """Three identical sources are concatenated in order."""
        inner = ListQuadSource([A, B, C])
        source = CompositeQuadSource([inner, inner, inner])
        assert list(source.get_quads()) == [A, B, C, A, B, C, A, B, C]

    def test_each_call_is_independent(self):
        source = CompositeQuadSource([ListQuadSource([A]), ListQuadSource([B])])
        first = source.get_quads()
        second = source.get_quads()
        assert next(first) == A
        assert list(second) == [A, B]
        assert list(first) == [B]

    def test_sources_opened_lazily_in_order(self):
        """A source is only opened after the previous one is drained."""
        first = ListQuadSource([A, B])
        second = ListQuadSource([C])
        iterator = CompositeQuadSource([first, second]).get_quads()

        assert next(iterator) == A
        assert next(iterator) == B
        assert second.opened == 0
        assert next(iterator) == C
        assert second.opened == 1

    @pytest.mark.parametrize("position", [0, 1, 2])
    def test_error_in_any_source(self, position):
        """An error raised by the first, middle or last source reaches the consumer."""
        error = RuntimeError("Error in stream")
        sources = [ListQuadSource([A, B, C]) for _ in range(3)]
        sources[position] = FailingQuadSource(error=error)

        with pytest.raises(RuntimeError) as exc_info:
            list(CompositeQuadSource(sources).get_quads())
        assert exc_info.value is error

    def test_no_quads_after_error(self):
        failing = FailingQuadSource([A])
        after = ListQuadSource([C])
        iterator = CompositeQuadSource([failing, after]).get_quads()

        assert next(iterator) == A
        with pytest.raises(RuntimeError):
            next(iterator)
        assert list(iterator) == []
        assert after.opened == 0
