"""
Tests for the term rewriting transformers.
"""

import pytest
from rdflib import BNode, Literal, URIRef

from conftest import q
from rdf_fragmenter.exceptions import ConfigurationError
from rdf_fragmenter.transform import (
    BlankToNamedTransformer,
    DistributeIRITransformer,
    ReplaceIRITransformer,
    SequentialTransformer,
    SetIRIExtensionTransformer,
    to_replacement_template,
)


@pytest.mark.unit
class TestReplacementTemplate:
    """Tests for to_replacement_template."""

    def test_numbered_reference(self):
        assert to_replacement_template("http://new.org/$1/card", 1) == r"http://new.org/\g<1>/card"

    def test_whole_match_and_dollar(self):
        assert to_replacement_template("[$&] costs $$5", 0) == r"[\g<0>] costs $5"

    def test_backslash_is_literal(self):
        assert to_replacement_template(r"urn:b\c\1", 1) == r"urn:b\\c\\1"

    def test_two_digit_reference_falls_back_to_one_digit(self):
        assert to_replacement_template("$10", 1) == r"\g<1>0"

    def test_two_digit_reference(self):
        assert to_replacement_template("$10", 10) == r"\g<10>"

    def test_unknown_group_stays_literal(self):
        assert to_replacement_template("$2-$0", 1) == "$2-$0"

    def test_trailing_dollar(self):
        assert to_replacement_template("cost$", 0) == "cost$"

    def test_invalid_regex(self):
        with pytest.raises(ConfigurationError, match="Invalid regex"):
            ReplaceIRITransformer("([a-z]", "x")


@pytest.mark.unit
class TestReplaceIRITransformer:
    """Tests for ReplaceIRITransformer."""

    def test_replaces_in_every_iri(self):
        transformer = ReplaceIRITransformer("^http://a.org/", "http://b.org/")
        result = transformer.transform(q('http://a.org/s', 'http://a.org/p', 'http://a.org/o', 'http://a.org/g'))
        assert result == [q('http://b.org/s', 'http://b.org/p', 'http://b.org/o', 'http://b.org/g')]

    def test_literals_and_blank_nodes_untouched(self):
        transformer = ReplaceIRITransformer("a", "b")
        quad = q('_:a', 'ex:p', '"a"')
        assert transformer.transform(quad) == [q('_:a', 'ex:p', '"a"')]

    def test_capture_group_reference(self):
        transformer = ReplaceIRITransformer(r"^http://ex.org/pers([0-9]+)$", "http://pods.org/$1/card#me")
        result = transformer.transform(q('http://ex.org/pers12', 'ex:p', 'ex:o'))
        assert result[0].subject == URIRef("http://pods.org/12/card#me")

    def test_only_first_occurrence(self):
        transformer = ReplaceIRITransformer("x", "y")
        assert transformer.transform(q('urn:axxa', 'ex:p', 'ex:o'))[0].subject == URIRef("urn:ayxa")

    def test_backslash_in_replacement(self):
        transformer = ReplaceIRITransformer("^urn:a$", r"urn:b\c")
        assert transformer.transform(q('urn:a', 'ex:p', 'ex:o'))[0].subject == URIRef(r"urn:b\c")

    def test_reference_followed_by_digit(self):
        transformer = ReplaceIRITransformer("^urn:(a)$", "urn:$10")
        assert transformer.transform(q('urn:a', 'ex:p', 'ex:o'))[0].subject == URIRef("urn:a0")

    def test_chained_replacements_compose(self):
        """A to B followed by B to C equals A to C."""
        chained = SequentialTransformer([
            ReplaceIRITransformer("^http://a.org/", "http://b.org/"),
            ReplaceIRITransformer("^http://b.org/", "http://c.org/"),
        ])
        direct = ReplaceIRITransformer("^http://a.org/", "http://c.org/")
        quad = q('http://a.org/s', 'http://a.org/p', 'http://a.org/o')

        assert chained.transform(quad) == direct.transform(quad)


@pytest.mark.unit
class TestBlankToNamedTransformer:
    """Tests for BlankToNamedTransformer."""

    def test_changed_label_becomes_iri(self):
        transformer = BlankToNamedTransformer("^(.*)$", "http://ex.org/bnode/$1")
        result = transformer.transform(q('_:b1', 'ex:p', '_:b2'))
        assert result == [q('http://ex.org/bnode/b1', 'ex:p', 'http://ex.org/bnode/b2')]

    def test_unchanged_label_stays_blank(self):
        transformer = BlankToNamedTransformer("^genid", "http://ex.org/")
        result = transformer.transform(q('_:other', 'ex:p', '_:genid7'))

        assert isinstance(result[0].subject, BNode)
        assert result[0].object == URIRef("http://ex.org/7")

    def test_iris_untouched(self):
        transformer = BlankToNamedTransformer(".*", "http://ex.org/x")
        quad = q('http://ex.org/s', 'http://ex.org/p', '"o"')
        assert transformer.transform(quad) == [quad]


@pytest.mark.unit
class TestSetIRIExtensionTransformer:
    """Tests for SetIRIExtensionTransformer."""

    def test_adds_extension(self):
        transformer = SetIRIExtensionTransformer("nq")
        assert transformer.transform(q('ex:s', 'ex:p', '"o"'))[0].subject == URIRef("ex:s.nq")

    def test_replaces_existing_extension(self):
        transformer = SetIRIExtensionTransformer("nq")
        assert transformer.transform(q('ex:s.ttl', 'ex:p', '"o"'))[0].subject == URIRef("ex:s.nq")

    def test_idempotent(self):
        transformer = SetIRIExtensionTransformer("nq")
        once = transformer.transform(q('ex:s', 'ex:p', 'ex:o'))[0]
        assert transformer.transform(once) == [once]

    def test_literal_untouched(self):
        transformer = SetIRIExtensionTransformer("nq")
        assert transformer.transform(q('ex:s.nq', 'ex:p.nq', '"o"'))[0].object == Literal("o")

    def test_leading_dot_rejected(self):
        with pytest.raises(ConfigurationError, match="must not start with '.'"):
            SetIRIExtensionTransformer(".nq")

    def test_iri_pattern_restricts_changes(self):
        transformer = SetIRIExtensionTransformer("nq", iri_pattern="^http://data.org/")
        result = transformer.transform(q('http://data.org/s', 'http://vocab.org/p', 'http://data.org/o'))
        assert result == [q('http://data.org/s.nq', 'http://vocab.org/p', 'http://data.org/o.nq')]


@pytest.mark.unit
class TestDistributeIRITransformer:
    """Tests for DistributeIRITransformer."""

    REGEX = r"^http://www.ldbc.eu/data/pers([0-9]*)$"
    REPLACEMENTS = [
        "http://server1.ldbc.eu/pods/$1/profile/card#me",
        "http://server2.ldbc.eu/pods/$1/profile/card#me",
    ]

    def test_even_number_uses_first_template(self):
        transformer = DistributeIRITransformer(self.REGEX, self.REPLACEMENTS)
        result = transformer.transform(q('http://www.ldbc.eu/data/pers494', 'ex:p', 'ex:o'))
        assert result[0].subject == URIRef("http://server1.ldbc.eu/pods/494/profile/card#me")

    def test_odd_number_uses_second_template(self):
        transformer = DistributeIRITransformer(self.REGEX, self.REPLACEMENTS)
        result = transformer.transform(q('http://www.ldbc.eu/data/pers495', 'ex:p', 'ex:o'))
        assert result[0].subject == URIRef("http://server2.ldbc.eu/pods/495/profile/card#me")

    def test_non_matching_iri_untouched(self):
        transformer = DistributeIRITransformer(self.REGEX, self.REPLACEMENTS)
        quad = q('http://www.ldbc.eu/data/post1', 'ex:p', '"1"')
        assert transformer.transform(quad) == [quad]

    def test_regex_without_group(self):
        with pytest.raises(ConfigurationError, match="does not contain any groups"):
            DistributeIRITransformer("^http://ex.org/", self.REPLACEMENTS)

    def test_no_replacements(self):
        with pytest.raises(ConfigurationError, match="At least one replacement"):
            DistributeIRITransformer(self.REGEX, [])

    def test_group_not_a_number(self):
        transformer = DistributeIRITransformer(r"^http://ex.org/([a-z]+)$", self.REPLACEMENTS)
        with pytest.raises(ConfigurationError, match="must always match a number"):
            transformer.transform(q('http://ex.org/abc', 'ex:p', 'ex:o'))
