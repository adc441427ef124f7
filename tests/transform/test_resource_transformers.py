"""
Tests for the stateful resource transformers and ResourceIdentifier.
"""

import pytest
from rdflib import URIRef

from conftest import q
from rdf_fragmenter.exceptions import ConfigurationError, FragmentationError
from rdf_fragmenter.shared.models import RDF_TYPE
from rdf_fragmenter.transform import (
    BlankToSubjectFragmentTransformer,
    CompositeVaryingResourceTransformer,
    IdentityTransformer,
    QuadTransformStream,
    RemapResourceIdentifierTransformer,
    ReplaceIRITransformer,
    ResourceIdentifier,
)

EX = "http://ex.org/"
TYPE = str(RDF_TYPE)


@pytest.mark.unit
class TestBlankToSubjectFragmentTransformer:
    """Tests for BlankToSubjectFragmentTransformer."""

    def test_maps_blank_nodes_to_fragments(self):
        transformer = BlankToSubjectFragmentTransformer()

        link = transformer.transform(q(EX + "alice#me", EX + "address", '_:addr'))
        street = transformer.transform(q('_:addr', EX + "street", '"Main"'))

        assert link == [q(EX + "alice#me", EX + "address", EX + "alice#addr")]
        assert street == [q(EX + "alice#addr", EX + "street", '"Main"')]

    def test_first_subject_wins(self):
        transformer = BlankToSubjectFragmentTransformer()
        transformer.transform(q(EX + "alice", EX + "address", '_:addr'))

        result = transformer.transform(q(EX + "bob", EX + "address", '_:addr'))

        assert result == [q(EX + "bob", EX + "address", EX + "alice#addr")]

    def test_other_quads_untouched(self):
        quad = q(EX + "alice", EX + "name", '"Alice"')
        assert BlankToSubjectFragmentTransformer().transform(quad) == [quad]

    def test_unmapped_blank_subject(self):
        with pytest.raises(FragmentationError, match="Unmapped blank node"):
            BlankToSubjectFragmentTransformer().transform(q('_:orphan', EX + "p", '"x"'))


@pytest.mark.unit
class TestResourceIdentifier:
    """Tests for ResourceIdentifier."""

    def test_buffer_starts_at_type_quad(self):
        identifier = ResourceIdentifier("Post$", "hasCreator$")

        assert identifier.try_initializing_buffer(q(EX + "post1", TYPE, EX + "Post"))
        assert not identifier.try_initializing_buffer(q(EX + "person1", TYPE, EX + "Person"))
        assert identifier.buffered_resource(q(EX + "x", EX + "likes", EX + "post1")).iri == EX + "post1"

    def test_target_overwrite_rejected(self):
        identifier = ResourceIdentifier("Post$", "hasCreator$")
        identifier.try_initializing_buffer(q(EX + "post1", TYPE, EX + "Post"))
        resource = identifier.buffer[EX + "post1"]
        identifier.try_storing_target(resource, q(EX + "post1", EX + "hasCreator", EX + "alice"))

        with pytest.raises(FragmentationError, match="Illegal overwrite of target"):
            identifier.try_storing_target(resource, q(EX + "post1", EX + "hasCreator", EX + "bob"))

    def test_unresolved_resources_fail_at_end(self):
        identifier = ResourceIdentifier("Post$", "hasCreator$")
        identifier.try_initializing_buffer(q(EX + "post1", TYPE, EX + "Post"))

        with pytest.raises(FragmentationError, match="non-finalized resources"):
            identifier.check_resolved()


@pytest.mark.unit
class TestRemapResourceIdentifierTransformer:
    """Tests for RemapResourceIdentifierTransformer."""

    def make(self):
        return RemapResourceIdentifierTransformer("#Post", "Post$", "hasId$", "hasCreator$")

    def test_resource_moves_into_target(self):
        transformer = self.make()
        new_iri = EX + "person1#Post1"

        assert transformer.transform(q(EX + "post1", TYPE, EX + "Post")) == []
        assert transformer.transform(q(EX + "post1", EX + "hasId", '"1"')) == []
        result = transformer.transform(q(EX + "post1", EX + "hasCreator", EX + "person1"))

        assert result == [
            q(new_iri, TYPE, EX + "Post"),
            q(new_iri, EX + "hasId", '"1"'),
            q(new_iri, EX + "hasCreator", EX + "person1"),
        ]

    def test_later_references_rewritten(self):
        transformer = self.make()
        for quad in [
            q(EX + "post1", TYPE, EX + "Post"),
            q(EX + "post1", EX + "hasId", '"1"'),
            q(EX + "post1", EX + "hasCreator", EX + "person1"),
        ]:
            transformer.transform(quad)

        assert transformer.transform(q(EX + "c1", EX + "replyOf", EX + "post1")) == [
            q(EX + "c1", EX + "replyOf", EX + "person1#Post1"),
        ]

    def test_unrelated_quads_pass(self):
        quad = q(EX + "person1", EX + "name", '"P"')
        assert self.make().transform(quad) == [quad]

    def test_identifier_must_be_literal(self):
        transformer = self.make()
        transformer.transform(q(EX + "post1", TYPE, EX + "Post"))

        with pytest.raises(FragmentationError, match="identifier value of type Literal"):
            transformer.transform(q(EX + "post1", EX + "hasId", EX + "one"))

    def test_unresolved_resource_fails_finalize(self):
        transformer = self.make()
        transformer.transform(q(EX + "post1", TYPE, EX + "Post"))

        with pytest.raises(FragmentationError, match="non-finalized resources"):
            transformer.finalize()


@pytest.mark.unit
class TestCompositeVaryingResourceTransformer:
    """Tests for CompositeVaryingResourceTransformer."""

    def make(self):
        return CompositeVaryingResourceTransformer("Post$", "hasCreator$", [
            ReplaceIRITransformer("^http://ex.org/", "http://server0.org/"),
            ReplaceIRITransformer("^http://ex.org/", "http://server1.org/"),
        ])

    def server_of(self, target):
        return sum(map(ord, target)) % 2

    def test_resource_goes_through_one_transformer(self):
        transformer = self.make()
        server = f"http://server{self.server_of(EX + 'person1')}.org/"

        assert transformer.transform(q(EX + "post1", TYPE, EX + "Post")) == []
        result = transformer.transform(q(EX + "post1", EX + "hasCreator", EX + "person1"))
        later = transformer.transform(q(EX + "post1", EX + "content", '"hi"'))

        assert result == [
            q(server + "post1", TYPE, EX + "Post"),
            q(server + "post1", EX + "hasCreator", EX + "person1"),
        ]
        assert later == [q(server + "post1", EX + "content", '"hi"')]

    def test_only_resource_position_rewritten(self):
        transformer = self.make()
        transformer.transform(q(EX + "post1", TYPE, EX + "Post"))
        transformer.transform(q(EX + "post1", EX + "hasCreator", EX + "person1"))
        server = f"http://server{self.server_of(EX + 'person1')}.org/"

        result = transformer.transform(q(EX + "c1", EX + "replyOf", EX + "post1"))

        assert result == [q(EX + "c1", EX + "replyOf", server + "post1")]

    def test_non_term_transformer_applied_to_quad(self):
        transformer = CompositeVaryingResourceTransformer("Post$", "hasCreator$", [IdentityTransformer()])
        typed = q(EX + "post1", TYPE, EX + "Post")
        creator = q(EX + "post1", EX + "hasCreator", EX + "person1")

        transformer.transform(typed)

        assert transformer.transform(creator) == [typed, creator]

    def test_no_transformers(self):
        with pytest.raises(ConfigurationError, match="At least one transformer"):
            CompositeVaryingResourceTransformer("Post$", "hasCreator$", [])

    def test_finalize_reaches_transformers(self):
        """An unresolved resource is reported when the transform stream ends."""
        stream = QuadTransformStream([self.make()])

        with pytest.raises(FragmentationError, match="non-finalized resources"):
            list(stream.transform([q(EX + "post1", TYPE, EX + "Post")]))

    def test_resolved_stream(self):
        quads = [
            q(EX + "post1", TYPE, EX + "Post"),
            q(EX + "post1", EX + "hasCreator", EX + "person1"),
        ]
        result = list(QuadTransformStream([self.make()]).transform(quads))

        assert [quad.subject for quad in result] == [
            URIRef(f"http://server{self.server_of(EX + 'person1')}.org/post1")
        ] * 2
