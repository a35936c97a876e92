"""
test_link_graph.py
------------------
Tests for LinkGraph: reciprocal links/backlinks bookkeeping.
"""
import pytest
from datetime import datetime, timezone

from mnemos.core.exceptions import NotFoundError, ValidationError
from mnemos.database.link_graph import LinkGraph
from mnemos.database.models import LinkType

LATER = datetime(2024, 6, 11, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def graph(db):
    return LinkGraph(db)


@pytest.fixture
def notes(note_factory):
    return [note_factory(note_id) for note_id in ("a", "b", "c")]


class TestCreateLink:
    """Test LinkGraph.create_link()."""

    def test_updates_both_endpoints(self, graph, notes, note_manager):
        link = graph.create_link("a", "b", "expands", context="builds on", now=LATER)

        assert link.type is LinkType.EXPANDS
        assert link.strength == 5
        assert link.context == "builds on"
        assert link.id.startswith("link_")
        a, b = note_manager.get("a"), note_manager.get("b")
        assert a.links == ["b"]
        assert b.backlinks == ["a"]
        assert a.updated_at == LATER
        assert b.updated_at == LATER

    def test_parallel_links_do_not_duplicate_entries(self, graph, notes, note_manager):
        graph.create_link("a", "b", "related")
        graph.create_link("a", "b", "references")
        assert note_manager.get("a").links == ["b"]
        assert note_manager.get("b").backlinks == ["a"]

    def test_self_link_rejected(self, graph, notes, link_manager):
        with pytest.raises(ValidationError, match="cannot link to itself"):
            graph.create_link("a", "a", "related")
        assert link_manager.count() == 0

    def test_missing_endpoint(self, graph, notes, link_manager):
        with pytest.raises(NotFoundError, match="Note not found: zzz"):
            graph.create_link("a", "zzz", "related")
        assert link_manager.count() == 0

    def test_unknown_type(self, graph, notes):
        with pytest.raises(ValidationError):
            graph.create_link("a", "b", "cites")


class TestDeleteLink:
    """Test LinkGraph.delete_link()."""

    def test_removes_endpoint_entries(self, graph, notes, note_manager):
        link = graph.create_link("a", "b", "related")
        removed = graph.delete_link(link.id)

        assert removed.id == link.id
        assert note_manager.get("a").links == []
        assert note_manager.get("b").backlinks == []

    def test_keeps_entries_while_parallel_link_remains(self, graph, notes, note_manager):
        first = graph.create_link("a", "b", "related")
        graph.create_link("a", "b", "follows")
        graph.delete_link(first.id)

        assert note_manager.get("a").links == ["b"]
        assert note_manager.get("b").backlinks == ["a"]

    def test_missing_link(self, graph):
        assert graph.delete_link("link_missing") is None


class TestScrubAndVerify:
    """Test scrub_note() and verify()."""

    def test_delete_note_scrubs_survivors(self, graph, notes, note_manager):
        graph.create_link("a", "b", "related")
        graph.create_link("c", "a", "related")
        graph.create_link("b", "c", "related")

        removed = note_manager.delete("a")
        touched = graph.scrub_note("a", removed, now=LATER)

        assert sorted(touched) == ["b", "c"]
        b, c = note_manager.get("b"), note_manager.get("c")
        assert b.backlinks == []
        assert b.links == ["c"]
        assert c.links == []
        assert c.backlinks == ["b"]
        assert graph.verify() == []

    def test_verify_sound_graph(self, graph, notes):
        graph.create_link("a", "b", "related")
        graph.create_link("b", "c", "related")
        assert graph.verify() == []

    def test_verify_reports_missing_entries(self, graph, notes, note_manager):
        link = graph.create_link("a", "b", "related")
        note_manager.put({"id": "a", "links": []})

        problems = graph.verify()

        assert problems == [f"{link.id}: b missing from a.links"]

    def test_verify_reports_dangling_link(self, graph, notes, link_manager):
        link_manager.create({"id": "l9", "source_id": "a", "target_id": "gone", "type": "related"})
        assert graph.verify() == ["l9: dangling endpoint"]
