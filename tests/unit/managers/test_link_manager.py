"""
test_link_manager.py
--------------------
Unit tests for LinkManager storage and source/target indexes.

Target Coverage: 90%+
"""
import pytest
from datetime import datetime, timedelta, timezone

from mnemos.core.exceptions import DuplicateIdError, ValidationError
from mnemos.database.models import LinkType

NOW = datetime(2024, 6, 10, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_link(link_manager):
    """Create links through the LinkManager."""

    def create(link_id, source, target, minutes=0, **overrides):
        metadata = {
            "id": link_id,
            "source_id": source,
            "target_id": target,
            "type": "related",
            "created_at": NOW + timedelta(minutes=minutes),
        }
        metadata.update(overrides)
        return link_manager.create(metadata)

    return create


class TestLinkManagerCreate:
    """Test LinkManager.create()."""

    def test_create_defaults(self, link_manager):
        link = link_manager.create(
            {"id": "l1", "source_id": "a", "target_id": "b", "type": "prerequisite"}
        )
        assert link.type is LinkType.PREREQUISITE
        assert link.strength == 5
        assert link.context is None
        assert link.created_at is not None

    def test_create_with_context_and_strength(self, make_link):
        link = make_link("l1", "a", "b", strength=8, context="see chapter 2")
        assert link.strength == 8
        assert link.context == "see chapter 2"

    def test_duplicate_id(self, make_link):
        make_link("l1", "a", "b")
        with pytest.raises(DuplicateIdError, match="link already exists: l1"):
            make_link("l1", "b", "c")

    def test_missing_type(self, link_manager):
        with pytest.raises(ValidationError, match="type"):
            link_manager.create({"id": "l1", "source_id": "a", "target_id": "b"})

    def test_unknown_type(self, make_link):
        with pytest.raises(ValidationError, match="LinkType"):
            make_link("l1", "a", "b", type="cites")

    def test_strength_bounds(self, make_link):
        with pytest.raises(ValidationError, match="strength"):
            make_link("l1", "a", "b", strength=11)


class TestLinkManagerQueries:
    """Test index lookups and deletion."""

    @pytest.fixture
    def graph(self, make_link):
        make_link("l1", "a", "b", minutes=0)
        make_link("l2", "a", "c", minutes=1)
        make_link("l3", "c", "a", minutes=2)
        make_link("l4", "b", "c", minutes=3)

    def test_get_by_source(self, link_manager, graph):
        assert [l.id for l in link_manager.get_by_source("a")] == ["l1", "l2"]

    def test_get_by_target(self, link_manager, graph):
        assert [l.id for l in link_manager.get_by_target("c")] == ["l2", "l4"]

    def test_get_for_note_covers_both_directions(self, link_manager, graph):
        assert [l.id for l in link_manager.get_for_note("a")] == ["l1", "l2", "l3"]

    def test_delete_returns_link(self, link_manager, graph):
        removed = link_manager.delete("l2")
        assert removed.id == "l2"
        assert link_manager.exists("l2") is False
        assert link_manager.count() == 3

    def test_delete_missing_returns_none(self, link_manager):
        assert link_manager.delete("nope") is None

    def test_delete_for_note(self, link_manager, graph):
        removed = link_manager.delete_for_note("a")
        assert sorted(l.id for l in removed) == ["l1", "l2", "l3"]
        assert [l.id for l in link_manager.get_all()] == ["l4"]

    def test_delete_for_unlinked_note(self, link_manager, graph):
        assert link_manager.delete_for_note("zzz") == []
        assert link_manager.count() == 4

    def test_put_overwrites(self, link_manager, graph):
        link = link_manager.put({"id": "l1", "type": "contradicts"})
        assert link.type is LinkType.CONTRADICTS
        assert link.source_id == "a"

    def test_clear(self, link_manager, graph):
        assert link_manager.clear() == 4
        assert link_manager.get_all() == []
