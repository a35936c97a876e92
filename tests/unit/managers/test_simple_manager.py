"""
test_simple_manager.py
----------------------
Unit tests for the config-driven SimpleManager (tags, quests, rooms).

Target Coverage: 90%+
"""
import pytest
from datetime import datetime, timezone

from mnemos.core.exceptions import DuplicateIdError, ValidationError
from mnemos.database.models import KnowledgeDomain, QuestDifficulty


class TestTagManager:
    """Test SimpleManager configured for tags."""

    def test_create_with_defaults(self, tag_manager):
        tag = tag_manager.create({"id": "t1", "name": "physics"})
        assert tag.name == "physics"
        assert tag.color == ""
        assert tag.description == ""
        assert tag.note_count == 0
        assert tag.created_at is not None

    def test_name_is_required(self, tag_manager):
        with pytest.raises(ValidationError, match="name"):
            tag_manager.create({"id": "t1", "color": "#FFF"})

    def test_duplicate(self, tag_manager):
        tag_manager.create({"id": "t1", "name": "physics"})
        with pytest.raises(DuplicateIdError, match="tag already exists: t1"):
            tag_manager.create({"id": "t1", "name": "other"})

    def test_update(self, tag_manager):
        tag_manager.create({"id": "t1", "name": "physics", "color": "#F00"})
        tag = tag_manager.update("t1", {"description": "Matter and energy"})
        assert tag.description == "Matter and energy"
        assert tag.color == "#F00"

    def test_update_missing_returns_none(self, tag_manager):
        assert tag_manager.update("missing", {"name": "x"}) is None

    def test_update_cannot_change_id(self, tag_manager):
        tag_manager.create({"id": "t1", "name": "physics"})
        with pytest.raises(ValidationError, match="Cannot change tag id"):
            tag_manager.update("t1", {"id": "t2"})

    def test_delete(self, tag_manager):
        tag_manager.create({"id": "t1", "name": "physics"})
        assert tag_manager.delete("t1") is True
        assert tag_manager.delete("t1") is False
        assert tag_manager.count() == 0

    def test_put_creates_then_updates(self, tag_manager):
        tag_manager.put({"id": "t1", "name": "physics"})
        tag = tag_manager.put({"id": "t1", "name": "chemistry"})
        assert tag.name == "chemistry"
        assert tag_manager.count() == 1


class TestQuestManager:
    """Test SimpleManager configured for quests."""

    def _quest(self, **overrides):
        metadata = {
            "id": "q1",
            "title": "First Steps",
            "domain": "learning",
            "difficulty": "easy",
        }
        metadata.update(overrides)
        return metadata

    def test_create_defaults(self, quest_manager):
        quest = quest_manager.create(self._quest())
        assert quest.domain is KnowledgeDomain.LEARNING
        assert quest.difficulty is QuestDifficulty.EASY
        assert quest.reward == {"wisdomPoints": 0}
        assert quest.progress == 0
        assert quest.is_completed is False
        assert quest.required_notes == []
        assert quest.completed_at is None

    def test_difficulty_is_required(self, quest_manager):
        metadata = self._quest()
        del metadata["difficulty"]
        with pytest.raises(ValidationError, match="difficulty"):
            quest_manager.create(metadata)

    def test_progress_bounds(self, quest_manager):
        with pytest.raises(ValidationError, match="progress"):
            quest_manager.create(self._quest(progress=101))

    def test_reward_must_be_mapping(self, quest_manager):
        with pytest.raises(ValidationError, match="reward"):
            quest_manager.create(self._quest(reward=50))

    def test_update_completion(self, quest_manager):
        quest_manager.create(self._quest(required_notes=["n1", "n1", "n2"]))
        done = datetime(2024, 6, 11, tzinfo=timezone.utc)
        quest = quest_manager.update("q1", {"is_completed": True, "completed_at": done})
        assert quest.is_completed is True
        assert quest.completed_at == done
        assert quest.required_notes == ["n1", "n2"]


class TestRoomManager:
    """Test SimpleManager configured for rooms."""

    def test_create_defaults(self, room_manager):
        room = room_manager.create({"id": "lab", "name": "Laboratory", "domain": "science"})
        assert room.position == {"x": 0, "y": 0}
        assert room.size == {"width": 640, "height": 400}
        assert room.color_scheme == {}
        assert room.is_unlocked is False
        assert room.note_positions == []
        assert room.furniture == []
        assert room.unlock_requirement is None

    def test_domain_is_required(self, room_manager):
        with pytest.raises(ValidationError, match="domain"):
            room_manager.create({"id": "lab", "name": "Laboratory"})

    def test_note_positions_must_be_list(self, room_manager):
        with pytest.raises(ValidationError, match="note_positions"):
            room_manager.create(
                {"id": "lab", "name": "Lab", "domain": "science", "note_positions": "n1"}
            )

    def test_get_all_ordered_by_id(self, room_manager):
        room_manager.create({"id": "b_room", "name": "B", "domain": "art"})
        room_manager.create({"id": "a_room", "name": "A", "domain": "art"})
        assert [r.id for r in room_manager.get_all()] == ["a_room", "b_room"]

    def test_unlock_requirement_can_be_cleared(self, room_manager):
        room_manager.create(
            {"id": "lab", "name": "Lab", "domain": "science", "unlock_requirement": "quest_1"}
        )
        room = room_manager.update("lab", {"unlock_requirement": None})
        assert room.unlock_requirement is None
