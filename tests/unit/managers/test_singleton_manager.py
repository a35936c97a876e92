"""
test_singleton_manager.py
-------------------------
Unit tests for the Stats and Settings singleton managers.

Target Coverage: 90%+
"""
import pytest

from mnemos.core.exceptions import ValidationError
from mnemos.database.models import SINGLETON_ID, KnowledgeDomain, Theme
from mnemos.database.managers.singleton_manager import normalize_activity_entry


class TestStatsManager:
    """Test SingletonManager configured for stats."""

    def test_get_before_create_is_none(self, stats_manager):
        assert stats_manager.get() is None

    def test_get_or_create_defaults(self, stats_manager):
        stats = stats_manager.get_or_create()
        assert stats.id == SINGLETON_ID
        assert stats.total_notes == 0
        assert stats.wisdom_points == 0
        assert stats.average_review_accuracy == 0.0
        assert stats.most_productive_domain is KnowledgeDomain.PERSONAL
        assert stats.recent_activity == []

    def test_get_or_create_is_idempotent(self, stats_manager):
        first = stats_manager.get_or_create()
        assert stats_manager.get_or_create() is first

    def test_update_merges(self, stats_manager):
        stats_manager.update({"wisdom_points": 10})
        stats = stats_manager.update({"total_notes": 3})
        assert stats.wisdom_points == 10
        assert stats.total_notes == 3

    def test_unknown_key_raises(self, stats_manager):
        with pytest.raises(ValidationError, match="Unknown stats fields: bogus"):
            stats_manager.update({"bogus": 1})

    def test_negative_counter_raises(self, stats_manager):
        with pytest.raises(ValidationError, match="total_links"):
            stats_manager.update({"total_links": -1})

    def test_accuracy_bounds(self, stats_manager):
        with pytest.raises(ValidationError, match="average_review_accuracy"):
            stats_manager.update({"average_review_accuracy": 1.5})

    def test_put_resets_omitted_fields(self, stats_manager):
        stats_manager.update({"wisdom_points": 10, "total_notes": 4})
        stats = stats_manager.put({"total_notes": 2})
        assert stats.total_notes == 2
        assert stats.wisdom_points == 0

    def test_recent_activity_is_normalized(self, stats_manager):
        stats = stats_manager.update(
            {
                "recent_activity": [
                    {
                        "id": "a1",
                        "type": "note_created",
                        "timestamp": "2024-06-10T12:00:00Z",
                        "description": "Created note",
                        "points": 10,
                    }
                ]
            }
        )
        assert stats.recent_activity == [
            {
                "id": "a1",
                "type": "note_created",
                "timestamp": "2024-06-10T12:00:00+00:00",
                "description": "Created note",
                "points": 10,
            }
        ]

    def test_recent_activity_must_be_list(self, stats_manager):
        with pytest.raises(ValidationError, match="recent_activity must be a list"):
            stats_manager.update({"recent_activity": "note_created"})


class TestActivityEntry:
    """Test normalize_activity_entry()."""

    def test_points_are_optional(self):
        entry = normalize_activity_entry(
            {"id": "a1", "type": "link_created", "timestamp": "2024-06-10T12:00:00"}
        )
        assert "points" not in entry
        assert entry["description"] == ""

    def test_unknown_type(self):
        with pytest.raises(ValidationError):
            normalize_activity_entry(
                {"id": "a1", "type": "note_deleted", "timestamp": "2024-06-10T12:00:00"}
            )

    def test_not_a_mapping(self):
        with pytest.raises(ValidationError, match="mappings"):
            normalize_activity_entry(["a1"])


class TestSettingsManager:
    """Test SingletonManager configured for settings."""

    def test_defaults(self, settings_manager):
        settings = settings_manager.get_or_create()
        assert settings.auto_save is True
        assert settings.default_domain is KnowledgeDomain.PERSONAL
        assert settings.daily_review_goal == 10
        assert settings.theme is Theme.RETRO_SNES
        assert settings.auto_link_similar is False

    def test_update_parses_values(self, settings_manager):
        settings = settings_manager.update(
            {"sound_effects": "off", "theme": "mystical", "default_domain": "art"}
        )
        assert settings.sound_effects is False
        assert settings.theme is Theme.MYSTICAL
        assert settings.default_domain is KnowledgeDomain.ART

    def test_unknown_key(self, settings_manager):
        with pytest.raises(ValidationError, match="Unknown settings fields"):
            settings_manager.update({"font": "mono"})

    def test_update_must_be_mapping(self, settings_manager):
        with pytest.raises(ValidationError, match="must be a mapping"):
            settings_manager.update(["theme"])
