"""
test_search_engine.py
---------------------
Unit tests for the substring search engine.
"""
import pytest

from mnemos.core.exceptions import ValidationError
from mnemos.database.models import KnowledgeDomain, NoteType
from mnemos.search.search_engine import (
    SearchEngine,
    SearchQuery,
    make_snippet,
    tokenize,
)


@pytest.fixture
def engine(db_session):
    return SearchEngine(db_session)


@pytest.fixture
def physics_notes(note_factory):
    """Three notes with overlapping vocabulary."""
    return {
        "quantum": note_factory(
            "n1", title="Quantum Mechanics", content="particles and waves"
        ),
        "ocean": note_factory(
            "n2", title="Ocean Waves", content="tides and surf", domain="personal"
        ),
        "tagged": note_factory(
            "n3", title="Entanglement", content="spooky action", tags=["Quantum"],
            type="fact",
        ),
    }


class TestTokenize:
    """Tests for tokenize()."""

    def test_lowercases_and_splits(self):
        assert tokenize("  Quantum   WAVES ") == ["quantum", "waves"]

    def test_empty_inputs(self):
        assert tokenize("") == []
        assert tokenize("   ") == []
        assert tokenize(None) == []


class TestSearchQuery:
    """Tests for SearchQuery.parse()."""

    def test_parse_filters(self):
        query = SearchQuery.parse("waves", domain="science", note_type="fact")
        assert query.terms == ["waves"]
        assert query.domain is KnowledgeDomain.SCIENCE
        assert query.note_type is NoteType.FACT

    def test_parse_rejects_unknown_domain(self):
        with pytest.raises(ValidationError):
            SearchQuery.parse("waves", domain="cooking")

    def test_empty_query(self):
        assert SearchQuery.parse("  ").is_empty


class TestSearch:
    """Tests for SearchEngine.search()."""

    def test_every_term_must_match(self, engine, physics_notes):
        """'quantum waves' matches only the note containing both terms."""
        results = engine.search(SearchQuery.parse("quantum waves"))
        assert [n.id for n in results] == ["n1"]

    def test_terms_may_come_from_different_fields(self, engine, physics_notes):
        """Title and content are searched together."""
        results = engine.search(SearchQuery.parse("mechanics particles"))
        assert [n.id for n in results] == ["n1"]

    def test_substring_and_case_insensitive(self, engine, physics_notes):
        results = engine.search(SearchQuery.parse("WAVE"))
        assert {n.id for n in results} == {"n1", "n2"}

    def test_tags_are_searched(self, engine, physics_notes):
        results = engine.search(SearchQuery.parse("quantum"))
        assert {n.id for n in results} == {"n1", "n3"}

    def test_empty_query_returns_nothing(self, engine, physics_notes):
        assert engine.search(SearchQuery.parse("")) == []
        assert engine.search(SearchQuery.parse("   \t ")) == []

    def test_no_match(self, engine, physics_notes):
        assert engine.search(SearchQuery.parse("quantum surf")) == []

    def test_domain_filter(self, engine, physics_notes):
        results = engine.search(SearchQuery.parse("waves", domain="personal"))
        assert [n.id for n in results] == ["n2"]

    def test_type_filter(self, engine, physics_notes):
        results = engine.search(SearchQuery.parse("quantum", note_type="fact"))
        assert [n.id for n in results] == ["n3"]


class TestSearchWithContext:
    """Tests for SearchEngine.search_with_context()."""

    def test_results_carry_terms_and_snippet(self, engine, physics_notes):
        results = engine.search_with_context(SearchQuery.parse("quantum waves"))
        assert len(results) == 1
        assert results[0].note.id == "n1"
        assert results[0].matched_terms == ["quantum", "waves"]
        assert results[0].snippet == "particles and waves"


class TestMakeSnippet:
    """Tests for make_snippet()."""

    def test_window_with_ellipses(self):
        content = "a" * 100 + " target " + "b" * 100
        snippet = make_snippet(content, "target", radius=10)
        assert snippet.startswith("...")
        assert snippet.endswith("...")
        assert "target" in snippet

    def test_window_aligned_when_lowercasing_changes_length(self):
        """'İ' lower-cases to two characters; the window still centers on the match."""
        content = "İ" * 10 + " Target " + "x" * 30
        assert make_snippet(content, "target", radius=3) == "...İİ Target xx..."

    def test_term_not_in_content_uses_start(self):
        assert make_snippet("short text", "missing") == "short text"

    def test_empty_content(self):
        assert make_snippet("", "x") == ""
