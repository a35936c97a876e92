"""
test_validators.py
------------------
Unit tests for DataValidator normalization helpers.
"""
import pytest
from datetime import datetime, timedelta, timezone

from mnemos.core.exceptions import ValidationError
from mnemos.core.validators import DataValidator
from mnemos.database.models import KnowledgeDomain, ReviewQuality


class TestValidateRequiredFields:
    """Test DataValidator.validate_required_fields()."""

    def test_passes_when_all_present(self):
        """No error when every field has a value."""
        DataValidator.validate_required_fields({"id": "n1", "type": "fact"}, ["id", "type"])

    def test_missing_field_raises(self):
        """A missing field raises ValidationError naming it."""
        with pytest.raises(ValidationError, match="'type'"):
            DataValidator.validate_required_fields({"id": "n1"}, ["id", "type"])

    def test_empty_string_counts_as_missing(self):
        """Empty strings and None are treated as missing."""
        with pytest.raises(ValidationError):
            DataValidator.validate_required_fields({"id": ""}, ["id"])
        with pytest.raises(ValidationError):
            DataValidator.validate_required_fields({"id": None}, ["id"])

    def test_non_mapping_raises(self):
        """A non-dict payload is rejected."""
        with pytest.raises(ValidationError, match="mapping"):
            DataValidator.validate_required_fields(["id"], ["id"])


class TestNormalizeString:
    """Test DataValidator.normalize_string()."""

    def test_strips_whitespace(self):
        assert DataValidator.normalize_string("  entropy  ") == "entropy"

    def test_blank_becomes_none(self):
        assert DataValidator.normalize_string("   ") is None
        assert DataValidator.normalize_string(None) is None


class TestNormalizeDatetime:
    """Test DataValidator.normalize_datetime()."""

    def test_parses_iso_with_z_suffix(self):
        """A trailing Z is read as UTC."""
        result = DataValidator.normalize_datetime("2024-06-10T12:00:00Z")
        assert result == datetime(2024, 6, 10, 12, 0, tzinfo=timezone.utc)

    def test_naive_is_treated_as_utc(self):
        result = DataValidator.normalize_datetime(datetime(2024, 6, 10, 12, 0))
        assert result.tzinfo is not None
        assert result.utcoffset() == timedelta(0)

    def test_other_offsets_are_converted(self):
        """Aware datetimes in other zones are converted to UTC."""
        plus_two = timezone(timedelta(hours=2))
        result = DataValidator.normalize_datetime(datetime(2024, 6, 10, 14, 0, tzinfo=plus_two))
        assert result == datetime(2024, 6, 10, 12, 0, tzinfo=timezone.utc)
        assert result.utcoffset() == timedelta(0)

    def test_empty_values_become_none(self):
        assert DataValidator.normalize_datetime(None) is None
        assert DataValidator.normalize_datetime("") is None

    def test_garbage_raises(self):
        with pytest.raises(ValidationError, match="Invalid timestamp"):
            DataValidator.normalize_datetime("next tuesday")

    def test_wrong_type_raises(self):
        with pytest.raises(ValidationError):
            DataValidator.normalize_datetime(12345)


class TestNormalizeNumbers:
    """Test normalize_int(), normalize_float() and normalize_bool()."""

    def test_int_within_bounds(self):
        assert DataValidator.normalize_int("3", 1, 5, "importance") == 3

    def test_int_out_of_bounds_raises(self):
        with pytest.raises(ValidationError, match="importance must be <= 5"):
            DataValidator.normalize_int(6, 1, 5, "importance")
        with pytest.raises(ValidationError, match=">= 1"):
            DataValidator.normalize_int(0, 1, 5, "importance")

    def test_int_rejects_bool(self):
        """Booleans are not accepted as integers."""
        with pytest.raises(ValidationError):
            DataValidator.normalize_int(True)

    def test_int_rejects_text(self):
        with pytest.raises(ValidationError):
            DataValidator.normalize_int("three")

    def test_float_parses_strings(self):
        assert DataValidator.normalize_float("2.5") == 2.5

    def test_float_rejects_bool(self):
        with pytest.raises(ValidationError):
            DataValidator.normalize_float(False)

    @pytest.mark.parametrize("value", [True, 1, "true", "Yes", "on"])
    def test_bool_truthy_spellings(self, value):
        assert DataValidator.normalize_bool(value) is True

    @pytest.mark.parametrize("value", [False, 0, "false", "NO", "off"])
    def test_bool_falsy_spellings(self, value):
        assert DataValidator.normalize_bool(value) is False

    def test_bool_rejects_other_values(self):
        with pytest.raises(ValidationError):
            DataValidator.normalize_bool("maybe")


class TestNormalizeEnum:
    """Test DataValidator.normalize_enum()."""

    def test_accepts_member(self):
        assert DataValidator.normalize_enum(ReviewQuality.GOOD, ReviewQuality) is ReviewQuality.GOOD

    def test_accepts_value(self):
        assert DataValidator.normalize_enum("science", KnowledgeDomain) is KnowledgeDomain.SCIENCE

    def test_unknown_value_raises(self):
        """Unknown values list the valid choices."""
        with pytest.raises(ValidationError, match="Invalid ReviewQuality"):
            DataValidator.normalize_enum("perfect", ReviewQuality)


class TestNormalizeStringList:
    """Test DataValidator.normalize_string_list()."""

    def test_drops_blanks_and_duplicates(self):
        result = DataValidator.normalize_string_list(["physics", " ", "physics", " math "])
        assert result == ["physics", "math"]

    def test_none_is_empty(self):
        assert DataValidator.normalize_string_list(None) == []

    def test_plain_string_raises(self):
        """A bare string is not silently split into characters."""
        with pytest.raises(ValidationError):
            DataValidator.normalize_string_list("physics", "tags")


class TestDerivedMetadata:
    """Test word_count() and reading_time()."""

    def test_word_count_counts_whitespace_tokens(self):
        assert DataValidator.word_count("  particles   and\nwaves\t") == 3

    def test_word_count_empty(self):
        assert DataValidator.word_count("") == 0
        assert DataValidator.word_count(None) == 0

    def test_reading_time_rounds_up_per_200_chars(self):
        assert DataValidator.reading_time("") == 0
        assert DataValidator.reading_time("x") == 1
        assert DataValidator.reading_time("x" * 200) == 1
        assert DataValidator.reading_time("x" * 201) == 2
