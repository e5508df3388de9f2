"""
Tests for moderation status codes and labels.
"""
import pytest

from moderation.errors import InvalidStatusError
from moderation.status import Status, status_matches


class TestStatusCodes:
    """Test the status enumeration."""

    def test_stable_integer_values(self):
        """Codes are stored as 0-3."""
        assert [int(s) for s in Status] == [0, 1, 2, 3]
        assert Status.PENDING == 0
        assert Status.POSTPONED == 3

    def test_labels(self):
        """Every code has an English label, listed in code order."""
        assert Status.APPROVED.label == "Approved"
        assert Status.labels() == {0: "Pending", 1: "Approved", 2: "Rejected", 3: "Postponed"}

    def test_localized_labels(self):
        """Alternate locales change labels only."""
        assert Status.REJECTED.localized("ru") == "Отклонено"
        assert list(Status.labels("ru")) == [0, 1, 2, 3]

    def test_unknown_locale_falls_back_to_english(self):
        assert Status.PENDING.localized("xx") == "Pending"

    def test_undefined_code_lookup_raises(self):
        with pytest.raises(ValueError):
            Status(9)


class TestCoerce:
    """Test loose conversion of stored values."""

    @pytest.mark.parametrize("value", [1, "1", " 1 ", Status.APPROVED])
    def test_accepts_numeric_forms(self, value):
        assert Status.coerce(value) is Status.APPROVED

    @pytest.mark.parametrize("value", [4, -1, "7", "approved", "", 1.5, True])
    def test_rejects_out_of_domain(self, value):
        with pytest.raises(InvalidStatusError):
            Status.coerce(value)

    def test_invalid_status_is_value_error(self):
        """Callers catching ValueError also see data-integrity errors."""
        with pytest.raises(ValueError):
            Status.coerce("nope")

    def test_status_matches_never_raises(self):
        assert status_matches("2", Status.REJECTED)
        assert not status_matches(None, Status.APPROVED)
        assert not status_matches(42, Status.APPROVED)

    def test_unset_value_is_pending(self):
        """A record that was never flushed has no status yet and reads as Pending."""
        assert Status.coerce(None) is Status.PENDING
        assert status_matches(None, Status.PENDING)
