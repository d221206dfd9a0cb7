"""
Unit Tests for giving helpers
"""
import pytest
from datetime import datetime
from types import SimpleNamespace

from ministry_hub.core.exceptions import ValidationError, InvalidSignatureError
from ministry_hub.core.security import sign_payload
from ministry_hub.services.giving_service import dollars_to_cents, verify_webhook, summarize_donations

NOW = datetime(2024, 6, 15, 12, 0, 0)


class TestDollarsToCents:

    @pytest.mark.parametrize("amount, cents", [
        (1, 100),
        ("25", 2500),
        (19.99, 1999),
        ("10.005", 1001),
        (1000000, 100000000),
    ])
    def test_valid_amounts(self, amount, cents):
        assert dollars_to_cents(amount) == cents

    @pytest.mark.parametrize("amount", [0.99, 0, -5, "abc", None, True, "nan", "inf"])
    def test_invalid_amounts(self, amount):
        with pytest.raises(ValidationError) as exc_info:
            dollars_to_cents(amount)

        assert exc_info.value.details["field"] == "amount"


class TestWebhookVerification:

    def test_accepts_signed_payload(self):
        body = b'{"reference": "gift_x", "status": "completed"}'

        verify_webhook(body, sign_payload(body, "test-webhook-secret"))

    def test_rejects_bad_signature(self):
        with pytest.raises(InvalidSignatureError):
            verify_webhook(b"{}", "deadbeef")

    def test_rejects_missing_signature(self):
        with pytest.raises(InvalidSignatureError):
            verify_webhook(b"{}", None)


def make_donation(cents, status="completed", donation_type="general", completed_at=NOW, created_at=NOW):
    return SimpleNamespace(
        amount_cents=cents, status=status, donation_type=donation_type,
        completed_at=completed_at, created_at=created_at,
    )


def test_summary_counts_completed_only():
    donations = [
        make_donation(5000),
        make_donation(2500, donation_type="missions", completed_at=datetime(2024, 2, 1)),
        make_donation(10000, completed_at=datetime(2023, 12, 31)),
        make_donation(999999, status="pending", completed_at=None),
        make_donation(4000, status="refunded"),
    ]

    summary = summarize_donations(donations, now=NOW)

    assert summary["lifetime_total"] == 175.0
    assert summary["year_to_date"] == 75.0
    assert summary["month_to_date"] == 50.0
    assert summary["by_type"] == {"general": 150.0, "missions": 25.0, "leadership": 0.0}
    assert summary["count"] == 3


def test_summary_empty():
    summary = summarize_donations([], now=NOW)

    assert summary["lifetime_total"] == 0
    assert summary["count"] == 0
