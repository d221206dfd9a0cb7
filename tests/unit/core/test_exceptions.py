"""
Unit Tests for the exception hierarchy and its HTTP mapping
"""
import pytest

from ministry_hub.core.exceptions import (
    MinistryHubError,
    AuthenticationError,
    AuthorizationError,
    TierAccessError,
    ResourceNotFoundError,
    TeachingNotFoundError,
    ContentNotFoundError,
    ValidationError,
    InvalidChoiceError,
    ConflictError,
    AIServiceError,
    AIUnavailableError,
    AIResponseParseError,
    InvalidSignatureError,
    error_response,
)


@pytest.mark.parametrize("error, status", [
    (AuthenticationError(), 401),
    (AuthorizationError(), 403),
    (TierAccessError("partner", "free"), 403),
    (TeachingNotFoundError("t1"), 404),
    (ValidationError("bad"), 400),
    (InvalidChoiceError("status", "x", ["a", "b"]), 422),
    (ConflictError("dup"), 409),
    (AIServiceError("down"), 502),
    (AIResponseParseError(), 502),
    (AIUnavailableError(), 503),
    (InvalidSignatureError(), 400),
])
def test_status_codes(error, status):
    assert error.status_code == status
    assert isinstance(error, MinistryHubError)


def test_not_found_code_and_details():
    error = ContentNotFoundError("sermon", "abc")

    assert isinstance(error, ResourceNotFoundError)
    assert error.code == "SERMON_NOT_FOUND"
    assert error.details == {"resource_type": "Sermon", "resource_id": "abc"}


def test_tier_access_details():
    error = TierAccessError("covenant", "member")

    assert error.code == "TIER_REQUIRED"
    assert error.details["required_tier"] == "covenant"
    assert error.details["member_tier"] == "member"


def test_invalid_choice_lists_allowed_values():
    error = InvalidChoiceError("fulfillment_status", "done", ["unfolding", "fulfilled"])

    assert error.details["field"] == "fulfillment_status"
    assert error.details["allowed"] == ["unfolding", "fulfilled"]
    assert "done" in error.message


def test_error_response_shape():
    body = error_response(ConflictError("You already belong to a family"))

    assert body == {
        "success": False,
        "error": {
            "code": "CONFLICT",
            "message": "You already belong to a family",
            "details": {},
        },
    }
