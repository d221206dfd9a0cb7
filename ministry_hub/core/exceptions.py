"""
Custom Exceptions for Ministry Hub
==================================

Use these instead of generic Exception to:
1. Make errors more specific and debuggable
2. Enable proper error handling at API layer
3. Provide meaningful error messages to members and staff

Usage:
    from ministry_hub.core.exceptions import TeachingNotFoundError

    if not teaching:
        raise TeachingNotFoundError(teaching_id)

Every error carries the HTTP status the API layer answers with; the handler
registered in ``ministry_hub.main`` renders ``error_response(exc)``.
"""

from typing import Optional, Any, Dict, List


class MinistryHubError(Exception):
    """Base exception for all Ministry Hub errors"""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


# ============================================
# Authentication & Authorization Errors
# ============================================

class AuthenticationError(MinistryHubError):
    """Member authentication failed"""

    status_code = 401

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message, code="AUTH_FAILED")


class AuthorizationError(MinistryHubError):
    """Member not authorized for this action"""

    status_code = 403

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message, code="NOT_AUTHORIZED")


class TierAccessError(AuthorizationError):
    """Member's tier is below what the content requires"""

    def __init__(self, required_tier: str, member_tier: str):
        super().__init__(f"This content requires the '{required_tier}' tier")
        self.code = "TIER_REQUIRED"
        self.details = {"required_tier": required_tier, "member_tier": member_tier}


# ============================================
# Resource Errors (404-type)
# ============================================

class ResourceNotFoundError(MinistryHubError):
    """Base class for not found errors"""

    status_code = 404

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} with ID '{resource_id}' not found",
            code=f"{resource_type.upper().replace(' ', '_')}_NOT_FOUND",
            details={"resource_type": resource_type, "resource_id": resource_id}
        )


class MemberNotFoundError(ResourceNotFoundError):
    def __init__(self, member_id: str):
        super().__init__("Member", member_id)


class TeachingNotFoundError(ResourceNotFoundError):
    def __init__(self, teaching_id: str):
        super().__init__("Teaching", teaching_id)


class ContentNotFoundError(ResourceNotFoundError):
    def __init__(self, content_type: str, content_id: str):
        super().__init__(content_type.capitalize(), content_id)


class ProphecyNotFoundError(ResourceNotFoundError):
    def __init__(self, prophecy_id: str):
        super().__init__("Prophecy", prophecy_id)


class LeadNotFoundError(ResourceNotFoundError):
    def __init__(self, lead_id: str):
        super().__init__("Lead", lead_id)


class FamilyNotFoundError(ResourceNotFoundError):
    def __init__(self, family_id: str):
        super().__init__("Family", family_id)


class LiveServiceNotFoundError(ResourceNotFoundError):
    def __init__(self, service_id: str):
        super().__init__("Live Service", service_id)


class DonationNotFoundError(ResourceNotFoundError):
    def __init__(self, reference: str):
        super().__init__("Donation", reference)


class ConversationNotFoundError(ResourceNotFoundError):
    def __init__(self, conversation_id: str):
        super().__init__("Conversation", conversation_id)


# ============================================
# Validation Errors (400-type)
# ============================================

class ValidationError(MinistryHubError):
    """Input validation failed"""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class InvalidChoiceError(ValidationError):
    """Value is not one of the allowed options"""

    status_code = 422

    def __init__(self, field: str, value: Any, allowed: List[str]):
        super().__init__(
            f"Invalid {field} '{value}'. Allowed: {', '.join(allowed)}",
            field=field
        )
        self.code = "INVALID_CHOICE"
        self.details["allowed"] = allowed


class ConflictError(MinistryHubError):
    """Operation conflicts with existing state"""

    status_code = 409

    def __init__(self, message: str):
        super().__init__(message, code="CONFLICT")


# ============================================
# AI Errors
# ============================================

class AIServiceError(MinistryHubError):
    """AI text-generation service error"""

    status_code = 502

    def __init__(self, message: str):
        super().__init__(message, code="AI_SERVICE_ERROR")


class AIUnavailableError(AIServiceError):
    """AI is not configured for this deployment"""

    status_code = 503

    def __init__(self):
        super().__init__("AI features are not configured")
        self.code = "AI_UNAVAILABLE"


class AIResponseParseError(AIServiceError):
    """Failed to parse AI response"""

    def __init__(self, message: str = "Failed to parse AI response"):
        super().__init__(message)
        self.code = "AI_PARSE_ERROR"


# ============================================
# Giving Errors
# ============================================

class PaymentError(MinistryHubError):
    """Donation processing failed"""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message, code="PAYMENT_ERROR")


class InvalidSignatureError(PaymentError):
    """Webhook signature did not verify"""

    def __init__(self):
        super().__init__("Invalid webhook signature")
        self.code = "INVALID_SIGNATURE"


# ============================================
# Helper function for API responses
# ============================================

def error_response(error: MinistryHubError) -> Dict[str, Any]:
    """Convert exception to API error response format"""
    return {
        "success": False,
        "error": error.to_dict()
    }
