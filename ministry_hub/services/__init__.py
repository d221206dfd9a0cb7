from ministry_hub.services import tiers, library_service, lead_scoring, messaging_service, giving_service
from ministry_hub.services.audit_service import log_admin_action

__all__ = [
    "tiers",
    "library_service",
    "lead_scoring",
    "messaging_service",
    "giving_service",
    "log_admin_action",
]
