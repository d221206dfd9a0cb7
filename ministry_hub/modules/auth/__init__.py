# Authentication module

from ministry_hub.modules.auth.dependencies import (
    get_current_member,
    get_optional_member,
    get_current_staff,
    get_current_admin,
)

__all__ = [
    "get_current_member",
    "get_optional_member",
    "get_current_staff",
    "get_current_admin",
]
