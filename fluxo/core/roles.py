"""
Account roles and what each of them may do.

Every role must have an entry in ROLE_PERMISSIONS; adding a role without one
fails the role coverage test.
"""
import enum
from typing import Dict, FrozenSet, Union


class RoleEnum(str, enum.Enum):
    SUPER_ADMIN = "SUPER_ADMIN"
    INSTITUTION = "INSTITUTION"
    USER = "USER"


class Permission(str, enum.Enum):
    BROWSE_EVENTS = "browse_events"
    PUBLISH_EVENTS = "publish_events"
    SCAN_TICKETS = "scan_tickets"
    MANAGE_USERS = "manage_users"
    REVIEW_ORGANIZERS = "review_organizers"


ROLE_PERMISSIONS: Dict[RoleEnum, FrozenSet[Permission]] = {
    RoleEnum.SUPER_ADMIN: frozenset({
        Permission.MANAGE_USERS,
        Permission.REVIEW_ORGANIZERS,
    }),
    RoleEnum.INSTITUTION: frozenset({
        Permission.BROWSE_EVENTS,
        Permission.PUBLISH_EVENTS,
        Permission.SCAN_TICKETS,
    }),
    RoleEnum.USER: frozenset({
        Permission.BROWSE_EVENTS,
    }),
}

ROLE_LABELS: Dict[RoleEnum, str] = {
    RoleEnum.SUPER_ADMIN: "Platform Admin",
    RoleEnum.INSTITUTION: "Event Organizer",
    RoleEnum.USER: "Registered User",
}


def permissions_for(role: Union[RoleEnum, str]) -> FrozenSet[Permission]:
    """
    Return the permission set of a role.

    Raises:
        ValueError: If the role is not one of RoleEnum
    """
    return ROLE_PERMISSIONS[RoleEnum(role)]


def has_permission(role: Union[RoleEnum, str], permission: Permission) -> bool:
    return permission in permissions_for(role)


def role_label(role: Union[RoleEnum, str]) -> str:
    return ROLE_LABELS[RoleEnum(role)]
