"""
Access Policy - role-based authorization for the ticketing operations

Two layers:
- AUTHORIZATION_TABLE answers "may this role attempt the operation at all"
- the ownership predicates answer "may this principal touch this entity"

Roles form a closed set (UserRole); no role implicitly inherits another's rights.
"""

from enum import StrEnum
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from eventhub.platform.exception.exceptions import ForbiddenError
from eventhub.service.ticketing.domain.entity.user_entity import UserRole
from eventhub.service.ticketing.domain.value_object.principal import Principal


class Operation(StrEnum):
    MANAGE_EVENTS = 'manage_events'
    CREATE_BOOKING = 'create_booking'
    LIST_BOOKINGS = 'list_bookings'
    VIEW_BOOKING = 'view_booking'
    CANCEL_BOOKING = 'cancel_booking'
    READ_NOTIFICATIONS = 'read_notifications'
    VIEW_USER_DASHBOARD = 'view_user_dashboard'
    VIEW_ORGANIZER_DASHBOARD = 'view_organizer_dashboard'
    VIEW_ADMIN_DASHBOARD = 'view_admin_dashboard'


class BookingScope(StrEnum):
    """Which bookings a role sees when listing"""

    OWN = 'own'
    ORGANIZED = 'organized'
    ALL = 'all'


_EVERYONE = frozenset(UserRole)

AUTHORIZATION_TABLE: Mapping[Operation, frozenset[UserRole]] = MappingProxyType(
    {
        Operation.MANAGE_EVENTS: frozenset({UserRole.ORGANIZER, UserRole.ADMIN}),
        Operation.CREATE_BOOKING: _EVERYONE,
        Operation.LIST_BOOKINGS: _EVERYONE,
        Operation.VIEW_BOOKING: _EVERYONE,
        Operation.CANCEL_BOOKING: _EVERYONE,
        Operation.READ_NOTIFICATIONS: _EVERYONE,
        Operation.VIEW_USER_DASHBOARD: _EVERYONE,
        Operation.VIEW_ORGANIZER_DASHBOARD: frozenset({UserRole.ORGANIZER}),
        Operation.VIEW_ADMIN_DASHBOARD: frozenset({UserRole.ADMIN}),
    }
)

BOOKING_LIST_SCOPE: Mapping[UserRole, BookingScope] = MappingProxyType(
    {
        UserRole.USER: BookingScope.OWN,
        UserRole.ORGANIZER: BookingScope.ORGANIZED,
        UserRole.ADMIN: BookingScope.ALL,
    }
)


class AccessPolicy:
    @staticmethod
    def require_role(principal: Principal, allowed_roles: Iterable[UserRole]) -> Principal:
        if principal.role not in frozenset(allowed_roles):
            raise ForbiddenError('Access denied')
        return principal

    @classmethod
    def authorize(cls, principal: Principal, operation: Operation) -> Principal:
        return cls.require_role(principal, AUTHORIZATION_TABLE[operation])

    @staticmethod
    def is_allowed(role: UserRole, operation: Operation) -> bool:
        return role in AUTHORIZATION_TABLE[operation]

    @staticmethod
    def booking_scope(principal: Principal) -> BookingScope:
        return BOOKING_LIST_SCOPE[principal.role]

    @staticmethod
    def owns_event(principal: Principal, *, organizer_id: int) -> bool:
        return principal.is_admin or principal.id == organizer_id

    @staticmethod
    def event_owner_filter(principal: Principal) -> Optional[int]:
        """organizer_id to restrict event queries to, None for admins"""
        return None if principal.is_admin else principal.id

    @staticmethod
    def can_view_booking(
        principal: Principal, *, owner_id: int, organizer_id: Optional[int]
    ) -> bool:
        if principal.is_admin or principal.id == owner_id:
            return True
        return principal.role == UserRole.ORGANIZER and principal.id == organizer_id

    @staticmethod
    def can_cancel_booking(principal: Principal, *, owner_id: int) -> bool:
        return principal.is_admin or principal.id == owner_id
