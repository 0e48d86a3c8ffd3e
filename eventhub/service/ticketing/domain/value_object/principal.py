import attrs

from eventhub.service.ticketing.domain.entity.user_entity import UserRole


@attrs.define(frozen=True)
class Principal:
    """Authenticated caller, rebuilt from the access token on every request"""

    id: int
    role: UserRole
    email: str = ''
    name: str = ''

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
