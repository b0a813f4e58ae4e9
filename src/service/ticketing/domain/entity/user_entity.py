from typing import Optional

import attrs

from src.service.ticketing.domain.enum.user_role import UserRole
from src.service.ticketing.domain.value_object.user_info import UserInfo


@attrs.define
class UserEntity:
    """Authenticated caller, rebuilt from the bearer token (no user table here)."""

    id: str
    email: str = ''
    name: str = ''
    phone: str = ''
    role: UserRole = attrs.field(default=UserRole.USER, converter=UserRole)

    @property
    def can_manage_events(self) -> bool:
        return self.role in (UserRole.ADMIN, UserRole.ORGANIZER)

    def can_manage(self, *, created_by: Optional[str]) -> bool:
        return self.role == UserRole.ADMIN or (
            self.role == UserRole.ORGANIZER and created_by == self.id
        )

    def to_user_info(self) -> UserInfo:
        return UserInfo(name=self.name, email=self.email, phone=self.phone, user_id=self.id)
