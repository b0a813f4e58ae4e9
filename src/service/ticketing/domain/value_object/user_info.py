from typing import Optional

import attrs


@attrs.frozen
class UserInfo:
    """Snapshot of the person a reservation, hold or booking is made for."""

    name: str = ''
    email: str = ''
    phone: str = ''
    user_id: Optional[str] = None

    def same_person(self, other: Optional['UserInfo']) -> bool:
        if other is None:
            return False
        if self.user_id and other.user_id:
            return self.user_id == other.user_id
        return (self.email.lower(), self.phone) == (other.email.lower(), other.phone)
