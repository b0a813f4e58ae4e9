from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, EmailStr
from pydantic.alias_generators import to_camel

from src.service.ticketing.domain.value_object.user_info import UserInfo


T = TypeVar('T')


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(CamelModel, Generic[T]):
    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None


class MessageResponse(CamelModel):
    success: bool = True
    message: str


class UserInfoRequest(CamelModel):
    name: str = ''
    email: Optional[EmailStr] = None
    phone: str = ''

    def to_domain(self, *, user_id: Optional[str] = None) -> UserInfo:
        return UserInfo(name=self.name, email=self.email or '', phone=self.phone, user_id=user_id)


class UserInfoResponse(CamelModel):
    name: str
    email: str
    phone: str
    user_id: Optional[str] = None

    @classmethod
    def from_domain(cls, user_info: Optional[UserInfo]) -> Optional['UserInfoResponse']:
        if user_info is None:
            return None
        return cls(
            name=user_info.name,
            email=user_info.email,
            phone=user_info.phone,
            user_id=user_info.user_id,
        )
