"""
Caller authentication - bearer JWT signed with SECRET_KEY

Users are managed outside this service; the token carries everything needed
to rebuild the principal (no DB query).
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

import jwt

from src.platform.config.core_setting import Settings, settings as default_settings
from src.platform.exception.exceptions import AuthenticationError
from src.service.ticketing.domain.entity.user_entity import UserEntity, UserRole


class JwtAuth:
    def __init__(self, settings: Optional[Settings] = None) -> None:
        settings = settings or default_settings
        self.secret = settings.SECRET_KEY.get_secret_value()
        self.algorithm = settings.ALGORITHM
        self.token_expire_days = 7

    def create_jwt_token(self, user_entity: UserEntity) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            'sub': str(user_entity.id),
            'exp': now + timedelta(days=self.token_expire_days),
            'iat': now,
            'user_id': user_entity.id,
            'email': user_entity.email,
            'name': user_entity.name,
            'phone': user_entity.phone,
            'role': str(user_entity.role),
        }

        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_jwt_token(self, token: str) -> Dict:
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.PyJWTError as e:
            raise AuthenticationError('Invalid token') from e

    def get_current_user_info_from_jwt(self, token: Optional[str]) -> UserEntity:
        if not token:
            raise AuthenticationError('Not authenticated')

        payload = self.decode_jwt_token(token)

        user_id = payload.get('user_id') or payload.get('sub')
        role = payload.get('role')
        if not user_id or role not in set(UserRole):
            raise AuthenticationError('Invalid token')

        # Rebuild UserEntity from JWT payload
        return UserEntity(
            id=str(user_id),
            email=payload.get('email') or '',
            name=payload.get('name') or '',
            phone=payload.get('phone') or '',
            role=UserRole(role),
        )
