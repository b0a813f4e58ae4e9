from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError
from src.service.ticketing.domain.entity.user_entity import UserEntity
from src.service.ticketing.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


_bearer = HTTPBearer(auto_error=False)


def _extract_token(
    request: Request, credentials: Optional[HTTPAuthorizationCredentials]
) -> Optional[str]:
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.ACCESS_TOKEN_COOKIE_NAME)


@inject
async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> UserEntity:
    return jwt_auth.get_current_user_info_from_jwt(_extract_token(request, credentials))


@inject
async def get_optional_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> Optional[UserEntity]:
    """Public endpoints: a present token must still be valid."""
    token = _extract_token(request, credentials)
    if not token:
        return None
    return jwt_auth.get_current_user_info_from_jwt(token)


async def require_event_manager(
    current_user: UserEntity = Depends(get_current_user),
) -> UserEntity:
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span(
        'auth.require_event_manager',
        attributes={
            'user.id': current_user.id,
            'user.role': str(current_user.role),
        },
    ):
        if not current_user.can_manage_events:
            raise ForbiddenError('Only admins and organizers can perform this action')
        return current_user
