from typing import Generator, NamedTuple

from fastapi import Depends, Query, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from sikus.core.config import Settings
from sikus.core.errors import UnauthorizedError, ForbiddenError, ValidationError
from sikus.core.security import TokenClaims, verify_access_token
from sikus.models.user import Role

# Swagger Authorize: "Bearer token" input
bearer_scheme = HTTPBearer(auto_error=False)

# request-scoped identity taken from the token claims
CurrentUser = TokenClaims


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(request: Request) -> Generator[Session, None, None]:
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_current_user(
    cred: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> CurrentUser:
    if cred is None:
        raise UnauthorizedError("Token required")

    claims = verify_access_token(cred.credentials, settings)
    if claims is None:
        raise UnauthorizedError("Invalid token")

    return claims


def get_current_admin(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if current_user.role is not Role.ADMIN:
        raise ForbiddenError("Admin access required")
    return current_user


class PageParams(NamedTuple):
    page: int
    limit: int


def get_page_params(
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1),
    settings: Settings = Depends(get_settings),
) -> PageParams:
    limit = limit or settings.DEFAULT_PAGE_SIZE
    if limit > settings.MAX_PAGE_SIZE:
        raise ValidationError(f"limit must be <= {settings.MAX_PAGE_SIZE}")
    return PageParams(page=page, limit=limit)
