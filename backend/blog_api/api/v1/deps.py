# blog_api/api/v1/deps.py
import logging
import uuid

import jwt
from fastapi import Depends, Header, Request, status
from pydantic import ValidationError

from blog_api.config import settings
from blog_api.core.errors import Forbidden, InvalidToken, MissingToken
from blog_api.core.security import decode_access_token
from blog_api.models.principal import PROFESSOR
from blog_api.schemas.auth import CurrentPrincipal

logger = logging.getLogger("uvicorn.error")

PROFESSORS_ONLY = "Acesso restrito a professores."
SEARCH_ROLES_ONLY = "Acesso restrito a professores e alunos."


async def get_current_principal(
    request: Request,
    authorization: str | None = Header(default=None),
) -> CurrentPrincipal:
    """
    FastAPI dependency that authenticates the request from its bearer token.

    The check is stateless: the identity comes from the token claims only,
    there is no database lookup and no revocation list.

    Returns:
        CurrentPrincipal: decoded {id, email, role, name}, also stored on
        request.state.principal

    Raises:
        MissingToken (401): no Authorization header or no token after the scheme
        InvalidToken (401): bad signature, expired, malformed or missing claims

    Usage:
        @router.get("/protected")
        async def protected_route(principal: CurrentPrincipal = Depends(get_current_principal)):
            return {"id": principal.id}
    """
    token = None
    if authorization:
        # Token is the second segment whatever the scheme; a wrong scheme fails verification
        parts = authorization.split(" ", 1)
        if len(parts) == 2:
            token = parts[1].strip()

    if not token:
        raise MissingToken()

    try:
        payload = decode_access_token(token)
        principal = CurrentPrincipal(
            id=str(payload["id"]),
            email=payload["email"],
            role=payload["role"],
            name=payload["name"],
        )
    except (jwt.PyJWTError, KeyError, ValidationError) as exc:
        logger.info("[auth] token rejected: %s", exc.__class__.__name__)
        raise InvalidToken() from exc

    request.state.principal = principal
    return principal


async def require_professor(
    current: CurrentPrincipal = Depends(get_current_principal),
) -> CurrentPrincipal:
    """
    Guard for the teacher/student administration routes.

    Raises:
        Forbidden (403): caller is not a professor
    """
    if current.role != PROFESSOR:
        raise Forbidden(PROFESSORS_ONLY)
    return current


async def require_professor_for_posts(
    current: CurrentPrincipal = Depends(get_current_principal),
) -> CurrentPrincipal:
    """
    Guard for post create/update/delete.

    Same rule as require_professor but the post routes have always answered
    401 instead of 403; clients depend on that status.
    """
    if current.role != PROFESSOR:
        raise Forbidden(PROFESSORS_ONLY, status_code=status.HTTP_401_UNAUTHORIZED)
    return current


async def require_search_access(
    current: CurrentPrincipal = Depends(get_current_principal),
) -> CurrentPrincipal:
    """Guard for GET /posts/search: professors and alunos (see settings.search_allowed_roles)."""
    if current.role not in settings.search_allowed_roles:
        raise Forbidden(SEARCH_ROLES_ONLY, status_code=status.HTTP_401_UNAUTHORIZED)
    return current


def is_professor(principal: CurrentPrincipal) -> bool:
    return principal.role == PROFESSOR


def parse_id(raw: str) -> uuid.UUID | None:
    """Path ids are UUIDs; anything else cannot match a stored record."""
    try:
        return uuid.UUID(raw)
    except (ValueError, TypeError, AttributeError):
        return None
