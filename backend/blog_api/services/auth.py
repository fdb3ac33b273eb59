# blog_api/services/auth.py
"""
Login flow.

Checks run in a fixed order and each failure maps to one error:
    1. shared-secret proof       -> InvalidSharedSecret (no DB access yet)
    2. email lookup (teacher, then student) -> InvalidCredentials
    3. active flag               -> InactivePrincipal
    4. password hash             -> InvalidCredentials
    5. token signing             -> TokenIssuanceError

Step 3 runs before step 4, so an inactive account answers "Usuário inativo."
even with a wrong password. This is known and kept as is.
"""
import logging

from blog_api.core.errors import (
    InactivePrincipal,
    InternalError,
    InvalidCredentials,
    InvalidSharedSecret,
    TokenIssuanceError,
    store_errors,
)
from blog_api.core.security import create_access_token, verify_password, verify_shared_secret
from blog_api.models.principal import find_principal_by_email

logger = logging.getLogger("uvicorn.error")

LOGIN_FAILED = "Erro ao realizar login."


async def login(email: str, password: str, proof: str) -> tuple[str, dict]:
    """
    Authenticate a principal and issue an access token.

    Returns:
        (token, summary) where summary is {id, email, name, role}
    """
    if not verify_shared_secret(proof):
        logger.warning("[auth] login rejected: shared secret mismatch")
        raise InvalidSharedSecret()

    with store_errors(LOGIN_FAILED):
        principal = await find_principal_by_email(email)
    if principal is None:
        logger.warning("[auth] login rejected: unknown email")
        raise InvalidCredentials()

    if not principal.is_active:
        logger.warning("[auth] login rejected: inactive principal id=%s", principal.id)
        raise InactivePrincipal()

    try:
        password_ok = verify_password(password, principal.password_hash)
    except (ValueError, TypeError) as exc:
        # Corrupt or unknown hash format in the store
        logger.exception("[auth] password verification failed for id=%s", principal.id)
        raise InternalError(LOGIN_FAILED) from exc
    if not password_ok:
        logger.warning("[auth] login rejected: wrong password for id=%s", principal.id)
        raise InvalidCredentials()

    summary = principal.summary()
    try:
        token = create_access_token(summary["id"], summary["email"], summary["role"], summary["name"])
    except Exception as exc:
        logger.exception("[auth] token signing failed for id=%s", principal.id)
        raise TokenIssuanceError() from exc

    logger.info("[auth] login ok: id=%s role=%s", summary["id"], summary["role"])
    return token, summary
