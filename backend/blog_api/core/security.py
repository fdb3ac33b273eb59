# blog_api/core/security.py
"""
Security module for authentication.
Handles password hashing, the shared-secret proof and JWT token creation/validation.
"""
import datetime as dt
import hashlib
import hmac

import jwt  # PyJWT
from passlib.context import CryptContext

from blog_api.config import settings

# Password hashing context
# Argon2 is a modern, secure password hashing algorithm
pwd_context = CryptContext(
    schemes=["argon2"],  # Use Argon2 for password hashing
    deprecated="auto",   # Automatically handle deprecated schemes
)

# JWT configuration
JWT_SECRET = settings.jwt_secret
JWT_ALG = settings.jwt_algorithm
ACCESS_TOKEN_EXPIRE_HOURS = settings.access_token_expire_hours

# Claims every access token must carry besides iat/exp
REQUIRED_CLAIMS = ("id", "email", "role", "name")


def hash_password(plain: str) -> str:
    """
    Hash a plain text password using Argon2.

    Note: Never store plain text passwords. Always use this function before saving.
    """
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """Verify a plain text password against a stored hash (constant-time)."""
    return pwd_context.verify(plain, hashed)


def shared_secret_proof(secret: str | None = None) -> str:
    """
    Proof a client must send as "palavra-passe" on login.

    It is the hex SHA-256 digest of the server-held shared secret, so the
    secret itself never travels over the wire.
    """
    raw = settings.shared_secret if secret is None else secret
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


def verify_shared_secret(proof: str) -> bool:
    return hmac.compare_digest(proof.encode("utf-8"), shared_secret_proof().encode("utf-8"))


def create_access_token(principal_id: str, email: str, role: str, name: str) -> str:
    """
    Create a JWT access token for an authenticated principal.

    Token payload includes:
        - id, email, role, name: identity claims read by the access middleware
        - iat: Issued at timestamp
        - exp: Expiration timestamp (iat + 24h)
    """
    now = dt.datetime.now(dt.timezone.utc).replace(microsecond=0)
    payload = {
        "id": principal_id,
        "email": email,
        "role": role,
        "name": name,
        "iat": now,
        "exp": now + dt.timedelta(hours=ACCESS_TOKEN_EXPIRE_HOURS),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALG)


def decode_access_token(token: str) -> dict:
    """
    Decode and validate a JWT access token.

    Raises:
        jwt.ExpiredSignatureError: If token has expired
        jwt.InvalidTokenError: If token is invalid, tampered or lacks identity claims
    """
    return jwt.decode(
        token,
        JWT_SECRET,
        algorithms=[JWT_ALG],
        options={"require": ["exp", "iat", *REQUIRED_CLAIMS]},
    )
