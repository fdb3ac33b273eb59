# blog_api/schemas/auth.py
"""
Pydantic schemas for authentication endpoints.
Defines request/response models for login and the decoded token identity.
"""
from pydantic import BaseModel, ConfigDict, Field, constr


class LoginRequest(BaseModel):
    """
    Request model for the login endpoint.
    `palavra-passe` is the shared-secret proof (hex SHA-256 of the shared secret).
    """
    model_config = ConfigDict(populate_by_name=True)

    email: constr(strip_whitespace=True, min_length=1)  # Trimmed before lookup
    senha: constr(min_length=1)  # Plain text password, verified against the stored hash
    palavra_passe: constr(min_length=1) = Field(alias="palavra-passe")


class UserOut(BaseModel):
    """Principal summary returned by /login; never contains the password hash."""
    id: str
    email: str
    name: str
    role: str


class LoginResponse(BaseModel):
    message: str
    token: str  # JWT access token, valid for 24h
    user: UserOut


class CurrentPrincipal(BaseModel):
    """Identity decoded from a valid bearer token."""
    id: str
    email: str
    role: str
    name: str
