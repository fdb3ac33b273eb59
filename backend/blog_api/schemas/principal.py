# blog_api/schemas/principal.py
"""
Pydantic schemas for teacher and student administration endpoints.
"""
from typing import Optional

from pydantic import BaseModel, EmailStr, constr


class PrincipalCreateIn(BaseModel):
    name: constr(strip_whitespace=True, min_length=3, max_length=128)
    email: EmailStr  # Normalized (trimmed, lowercased) before storing
    password: constr(min_length=6)
    isActive: bool = True


class PrincipalUpdateIn(BaseModel):
    """
    All fields are optional - only provided fields will be updated.
    Email is accepted only if it equals the stored one (it cannot change).
    """
    name: Optional[constr(strip_whitespace=True, min_length=3, max_length=128)] = None
    email: Optional[EmailStr] = None
    password: Optional[constr(min_length=6)] = None
    isActive: Optional[bool] = None
