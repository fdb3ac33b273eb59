# blog_api/models/principal.py
"""
Database models for principals.
Teachers and students live in two separate tables ("collections") that share
one abstract base, so every lookup that must consider both goes through the
helpers at the bottom of this module.
"""
import uuid
from typing import Optional, Type

from tortoise import fields, models

PROFESSOR = "professor"
ALUNO = "aluno"


def normalize_email(raw: str) -> str:
    """Emails are stored and looked up trimmed and lowercased."""
    return (raw or "").strip().lower()


class Principal(models.Model):
    """
    Abstract principal model.

    Security:
    - Password is stored as a hash (never store plain text passwords)
    - Email is unique within its table; creation also checks the other table
    - Role is fixed per table and never changes
    """
    ROLE: str = ""
    LABEL: str = ""  # Human name of the collection used in API messages

    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    name = fields.CharField(max_length=128)
    email = fields.CharField(max_length=256, unique=True, index=True)
    password_hash = fields.CharField(max_length=255)
    is_active = fields.BooleanField(default=True)
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        abstract = True

    def summary(self) -> dict:
        """Identity returned by /login, same fields as the token claims."""
        return {"id": str(self.id), "email": self.email, "name": self.name, "role": self.role}

    def to_public(self) -> dict:
        """API representation; the password hash is never included."""
        return {
            "id": str(self.id),
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "isActive": self.is_active,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }


class Teacher(Principal):
    ROLE = PROFESSOR
    LABEL = "Professor"

    role = fields.CharField(max_length=16, default=PROFESSOR)

    class Meta:
        table = "teachers"


class Student(Principal):
    ROLE = ALUNO
    LABEL = "Aluno"

    role = fields.CharField(max_length=16, default=ALUNO)

    class Meta:
        table = "students"


# Lookup order matters: a teacher wins over a student with the same email
PRINCIPAL_MODELS: tuple[Type[Principal], ...] = (Teacher, Student)


async def find_principal_by_email(email: str) -> Optional[Principal]:
    """Resolve an email against Teacher first, then Student; first match wins."""
    email = normalize_email(email)
    for model in PRINCIPAL_MODELS:
        principal = await model.get_or_none(email=email)
        if principal is not None:
            return principal
    return None


async def email_in_use(email: str, exclude: Optional[Principal] = None) -> bool:
    """True if any teacher or student (other than `exclude`) already uses this email."""
    email = normalize_email(email)
    for model in PRINCIPAL_MODELS:
        qs = model.filter(email=email)
        if exclude is not None and isinstance(exclude, model):
            qs = qs.exclude(id=exclude.id)
        if await qs.exists():
            return True
    return False
