# blog_api/core/bootstrap.py
"""
Bootstrap module for application initialization.
Creates a default professor on first startup so that somebody can log in and
create the other accounts.
"""
import logging

from blog_api.config import settings
from blog_api.core.security import hash_password
from blog_api.models.principal import Teacher, email_in_use, normalize_email

logger = logging.getLogger("uvicorn.error")


async def ensure_default_professor() -> None:
    """
    If no teacher exists in the database, create one from settings.
    Only takes effect under the following conditions:
      - Currently no row in the teachers table
      - And ADMIN_PASSWORD is set (to avoid using a default weak password)
    Environment variables:
      ADMIN_NAME     (default: "Professor Admin")
      ADMIN_EMAIL    (default: "admin@escola.com")
      ADMIN_PASSWORD (required, otherwise won't create)
    """
    if await Teacher.all().exists():
        return

    if not settings.admin_password:
        logger.warning("[bootstrap] No professor present, but ADMIN_PASSWORD not set -> skip creating default professor.")
        return

    email = normalize_email(settings.admin_email)
    if await email_in_use(email):
        # A student already owns this email; emails are unique across both tables
        logger.warning("[bootstrap] ADMIN_EMAIL %s is already used by a student -> skip.", email)
        return

    t = await Teacher.create(
        name=settings.admin_name,
        email=email,
        password_hash=hash_password(settings.admin_password),
    )
    logger.warning("[bootstrap] Created default professor -> email=%s id=%s", t.email, t.id)
