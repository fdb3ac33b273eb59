# blog_api/api/v1/routers/principals.py
"""
Teacher and student administration (professors only, 403 otherwise).

Both collections expose the same five endpoints, so the router is built by
`build_principal_router` once per model.
"""
import logging
from typing import Type

from fastapi import APIRouter, Depends, status

from blog_api.api.v1.deps import parse_id, require_professor
from blog_api.core.errors import BadRequest, NotFound, store_errors
from blog_api.core.security import hash_password
from blog_api.models.principal import Principal, Student, Teacher, email_in_use, normalize_email
from blog_api.schemas.auth import CurrentPrincipal
from blog_api.schemas.principal import PrincipalCreateIn, PrincipalUpdateIn

logger = logging.getLogger("uvicorn.error")

EMAIL_TAKEN = "Email já cadastrado."
EMAIL_IMMUTABLE = "O email não pode ser alterado."


def build_principal_router(model: Type[Principal], prefix: str, singular: str, plural: str) -> APIRouter:
    """
    Args:
        model: Teacher or Student
        prefix: URL prefix ("/teachers", "/students")
        singular / plural: lowercase nouns used in error messages
            ("professor"/"professores", "aluno"/"alunos")
    """
    router = APIRouter(prefix=prefix, tags=[plural], dependencies=[Depends(require_professor)])
    label = model.LABEL
    not_found = f"{label} não encontrado."

    async def _get_or_404(record_id: str) -> Principal:
        pk = parse_id(record_id)
        if pk is None:
            raise NotFound(not_found)
        with store_errors(f"Erro ao buscar {singular}."):
            record = await model.get_or_none(id=pk)
        if record is None:
            raise NotFound(not_found)
        return record

    @router.get("")
    async def list_records():
        """List every record, newest first, without password hashes."""
        with store_errors(f"Erro ao buscar {plural}."):
            rows = await model.all().order_by("-created_at")
        return [r.to_public() for r in rows]

    @router.get("/{record_id}")
    async def get_record(record_id: str):
        record = await _get_or_404(record_id)
        return record.to_public()

    @router.post("", status_code=status.HTTP_201_CREATED)
    async def create_record(body: PrincipalCreateIn, current: CurrentPrincipal = Depends(require_professor)):
        """
        Create a record.

        The email must be free in both collections: a teacher and a student
        can never share an email.
        """
        email = normalize_email(body.email)
        with store_errors(f"Erro ao criar {singular}."):
            if await email_in_use(email):
                raise BadRequest(EMAIL_TAKEN)
            record = await model.create(
                name=body.name,
                email=email,
                password_hash=hash_password(body.password),
                role=model.ROLE,
                is_active=body.isActive,
            )
        logger.info("[admin] %s created id=%s by=%s", singular, record.id, current.id)
        return record.to_public()

    @router.put("/{record_id}")
    async def update_record(record_id: str, body: PrincipalUpdateIn):
        """
        Update name, password or active flag. Only provided fields change.

        Email is fixed after creation; sending a different one is a 400.
        """
        record = await _get_or_404(record_id)
        if body.email is not None and normalize_email(body.email) != record.email:
            raise BadRequest(EMAIL_IMMUTABLE)
        if body.name is not None:
            record.name = body.name
        if body.password is not None:
            record.password_hash = hash_password(body.password)
        if body.isActive is not None:
            record.is_active = body.isActive
        with store_errors(f"Erro ao atualizar {singular}."):
            await record.save()
        return record.to_public()

    @router.delete("/{record_id}")
    async def delete_record(record_id: str, current: CurrentPrincipal = Depends(require_professor)):
        record = await _get_or_404(record_id)
        with store_errors(f"Erro ao deletar {singular}."):
            await record.delete()
        logger.info("[admin] %s deleted id=%s by=%s", singular, record_id, current.id)
        return {"message": f"{label} excluído com sucesso."}

    return router


teachers_router = build_principal_router(Teacher, "/teachers", "professor", "professores")
students_router = build_principal_router(Student, "/students", "aluno", "alunos")
