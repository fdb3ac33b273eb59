# blog_api/core/errors.py
"""
Error taxonomy and FastAPI exception handlers.

Every failure the API reports is an ApiError subclass carrying the HTTP status
and the client-facing message. Handlers render them as {"message": ...}.
Persistence failures are wrapped with `store_errors`, logged server-side and
surfaced as a generic 500 message.
"""
import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from tortoise.exceptions import BaseORMException

logger = logging.getLogger("uvicorn.error")


class ApiError(Exception):
    """Base class for every error rendered to the client."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Erro interno do servidor."

    def __init__(self, message: str | None = None, status_code: int | None = None):
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationFailed(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Erro de validação."

    def __init__(self, errors: list[dict], message: str | None = None):
        super().__init__(message)
        self.errors = errors


class BadRequest(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Requisição inválida."


class MissingToken(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Token não fornecido."


class InvalidToken(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Token inválido."


class InvalidSharedSecret(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Palavra-passe incorreta."


class InvalidCredentials(ApiError):
    # Same message for unknown email and wrong password
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Email ou senha incorretos."


class InactivePrincipal(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Usuário inativo."


class Forbidden(ApiError):
    """Wrong role or not the owner. Post routes raise it with status_code=401."""

    status_code = status.HTTP_403_FORBIDDEN
    message = "Acesso negado."


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Recurso não encontrado."


class InternalError(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class TokenIssuanceError(InternalError):
    message = "Erro ao realizar login."


@contextmanager
def store_errors(message: str) -> Iterator[None]:
    """
    Translate persistence failures into an InternalError with a generic message.

    Usage:
        with store_errors("Erro ao criar post."):
            post = await Post.create(...)
    """
    try:
        yield
    except BaseORMException as exc:
        logger.exception("[store] %s (%s)", message, exc.__class__.__name__)
        raise InternalError(message) from exc


def _validation_errors(exc: RequestValidationError) -> list[dict]:
    """Flatten pydantic errors into [{field, msg}], dropping the 'body'/'query' prefix."""
    items = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        items.append({"field": ".".join(loc) or None, "msg": err.get("msg", "")})
    return items


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    if isinstance(exc, ValidationFailed):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.message, "errors": exc.errors},
        )
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed bodies are 400, not FastAPI's default 422
    return await api_error_handler(request, ValidationFailed(_validation_errors(exc)))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("[error] Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": InternalError.message},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
