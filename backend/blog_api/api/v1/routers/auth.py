# blog_api/api/v1/routers/auth.py
from fastapi import APIRouter, Depends

from blog_api.api.v1.deps import get_current_principal
from blog_api.schemas.auth import CurrentPrincipal, LoginRequest, LoginResponse
from blog_api.services import auth as auth_service

router = APIRouter(tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login(payload: LoginRequest):
    """
    Authenticate a teacher or student and create an access token.

    Body:
        - email: str (trimmed; looked up in teachers first, then students)
        - senha: str (plain text password)
        - palavra-passe: str (hex SHA-256 of the shared secret)

    Returns:
        dict: {message, token, user: {id, email, name, role}}

    Errors:
        - 400: missing or empty field
        - 401: "Palavra-passe incorreta." / "Email ou senha incorretos." / "Usuário inativo."
        - 500: "Erro ao realizar login."
    """
    token, user = await auth_service.login(payload.email, payload.senha, payload.palavra_passe)
    return {"message": "Login realizado com sucesso.", "token": token, "user": user}


@router.get("/me", response_model=CurrentPrincipal)
async def me(principal: CurrentPrincipal = Depends(get_current_principal)):
    """Identity carried by the caller's token."""
    return principal
