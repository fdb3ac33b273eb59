import jwt
import pytest

from blog_api.core.security import JWT_ALG, JWT_SECRET, shared_secret_proof


pytestmark = pytest.mark.asyncio


async def test_professor_login_success(create_teacher, login):
    teacher, password = await create_teacher(name="Professor Admin", email="admin@escola.com", password="admin123")

    resp = await login("admin@escola.com", password)
    body = resp.json()
    assert resp.status_code == 200
    assert body["message"] == "Login realizado com sucesso."
    assert body["user"] == {
        "id": str(teacher.id),
        "email": "admin@escola.com",
        "name": "Professor Admin",
        "role": "professor",
    }

    decoded = jwt.decode(body["token"], JWT_SECRET, algorithms=[JWT_ALG])
    assert decoded["role"] == "professor"
    assert decoded["id"] == str(teacher.id)
    assert decoded["name"] == "Professor Admin"
    assert decoded["exp"] - decoded["iat"] == 86400


async def test_student_login_success(create_student, login):
    student, password = await create_student(name="Aluno Teste", email="aluno@escola.com")

    resp = await login("aluno@escola.com", password)
    assert resp.status_code == 200
    assert resp.json()["user"]["role"] == "aluno"
    decoded = jwt.decode(resp.json()["token"], JWT_SECRET, algorithms=[JWT_ALG])
    assert decoded["email"] == "aluno@escola.com"
    assert decoded["role"] == "aluno"


async def test_teacher_wins_when_email_exists_in_both_collections(create_teacher, create_student, login):
    same_email = "duplicado@escola.com"
    await create_teacher(name="Professor", email=same_email, password="senha123")
    await create_student(name="Aluno", email=same_email, password="senha123")

    resp = await login(same_email, "senha123")
    assert resp.status_code == 200
    assert resp.json()["user"]["role"] == "professor"
    assert resp.json()["user"]["name"] == "Professor"


async def test_email_is_trimmed_and_case_insensitive(create_teacher, login):
    await create_teacher(email="prof@escola.com", password="senha123")

    resp = await login("  PROF@escola.com  ", "senha123")
    assert resp.status_code == 200
    assert resp.json()["user"]["email"] == "prof@escola.com"


async def test_response_never_contains_password(create_teacher, login):
    teacher, password = await create_teacher()
    resp = await login(teacher.email, password)
    assert resp.status_code == 200
    assert set(resp.json()["user"]) == {"id", "email", "name", "role"}
    assert "password" not in resp.text
    assert "password_hash" not in resp.text


@pytest.mark.parametrize("proof", ["secreta123", "errada", shared_secret_proof().upper(), shared_secret_proof()[:-1]])
async def test_wrong_shared_secret(create_teacher, login, proof):
    teacher, password = await create_teacher()
    resp = await login(teacher.email, password, proof=proof)
    assert resp.status_code == 401
    assert resp.json() == {"message": "Palavra-passe incorreta."}


async def test_shared_secret_checked_before_email(login):
    resp = await login("ninguem@escola.com", "qualquer", proof="errada")
    assert resp.status_code == 401
    assert resp.json()["message"] == "Palavra-passe incorreta."


async def test_unknown_email(login):
    resp = await login("ninguem@escola.com", "senha123")
    assert resp.status_code == 401
    assert resp.json()["message"] == "Email ou senha incorretos."


async def test_wrong_password_same_message_as_unknown_email(create_teacher, create_student, login):
    teacher, _ = await create_teacher()
    student, _ = await create_student()
    for principal in (teacher, student):
        resp = await login(principal.email, "errada")
        assert resp.status_code == 401
        assert resp.json()["message"] == "Email ou senha incorretos."


async def test_inactive_principal_rejected_regardless_of_password(create_teacher, create_student, login):
    teacher, t_pwd = await create_teacher(is_active=False)
    student, s_pwd = await create_student(is_active=False)
    for principal, password in ((teacher, t_pwd), (student, s_pwd), (teacher, "errada"), (student, "errada")):
        resp = await login(principal.email, password)
        assert resp.status_code == 401
        assert resp.json()["message"] == "Usuário inativo."


@pytest.mark.parametrize(
    "payload, missing",
    [
        ({"senha": "admin", "palavra-passe": "x"}, "email"),
        ({"email": "admin", "palavra-passe": "x"}, "senha"),
        ({"email": "admin", "senha": "admin"}, "palavra-passe"),
        ({"email": "   ", "senha": "admin", "palavra-passe": "x"}, "email"),
        ({"email": "admin", "senha": "", "palavra-passe": "x"}, "senha"),
        ({"email": "admin", "senha": "admin", "palavra-passe": ""}, "palavra-passe"),
    ],
)
async def test_login_validation(client, payload, missing):
    resp = await client.post("/login", json=payload)
    body = resp.json()
    assert resp.status_code == 400
    assert body["message"] == "Erro de validação."
    assert any(err["field"] == missing for err in body["errors"])


async def test_login_rejects_non_json_body(client):
    resp = await client.post("/login", content="não é json", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400


async def test_extra_fields_are_ignored(create_teacher, client):
    teacher, password = await create_teacher()
    resp = await client.post(
        "/login",
        json={
            "email": teacher.email,
            "senha": password,
            "palavra-passe": shared_secret_proof(),
            "role": "admin",
        },
    )
    assert resp.status_code == 200
    assert resp.json()["user"]["role"] == "professor"


async def test_signing_failure_is_500(create_teacher, login, monkeypatch):
    from blog_api.services import auth as auth_service

    def boom(*args, **kwargs):
        raise RuntimeError("Erro ao gerar token")

    monkeypatch.setattr(auth_service, "create_access_token", boom)
    teacher, password = await create_teacher()
    resp = await login(teacher.email, password)
    assert resp.status_code == 500
    assert resp.json() == {"message": "Erro ao realizar login."}


async def test_me_returns_token_identity(create_student, auth_headers, client):
    student, password = await create_student(name="Carla")
    headers = await auth_headers(student, password)
    resp = await client.get("/me", headers=headers)
    assert resp.status_code == 200
    assert resp.json() == {"id": str(student.id), "email": student.email, "role": "aluno", "name": "Carla"}


async def test_missing_and_invalid_tokens(client):
    no_header = await client.get("/me")
    assert no_header.status_code == 401
    assert no_header.json()["message"] == "Token não fornecido."

    no_segment = await client.get("/me", headers={"Authorization": "Bearer "})
    assert no_segment.status_code == 401
    assert no_segment.json()["message"] == "Token não fornecido."

    garbage = await client.get("/me", headers={"Authorization": "Bearer not.a.token"})
    assert garbage.status_code == 401
    assert garbage.json()["message"] == "Token inválido."


async def test_tampered_and_expired_tokens_are_invalid(client, mint_headers):
    import datetime as dt

    token = mint_headers("Carla", "aluno")["Authorization"].split(" ", 1)[1]
    header, _, signature = token.split(".")
    # Swap in a payload claiming the professor role, keep the original signature
    forged = mint_headers("Carla", "professor")["Authorization"].split(" ", 1)[1]
    tampered = f"{header}.{forged.split('.')[1]}.{signature}"
    resp = await client.get("/me", headers={"Authorization": f"Bearer {tampered}"})
    assert resp.status_code == 401
    assert resp.json()["message"] == "Token inválido."

    past = dt.datetime.now(dt.timezone.utc) - dt.timedelta(days=2)
    expired = jwt.encode(
        {"id": "a", "email": "a@escola.com", "role": "professor", "name": "A",
         "iat": past, "exp": past + dt.timedelta(hours=24)},
        JWT_SECRET,
        algorithm=JWT_ALG,
    )
    resp = await client.get("/me", headers={"Authorization": f"Bearer {expired}"})
    assert resp.status_code == 401
    assert resp.json()["message"] == "Token inválido."


async def test_non_bearer_scheme_is_verified_as_token(client):
    other_scheme = await client.get("/me", headers={"Authorization": "Token abc.def.ghi"})
    assert other_scheme.status_code == 401
    assert other_scheme.json()["message"] == "Token inválido."

    single_segment = await client.get("/me", headers={"Authorization": "abc.def.ghi"})
    assert single_segment.status_code == 401
    assert single_segment.json()["message"] == "Token não fornecido."
