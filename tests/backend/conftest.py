import os
import uuid

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from tortoise import Tortoise

TEST_DB_URL = "sqlite://:memory:"
os.environ["DATABASE_URL"] = TEST_DB_URL

from blog_api.core import db as db_module  # noqa: E402
from blog_api.core.security import create_access_token, hash_password, shared_secret_proof  # noqa: E402
from blog_api.main import app  # noqa: E402
from blog_api.models.principal import Student, Teacher  # noqa: E402

db_module.DB_URL = TEST_DB_URL
db_module.TORTOISE_ORM["connections"]["default"] = TEST_DB_URL


async def _init_test_db() -> None:
    """
    Initialize a clean in-memory SQLite database for every test.
    Ensures tables are recreated from scratch.
    """
    if Tortoise._inited:
        await Tortoise.close_connections()
    await Tortoise.init(config=db_module.TORTOISE_ORM)
    await Tortoise.generate_schemas()


@pytest_asyncio.fixture
async def client():
    """
    Provide an HTTPX AsyncClient bound to the FastAPI app with a fresh DB.
    Lifespan is not run, so the startup bootstrap does not interfere.
    """
    await _init_test_db()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client
    await Tortoise.close_connections()


@pytest_asyncio.fixture
async def create_teacher():
    """Factory fixture creating teachers directly via ORM."""

    async def _create_teacher(
        name: str = "Professor Teste",
        email: str | None = None,
        password: str = "senha123",
        is_active: bool = True,
    ) -> tuple[Teacher, str]:
        teacher = await Teacher.create(
            name=name,
            email=email or f"prof_{uuid.uuid4().hex[:6]}@escola.com",
            password_hash=hash_password(password),
            is_active=is_active,
        )
        return teacher, password

    return _create_teacher


@pytest_asyncio.fixture
async def create_student():
    """Factory fixture creating students directly via ORM."""

    async def _create_student(
        name: str = "Aluno Teste",
        email: str | None = None,
        password: str = "aluno123",
        is_active: bool = True,
    ) -> tuple[Student, str]:
        student = await Student.create(
            name=name,
            email=email or f"aluno_{uuid.uuid4().hex[:6]}@escola.com",
            password_hash=hash_password(password),
            is_active=is_active,
        )
        return student, password

    return _create_student


@pytest_asyncio.fixture
async def login(client):
    """Helper fixture posting to /login with the correct shared-secret proof."""

    async def _login(email: str, password: str, proof: str | None = None):
        return await client.post(
            "/login",
            json={
                "email": email,
                "senha": password,
                "palavra-passe": shared_secret_proof() if proof is None else proof,
            },
        )

    return _login


@pytest_asyncio.fixture
async def auth_headers(login):
    """
    Helper fixture to obtain Authorization headers via the login endpoint.
    """

    async def _get_headers(principal, password: str) -> dict[str, str]:
        resp = await login(principal.email, password)
        assert resp.status_code == 200, resp.text
        return {"Authorization": f"Bearer {resp.json()['token']}"}

    return _get_headers


@pytest_asyncio.fixture
async def professor_headers(create_teacher, auth_headers):
    teacher, password = await create_teacher(name="Professor A")
    return await auth_headers(teacher, password)


@pytest_asyncio.fixture
async def student_headers(create_student, auth_headers):
    student, password = await create_student(name="Aluno A")
    return await auth_headers(student, password)


@pytest_asyncio.fixture
async def mint_headers():
    """Authorization headers for a token minted directly, without a stored principal."""

    def _mint(name: str, role: str, principal_id: str | None = None, email: str | None = None) -> dict[str, str]:
        principal_id = principal_id or str(uuid.uuid4())
        email = email or f"{principal_id[:6]}@escola.com"
        return {"Authorization": f"Bearer {create_access_token(principal_id, email, role, name)}"}

    return _mint
