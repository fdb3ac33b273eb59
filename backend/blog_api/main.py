# blog_api/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from blog_api.config import settings
from blog_api.core.db import init_db, close_db
from blog_api.core.bootstrap import ensure_default_professor
from blog_api.core.errors import register_error_handlers

from blog_api.api.v1.routers import auth, posts
from blog_api.api.v1.routers.principals import teachers_router, students_router

logger = logging.getLogger("uvicorn.error")

app = FastAPI(title=settings.APP_NAME)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)


@app.on_event("startup")
async def on_startup():
    await init_db()
    # Ensure there's a professor account on first run
    await ensure_default_professor()
    logger.info("[startup] %s ready (env=%s)", settings.APP_NAME, settings.env)


@app.on_event("shutdown")
async def on_shutdown():
    await close_db()


# REST
app.include_router(auth.router)
app.include_router(posts.router)
app.include_router(teachers_router)
app.include_router(students_router)


@app.get("/healthz")
def healthz():
    return {"ok": True}
