# rive/main.py
import os
import time
import logging
import uuid
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from rive.routers.auth import router as auth_router
from rive.routers.users import router as users_router
from rive.routers.exercises import router as exercises_router
from rive.routers.workouts import router as workouts_router
from rive.routers.sessions import router as sessions_router
from rive.routers.drafts import router as drafts_router
from rive.db import SessionLocal  # for healthz DB check
from rive.settings import get_settings

log = logging.getLogger("uvicorn")
settings = get_settings()
logging.getLogger("rive").setLevel(settings.LOG_LEVEL.upper())

app = FastAPI(
    title="Rive API",
    openapi_tags=[
        {"name": "auth", "description": "Sign-up, sign-in & sign-out"},
        {"name": "users", "description": "Profile completion"},
        {"name": "exercises", "description": "Exercise library, favorites & recents"},
        {"name": "workouts", "description": "Workout templates"},
        {"name": "sessions", "description": "Performed workouts and their sets"},
        {"name": "drafts", "description": "Resumable in-progress workout form"},
    ],
)


# CORS (relax for local dev; tighten origins in prod via env)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOW_ORIGINS.split(","),
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def add_request_id_and_log(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = req_id
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    response.headers["X-Request-ID"] = req_id
    log.info("rid=%s %s %s -> %s in %.1fms",
             req_id, request.method, request.url.path, response.status_code, duration_ms)
    return response

@app.exception_handler(SQLAlchemyError)
async def database_error(request: Request, exc: SQLAlchemyError):
    rid = getattr(request.state, "request_id", "-")
    log.error("rid=%s %s %s failed: %s", rid, request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Database error"})

@app.get("/")
def root():
    return {"ok": True, "name": "Rive API"}

@app.get("/ping")
def ping():
    return {"pong": True}

@app.get("/healthz")
def healthz():
    # Quick DB sanity check
    try:
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
        return {"status": "ok"}
    except Exception as e:
        return {"status": "degraded", "error": str(e)}

@app.get("/version")
def version():
    return {"version": os.getenv("API_VERSION", "dev")}

# Routers
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(exercises_router)
app.include_router(workouts_router)
app.include_router(sessions_router)
app.include_router(drafts_router)
