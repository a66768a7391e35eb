"""
main.py

FastAPI application entry point.

create_app() assembles the whole service: it builds the Settings
object once, configures logging, creates the database engine and
session factory, registers the error handlers and routers.

Main roles:
- FastAPI app creation (application factory)
- CORS middleware
- {"error": ...} JSON rendering for every failure
- router registration (auth, reports, users)
- health / db-ping endpoints

Design principles:
- no business logic here, only wiring
- Settings / engine / session factory are stored on app.state and
  reached through dependencies, never as module globals
- an unreachable database at startup is fatal

Run:
- uvicorn sikus.main:create_app --factory

Related files:
- sikus.core.config        : Settings
- sikus.core.deps          : get_db / get_settings
- sikus.routers.*          : API routers

"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy import text
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from sikus.core.config import Settings
from sikus.core.deps import get_db
from sikus.core.errors import AppError
from sikus.core.logging import setup_logging
from sikus.db.session import build_engine, build_session_factory, ping
from sikus.routers import auth, reports, users


@asynccontextmanager
async def lifespan(app: FastAPI):
    engine = app.state.engine
    try:
        ping(engine)
    except Exception:
        logger.critical("Database connection failed: {}", engine.url.render_as_string(hide_password=True))
        raise
    logger.info("Database connected successfully")

    yield

    engine.dispose()


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Data tidak valid"
    first = errors[0]
    loc = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"{loc}: {first.get('msg')}" if loc else str(first.get("msg"))


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.message},
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": _validation_message(exc)})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.opt(exception=exc).error("Unhandled error on {} {}", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Server error"})


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_DIR)

    app = FastAPI(title="SIKUS Backend", lifespan=lifespan)

    app.state.settings = settings
    app.state.engine = build_engine(settings.DATABASE_URL)
    app.state.session_factory = build_session_factory(app.state.engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(reports.router)
    app.include_router(users.router)

    """
    Server health check

    - confirms the application process is alive

    """
    @app.get("/health")
    def health():
        return {"status": "ok"}

    """
    Database connectivity check

    - SELECT 1 through a request-scoped session
    - separates "server up, database down" from a dead server

    """
    @app.get("/db-ping")
    def db_ping(db: Session = Depends(get_db)):
        value = db.execute(text("SELECT 1")).scalar_one()
        return {"db": "ok", "value": value}

    return app
