import time
from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from loguru import logger

from .config import Settings, load_settings
from .db import Database
from .errors import ConflictError, NotFoundError, ValidationError
from .repository import SqlRepository
from .responses import error_response
from .routers import departments, employees
from .services import HRService

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    database: Database = app.state.database
    database.test_connection()
    database.create_all()
    logger.info("HTTP front-end ready")
    yield
    logger.info("HTTP front-end stopped")


def _request_errors(exc: RequestValidationError):
    errors = []
    for err in exc.errors():
        # Drop the leading "body"/"path"/"query" segment
        loc = [str(part) for part in err.get("loc", ())[1:]]
        errors.append({"field": ".".join(loc) or "body", "message": err.get("msg", "Invalid request")})
    return errors


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(ValidationError)
    async def validation_error(request: Request, exc: ValidationError):
        return error_response(exc.message, HTTPStatus.BAD_REQUEST, errors=exc.errors)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(request: Request, exc: RequestValidationError):
        return error_response("Validation error", HTTPStatus.BAD_REQUEST, errors=_request_errors(exc))

    @app.exception_handler(NotFoundError)
    async def not_found(request: Request, exc: NotFoundError):
        return error_response(exc.message, HTTPStatus.NOT_FOUND)

    @app.exception_handler(ConflictError)
    async def conflict(request: Request, exc: ConflictError):
        return error_response(exc.message, HTTPStatus.CONFLICT, error=exc.detail)

    @app.exception_handler(Exception)
    async def internal_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on {} {}", request.method, request.url.path)
        return error_response("Internal server error", HTTPStatus.INTERNAL_SERVER_ERROR, error=str(exc))


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
    service: Optional[HRService] = None,
) -> FastAPI:
    settings = settings or load_settings()
    database = database or Database(settings)
    service = service or HRService(SqlRepository(database))

    # Initialize FastAPI application
    app = FastAPI(title="HR Directory API", version=VERSION, lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database
    app.state.service = service

    register_exception_handlers(app)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = (time.perf_counter() - start) * 1000
        logger.info("{} {} -> {} ({:.1f}ms)", request.method, request.url.path, response.status_code, elapsed)
        return response

    # Register routers
    app.include_router(departments.router)
    app.include_router(employees.router)

    @app.get("/")
    def root():
        return {
            "message": "HR Directory API is running",
            "version": VERSION,
            "grpc_port": settings.grpc_port,
        }

    # Health check endpoint
    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app
