import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from prometheus_client import make_asgi_app
from pydantic import ValidationError

from devconnector.api.routes import router as api_router
from devconnector.core.config import Settings, get_settings
from devconnector.core.exceptions import AppError, ValidationFailed
from devconnector.core.logging import setup_logging
from devconnector.core.security import PasswordHasher
from devconnector.db.database import Base, create_db_engine, create_session_factory
from devconnector.services.token_service import TokenService


def _validation_message(error: dict) -> str:
    ctx = error.get("ctx") or {}
    if error.get("type") == "value_error" and "error" in ctx:
        return str(ctx["error"])
    return error.get("msg", "Invalid value")


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"errors": exc.errors})


def _missing_body_errors(request: Request, errors: list) -> list:
    """Validate an absent body as an empty object so every rule is reported."""
    if len(errors) != 1 or errors[0].get("type") != "missing" or tuple(errors[0].get("loc", ())) != ("body",):
        return errors

    body_field = getattr(request.scope.get("route"), "body_field", None)
    model = getattr(getattr(body_field, "field_info", None), "annotation", None)
    if not hasattr(model, "model_validate"):
        return errors
    try:
        model.model_validate({})
    except ValidationError as exc:
        return [{**error, "loc": ("body", *error["loc"])} for error in exc.errors()]
    return errors


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = []
    for error in _missing_body_errors(request, list(exc.errors())):
        field = ".".join(str(part) for part in error.get("loc", ())[1:])
        errors.append({"message": _validation_message(error), "field": field or None})
    return await app_error_handler(request, ValidationFailed(errors))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all unhandled exceptions"""
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"errors": [{"message": str(exc) or "Server error"}]},
    )


async def log_requests(request: Request, call_next):
    """Log request timing and status"""
    start_time = time.time()
    response = await call_next(request)
    end_time = time.time()

    logger.info(
        f"{request.method} {request.url.path} "
        f"Status: {response.status_code} "
        f"Duration: {(end_time - start_time):.3f}s"
    )
    return response


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application and everything it needs from ``settings``."""
    settings = settings or get_settings()
    setup_logging(settings)

    engine = create_db_engine(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.PROJECT_NAME} {settings.VERSION}")
        if settings.CREATE_TABLES:
            Base.metadata.create_all(bind=engine)
            logger.info("Database tables ready")

        yield

        engine.dispose()
        logger.info(f"Shutting down {settings.PROJECT_NAME}")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Developer profiles: registration, token authentication and profile management",
        version=settings.VERSION,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.token_service = TokenService(settings)
    app.state.password_hasher = PasswordHasher(settings)

    # CORS middleware configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(log_requests)

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Prometheus monitoring
    app.mount("/metrics", make_asgi_app())

    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/health", tags=["health"])
    async def health_check():
        return {"status": "healthy", "version": settings.VERSION}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("devconnector.main:app", host="0.0.0.0", port=5000, reload=True)
