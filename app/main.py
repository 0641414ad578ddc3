import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
from starlette.requests import Request

from app.api.v1 import jwks
from app.api.v1.router import api_router
from app.core.config import settings
from app.core.errors import (
    AuthError,
    InvalidCredentialsError,
    SessionRevokedError,
    TenantNotFoundError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from app.core.logging import setup_logging
from app.db.bootstrap import run_migrations_and_seed

setup_logging()
logger = logging.getLogger("app")

api = FastAPI(
    title="Auth Service",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    swagger_ui_parameters={"displayRequestDuration": True, "persistAuthorization": True},
)

api.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # restrict to known frontends in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Prometheus metrics at /metrics
Instrumentator().instrument(api).expose(api, include_in_schema=False, should_gzip=True)

api.include_router(api_router, prefix="/api/v1")
api.include_router(jwks.router, prefix="/.well-known", tags=["jwks"])

@api.get("/healthz", tags=["health"])
def healthz():
    return {"status": "ok"}

@api.on_event("startup")
def startup():
    # refuse to serve without signing material
    settings.validate_signing_material()
    run_migrations_and_seed()

# ---------- error envelope ----------
_CLIENT_ERRORS = {
    UserAlreadyExistsError: 400,
    InvalidCredentialsError: 401,
    UserNotFoundError: 401,
    SessionRevokedError: 401,
    TenantNotFoundError: 400,
}

def _envelope(status_code: int, code: str, message: str, details=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"code": code, "message": message, "details": details})

@api.exception_handler(AuthError)
def handle_auth_error(request: Request, exc: AuthError):
    for cls, status_code in _CLIENT_ERRORS.items():
        if isinstance(exc, cls):
            return _envelope(status_code, exc.code, exc.message)
    # SecretNotFoundError, AdminCredentialsNotFound: deployment faults
    logger.error("Server configuration error on %s %s: %s", request.method, request.url.path, exc.message)
    return _envelope(500, "INTERNAL_ERROR", "Internal server error.")

@api.exception_handler(RequestValidationError)
def handle_validation_error(request: Request, exc: RequestValidationError):
    details = [{"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")} for e in exc.errors()]
    return _envelope(400, "VALIDATION_ERROR", "Invalid request.", details)

@api.exception_handler(Exception)
def handle_unexpected(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _envelope(500, "INTERNAL_ERROR", "Internal server error.")
