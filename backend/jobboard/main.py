import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from jobboard.core.config import require_jwt_secret, settings
from jobboard.core.errors import AppError
from jobboard.core.rate_limit import limiter
from jobboard.routes.applications import router as applications_router
from jobboard.routes.auth import router as auth_router
from jobboard.routes.jobs import router as jobs_router
from jobboard.routes.users import router as users_router

# Register every mapped class before the first query configures relationships.
import jobboard.models.application  # noqa: F401
import jobboard.models.job  # noqa: F401
import jobboard.models.user  # noqa: F401

logger = logging.getLogger(__name__)

require_jwt_secret()

app = FastAPI(title="Job Board API")
logger.info(
    "Startup config: ENV=%s EMAIL_PROVIDER=%s ENABLE_RATE_LIMITING=%s",
    settings.ENV,
    (settings.EMAIL_PROVIDER or "resend"),
    settings.ENABLE_RATE_LIMITING,
)

GENERIC_ERROR_MESSAGE = "Something went very wrong!"


def _error_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    # 4xx -> "fail", 5xx -> "error"
    status_label = "fail" if 400 <= int(status_code) < 500 else "error"
    return JSONResponse(
        status_code=status_code,
        content={"status": status_label, "message": message},
        headers=headers,
    )


def _auth_headers(status_code: int) -> dict | None:
    return {"WWW-Authenticate": "Bearer"} if status_code == 401 else None


@app.exception_handler(AppError)
def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return _error_response(exc.status_code, exc.message, _auth_headers(exc.status_code))


@app.exception_handler(StarletteHTTPException)
def http_exception_handler(request: Request, exc: StarletteHTTPException):  # noqa: ARG001
    detail = exc.detail
    message = detail if isinstance(detail, str) and detail else "Request failed"
    return _error_response(exc.status_code, message, getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
def validation_exception_handler(request: Request, exc: RequestValidationError):  # noqa: ARG001
    parts: list[str] = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        field = ".".join(loc)
        msg = str(err.get("msg") or "invalid value")
        parts.append(f"{field}: {msg}" if field else msg)
    message = "Invalid input data. " + "; ".join(parts) if parts else "Invalid input data."
    return _error_response(400, message)


@app.exception_handler(RateLimitExceeded)
def rate_limit_handler(request: Request, exc: RateLimitExceeded):  # noqa: ARG001
    return _error_response(429, "Too many requests. Please try again later!")


@app.exception_handler(Exception)
def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s %s", request.method, request.url.path, exc_info=exc)
    return _error_response(500, GENERIC_ERROR_MESSAGE)


app.state.limiter = limiter

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(users_router)
app.include_router(jobs_router)
app.include_router(applications_router)


@app.get("/health")
def health_check():
    return {"status": "ok"}
