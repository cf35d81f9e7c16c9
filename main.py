import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError

from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette import status as starlette_status

from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from config import settings
from routers import daily_challenge, health
from db import database, models  # noqa: F401  (registers the tables)
from utils.errors import DailyChallengeError
from utils.limiter import limiter

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

database.Base.metadata.create_all(bind=database.engine)

app = FastAPI(title="Daily Word Challenge")

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# === Strict CORS per environment ===
# Common local origins are added outside production
_local_dev = [
    "http://127.0.0.1:5500", "http://localhost:5500",
    "http://localhost:5173", "http://localhost:3000"
]
allow_origins = (
    settings.ALLOWED_ORIGINS
    if settings.ENV == "production"
    else list({*settings.ALLOWED_ORIGINS, *_local_dev})
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["Content-Length", "Content-Type"],
    max_age=600,
)

app.include_router(daily_challenge.router)
app.include_router(health.router)

# === Consistent error envelope ===
@app.exception_handler(DailyChallengeError)
async def domain_exc_handler(request: Request, exc: DailyChallengeError):
    content = {
        "error": exc.status_code,
        "kind": exc.error_kind,
        "message": exc.message,
        "path": str(request.url.path),
    }
    if exc.retryable:
        content["retryable"] = True
    return JSONResponse(status_code=exc.status_code, content=content)

@app.exception_handler(StarletteHTTPException)
async def http_exc_handler(request: Request, exc: StarletteHTTPException):
    kind = {401: "unauthorized", 404: "not_found"}.get(exc.status_code, "http")
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.status_code,
            "kind": kind,
            "message": exc.detail or "HTTP error",
            "path": str(request.url.path),
        },
        headers=getattr(exc, "headers", None),
    )

@app.exception_handler(RequestValidationError)
async def validation_exc_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=starlette_status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": 422,
            "kind": "validation",
            "message": "Invalid parameters",
            "details": jsonable_errors(exc),
            "path": str(request.url.path),
        },
    )

@app.exception_handler(Exception)
async def unhandled_exc_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s", request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=starlette_status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": 500,
            "kind": "internal",
            "message": "An unexpected error occurred",
            "path": str(request.url.path),
        },
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    # ctx may hold exception instances that JSONResponse cannot encode
    return [{k: v for k, v in err.items() if k != "ctx"} for err in exc.errors()]
