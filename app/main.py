"""FastAPI application entry point."""
import logging
import time
import uuid

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import settings
from app.core.errors import CRMError, Internal
from app.core.structured_logging import build_log_context
from app.db.session import engine

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# ============================================================================
# Sentry Integration (optional, for production error tracking)
# ============================================================================

if settings.SENTRY_DSN and settings.ENV != "dev":
    import sentry_sdk
    from sentry_sdk.integrations.fastapi import FastApiIntegration
    from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENV,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            SqlalchemyIntegration(),
        ],
        traces_sample_rate=0.1,  # 10% of requests for performance monitoring
        send_default_pii=False,  # Don't send PII to Sentry
    )
    logger.info("Sentry initialized for error tracking")

# ============================================================================
# Rate Limiting
# ============================================================================

from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from app.core.rate_limit import limiter


# ============================================================================
# FastAPI App
# ============================================================================

app = FastAPI(
    title="CRM API",
    description="Contacts, organizations, deals and tasks for sales and support teams",
    version=settings.VERSION,
    docs_url="/docs" if settings.ENV == "dev" else None,
    redoc_url="/redoc" if settings.ENV == "dev" else None,
)

# Add rate limiter
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
# Applies RATE_LIMIT_API to every route without its own limit
app.add_middleware(SlowAPIMiddleware)

# CORS middleware - must be added before routers
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
    expose_headers=["X-Request-ID"],
)


@app.middleware("http")
async def request_logging(request: Request, call_next):
    """Tag each request with an X-Request-ID and log its outcome."""
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    request.state.request_id = request_id
    started = time.perf_counter()

    response = await call_next(request)

    response.headers["X-Request-ID"] = request_id
    logger.info(
        "request completed",
        extra=build_log_context(
            request_id=request_id,
            route=request.url.path,
            method=request.method,
            status_code=response.status_code,
            duration_ms=(time.perf_counter() - started) * 1000,
        ),
    )
    return response


# ============================================================================
# Error Handlers
# ============================================================================

@app.exception_handler(CRMError)
async def crm_error_handler(request: Request, exc: CRMError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Every field error, as {"msg", "param"} pairs."""
    errors = []
    for err in exc.errors():
        loc = err.get("loc") or ()
        errors.append({"msg": err.get("msg", "Invalid value"), "param": str(loc[-1]) if loc else ""})
    return JSONResponse(status_code=400, content={"errors": errors})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled error",
        extra=build_log_context(
            request_id=getattr(request.state, "request_id", None),
            route=request.url.path,
            method=request.method,
        ),
    )
    return JSONResponse(status_code=500, content={"error": Internal.default_message})


# ============================================================================
# Routers
# ============================================================================

from app.routers import auth, contacts, deals, organizations, tasks

app.include_router(auth.router, prefix="/auth", tags=["auth"])
app.include_router(contacts.router, prefix="/contacts", tags=["contacts"])
app.include_router(organizations.router, prefix="/organizations", tags=["organizations"])
app.include_router(deals.router, prefix="/deals", tags=["deals"])
app.include_router(tasks.router, prefix="/tasks", tags=["tasks"])


# ============================================================================
# Health Check
# ============================================================================

def _database_ok() -> bool:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        logger.exception("Database health check failed")
        return False


@app.get("/health")
def health():
    """
    Health check endpoint.

    Verifies database connectivity and returns environment info.
    """
    if not _database_ok():
        return JSONResponse(
            status_code=503,
            content={"status": "error", "database": "unreachable"},
        )
    return {"status": "ok", "env": settings.ENV, "version": settings.VERSION}


@app.get("/ready")
def ready():
    """Readiness: the database answers queries."""
    if not _database_ok():
        return JSONResponse(status_code=503, content={"status": "not_ready"})
    return {"status": "ok"}


@app.get("/live")
def live():
    """Liveness: the process is up; no dependencies are touched."""
    return {"status": "ok"}
