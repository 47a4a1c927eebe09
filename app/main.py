from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.routes import health, reviews
from app.core.config import settings
from app.core.logging import get_logger

log = get_logger("app")

CORS_METHODS = ["GET", "POST", "DELETE", "OPTIONS"]
CORS_HEADERS = ["Content-Type"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    log.info(f"Starting application in {settings.ENV.upper()} mode")
    if settings.hostaway_configured:
        log.info("Hostaway credentials present: property reviews in live mode (fixture fallback)")
    else:
        log.info(f"Hostaway credentials missing: serving fixture {settings.HOSTAWAY_FIXTURE_PATH.name}")
    if not settings.GOOGLE_PLACES_API_KEY:
        log.warning("GOOGLE_PLACES_API_KEY missing: /api/reviews/google will answer NO_API_KEY")
    log.info(f"Approval store: {settings.APPROVAL_STORE}")

    yield

    log.info("Application shutdown complete")


app = FastAPI(
    title="Property Reviews API",
    description="Normalized property reviews, live place reviews and review approvals",
    version="1.0.0",
    lifespan=lifespan,
    # Disable docs in production
    docs_url="/docs" if settings.docs_enabled else None,
    redoc_url="/redoc" if settings.docs_enabled else None,
    openapi_url="/openapi.json" if settings.docs_enabled else None,
    debug=settings.debug_enabled,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=CORS_METHODS,
    allow_headers=CORS_HEADERS,
)


@app.middleware("http")
async def answer_options(request: Request, call_next):
    """Every OPTIONS request is answered here: 204, no body, CORS headers."""
    if request.method != "OPTIONS":
        return await call_next(request)

    headers = {
        "Access-Control-Allow-Methods": ",".join(CORS_METHODS),
        "Access-Control-Allow-Headers": ",".join(CORS_HEADERS),
    }
    origin = request.headers.get("origin")
    if "*" in settings.CORS_ORIGINS:
        headers["Access-Control-Allow-Origin"] = "*"
    elif origin in settings.CORS_ORIGINS:
        # A single origin per response; echo the caller when it is allowed
        headers["Access-Control-Allow-Origin"] = origin
        headers["Vary"] = "Origin"
    return Response(status_code=204, headers=headers)


@app.exception_handler(StarletteHTTPException)
async def http_error_envelope(request: Request, exc: StarletteHTTPException):
    message = "Method not allowed" if exc.status_code == 405 else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"status": "error", "message": message},
        headers=getattr(exc, "headers", None),
    )


app.include_router(health.router)
app.include_router(reviews.router)
