"""
FastAPI application entry point.
API key middleware, request timing, domain error mapping and all routers.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from zoo.routers import gate, health, spaces, staff, tickets
from zoo.cache import close_redis
from zoo.database import create_tables
from zoo.config import settings
from zoo.errors import ZooError
from zoo.utils.logger import get_logger
import time

logger = get_logger(__name__)

app = FastAPI(
    title="Zoo Admission API",
    description="Spaces, staff, tickets and the zoo gate.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── API Key Middleware ───────────────────────────────────────────────────────
class APIKeyMiddleware(BaseHTTPMiddleware):
    """
    Lightweight API key auth. Set API_KEY in .env; leave empty to disable.
    Health check and docs stay open.
    """
    open_paths = {"/api/v1/health", "/docs", "/redoc", "/openapi.json"}

    async def dispatch(self, request: Request, call_next):
        if request.url.path in self.open_paths or not settings.API_KEY:
            return await call_next(request)

        api_key = request.headers.get("X-API-Key") or request.query_params.get("api_key")
        if api_key != settings.API_KEY:
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"detail": "Invalid or missing API key"},
            )
        return await call_next(request)


if settings.API_KEY:
    app.add_middleware(APIKeyMiddleware)


# ── Request Timing Middleware ────────────────────────────────────────────────
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration = round((time.time() - start) * 1000, 2)
    logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
    return response


# ── Exception Handlers ───────────────────────────────────────────────────────
@app.exception_handler(ZooError)
async def zoo_error_handler(request: Request, exc: ZooError):
    logger.info(f"Refused {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"code": exc.code.value, "detail": exc.message},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# ── Routers ──────────────────────────────────────────────────────────────────
app.include_router(spaces.router,  prefix="/api/v1", tags=["Spaces"])
app.include_router(staff.router,   prefix="/api/v1", tags=["Staff"])
app.include_router(tickets.router, prefix="/api/v1", tags=["Tickets"])
app.include_router(gate.router,    prefix="/api/v1", tags=["Zoo gate"])
app.include_router(health.router,  prefix="/api/v1", tags=["Health"])


# ── Startup ───────────────────────────────────────────────────────────────────
@app.on_event("startup")
async def startup():
    logger.info("Zoo backend starting up...")
    create_tables()
    logger.info("Document store tables ready")
    logger.info(f"State cache at {settings.REDIS_URL}")
    logger.info(f"Listening on http://{settings.BACKEND_IP}:{settings.BACKEND_PORT}")


@app.on_event("shutdown")
async def shutdown():
    logger.info("Zoo backend shutting down...")
    await close_redis()
