from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
import contextlib

from commentcard.config import settings
from commentcard.core.errors import CardServiceError
from commentcard.api.v1 import card, comment, generate

@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    # === Service Registration ===
    from commentcard.core.container import container, Services
    from commentcard.core.service_registry import register_all_services
    register_all_services()

    # === Startup Logic ===
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    settings.init_dirs()

    # Configure File Logging
    log_file = settings.LOG_DIR / "commentcard.log"
    sink_id = logger.add(
        log_file,
        rotation="10 MB",
        retention="7 days",
        level="DEBUG" if settings.DEBUG else "INFO",
        encoding="utf-8",
        enqueue=True,
        backtrace=True,
        diagnose=settings.DEBUG,
    )
    logger.info(f"Log file configured at {log_file}")
    logger.info(f"Registered {len(container._factories)} services, default renderer: {settings.DEFAULT_RENDERER}")

    yield

    # === Shutdown Logic ===
    logger.info("Shutting down...")
    for name in (Services.QUOTA, Services.PILLOW_RENDERER, Services.BROWSER_RENDERER):
        if container.is_instantiated(name):
            await container.get(name).close()
    container.reset()
    logger.remove(sink_id)


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


app.include_router(comment.router, prefix="/api/v1")
app.include_router(card.router, prefix="/api/v1")
app.include_router(generate.router, prefix="/api/v1")

# Cards are embedded and downloaded from the web front end
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

# ─── Global Error Handlers ────────────────────────────────────────
@app.exception_handler(CardServiceError)
async def card_service_error_handler(request: Request, exc: CardServiceError):
    """Known failure: short message + mapped status code."""
    logger.warning(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    """Return 400 for input validation errors."""
    logger.warning(f"ValueError on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=400, content={"error": "Bad request"})

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch-all: log the traceback, return a generic 500."""
    logger.opt(exception=exc).error(f"Unhandled exception on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})

@app.get("/health")
async def health_check():
    """Heartbeat endpoint to check if the service is running."""
    return {
        "status": "online",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "commentcard.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG
    )
