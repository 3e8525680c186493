from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException
from . import __version__
from .config import tally
from .core.events import startup_event, shutdown_event
from .core.exceptions import TallyError
from .routes import health, increment, leaderboard, stats
from .logger import get_logger

logger = get_logger()

@asynccontextmanager
async def lifespan(app: FastAPI):
    await startup_event()
    try:
        yield
    finally:
        await shutdown_event()


async def tally_error_handler(request: Request, exc: TallyError):
    return ORJSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def http_error_handler(request: Request, exc: HTTPException):
    return ORJSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
    return ORJSONResponse(status_code=400, content={"error": "invalid request"})


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return ORJSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(use_lifespan: bool = True) -> FastAPI:
    app = FastAPI(
        default_response_class=ORJSONResponse,
        title="Tally Service",
        description="Event counters and a live leaderboard backed by Redis",
        version=__version__,
        lifespan=lifespan if use_lifespan else None
    )

    app.add_exception_handler(TallyError, tally_error_handler)
    app.add_exception_handler(HTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(increment.router)
    app.include_router(stats.router)
    app.include_router(leaderboard.router)
    app.include_router(health.router)
    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "tally.main:app",
        host=tally.host,
        port=tally.port,
        workers=tally.workers,
        log_level=tally.log_level.lower()
    )
