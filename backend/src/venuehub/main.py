from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from venuehub.db.session import shutdown
from venuehub.dependencies import DB
from venuehub.exceptions import DomainError, GeolocationError, NotFoundError
from venuehub.logging import get_logger
from venuehub.middleware import RequestIDMiddleware
from venuehub.routers import reservation, venue
from venuehub.schemas.error import ErrorDetail, ErrorResponse

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup runs before the yield; on shutdown the connection pool is closed."""
    yield
    await shutdown()


app = FastAPI(title="VenueHub", lifespan=lifespan)
app.add_middleware(RequestIDMiddleware)
app.include_router(venue.router)
app.include_router(reservation.router)


def _error_json(code: str, message: str) -> dict[str, object]:
    return ErrorResponse(error=ErrorDetail(code=code, message=message)).model_dump()


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.info("entity_not_found", entity=exc.entity, identifier=exc.identifier)
    return JSONResponse(status_code=404, content=_error_json("not_found", exc.message))


@app.exception_handler(GeolocationError)
async def geolocation_error_handler(request: Request, exc: GeolocationError) -> JSONResponse:
    """The upstream geolocation provider failed; report it as a bad gateway."""
    logger.warning("geolocation_error", error=exc.message, path=request.url.path)
    return JSONResponse(status_code=502, content=_error_json("geolocation_error", exc.message))


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    logger.warning("domain_error", error=exc.message, path=request.url.path)
    return JSONResponse(status_code=400, content=_error_json("domain_error", exc.message))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log with traceback, answer with a generic message (no internals leaked)."""
    logger.exception("unhandled_exception", path=request.url.path, method=request.method)
    return JSONResponse(
        status_code=500,
        content=_error_json("internal_error", "Internal server error"),
    )


@app.get("/health")
async def health(db: DB) -> dict[str, str]:
    """Returns 200 only if the database answers a ping query."""
    await db.execute(text("SELECT 1"))
    return {"status": "ok"}
