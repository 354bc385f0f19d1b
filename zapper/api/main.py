"""FastAPI application for zap previews.

Serves sizing and quote endpoints only; it never moves funds.
"""

import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from zapper import __version__
from zapper.api.endpoints import router
from zapper.api.schemas import ErrorResponse
from zapper.errors import ZapError
from zapper.log_config import configure_logging

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("ZAPPER_HOST", "0.0.0.0")
PORT = int(os.environ.get("ZAPPER_PORT", "8000"))
DEBUG = os.environ.get("ZAPPER_DEBUG", "false").lower() in ("true", "1", "yes")

logger = structlog.get_logger()

app = FastAPI(
    title="Single-token zapper",
    description="Optimal-swap sizing and zap previews for constant-product pools",
    version=__version__,
)


@app.exception_handler(ZapError)
async def zap_error_handler(_request: Request, exc: ZapError) -> JSONResponse:
    """Map zap errors to 400 with the error class name."""
    logger.info("zap_request_rejected", error=type(exc).__name__, message=str(exc))
    body = ErrorResponse(error=type(exc).__name__, message=str(exc))
    return JSONResponse(status_code=400, content=body.model_dump())


@app.exception_handler(ValueError)
async def value_error_handler(_request: Request, exc: ValueError) -> JSONResponse:
    """Invalid inputs that reach the math (identical tokens, zero reserves)."""
    body = ErrorResponse(error="InvalidInput", message=str(exc))
    return JSONResponse(status_code=400, content=body.model_dump())


app.include_router(router, responses={400: {"model": ErrorResponse}})


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the preview API server.

    Configuration via environment variables:
    - ZAPPER_HOST: Host to bind to (default: 0.0.0.0)
    - ZAPPER_PORT: Port to bind to (default: 8000)
    - ZAPPER_DEBUG: Enable debug logging and reload mode (default: false)
    """
    configure_logging(verbose=DEBUG)
    uvicorn.run(
        "zapper.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
