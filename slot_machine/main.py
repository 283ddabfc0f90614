"""
Slot Machine HTTP entry point.
FastAPI app exposing the paytable and in-memory game sessions.
"""

import sys
from pathlib import Path

# Add parent directory to path so imports work when running directly
if __name__ == "__main__":
    sys.path.insert(0, str(Path(__file__).parent.parent))

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import uvicorn

from slot_machine.core.logger import init_logging, get_logger
from slot_machine.config import settings
from slot_machine.core.exceptions import SlotMachineError
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slot_machine.routers import api

# Initialize logging first
init_logging(
    level=settings.logging.level,
    log_to_file=settings.logging.log_to_file,
    formatter=settings.logging.formatter,
    log_file_path=settings.paths.get_log_path(),
)
logger = get_logger("main")


# ==================== Application Setup ====================


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.server.name,
        docs_url="/docs" if settings.server.debug else None,
        redoc_url=None,
    )

    app.state.limiter = api.limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(SlotMachineError, slot_machine_error_handler)

    app.include_router(api.router, prefix="/api")

    @app.get("/health")
    async def health():
        return {"status": "ok", "sessions": len(api.sessions)}

    return app


async def slot_machine_error_handler(request: Request, exc: SlotMachineError):
    """Game errors that escaped a route become a 400 instead of a 500."""
    logger.error(f"Unhandled game error on {request.url.path}: {exc}")
    return JSONResponse(status_code=400, content={"detail": str(exc)})


app = create_app()

logger.info(f"Application '{settings.server.name}' initialized")


# ==================== Main Entry Point ====================

def run():
    logger.info(f"Starting server on {settings.server.host}:{settings.server.port}")
    uvicorn.run(
        "slot_machine.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.server.debug,
    )


if __name__ == "__main__":
    run()
