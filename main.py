"""
FastAPI Application Entry Point

Integrates:
  - Discord interactions webhook
  - Debug report
  - Middleware for logging & error handling
  - Plain OK for any non-POST request

Run: uvicorn main:app --reload --host 0.0.0.0 --port 8000
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from config import BotConfig
from inference import CompletionBackend, create_completion_backend
from transport.discord import router as discord_router

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_app(
    config: Optional[BotConfig] = None,
    completion_backend: Optional[CompletionBackend] = None,
) -> FastAPI:
    """
    Build the application with an explicit configuration.

    Args:
        config: Bot configuration (loaded from environment if omitted)
        completion_backend: Override for the completion backend (tests, local runs)
    """
    config = config or BotConfig.from_env()
    backend = completion_backend or create_completion_backend(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan: startup and shutdown handlers.
        """
        # Startup
        logger.info("=" * 60)
        logger.info("Truth Bot starting up...")
        logger.info(f"LLM Backend: {config.llm_backend}")
        logger.info(f"Model: {config.openai_model}")
        missing = config.validate()
        if missing:
            logger.warning(f"Missing configuration: {', '.join(missing)}")
        logger.info("=" * 60)

        yield

        # Shutdown
        logger.info("Truth Bot shutting down...")

    app = FastAPI(
        title="Truth Bot",
        description="Discord interactions endpoint for the /truth command",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.completion_backend = backend

    # Middleware for logging
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all requests."""
        logger.debug(f"{request.method} {request.url.path}")
        try:
            response = await call_next(request)
            return response
        except Exception as e:
            logger.error(f"Request error: {str(e)}", exc_info=True)
            return JSONResponse(
                status_code=500,
                content={"detail": "Internal server error"},
            )

    # Non-POST methods outside the explicit fallback list (PROPFIND, custom verbs)
    @app.exception_handler(405)
    async def method_not_allowed(request: Request, exc: Exception) -> PlainTextResponse:
        logger.debug(f"Fallback OK for {request.method} {request.url.path}")
        return PlainTextResponse("OK")

    app.include_router(discord_router)
    return app


_config = BotConfig.from_env()
setup_logging(_config.log_level)
app = create_app(_config)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=_config.port,
    )
