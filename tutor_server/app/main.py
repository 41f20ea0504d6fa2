# app/main.py
# -*- coding: utf-8 -*-
"""
Conversation Tutor Relay — FastAPI application entrypoint
---------------------------------------------------------
This file wires everything together:

- Sets up central logging.
- Refuses to start without a provider API key.
- Creates the FastAPI app with CORS and the JSON error handlers.
- Mounts routers:
    * /ask   (POST) → text chat with the tutor (per-session history)
    * /stt   (POST) → speech-to-text for microphone recordings
    * /tts   (GET)  → text-to-speech (audio/mpeg)
    * /health (GET) → liveness probe
- Serves the browser front-end from app/public at /.

Typical run command (dev):

    uvicorn app.main:app --host 0.0.0.0 --port 3000 --reload

"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.core.config import settings
from app.core.errors import RelayError
from app.models.responses import HealthResponse
from app.routers.ask import router as ask_router
from app.routers.stt import router as stt_router
from app.routers.tts import router as tts_router
from app.utils import setup_logging, get_logger


setup_logging(debug=settings.debug)
logger = get_logger(__name__)


def _register_error_handlers(app: FastAPI) -> None:
    """Every error leaves the server as {"error": "<message>"}."""

    @app.exception_handler(RelayError)
    async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        in_body = any((err.get("loc") or ("",))[0] == "body" for err in errors)
        message = "Invalid request body" if in_body else "Invalid request"
        logger.info("%s %s rejected: %d validation error(s)", request.method, request.url.path, len(errors))
        return JSONResponse(status_code=400, content={"error": message})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception in %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Server error"})


def create_app() -> FastAPI:
    """
    Application factory.

    Exits the process when OPENAI_API_KEY is not configured.
    """
    if not settings.openai_api_key:
        logger.error("Missing OPENAI_API_KEY (environment or .env); refusing to start.")
        raise SystemExit(1)

    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_error_handlers(app)

    app.include_router(ask_router)
    app.include_router(stt_router)
    app.include_router(tts_router)

    @app.get("/health", tags=["meta"], response_model=HealthResponse)
    async def health_check():
        return HealthResponse(ok=True)

    # Front-end last, so API routes win over static paths.
    if settings.public_dir.is_dir():
        app.mount("/", StaticFiles(directory=settings.public_dir, html=True), name="public")
    else:
        logger.warning("Front-end directory %s not found; serving API only.", settings.public_dir)

    logger.info(
        "FastAPI app created (env=%s, model=%s, max_history_turns=%d)",
        settings.environment,
        settings.openai_model,
        settings.max_history_turns,
    )
    return app


# ASGI app for uvicorn
app = create_app()


if __name__ == "__main__":
    import uvicorn

    logger.info("Conversation bot running on http://localhost:%d", settings.port)
    uvicorn.run(
        "app.main:app",
        host=settings.api_host,
        port=settings.port,
        reload=(settings.environment == "development"),
    )
