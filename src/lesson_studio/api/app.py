"""FastAPI application with lifespan management."""

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from lesson_studio.api.middleware import RequestLoggingMiddleware
from lesson_studio.api.routes.lessons import router as lessons_router
from lesson_studio.api.routes.narration import router as narration_router
from lesson_studio.config import settings
from lesson_studio.errors import SpeechNotConfiguredError, SpeechSynthesisError
from lesson_studio.lessons import LessonRepository
from lesson_studio.logging_config import configure_logging
from lesson_studio.media.speech import create_speech_synthesizer

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown.

    Startup:
        - Build the lesson repository and scan the course tree.
        - Create the speech synthesizer (skipped without an API key).
    Shutdown:
        - Close the speech client's connection pool.
    """
    configure_logging(
        environment=str(settings.environment),
        log_level=settings.log_level,
    )
    app.state.settings = settings

    repository = LessonRepository(settings.courses_root)
    await asyncio.to_thread(repository.initialize)
    app.state.lesson_repository = repository

    synthesizer = create_speech_synthesizer(settings)
    app.state.speech_synthesizer = synthesizer

    logger.info(
        "app_started",
        environment=str(settings.environment),
        lesson_count=repository.count(),
        speech_enabled=synthesizer is not None,
    )
    yield

    if synthesizer is not None:
        await synthesizer.aclose()
    logger.info("app_stopped")


app = FastAPI(
    title="Lesson Studio",
    description="Lesson catalog and narration timeline service",
    version="0.1.0",
    lifespan=lifespan,
    debug=settings.is_dev,
)

app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allowed_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allowed_methods,
    allow_headers=settings.cors_allowed_headers,
)


@app.get("/health")
async def health() -> JSONResponse:
    """Catalog size and narration availability."""
    repository: LessonRepository | None = getattr(
        app.state, "lesson_repository", None
    )
    lesson_count = repository.count() if repository is not None else 0
    speech_enabled = getattr(app.state, "speech_synthesizer", None) is not None

    overall = "ok" if lesson_count > 0 else "degraded"
    return JSONResponse(
        status_code=200 if overall == "ok" else 503,
        content={
            "status": overall,
            "checks": {
                "catalog": f"{lesson_count} lessons",
                "speech": "enabled" if speech_enabled else "disabled",
            },
            "timestamp": datetime.now(UTC).isoformat(timespec="seconds"),
        },
    )


@app.exception_handler(SpeechSynthesisError)
async def speech_synthesis_error_handler(
    request: Request,
    exc: SpeechSynthesisError,
) -> JSONResponse:
    """Upstream TTS rejection is reported as a bad gateway."""
    logger.warning(
        "speech_synthesis_failed",
        path=request.url.path,
        status_code=exc.status_code,
        voice=exc.voice,
    )
    return JSONResponse(
        status_code=502,
        content={
            "detail": "Speech synthesis failed",
            "upstream_status": exc.status_code,
        },
    )


@app.exception_handler(SpeechNotConfiguredError)
async def speech_not_configured_handler(
    request: Request,
    exc: SpeechNotConfiguredError,
) -> JSONResponse:
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Catch-all handler for unhandled exceptions."""
    logger.error("unhandled_exception", exc_info=exc, path=request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


app.include_router(lessons_router, prefix="/api/v1")
app.include_router(narration_router, prefix="/api/v1")
