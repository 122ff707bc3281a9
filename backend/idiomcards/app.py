"""
Smart Idiom Cards - FastAPI Application

Turns study notes into flashcards and schedules their review.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root (parent of backend/)
# Must happen before importing modules that use environment variables
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(env_path)

from fastapi import FastAPI  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402

from idiomcards import __version__  # noqa: E402
from idiomcards.api.dependencies import cleanup_dependencies, init_dependencies  # noqa: E402
from idiomcards.api.routes import (  # noqa: E402
    assistant_router,
    decks_router,
    notes_router,
    review_router,
)
from idiomcards.config import (  # noqa: E402
    CORS_ALLOWED_METHODS,
    get_cors_origins,
    get_log_level,
)

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Configure root logging from LOG_LEVEL."""
    logging.basicConfig(
        level=get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan manager for startup/shutdown events.

    Startup:
    - Initialize singleton dependencies

    Shutdown:
    - Abort the running review session
    """
    logger.info("Starting Smart Idiom Cards backend...")
    await init_dependencies()
    logger.info("Dependencies initialized")

    yield

    logger.info("Shutting down Smart Idiom Cards backend...")
    await cleanup_dependencies()
    logger.info("Shutdown complete")


def create_app() -> FastAPI:
    """Build the FastAPI application with routers and CORS."""
    configure_logging()

    application = FastAPI(
        title="Smart Idiom Cards API",
        description="Study notes to flashcards with spaced-repetition review",
        version=__version__,
        lifespan=lifespan,
    )

    # CORS configuration - loaded from environment with restrictive defaults
    application.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(),
        allow_methods=CORS_ALLOWED_METHODS,
        allow_headers=["Content-Type"],
    )

    # Register API routers
    application.include_router(notes_router)
    application.include_router(decks_router)
    application.include_router(review_router)
    application.include_router(assistant_router)

    @application.get("/health")
    async def health() -> dict[str, str]:
        """Health check endpoint."""
        return {
            "status": "healthy",
            "service": "idiomcards-backend",
            "version": __version__,
        }

    return application


app = create_app()
