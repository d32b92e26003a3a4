"""FastAPI application entry point for the CVInsight resume builder API."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cvinsight.api.routes import builder, health, profile, render, templates
from cvinsight.api.sessions import SessionRegistry
from cvinsight.config import get_settings

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the session registry on startup and drop all sessions on shutdown."""
    settings = get_settings()
    app.state.sessions = SessionRegistry(ttl=settings.session_ttl, max_sessions=settings.max_sessions)
    yield
    logger.debug("Discarding %d builder sessions", len(app.state.sessions))
    app.state.sessions.clear()


app = FastAPI(
    title="CVInsight API",
    description="Build resumes from structured content and render them to PDF",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(templates.router, prefix="/api")
app.include_router(render.router, prefix="/api")
app.include_router(profile.router, prefix="/api")
app.include_router(builder.router, prefix="/api")


def main() -> None:
    """Start the development server."""
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(
        "cvinsight.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
