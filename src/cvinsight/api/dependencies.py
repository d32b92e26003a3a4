"""Shared dependencies for API routes."""

from __future__ import annotations

from functools import partial
from typing import Annotated

from fastapi import Depends, HTTPException, Path, Request, status

from cvinsight.api.sessions import BuilderSession, SessionRegistry, UnknownSessionError
from cvinsight.builder.artifacts import Materializer, materialize_pdf
from cvinsight.config import get_settings


def get_registry(request: Request) -> SessionRegistry:
    """Return the session registry created by the application lifespan."""
    return request.app.state.sessions


def get_builder_session(
    session_id: Annotated[str, Path(description="Builder session ID")],
    registry: Annotated[SessionRegistry, Depends(get_registry)],
) -> BuilderSession:
    """Resolve the builder session named in the path.

    Raises:
        HTTPException: 404 if the session does not exist.
    """
    try:
        return registry.get(session_id)
    except UnknownSessionError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Builder session '{session_id}' not found",
        ) from None


def get_materializer() -> Materializer:
    """Return the function that compiles a document to a PDF artifact.

    Tests override this dependency so no LaTeX installation is needed.
    """
    return partial(materialize_pdf, compiler=get_settings().latex_compiler)
