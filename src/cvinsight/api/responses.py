"""Helpers that turn rendered documents into HTTP responses."""

from __future__ import annotations

import logging

from fastapi import BackgroundTasks, HTTPException, status
from fastapi.responses import FileResponse
from pylatex import Document

from cvinsight.builder.artifacts import Materializer, RenderError

logger = logging.getLogger(__name__)


def pdf_response(
    doc: Document,
    materializer: Materializer,
    background_tasks: BackgroundTasks,
    *,
    filename: str,
    inline: bool = False,
) -> FileResponse:
    """Compile *doc* and stream the PDF, removing it once sent.

    Raises:
        HTTPException: 502 if the document cannot be compiled.
    """
    try:
        artifact = materializer(doc, "resume")
    except RenderError as exc:
        logger.warning("PDF rendering failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(exc),
        ) from None

    background_tasks.add_task(artifact.release)
    return FileResponse(
        path=str(artifact.path),
        media_type="application/pdf",
        filename=filename,
        content_disposition_type="inline" if inline else "attachment",
    )
