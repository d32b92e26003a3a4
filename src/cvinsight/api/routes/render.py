"""Stateless render routes for the API."""

from __future__ import annotations

from typing import Annotated, Literal

from fastapi import APIRouter, BackgroundTasks, Depends, Query
from fastapi.responses import PlainTextResponse, Response

from cvinsight.api.dependencies import get_materializer
from cvinsight.api.responses import pdf_response
from cvinsight.api.schemas.resume import ResumeDocument
from cvinsight.builder.artifacts import Materializer, download_filename
from cvinsight.templates import render

router = APIRouter(tags=["render"])


@router.post(
    "/render",
    responses={200: {"content": {"application/pdf": {}, "text/plain": {}}}},
)
def render_resume(
    resume: ResumeDocument,
    background_tasks: BackgroundTasks,
    materializer: Annotated[Materializer, Depends(get_materializer)],
    output_format: Annotated[Literal["pdf", "tex"], Query(alias="format")] = "pdf",
) -> Response:
    """Render posted resume content with its selected template.

    ``format=tex`` returns the LaTeX source instead of compiling it.
    """
    snapshot = resume.to_snapshot()
    doc = render(snapshot)
    if output_format == "tex":
        return PlainTextResponse(doc.dumps())

    return pdf_response(
        doc,
        materializer,
        background_tasks,
        filename=download_filename(snapshot.about.name),
    )
