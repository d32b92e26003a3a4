"""Resume builder session routes for the API."""

from __future__ import annotations

import dataclasses
import logging
from typing import Annotated, Any

from fastapi import APIRouter, BackgroundTasks, Body, Depends, HTTPException, Path, Query, status
from fastapi.responses import FileResponse, PlainTextResponse, Response

from cvinsight.api.dependencies import get_builder_session, get_materializer, get_registry
from cvinsight.api.responses import pdf_response
from cvinsight.api.schemas.resume import (
    AboutSchema,
    AboutUpdateRequest,
    FieldChangeRequest,
    ImportResponse,
    ResumeDocument,
    SessionResponse,
    TagSchema,
    TagSubmitRequest,
    TemplateSelectRequest,
)
from cvinsight.api.sessions import BuilderSession, SessionRegistry
from cvinsight.builder.artifacts import Materializer, download_filename
from cvinsight.builder.panels import SectionFullError, SectionPanel, TagPanel
from cvinsight.builder.store import UnknownTemplateError
from cvinsight.services.extraction import apply_extraction
from cvinsight.templates import render

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/builder/sessions", tags=["builder"])

CurrentSession = Annotated[BuilderSession, Depends(get_builder_session)]


def _session_response(session: BuilderSession) -> SessionResponse:
    snapshot = session.store.snapshot()
    return SessionResponse(
        id=session.id,
        selected_template=snapshot.selected_template,
        template_theme=snapshot.template_theme,
        resume=ResumeDocument.from_snapshot(snapshot),
    )


def _section_panel(session: BuilderSession, section: str) -> SectionPanel:
    """Return the panel for *section*.

    Raises:
        HTTPException: 404 if there is no such section.
    """
    try:
        return session.sections[section]
    except KeyError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown section '{section}'",
        ) from None


def _tag_panel(session: BuilderSession, tag_list: str) -> TagPanel:
    try:
        return session.skills.tag_list(tag_list)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown tag list '{tag_list}'",
        ) from None


# ---------------------------------------------------------------------------
# sessions
# ---------------------------------------------------------------------------


@router.post("", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
def create_session(
    registry: Annotated[SessionRegistry, Depends(get_registry)],
    seeded: Annotated[bool, Query(description="Start with the default sample content")] = True,
) -> SessionResponse:
    """Open a new builder session."""
    return _session_response(registry.create(seeded=seeded))


@router.get("/{session_id}", response_model=SessionResponse)
def get_session(session: CurrentSession) -> SessionResponse:
    """Return the current content of a builder session."""
    with session.lock:
        return _session_response(session)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def close_session(
    session: CurrentSession,
    registry: Annotated[SessionRegistry, Depends(get_registry)],
) -> None:
    """Discard a builder session and everything entered in it."""
    registry.discard(session.id)


# ---------------------------------------------------------------------------
# template and about
# ---------------------------------------------------------------------------


@router.put("/{session_id}/template", response_model=SessionResponse)
def select_template(session: CurrentSession, data: TemplateSelectRequest) -> SessionResponse:
    """Switch the template; the theme follows the catalog entry."""
    with session.lock:
        try:
            session.store.selected_template = data.template_id
        except UnknownTemplateError as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=str(exc),
            ) from None
        return _session_response(session)


@router.patch("/{session_id}/about", response_model=AboutSchema)
def update_about(session: CurrentSession, data: AboutUpdateRequest) -> AboutSchema:
    """Merge the provided fields into the about record."""
    changes = data.model_dump(exclude_none=True)
    with session.lock:
        about = session.about.update(**changes) if changes else session.about.about
    return AboutSchema(**dataclasses.asdict(about))


# ---------------------------------------------------------------------------
# sections
# ---------------------------------------------------------------------------


@router.post("/{session_id}/sections/{section}", status_code=status.HTTP_201_CREATED)
def add_section_item(
    session: CurrentSession,
    section: Annotated[str, Path(description="Section name, e.g. work_list")],
) -> dict[str, Any]:
    """Append a blank entry to a section."""
    panel = _section_panel(session, section)
    try:
        with session.lock:
            entry = panel.add_item()
    except SectionFullError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from None
    return dataclasses.asdict(entry)


@router.patch("/{session_id}/sections/{section}/{item_id}")
def change_section_item(
    session: CurrentSession,
    section: Annotated[str, Path(description="Section name, e.g. work_list")],
    item_id: Annotated[str, Path(description="Entry ID")],
    data: FieldChangeRequest,
) -> dict[str, Any]:
    """Change one field of a section entry."""
    panel = _section_panel(session, section)
    try:
        with session.lock:
            entry = panel.change_field(item_id, data.field, data.value)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from None
    if entry is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Entry '{item_id}' not found in {section}",
        )
    return dataclasses.asdict(entry)


@router.delete("/{session_id}/sections/{section}/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_section_item(
    session: CurrentSession,
    section: Annotated[str, Path(description="Section name, e.g. work_list")],
    item_id: Annotated[str, Path(description="Entry ID")],
) -> None:
    """Remove an entry; the remaining entries keep their order."""
    panel = _section_panel(session, section)
    with session.lock:
        deleted = panel.delete_item(item_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Entry '{item_id}' not found in {section}",
        )


# ---------------------------------------------------------------------------
# tags
# ---------------------------------------------------------------------------


@router.post("/{session_id}/tags/{tag_list}", response_model=list[TagSchema])
def submit_tag(
    session: CurrentSession,
    tag_list: Annotated[str, Path(description="skills, soft_skills or interests")],
    data: TagSubmitRequest,
) -> list[TagSchema]:
    """Add a tag from submitted text and return the whole list."""
    panel = _tag_panel(session, tag_list)
    with session.lock:
        try:
            panel.submit(data.text)
        except SectionFullError as exc:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from None
        return [TagSchema(id=tag.id, name=tag.name) for tag in panel.items]


@router.delete("/{session_id}/tags/{tag_list}/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_tag(
    session: CurrentSession,
    tag_list: Annotated[str, Path(description="skills, soft_skills or interests")],
    tag_id: Annotated[str, Path(description="Tag ID")],
) -> None:
    panel = _tag_panel(session, tag_list)
    with session.lock:
        deleted = panel.delete_item(tag_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Tag '{tag_id}' not found in {tag_list}",
        )


# ---------------------------------------------------------------------------
# import and output
# ---------------------------------------------------------------------------


@router.post("/{session_id}/import", response_model=ImportResponse)
def import_extraction(
    session: CurrentSession,
    payload: Annotated[dict[str, Any], Body(description="Content extracted from an uploaded CV")],
) -> ImportResponse:
    """Fill the session from an extraction result."""
    with session.lock:
        populated = apply_extraction(session.store, payload)
    return ImportResponse(populated=populated)


@router.get("/{session_id}/source", response_class=PlainTextResponse)
def get_source(session: CurrentSession) -> str:
    """Return the LaTeX source for the current content."""
    with session.lock:
        snapshot = session.store.snapshot()
    return render(snapshot).dumps()


@router.get(
    "/{session_id}/preview",
    responses={200: {"content": {"application/pdf": {}}}},
)
def preview_pdf(
    session: CurrentSession,
    background_tasks: BackgroundTasks,
    materializer: Annotated[Materializer, Depends(get_materializer)],
) -> Response:
    """Compile the current content for inline display."""
    with session.lock:
        snapshot = session.store.snapshot()
    return pdf_response(
        render(snapshot),
        materializer,
        background_tasks,
        filename="preview.pdf",
        inline=True,
    )


@router.get(
    "/{session_id}/download",
    responses={200: {"content": {"application/pdf": {}}}},
)
def download_pdf(
    session: CurrentSession,
    background_tasks: BackgroundTasks,
    materializer: Annotated[Materializer, Depends(get_materializer)],
) -> FileResponse:
    """Compile the current content as ``<Name>_Resume.pdf``."""
    with session.lock:
        snapshot = session.store.snapshot()
    return pdf_response(
        render(snapshot),
        materializer,
        background_tasks,
        filename=download_filename(snapshot.about.name),
    )
