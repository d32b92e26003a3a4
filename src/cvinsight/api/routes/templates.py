"""Template catalog routes for the API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status

from cvinsight.api.schemas.templates import TemplateResponse
from cvinsight.templates.catalog import TemplateDescriptor, filter_templates

router = APIRouter(prefix="/templates", tags=["templates"])


def _to_response(descriptor: TemplateDescriptor) -> TemplateResponse:
    return TemplateResponse(
        id=descriptor.id,
        name=descriptor.name,
        description=descriptor.description,
        thumbnail=descriptor.thumbnail,
        theme=descriptor.theme.value,
        layout=descriptor.layout.value,
        is_premium=descriptor.is_premium,
    )


@router.get("", response_model=list[TemplateResponse])
def list_templates(
    layout: Annotated[str, Query(description="Layout filter, or 'all'")] = "all",
) -> list[TemplateResponse]:
    """List catalog templates in display order."""
    try:
        descriptors = filter_templates(layout)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from None
    return [_to_response(d) for d in descriptors]
