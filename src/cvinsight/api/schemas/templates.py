"""Pydantic schemas for template catalog endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class TemplateResponse(BaseModel):
    """One entry of the template catalog."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str
    thumbnail: str
    theme: str
    layout: str
    is_premium: bool = False
