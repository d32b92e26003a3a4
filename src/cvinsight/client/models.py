"""Pydantic models for responses of the CV storage and analysis backend."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _BackendModel(BaseModel):
    """Backend payloads use camelCase keys and may carry extra fields."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ResumeSummary(_BackendModel):
    """One stored resume as returned by ``GET /resume``."""

    id: str
    filename: str = ""
    content_type: str = Field("", alias="contentType")
    size: int = 0
    uploaded_at: datetime | None = Field(None, alias="uploadedAt")
    score: float | None = None
    json_content: Any = Field(None, alias="jsonContent")


class ResumeAnalysis(_BackendModel):
    """AI analysis of a stored resume."""

    score: float | None = None
    overall_feedback: str = Field("", alias="overallFeedback")
    weaknesses: list[Any] = Field(default_factory=list)
    improvements: list[Any] = Field(default_factory=list)
    missing_sections: list[Any] = Field(default_factory=list, alias="missingSections")
    mistakes: list[Any] = Field(default_factory=list)


class ResumeComparison(_BackendModel):
    """AI comparison of two stored resumes."""

    summary: str = ""
    left_highlights: list[str] = Field(default_factory=list, alias="leftHighlights")
    right_highlights: list[str] = Field(default_factory=list, alias="rightHighlights")
    shared_strengths: list[str] = Field(default_factory=list, alias="sharedStrengths")
    gaps: list[str] = Field(default_factory=list)
    winner: str | None = None
    hiring_advice: str = Field("", alias="hiringAdvice")


@dataclass(frozen=True)
class ResumeFile:
    """Original uploaded file bytes and their content type."""

    content: bytes
    content_type: str
