"""Pydantic schemas for resume content exchanged with the API."""

from __future__ import annotations

import dataclasses
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from cvinsight.builder.models import (
    AboutInfo,
    CertificateEntry,
    EducationEntry,
    LanguageEntry,
    ProjectEntry,
    ResumeSnapshot,
    SocialActivityEntry,
    TagEntry,
    WorkEntry,
    new_id,
)
from cvinsight.templates.catalog import DEFAULT_TEMPLATE_ID, find_template


class AboutSchema(BaseModel):
    name: str = ""
    role: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    linkedin: str = ""
    github: str = ""
    portfolio: str = ""
    picture: str = ""
    summary: str = ""


class AboutUpdateRequest(BaseModel):
    """Partial update of the about record; only provided fields change."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    role: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    linkedin: str | None = None
    github: str | None = None
    portfolio: str | None = None
    picture: str | None = None
    summary: str | None = None


class EducationSchema(BaseModel):
    id: str = Field(default_factory=new_id)
    degree: str = ""
    school: str = ""
    start_year: int = 0
    end_year: int = 0
    grade: str = ""


class WorkSchema(BaseModel):
    id: str = Field(default_factory=new_id)
    position: str = ""
    company: str = ""
    employment_type: str = ""
    start_date: str = ""
    end_date: str = ""
    description: str = ""


class ProjectSchema(BaseModel):
    id: str = Field(default_factory=new_id)
    name: str = ""
    url: str = ""
    github: str = ""
    description: str = ""


class LanguageSchema(BaseModel):
    id: str = Field(default_factory=new_id)
    name: str = ""
    level: str = ""


class CertificateSchema(BaseModel):
    id: str = Field(default_factory=new_id)
    title: str = ""
    issuer: str = ""
    year: str = ""


class SocialActivitySchema(BaseModel):
    id: str = Field(default_factory=new_id)
    role: str = ""
    organization: str = ""
    description: str = ""


class TagSchema(BaseModel):
    id: str = Field(default_factory=new_id)
    name: str = ""


class ResumeDocument(BaseModel):
    """Complete resume content, as posted for rendering or returned by a session."""

    about: AboutSchema = Field(default_factory=AboutSchema)
    education_list: list[EducationSchema] = Field(default_factory=list)
    work_list: list[WorkSchema] = Field(default_factory=list)
    skills: list[TagSchema] = Field(default_factory=list)
    soft_skills: list[TagSchema] = Field(default_factory=list)
    interests: list[TagSchema] = Field(default_factory=list)
    projects: list[ProjectSchema] = Field(default_factory=list)
    languages: list[LanguageSchema] = Field(default_factory=list)
    certificates: list[CertificateSchema] = Field(default_factory=list)
    social_activities: list[SocialActivitySchema] = Field(default_factory=list)
    selected_template: str = Field(DEFAULT_TEMPLATE_ID.value, description="Template id, e.g. temp-1")

    @classmethod
    def from_snapshot(cls, snapshot: ResumeSnapshot) -> ResumeDocument:
        return cls.model_validate(dataclasses.asdict(snapshot))

    def to_snapshot(self) -> ResumeSnapshot:
        """Build a snapshot; an unknown template id renders with the default."""
        descriptor = find_template(self.selected_template) or find_template(DEFAULT_TEMPLATE_ID.value)
        return ResumeSnapshot(
            about=AboutInfo(**self.about.model_dump()),
            education_list=tuple(EducationEntry(**e.model_dump()) for e in self.education_list),
            work_list=tuple(WorkEntry(**w.model_dump()) for w in self.work_list),
            skills=tuple(TagEntry(**t.model_dump()) for t in self.skills),
            soft_skills=tuple(TagEntry(**t.model_dump()) for t in self.soft_skills),
            interests=tuple(TagEntry(**t.model_dump()) for t in self.interests),
            projects=tuple(ProjectEntry(**p.model_dump()) for p in self.projects),
            languages=tuple(LanguageEntry(**lang.model_dump()) for lang in self.languages),
            certificates=tuple(CertificateEntry(**c.model_dump()) for c in self.certificates),
            social_activities=tuple(
                SocialActivityEntry(**a.model_dump()) for a in self.social_activities
            ),
            selected_template=descriptor.id,
            template_theme=descriptor.theme.value,
        )


class SessionResponse(BaseModel):
    """State of a builder session."""

    id: str
    selected_template: str
    template_theme: str
    resume: ResumeDocument


class TemplateSelectRequest(BaseModel):
    template_id: str = Field(..., description="Catalog id of the template to use")


class FieldChangeRequest(BaseModel):
    field: str = Field(..., description="Entry field to change")
    value: Any = Field(None, description="New value; years are coerced to integers")


class TagSubmitRequest(BaseModel):
    text: str = Field("", description="Tag text; blank text is ignored")


class ImportResponse(BaseModel):
    populated: list[str] = Field(description="Sections replaced by the import")
