"""Resume content records held by the resume builder.

Every record is an immutable dataclass.  Editors never patch a record in
place: they build a copy with :func:`dataclasses.replace` and write the
whole section back to the store.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum

__all__ = [
    "AboutInfo",
    "CertificateEntry",
    "EducationEntry",
    "EmploymentType",
    "LanguageEntry",
    "ProjectEntry",
    "ResumeSnapshot",
    "SocialActivityEntry",
    "TagEntry",
    "WorkEntry",
    "new_id",
]


def new_id() -> str:
    """Return a fresh opaque identifier for a resume entry."""
    return uuid.uuid4().hex


class EmploymentType(str, Enum):
    """Employment types offered by the work editor."""

    UNSET = ""
    FULL_TIME = "Full-time"
    PART_TIME = "Part-time"
    INTERNSHIP = "Internship"
    FREELANCE = "Freelance"


@dataclass(frozen=True)
class AboutInfo:
    """Header and contact details."""

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


@dataclass(frozen=True)
class EducationEntry:
    id: str = field(default_factory=new_id)
    degree: str = ""
    school: str = ""
    start_year: int = 0
    end_year: int = 0
    grade: str = ""


@dataclass(frozen=True)
class WorkEntry:
    id: str = field(default_factory=new_id)
    position: str = ""
    company: str = ""
    # Imports may carry free text, so this stays a plain string.
    employment_type: str = EmploymentType.UNSET.value
    start_date: str = ""
    end_date: str = ""
    description: str = ""


@dataclass(frozen=True)
class ProjectEntry:
    id: str = field(default_factory=new_id)
    name: str = ""
    url: str = ""
    github: str = ""
    description: str = ""


@dataclass(frozen=True)
class LanguageEntry:
    id: str = field(default_factory=new_id)
    name: str = ""
    level: str = ""


@dataclass(frozen=True)
class CertificateEntry:
    id: str = field(default_factory=new_id)
    title: str = ""
    issuer: str = ""
    year: str = ""


@dataclass(frozen=True)
class SocialActivityEntry:
    id: str = field(default_factory=new_id)
    role: str = ""
    organization: str = ""
    description: str = ""


@dataclass(frozen=True)
class TagEntry:
    """A skill, soft skill or interest shown as a single tag."""

    id: str = field(default_factory=new_id)
    name: str = ""


@dataclass(frozen=True)
class ResumeSnapshot:
    """Point-in-time copy of the whole resume store.

    This is the only input a template renderer receives.
    """

    about: AboutInfo = field(default_factory=AboutInfo)
    education_list: tuple[EducationEntry, ...] = ()
    work_list: tuple[WorkEntry, ...] = ()
    skills: tuple[TagEntry, ...] = ()
    soft_skills: tuple[TagEntry, ...] = ()
    interests: tuple[TagEntry, ...] = ()
    projects: tuple[ProjectEntry, ...] = ()
    languages: tuple[LanguageEntry, ...] = ()
    certificates: tuple[CertificateEntry, ...] = ()
    social_activities: tuple[SocialActivityEntry, ...] = ()
    selected_template: str = "temp-1"
    template_theme: str = "blue"
