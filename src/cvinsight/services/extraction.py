"""Import structured content extracted from an uploaded CV into a resume store.

The extraction backend returns loosely-typed JSON whose key names vary
between runs.  Each target field lists the keys it accepts in priority
order; the first usable value wins.  The mapping is best effort: anything
unrecognised is skipped rather than reported.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable, Mapping
from typing import Any

from cvinsight.builder.models import (
    AboutInfo,
    CertificateEntry,
    EducationEntry,
    LanguageEntry,
    ProjectEntry,
    SocialActivityEntry,
    TagEntry,
    WorkEntry,
)
from cvinsight.builder.store import ResumeStore

logger = logging.getLogger(__name__)

__all__ = ["apply_extraction"]

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _string(obj: Mapping[str, Any], *keys: str) -> str:
    """First non-blank string (numbers stringified) among *keys*."""
    for key in keys:
        value = obj.get(key)
        if isinstance(value, bool):
            continue
        if isinstance(value, str) and value.strip():
            return value
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float):
            return str(int(value)) if value.is_integer() else str(value)
    return ""


def _year(obj: Mapping[str, Any], *keys: str) -> int:
    """First integer among *keys*; strings are read up to the first non-digit."""
    for key in keys:
        value = obj.get(key)
        if isinstance(value, bool):
            continue
        if isinstance(value, (int, float)):
            return int(value)
        if isinstance(value, str):
            match = _LEADING_INT.match(value)
            if match:
                return int(match.group(1))
    return 0


def _array(obj: Mapping[str, Any], *keys: str) -> list[Any] | None:
    for key in keys:
        value = obj.get(key)
        if isinstance(value, list):
            return value
    return None


def _about(src: Mapping[str, Any]) -> AboutInfo:
    return AboutInfo(
        name=_string(src, "name", "fullName"),
        role=_string(src, "role", "title", "profession"),
        email=_string(src, "email"),
        phone=_string(src, "phone", "telephone"),
        address=_string(src, "address"),
        linkedin=_string(src, "linkedin", "linkedinUrl"),
        github=_string(src, "github", "githubUrl"),
        portfolio=_string(src, "portfolio", "website"),
        picture=_string(src, "picture"),
        summary=_string(src, "summary", "bio", "description"),
    )


def _education(e: Mapping[str, Any]) -> EducationEntry:
    return EducationEntry(
        degree=_string(e, "degree", "qualification"),
        school=_string(e, "school", "institution", "university"),
        start_year=_year(e, "startYr", "startYear", "fromYear"),
        end_year=_year(e, "endYr", "endYear", "toYear"),
        grade=_string(e, "grade", "score", "result"),
    )


def _work(w: Mapping[str, Any]) -> WorkEntry:
    end_date = _string(w, "endDate", "to")
    if not end_date and w.get("current") is True:
        end_date = "Present"
    return WorkEntry(
        position=_string(w, "position", "title"),
        company=_string(w, "company", "employer"),
        employment_type=_string(w, "type"),
        start_date=_string(w, "startDate", "from"),
        end_date=end_date,
        description=_string(w, "description", "summary", "details"),
    )


def _project(p: Mapping[str, Any]) -> ProjectEntry:
    return ProjectEntry(
        name=_string(p, "name", "title"),
        url=_string(p, "url", "link"),
        github=_string(p, "github", "repo"),
        description=_string(p, "description", "summary"),
    )


def _language(lang: Mapping[str, Any]) -> LanguageEntry:
    return LanguageEntry(
        name=_string(lang, "name", "language"),
        level=_string(lang, "level", "proficiency"),
    )


def _certificate(c: Mapping[str, Any]) -> CertificateEntry:
    return CertificateEntry(
        title=_string(c, "title", "name"),
        issuer=_string(c, "issuer", "institution"),
        year=_string(c, "year", "date"),
    )


def _activity(a: Mapping[str, Any]) -> SocialActivityEntry:
    return SocialActivityEntry(
        role=_string(a, "role", "title"),
        organization=_string(a, "organization", "org"),
        description=_string(a, "description", "details"),
    )


def _tag(item: Any) -> TagEntry | None:
    name = item if isinstance(item, str) else _string(_as_mapping(item), "name")
    name = name.strip()
    return TagEntry(name=name) if name else None


# store attribute -> (accepted keys, per-item builder)
_SECTIONS: tuple[tuple[str, tuple[str, ...], Callable[[Mapping[str, Any]], Any]], ...] = (
    ("education_list", ("education", "educations"), _education),
    ("work_list", ("experience", "work", "workExperience"), _work),
    ("projects", ("projects",), _project),
    ("languages", ("languages",), _language),
    ("certificates", ("certificates", "certs", "certifications"), _certificate),
    ("social_activities", ("socialActivities", "activities"), _activity),
)

_TAG_SECTIONS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("skills", ("skills",)),
    ("soft_skills", ("softSkills", "soft_skills")),
    ("interests", ("interests",)),
)


def apply_extraction(store: ResumeStore, payload: Mapping[str, Any] | str) -> list[str]:
    """Write the sections found in *payload* into *store*.

    Args:
        store: Target resume store.
        payload: Extraction result as a mapping or a JSON string.

    Returns:
        Store attributes that were replaced, in write order.  A section is
        left untouched unless the payload yields at least one entry for it.

    Raises:
        ValueError: If *payload* is a string that is not valid JSON.
    """
    if isinstance(payload, str):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Extraction payload is not valid JSON: {exc.msg}") from exc

    root = _as_mapping(payload)
    if not root:
        logger.warning("Ignoring extraction payload of type %s", type(payload).__name__)
        return []

    populated: list[str] = []

    about_src = next(
        (root[key] for key in ("about", "personal", "profile") if root.get(key) is not None),
        None,
    )
    if isinstance(about_src, Mapping):
        store.about = _about(about_src)
        populated.append("about")

    for attr, keys, build in _SECTIONS:
        items = _array(root, *keys)
        if not items:
            continue
        setattr(store, attr, [build(_as_mapping(item)) for item in items])
        populated.append(attr)

    for attr, keys in _TAG_SECTIONS:
        tags = [tag for tag in map(_tag, _array(root, *keys) or []) if tag is not None]
        if tags:
            setattr(store, attr, tags)
            populated.append(attr)

    logger.info("Imported extracted sections: %s", ", ".join(populated) or "none")
    return populated
