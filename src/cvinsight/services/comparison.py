"""Side-by-side statistics for two stored resumes.

Resumes come back from the backend with their extracted content as
loosely-typed JSON.  The helpers here count what they can find and decide
which side is stronger per metric; missing data counts as zero or
``None``, never as an error.
"""

from __future__ import annotations

import json
import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Literal, Protocol

__all__ = [
    "COMPARISON_METRICS",
    "ComparisonMetric",
    "ComparisonSelectionError",
    "ResumeStats",
    "SkillOverlap",
    "build_stats",
    "extract_skills",
    "format_metric",
    "parse_json_content",
    "pick_winner",
    "skill_overlap",
    "validate_selection",
]

MISSING_SELECTION_MESSAGE = "Select a resume on the left and another on the right to compare."
SAME_SELECTION_MESSAGE = "Choose two different resumes to compare."

_SKILL_KEYS = ("skills", "Skills", "skillset", "skill_list")
_EXPERIENCE_KEYS = ("experience", "experiences", "work_experience", "workExperience")
_EDUCATION_KEYS = ("education", "educations", "education_history", "educationHistory")
_PROJECT_KEYS = ("projects", "project_list", "project")

Winner = Literal["left", "right", "equal"]


class ComparisonSelectionError(ValueError):
    """Raised when the pair of resumes chosen for comparison is not usable."""


class StoredResume(Protocol):
    score: float | None
    size: int
    json_content: Any


@dataclass(frozen=True)
class ResumeStats:
    score: int | None = None
    skill_count: int = 0
    experience_count: int = 0
    education_count: int = 0
    project_count: int = 0
    size: int = 0


@dataclass(frozen=True)
class SkillOverlap:
    shared: list[str]
    left_only: list[str]
    right_only: list[str]


@dataclass(frozen=True)
class ComparisonMetric:
    key: str
    label: str
    higher_is_better: bool = True
    formatter: Callable[[int | None], str] | None = None


def _percent(value: int | None) -> str:
    return f"{value}%" if value is not None else "N/A"


COMPARISON_METRICS: tuple[ComparisonMetric, ...] = (
    ComparisonMetric("score", "Overall score", formatter=_percent),
    ComparisonMetric("skill_count", "Skills detected"),
    ComparisonMetric("experience_count", "Experience entries"),
    ComparisonMetric("education_count", "Education entries"),
    ComparisonMetric("project_count", "Projects"),
)


def validate_selection(left_id: str | None, right_id: str | None) -> None:
    """Check that two distinct resumes are selected.

    Raises:
        ComparisonSelectionError: With the message to show the user.
    """
    if not left_id or not right_id:
        raise ComparisonSelectionError(MISSING_SELECTION_MESSAGE)
    if left_id == right_id:
        raise ComparisonSelectionError(SAME_SELECTION_MESSAGE)


def parse_json_content(content: Any) -> Mapping[str, Any] | None:
    """Return *content* as a mapping, decoding JSON text; *None* otherwise."""
    if not content:
        return None
    if isinstance(content, str):
        try:
            content = json.loads(content)
        except json.JSONDecodeError:
            return None
    return content if isinstance(content, Mapping) else None


def _array(content: Mapping[str, Any] | None, keys: tuple[str, ...]) -> list[Any]:
    if not content:
        return []
    for key in keys:
        value = content.get(key)
        if isinstance(value, list):
            return value
    return []


def extract_skills(content: Mapping[str, Any] | None) -> list[str]:
    """Skill names in first-seen order, trimmed and de-duplicated."""
    names: list[str] = []
    for skill in _array(content, _SKILL_KEYS):
        if isinstance(skill, Mapping):
            skill = skill.get("name") or skill.get("skill") or skill.get("title")
        if isinstance(skill, str) and skill.strip():
            names.append(skill.strip())
    return list(dict.fromkeys(names))


def build_stats(resume: StoredResume | None) -> ResumeStats:
    if resume is None:
        return ResumeStats()
    content = parse_json_content(resume.json_content)
    score = resume.score
    return ResumeStats(
        # Round half up, as the scores are shown as whole percentages.
        score=math.floor(score + 0.5) if isinstance(score, (int, float)) else None,
        skill_count=len(extract_skills(content)),
        experience_count=len(_array(content, _EXPERIENCE_KEYS)),
        education_count=len(_array(content, _EDUCATION_KEYS)),
        project_count=len(_array(content, _PROJECT_KEYS)),
        size=resume.size or 0,
    )


def skill_overlap(left: list[str], right: list[str]) -> SkillOverlap:
    """Split two skill lists into shared and one-sided skills, ignoring case."""
    left_keys = {skill.lower() for skill in left}
    right_keys = {skill.lower() for skill in right}
    return SkillOverlap(
        shared=[skill for skill in left if skill.lower() in right_keys],
        left_only=[skill for skill in left if skill.lower() not in right_keys],
        right_only=[skill for skill in right if skill.lower() not in left_keys],
    )


def pick_winner(metric: ComparisonMetric, left: int | None, right: int | None) -> Winner:
    if left == right:
        return "equal"
    if left is None:
        return "right"
    if right is None:
        return "left"
    if metric.higher_is_better:
        return "left" if left > right else "right"
    return "left" if left < right else "right"


def format_metric(metric: ComparisonMetric, value: int | None) -> str:
    if metric.formatter is not None:
        return metric.formatter(value)
    return "N/A" if value is None else str(value)
