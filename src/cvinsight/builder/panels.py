"""Editor panels: one per resume section.

A panel reads one section of the :class:`~cvinsight.builder.store.ResumeStore`
and writes a full replacement value back on every change.  Panels keep no
copy of the data themselves.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, ClassVar, Generic, TypeVar

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

__all__ = [
    "AboutPanel",
    "CertificatesPanel",
    "EducationPanel",
    "LanguagesPanel",
    "ProjectsPanel",
    "SectionFullError",
    "SectionPanel",
    "SkillsPanel",
    "SocialActivitiesPanel",
    "TagPanel",
    "WorkPanel",
    "build_panels",
]

E = TypeVar("E")

# Soft caps enforced by disabling the add affordance.
EDUCATION_LIMIT = 3
SECTION_LIMIT = 5


class SectionFullError(RuntimeError):
    """Raised when adding to a section whose add affordance is disabled."""


def _editable_fields(entry_type: type) -> frozenset[str]:
    return frozenset(f.name for f in dataclasses.fields(entry_type) if f.name != "id")


class AboutPanel:
    """Edits the singleton :class:`AboutInfo` record."""

    fields: ClassVar[frozenset[str]] = frozenset(f.name for f in dataclasses.fields(AboutInfo))

    def __init__(self, store: ResumeStore) -> None:
        self.store = store

    @property
    def about(self) -> AboutInfo:
        return self.store.about

    def change_field(self, field: str, value: str) -> AboutInfo:
        """Shallow-merge one field into a copy of the record and write it back."""
        return self.update(**{field: value})

    def update(self, **changes: str) -> AboutInfo:
        unknown = set(changes) - self.fields
        if unknown:
            raise ValueError(f"Unknown about fields: {', '.join(sorted(unknown))}")
        updated = dataclasses.replace(self.store.about, **changes)
        self.store.about = updated
        return updated


class SectionPanel(Generic[E]):
    """Editor for an ordered section of entries with stable ids.

    Subclasses set ``section`` (store attribute), ``entry_type`` and
    ``max_items``.
    """

    section: ClassVar[str]
    entry_type: ClassVar[type]
    max_items: ClassVar[int | None] = SECTION_LIMIT

    def __init__(self, store: ResumeStore) -> None:
        self.store = store

    @property
    def items(self) -> tuple[E, ...]:
        return getattr(self.store, self.section)

    @property
    def can_add(self) -> bool:
        """Whether the add affordance is enabled."""
        return self.max_items is None or len(self.items) < self.max_items

    def add_item(self) -> E:
        """Append a blank entry with a fresh id.

        Raises:
            SectionFullError: If the section is at its cap.
        """
        if not self.can_add:
            raise SectionFullError(f"{self.section} is limited to {self.max_items} entries")
        entry = self.entry_type()
        setattr(self.store, self.section, [*self.items, entry])
        return entry

    def change_field(self, item_id: str, field: str, value: Any) -> E | None:
        """Shallow-merge *field* into the entry with *item_id*.

        The whole section is written back.  Returns the updated entry, or
        *None* when no entry has that id.

        Raises:
            ValueError: If *field* is not an editable field of the entry.
        """
        if field not in _editable_fields(self.entry_type):
            raise ValueError(f"Unknown field {field!r} for {self.section}")

        value = self._coerce(field, value)
        updated: E | None = None
        new_items = []
        for entry in self.items:
            if entry.id == item_id:
                entry = dataclasses.replace(entry, **{field: value})
                updated = entry
            new_items.append(entry)

        if updated is None:
            logger.warning("No %s entry with id %s", self.section, item_id)
            return None

        setattr(self.store, self.section, new_items)
        return updated

    def delete_item(self, item_id: str) -> bool:
        """Remove the entry with *item_id*; survivors keep their order."""
        remaining = [entry for entry in self.items if entry.id != item_id]
        if len(remaining) == len(self.items):
            return False
        setattr(self.store, self.section, remaining)
        return True

    def delete_at(self, index: int) -> bool:
        """Remove the entry at position *index*."""
        if not 0 <= index < len(self.items):
            return False
        remaining = [entry for i, entry in enumerate(self.items) if i != index]
        setattr(self.store, self.section, remaining)
        return True

    def _coerce(self, field: str, value: Any) -> Any:
        return "" if value is None else str(value)


class EducationPanel(SectionPanel[EducationEntry]):
    section = "education_list"
    entry_type = EducationEntry
    max_items = EDUCATION_LIMIT

    _YEAR_FIELDS = frozenset({"start_year", "end_year"})

    def _coerce(self, field: str, value: Any) -> Any:
        if field not in self._YEAR_FIELDS:
            return super()._coerce(field, value)
        # Year inputs arrive as text; anything blank or non-numeric is 0.
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        try:
            return int(str(value).strip())
        except (TypeError, ValueError):
            return 0


class WorkPanel(SectionPanel[WorkEntry]):
    section = "work_list"
    entry_type = WorkEntry


class ProjectsPanel(SectionPanel[ProjectEntry]):
    section = "projects"
    entry_type = ProjectEntry


class LanguagesPanel(SectionPanel[LanguageEntry]):
    section = "languages"
    entry_type = LanguageEntry


class CertificatesPanel(SectionPanel[CertificateEntry]):
    section = "certificates"
    entry_type = CertificateEntry


class SocialActivitiesPanel(SectionPanel[SocialActivityEntry]):
    section = "social_activities"
    entry_type = SocialActivityEntry


class TagPanel:
    """Free-text tag list (skills, soft skills or interests).

    Tags are uncapped unless *max_items* is given; duplicates are allowed.
    """

    def __init__(self, store: ResumeStore, section: str, *, max_items: int | None = None) -> None:
        if section not in ("skills", "soft_skills", "interests"):
            raise ValueError(f"{section!r} is not a tag section")
        self.store = store
        self.section = section
        self.max_items = max_items

    @property
    def items(self) -> tuple[TagEntry, ...]:
        return getattr(self.store, self.section)

    @property
    def can_add(self) -> bool:
        return self.max_items is None or len(self.items) < self.max_items

    def submit(self, text: str) -> TagEntry | None:
        """Append a tag from submitted text.

        Blank text is ignored and returns *None*.

        Raises:
            SectionFullError: If the list is at its cap.
        """
        name = (text or "").strip()
        if not name:
            return None
        if not self.can_add:
            raise SectionFullError(f"{self.section} is limited to {self.max_items} entries")
        tag = TagEntry(name=name)
        setattr(self.store, self.section, [*self.items, tag])
        return tag

    def delete_item(self, item_id: str) -> bool:
        remaining = [tag for tag in self.items if tag.id != item_id]
        if len(remaining) == len(self.items):
            return False
        setattr(self.store, self.section, remaining)
        return True


class SkillsPanel:
    """Groups the three tag lists edited on the skills tab."""

    def __init__(self, store: ResumeStore, *, max_items: int | None = None) -> None:
        self.skills = TagPanel(store, "skills", max_items=max_items)
        self.soft_skills = TagPanel(store, "soft_skills", max_items=max_items)
        self.interests = TagPanel(store, "interests", max_items=max_items)

    def tag_list(self, name: str) -> TagPanel:
        """Return the tag panel for *name* (``skills``, ``soft_skills``, ``interests``)."""
        try:
            return {
                "skills": self.skills,
                "soft_skills": self.soft_skills,
                "interests": self.interests,
            }[name]
        except KeyError:
            raise ValueError(f"Unknown tag list {name!r}") from None


_SECTION_PANELS: tuple[type[SectionPanel], ...] = (
    EducationPanel,
    WorkPanel,
    ProjectsPanel,
    LanguagesPanel,
    CertificatesPanel,
    SocialActivitiesPanel,
)


def build_panels(store: ResumeStore) -> dict[str, SectionPanel]:
    """Return one section panel per sequence section, keyed by store attribute."""
    return {panel_cls.section: panel_cls(store) for panel_cls in _SECTION_PANELS}
