"""In-memory resume store shared by the editor panels and the renderer.

A store is created per builder session and never lives at module level.
:func:`resume_session` provides one to the enclosing scope; code that asks
for the current store outside such a scope fails immediately.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Generic, TypeVar, overload

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
)
from cvinsight.templates.catalog import DEFAULT_TEMPLATE_ID, find_template

logger = logging.getLogger(__name__)

__all__ = [
    "ResumeContextError",
    "ResumeStore",
    "UnknownTemplateError",
    "current_store",
    "resume_session",
]

T = TypeVar("T")

Listener = Callable[["ResumeStore"], None]


class ResumeContextError(RuntimeError):
    """Raised when the resume store is requested outside a builder session."""


class UnknownTemplateError(ValueError):
    """Raised when selecting a template id that is not in the catalog."""


class _Slot(Generic[T]):
    """Store attribute with a whole-value setter that notifies listeners.

    Sequences are frozen into tuples on write so readers can never mutate
    store contents in place.
    """

    def __init__(self, *, sequence: bool = True) -> None:
        self._sequence = sequence

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        self._attr = f"_{name}"

    @overload
    def __get__(self, obj: None, objtype: type) -> _Slot[T]: ...

    @overload
    def __get__(self, obj: ResumeStore, objtype: type) -> T: ...

    def __get__(self, obj: ResumeStore | None, objtype: type | None = None) -> Any:
        if obj is None:
            return self
        return getattr(obj, self._attr)

    def __set__(self, obj: ResumeStore, value: Any) -> None:
        if self._sequence:
            value = tuple(value)
        setattr(obj, self._attr, value)
        obj._notify(self.name)


class ResumeStore:
    """Mutable holder of one resume being edited.

    Each section has a getter and a whole-value setter; there is no partial
    update API.  Every write notifies subscribers synchronously, in write
    order.
    """

    about: _Slot[AboutInfo] = _Slot(sequence=False)
    education_list: _Slot[tuple[EducationEntry, ...]] = _Slot()
    work_list: _Slot[tuple[WorkEntry, ...]] = _Slot()
    skills: _Slot[tuple[TagEntry, ...]] = _Slot()
    soft_skills: _Slot[tuple[TagEntry, ...]] = _Slot()
    interests: _Slot[tuple[TagEntry, ...]] = _Slot()
    projects: _Slot[tuple[ProjectEntry, ...]] = _Slot()
    languages: _Slot[tuple[LanguageEntry, ...]] = _Slot()
    certificates: _Slot[tuple[CertificateEntry, ...]] = _Slot()
    social_activities: _Slot[tuple[SocialActivityEntry, ...]] = _Slot()

    SECTIONS: tuple[str, ...] = (
        "about",
        "education_list",
        "work_list",
        "skills",
        "soft_skills",
        "interests",
        "projects",
        "languages",
        "certificates",
        "social_activities",
    )

    def __init__(
        self,
        *,
        about: AboutInfo | None = None,
        education_list: Iterable[EducationEntry] = (),
        work_list: Iterable[WorkEntry] = (),
        skills: Iterable[TagEntry] = (),
        soft_skills: Iterable[TagEntry] = (),
        interests: Iterable[TagEntry] = (),
        projects: Iterable[ProjectEntry] = (),
        languages: Iterable[LanguageEntry] = (),
        certificates: Iterable[CertificateEntry] = (),
        social_activities: Iterable[SocialActivityEntry] = (),
        selected_template: str = DEFAULT_TEMPLATE_ID.value,
    ) -> None:
        self._listeners: list[Listener] = []
        self._about = about or AboutInfo()
        self._education_list = tuple(education_list)
        self._work_list = tuple(work_list)
        self._skills = tuple(skills)
        self._soft_skills = tuple(soft_skills)
        self._interests = tuple(interests)
        self._projects = tuple(projects)
        self._languages = tuple(languages)
        self._certificates = tuple(certificates)
        self._social_activities = tuple(social_activities)

        descriptor = find_template(selected_template)
        if descriptor is None:
            raise UnknownTemplateError(f"Unknown template {selected_template!r}")
        self._selected_template = descriptor.id
        self._template_theme = descriptor.theme.value

    @classmethod
    def seeded(cls) -> ResumeStore:
        """Return a store with the defaults shown when the builder opens."""
        return cls(
            education_list=[EducationEntry()],
            work_list=[WorkEntry()],
            skills=[
                TagEntry(name=name) for name in ("JavaScript", "ReactJS", "NodeJS", "MongoDB")
            ],
            soft_skills=[
                TagEntry(name=name)
                for name in ("Communication", "Problem-solving", "Teamwork", "Leadership")
            ],
            interests=[
                TagEntry(name=name)
                for name in ("Web Development", "Machine Learning", "Open Source Projects")
            ],
            projects=[ProjectEntry()],
            languages=[LanguageEntry()],
            certificates=[CertificateEntry()],
            social_activities=[SocialActivityEntry()],
        )

    # ------------------------------------------------------------------
    # template selection
    # ------------------------------------------------------------------

    @property
    def selected_template(self) -> str:
        return self._selected_template

    @selected_template.setter
    def selected_template(self, template_id: str) -> None:
        descriptor = find_template(template_id)
        if descriptor is None:
            raise UnknownTemplateError(f"Unknown template {template_id!r}")
        self._selected_template = descriptor.id
        # The theme is derived; keep it in step with the selection.
        self._template_theme = descriptor.theme.value
        self._notify("selected_template")

    @property
    def template_theme(self) -> str:
        return self._template_theme

    # ------------------------------------------------------------------
    # subscriptions
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener* for every write; return an unsubscribe callable.

        A listener that raises is logged and skipped; the write stands and
        later listeners still run.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, section: str) -> None:
        logger.debug("Resume store section %s replaced", section)
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Resume store listener %r failed", listener)

    # ------------------------------------------------------------------
    # reads
    # ------------------------------------------------------------------

    def snapshot(self) -> ResumeSnapshot:
        """Return an immutable copy of the current contents."""
        return ResumeSnapshot(
            about=self._about,
            education_list=self._education_list,
            work_list=self._work_list,
            skills=self._skills,
            soft_skills=self._soft_skills,
            interests=self._interests,
            projects=self._projects,
            languages=self._languages,
            certificates=self._certificates,
            social_activities=self._social_activities,
            selected_template=self._selected_template,
            template_theme=self._template_theme,
        )


_current_store: ContextVar[ResumeStore | None] = ContextVar("cvinsight_resume_store", default=None)


@contextmanager
def resume_session(store: ResumeStore | None = None) -> Iterator[ResumeStore]:
    """Provide a resume store to the enclosing scope.

    A seeded store is created when *store* is not given.  The store is
    discarded from the scope on exit; nothing is persisted.
    """
    active = store if store is not None else ResumeStore.seeded()
    token = _current_store.set(active)
    try:
        yield active
    finally:
        _current_store.reset(token)


def current_store() -> ResumeStore:
    """Return the store of the enclosing :func:`resume_session`.

    Raises:
        ResumeContextError: If called outside a resume session.
    """
    store = _current_store.get()
    if store is None:
        raise ResumeContextError("current_store() must be used within resume_session()")
    return store
