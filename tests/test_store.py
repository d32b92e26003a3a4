"""Tests for the resume store and its scoped provisioning."""

from __future__ import annotations

import dataclasses

import pytest

from cvinsight.builder.models import AboutInfo, ResumeSnapshot, TagEntry, WorkEntry
from cvinsight.builder.store import (
    ResumeContextError,
    ResumeStore,
    UnknownTemplateError,
    current_store,
    resume_session,
)
from cvinsight.templates.catalog import RESUME_TEMPLATES


class TestResumeStore:
    def test_empty_store_defaults(self) -> None:
        store = ResumeStore()
        assert store.about == AboutInfo()
        assert store.work_list == ()
        assert store.selected_template == "temp-1"
        assert store.template_theme == "blue"

    def test_seeded_store_has_one_blank_entry_per_section(self) -> None:
        store = ResumeStore.seeded()
        for section in (
            "education_list",
            "work_list",
            "projects",
            "languages",
            "certificates",
            "social_activities",
        ):
            assert len(getattr(store, section)) == 1
        assert [t.name for t in store.skills] == ["JavaScript", "ReactJS", "NodeJS", "MongoDB"]
        assert len(store.soft_skills) == 4
        assert len(store.interests) == 3

    def test_setter_freezes_sequences(self) -> None:
        store = ResumeStore()
        store.work_list = [WorkEntry(position="Engineer")]
        assert isinstance(store.work_list, tuple)

    def test_entries_are_immutable(self) -> None:
        store = ResumeStore(work_list=[WorkEntry(position="Engineer")])
        with pytest.raises(dataclasses.FrozenInstanceError):
            store.work_list[0].position = "Manager"  # type: ignore[misc]

    def test_subscribers_notified_in_write_order(self) -> None:
        store = ResumeStore()
        seen: list[str] = []
        store.subscribe(lambda s: seen.append(s.about.name))

        store.about = AboutInfo(name="Ada")
        store.about = AboutInfo(name="Grace")

        assert seen == ["Ada", "Grace"]

    def test_unsubscribe_stops_notifications(self) -> None:
        store = ResumeStore()
        calls: list[ResumeStore] = []
        unsubscribe = store.subscribe(calls.append)
        unsubscribe()
        store.skills = [TagEntry(name="Python")]
        assert calls == []

    def test_failing_listener_does_not_block_others(self, caplog: pytest.LogCaptureFixture) -> None:
        store = ResumeStore()
        seen: list[str] = []

        def broken(_store: ResumeStore) -> None:
            raise RuntimeError("boom")

        store.subscribe(broken)
        store.subscribe(lambda s: seen.append(s.about.name))

        with caplog.at_level("ERROR", logger="cvinsight.builder.store"):
            store.about = AboutInfo(name="Ada")

        assert store.about.name == "Ada"
        assert seen == ["Ada"]
        assert "listener" in caplog.text

    def test_snapshot_is_a_value(self) -> None:
        store = ResumeStore(skills=[TagEntry(name="Python")])
        first = store.snapshot()
        store.skills = []
        assert isinstance(first, ResumeSnapshot)
        assert [t.name for t in first.skills] == ["Python"]
        assert store.snapshot().skills == ()


class TestTemplateSelection:
    @pytest.mark.parametrize("descriptor", RESUME_TEMPLATES, ids=lambda d: d.id)
    def test_switch_updates_theme(self, descriptor) -> None:
        store = ResumeStore()
        store.selected_template = descriptor.id
        assert store.selected_template == descriptor.id
        assert store.template_theme == descriptor.theme.value

    def test_unknown_template_rejected_and_store_unchanged(self) -> None:
        store = ResumeStore()
        store.selected_template = "temp-3"
        with pytest.raises(UnknownTemplateError):
            store.selected_template = "classic-blue"
        assert store.selected_template == "temp-3"
        assert store.template_theme == "green"

    def test_unknown_template_in_constructor(self) -> None:
        with pytest.raises(ValueError):
            ResumeStore(selected_template="temp-99")

    def test_switch_notifies(self) -> None:
        store = ResumeStore()
        themes: list[str] = []
        store.subscribe(lambda s: themes.append(s.template_theme))
        store.selected_template = "temp-2"
        assert themes == ["mono"]


class TestResumeSession:
    def test_current_store_outside_session_fails(self) -> None:
        with pytest.raises(ResumeContextError):
            current_store()

    def test_session_provides_seeded_store(self) -> None:
        with resume_session() as store:
            assert current_store() is store
            assert len(store.skills) == 4
        with pytest.raises(ResumeContextError):
            current_store()

    def test_nested_sessions_are_isolated(self) -> None:
        outer_store = ResumeStore()
        inner_store = ResumeStore()
        with resume_session(outer_store):
            with resume_session(inner_store):
                current_store().about = AboutInfo(name="Inner")
            assert current_store() is outer_store
        assert outer_store.about.name == ""
        assert inner_store.about.name == "Inner"
