"""Tests for resume comparison statistics."""

from __future__ import annotations

import json

import pytest

from cvinsight.client.models import ResumeSummary
from cvinsight.services.comparison import (
    COMPARISON_METRICS,
    MISSING_SELECTION_MESSAGE,
    SAME_SELECTION_MESSAGE,
    ComparisonMetric,
    ComparisonSelectionError,
    ResumeStats,
    build_stats,
    extract_skills,
    format_metric,
    parse_json_content,
    pick_winner,
    skill_overlap,
    validate_selection,
)

SCORE = COMPARISON_METRICS[0]


class TestSelection:
    @pytest.mark.parametrize(("left", "right"), [(None, "b"), ("a", None), ("", ""), (None, None)])
    def test_missing(self, left, right) -> None:
        with pytest.raises(ComparisonSelectionError, match=MISSING_SELECTION_MESSAGE):
            validate_selection(left, right)

    def test_same(self) -> None:
        with pytest.raises(ComparisonSelectionError) as exc_info:
            validate_selection("r1", "r1")
        assert str(exc_info.value) == SAME_SELECTION_MESSAGE

    def test_distinct(self) -> None:
        validate_selection("r1", "r2")


class TestContent:
    def test_parse_json_text(self) -> None:
        assert parse_json_content('{"skills": []}') == {"skills": []}

    @pytest.mark.parametrize("content", [None, "", "{broken", "[1, 2]", 42])
    def test_parse_unusable(self, content) -> None:
        assert parse_json_content(content) is None

    def test_extract_skills_dedupes_in_order(self) -> None:
        content = {"Skills": ["Python", {"name": "SQL"}, {"skill": " Python "}, {"title": "Go"}, 7, ""]}
        assert extract_skills(content) == ["Python", "SQL", "Go"]

    def test_extract_skills_without_content(self) -> None:
        assert extract_skills(None) == []


class TestStats:
    def test_build_stats(self) -> None:
        resume = ResumeSummary(
            id="r1",
            size=2048,
            score=72.5,
            jsonContent=json.dumps(
                {
                    "skillset": ["Python", "SQL"],
                    "workExperience": [{}, {}, {}],
                    "educationHistory": [{}],
                    "project": [{}, {}],
                }
            ),
        )
        assert build_stats(resume) == ResumeStats(
            score=73,
            skill_count=2,
            experience_count=3,
            education_count=1,
            project_count=2,
            size=2048,
        )

    def test_missing_score_and_content(self) -> None:
        stats = build_stats(ResumeSummary(id="r2"))
        assert stats.score is None
        assert stats.skill_count == 0

    def test_no_resume(self) -> None:
        assert build_stats(None) == ResumeStats()

    @pytest.mark.parametrize(("score", "expected"), [(0.5, 1), (1.5, 2), (2.5, 3), (84.49, 84)])
    def test_score_rounds_half_up(self, score, expected) -> None:
        assert build_stats(ResumeSummary(id="r", score=score)).score == expected


class TestOverlap:
    def test_case_insensitive(self) -> None:
        overlap = skill_overlap(["Python", "Docker", "SQL"], ["python", "Go", "sql"])
        assert overlap.shared == ["Python", "SQL"]
        assert overlap.left_only == ["Docker"]
        assert overlap.right_only == ["Go"]


class TestWinner:
    @pytest.mark.parametrize(
        ("left", "right", "expected"),
        [(80, 70, "left"), (60, 70, "right"), (5, 5, "equal"), (None, 3, "right"), (3, None, "left"), (None, None, "equal")],
    )
    def test_higher_is_better(self, left, right, expected) -> None:
        assert pick_winner(SCORE, left, right) == expected

    def test_lower_is_better(self) -> None:
        metric = ComparisonMetric("gaps", "Gaps", higher_is_better=False)
        assert pick_winner(metric, 1, 4) == "left"

    def test_format(self) -> None:
        assert format_metric(SCORE, 73) == "73%"
        assert format_metric(SCORE, None) == "N/A"
        assert format_metric(COMPARISON_METRICS[1], 4) == "4"
        assert format_metric(COMPARISON_METRICS[1], None) == "N/A"
