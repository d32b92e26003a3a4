"""Tests for the backend API client."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import httpx
import pytest

from cvinsight.client import ApiError, CVInsightClient
from cvinsight.client.api import COMPARISON_ERROR, DELETE_ERROR, LIST_ERROR, UPLOAD_ERROR
from cvinsight.config import Settings
from cvinsight.services.comparison import ComparisonSelectionError


class Recorder:
    """MockTransport handler that records requests and replays a canned response."""

    def __init__(self, response: httpx.Response | Exception) -> None:
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


def _client(handler: Recorder, **settings) -> CVInsightClient:
    return CVInsightClient(
        Settings(api_url="http://backend.test", **settings),
        transport=httpx.MockTransport(handler),
    )


def _run(handler: Recorder, call, **settings):
    async def scenario():
        async with _client(handler, **settings) as client:
            return await call(client)

    return asyncio.run(scenario())


@pytest.fixture
def cv_file(tmp_path: Path) -> Path:
    path = tmp_path / "cv.pdf"
    path.write_bytes(b"%PDF-1.4 cv")
    return path


class TestUpload:
    def test_json_string_body_is_decoded(self, cv_file: Path) -> None:
        extracted = {"about": {"name": "Ada"}}
        handler = Recorder(httpx.Response(200, json=json.dumps(extracted)))

        result = _run(handler, lambda c: c.upload_resume(cv_file))

        assert result == extracted
        [request] = handler.requests
        assert request.method == "POST"
        assert request.url.path == "/resume/upload-and-process"
        assert b'name="file"; filename="cv.pdf"' in request.content
        assert b"%PDF-1.4 cv" in request.content

    def test_object_body(self, cv_file: Path) -> None:
        handler = Recorder(httpx.Response(200, json={"skills": ["Python"]}))
        assert _run(handler, lambda c: c.upload_resume(cv_file)) == {"skills": ["Python"]}

    def test_non_object_body(self, cv_file: Path) -> None:
        handler = Recorder(httpx.Response(200, json="[1, 2]"))
        with pytest.raises(ApiError) as exc_info:
            _run(handler, lambda c: c.upload_resume(cv_file))
        assert exc_info.value.message == UPLOAD_ERROR

    def test_backend_error_message_surfaces(self, cv_file: Path) -> None:
        handler = Recorder(httpx.Response(400, json={"error": "Only PDF files are supported."}))
        with pytest.raises(ApiError) as exc_info:
            _run(handler, lambda c: c.upload_resume(cv_file))
        assert exc_info.value.message == "Only PDF files are supported."
        assert exc_info.value.status_code == 400


class TestErrors:
    def test_fallback_without_error_key(self) -> None:
        handler = Recorder(httpx.Response(500, text="Internal Server Error"))
        with pytest.raises(ApiError) as exc_info:
            _run(handler, lambda c: c.list_resumes())
        assert exc_info.value.message == LIST_ERROR
        assert exc_info.value.status_code == 500

    def test_connection_error(self) -> None:
        handler = Recorder(httpx.ConnectError("refused"))
        with pytest.raises(ApiError) as exc_info:
            _run(handler, lambda c: c.delete_resume("r1"))
        assert exc_info.value.message == DELETE_ERROR
        assert exc_info.value.status_code is None


class TestEndpoints:
    def test_list_resumes(self) -> None:
        handler = Recorder(
            httpx.Response(
                200,
                json=[
                    {
                        "id": "r1",
                        "filename": "cv.pdf",
                        "contentType": "application/pdf",
                        "size": 1024,
                        "uploadedAt": "2024-05-01T10:00:00Z",
                        "score": 81.2,
                        "jsonContent": "{}",
                        "ownerId": "ignored",
                    }
                ],
            )
        )
        [resume] = _run(handler, lambda c: c.list_resumes())
        assert resume.id == "r1"
        assert resume.content_type == "application/pdf"
        assert resume.uploaded_at is not None and resume.uploaded_at.year == 2024
        assert resume.score == 81.2

    def test_get_analysis(self) -> None:
        handler = Recorder(
            httpx.Response(200, json={"score": 70, "overallFeedback": "Solid.", "missingSections": ["Projects"]})
        )
        analysis = _run(handler, lambda c: c.get_analysis("r1"))
        assert handler.requests[0].url.path == "/resume/r1/analysis"
        assert analysis.overall_feedback == "Solid."
        assert analysis.missing_sections == ["Projects"]
        assert analysis.weaknesses == []

    def test_get_file(self) -> None:
        handler = Recorder(httpx.Response(200, content=b"%PDF", headers={"content-type": "application/pdf"}))
        file = _run(handler, lambda c: c.get_file("r1"))
        assert file.content == b"%PDF"
        assert file.content_type == "application/pdf"

    def test_delete(self) -> None:
        handler = Recorder(httpx.Response(204))
        assert _run(handler, lambda c: c.delete_resume("r9")) is None
        assert handler.requests[0].method == "DELETE"
        assert handler.requests[0].url.path == "/resume/r9"

    def test_bearer_token(self) -> None:
        handler = Recorder(httpx.Response(200, json=[]))
        _run(handler, lambda c: c.list_resumes(), api_token="secret")
        assert handler.requests[0].headers["Authorization"] == "Bearer secret"

    def test_no_token_no_header(self) -> None:
        handler = Recorder(httpx.Response(200, json=[]))
        _run(handler, lambda c: c.list_resumes())
        assert "Authorization" not in handler.requests[0].headers


class TestCompare:
    def test_sends_ordered_pair(self) -> None:
        handler = Recorder(
            httpx.Response(200, json={"summary": "Left is stronger.", "winner": "left", "leftHighlights": ["Go"]})
        )
        comparison = _run(handler, lambda c: c.compare_resumes("r1", "r2"))
        [request] = handler.requests
        assert request.url.path == "/resume/resumes-comparison"
        assert json.loads(request.content) == ["r1", "r2"]
        assert comparison.winner == "left"
        assert comparison.left_highlights == ["Go"]

    def test_same_resume_never_hits_network(self) -> None:
        handler = Recorder(httpx.Response(200, json={}))
        with pytest.raises(ComparisonSelectionError, match="Choose two different resumes to compare."):
            _run(handler, lambda c: c.compare_resumes("r1", "r1"))
        assert handler.requests == []

    def test_missing_selection_never_hits_network(self) -> None:
        handler = Recorder(httpx.Response(200, json={}))
        with pytest.raises(ComparisonSelectionError):
            _run(handler, lambda c: c.compare_resumes("r1", None))
        assert handler.requests == []

    def test_backend_failure(self) -> None:
        handler = Recorder(httpx.Response(502, json={"message": "upstream"}))
        with pytest.raises(ApiError, match=COMPARISON_ERROR):
            _run(handler, lambda c: c.compare_resumes("r1", "r2"))
