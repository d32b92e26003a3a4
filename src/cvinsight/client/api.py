"""Async client for the CV storage and AI analysis backend."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from types import TracebackType
from typing import Any

import httpx

from cvinsight.client.models import ResumeAnalysis, ResumeComparison, ResumeFile, ResumeSummary
from cvinsight.config import Settings, get_settings
from cvinsight.services.comparison import validate_selection

logger = logging.getLogger(__name__)

__all__ = ["ApiError", "CVInsightClient"]

UPLOAD_ERROR = "Unexpected error occurred during upload."
LIST_ERROR = "Failed to load resumes."
ANALYSIS_ERROR = "Unexpected error during analysis."
FILE_ERROR = "Could not load PDF file."
DELETE_ERROR = "Failed to delete resume."
COMPARISON_ERROR = "Failed to load AI comparison."


class ApiError(Exception):
    """A backend call failed.

    Attributes:
        message: Text suitable for showing to the user.
        status_code: HTTP status, or *None* when no response was received.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(response: httpx.Response, fallback: str) -> str:
    """Return the backend's ``error`` text, or *fallback*."""
    try:
        body = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict):
        message = body.get("error")
        if isinstance(message, str) and message.strip():
            return message
    return fallback


class CVInsightClient:
    """Thin typed wrapper over the backend's ``/resume`` endpoints.

    Use as an async context manager, or call :meth:`aclose` when done.
    Requests are never retried; every failure surfaces as :class:`ApiError`.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = settings or get_settings()
        headers = {}
        if settings.api_token:
            headers["Authorization"] = f"Bearer {settings.api_token}"
        self._http = httpx.AsyncClient(
            base_url=settings.api_url,
            headers=headers,
            timeout=settings.api_timeout,
            transport=transport,
        )

    async def __aenter__(self) -> CVInsightClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, url: str, fallback: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._http.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise ApiError(fallback) from exc

        if response.is_error:
            message = _error_message(response, fallback)
            logger.warning("%s %s returned %d: %s", method, url, response.status_code, message)
            raise ApiError(message, response.status_code)
        return response

    # ------------------------------------------------------------------
    # endpoints
    # ------------------------------------------------------------------

    async def upload_resume(
        self,
        file: str | Path,
        *,
        content_type: str = "application/pdf",
    ) -> dict[str, Any]:
        """Upload a CV and return the content the backend extracted from it."""
        path = Path(file)
        with path.open("rb") as fh:
            response = await self._request(
                "POST",
                "/resume/upload-and-process",
                UPLOAD_ERROR,
                files={"file": (path.name, fh, content_type)},
            )

        try:
            data: Any = response.json()
            # The backend sends the extraction result as a JSON-encoded string.
            if isinstance(data, str):
                data = json.loads(data)
        except ValueError as exc:
            raise ApiError(UPLOAD_ERROR, response.status_code) from exc
        if not isinstance(data, dict):
            raise ApiError(UPLOAD_ERROR, response.status_code)
        return data

    async def list_resumes(self) -> list[ResumeSummary]:
        response = await self._request("GET", "/resume", LIST_ERROR)
        return [ResumeSummary.model_validate(item) for item in response.json()]

    async def get_analysis(self, resume_id: str) -> ResumeAnalysis:
        response = await self._request("GET", f"/resume/{resume_id}/analysis", ANALYSIS_ERROR)
        return ResumeAnalysis.model_validate(response.json())

    async def get_file(self, resume_id: str) -> ResumeFile:
        response = await self._request("GET", f"/resume/{resume_id}/file", FILE_ERROR)
        return ResumeFile(
            content=response.content,
            content_type=response.headers.get("content-type", "application/octet-stream"),
        )

    async def delete_resume(self, resume_id: str) -> None:
        await self._request("DELETE", f"/resume/{resume_id}", DELETE_ERROR)

    async def compare_resumes(self, left_id: str | None, right_id: str | None) -> ResumeComparison:
        """Ask the backend to compare two resumes.

        The selection is checked locally first, so an incomplete or
        duplicate selection never reaches the network.

        Raises:
            ComparisonSelectionError: If the selection is not two distinct ids.
            ApiError: If the backend call fails.
        """
        validate_selection(left_id, right_id)
        response = await self._request(
            "POST",
            "/resume/resumes-comparison",
            COMPARISON_ERROR,
            json=[left_id, right_id],
        )
        return ResumeComparison.model_validate(response.json())
