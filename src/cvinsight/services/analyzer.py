"""Load the AI analysis and original file of the resume a user selects.

Selecting resumes in quick succession starts overlapping requests.  Only
the newest selection may publish results; responses that arrive for an
older one are dropped.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from cvinsight.client.api import ANALYSIS_ERROR, FILE_ERROR, ApiError

if TYPE_CHECKING:
    from cvinsight.client.api import CVInsightClient
    from cvinsight.client.models import ResumeAnalysis, ResumeFile

logger = logging.getLogger(__name__)

__all__ = ["AnalysisState", "LatestRequestGuard", "ResumeAnalyzer"]


class LatestRequestGuard:
    """Hands out increasing tokens; only the newest token is current."""

    def __init__(self) -> None:
        self._latest = 0

    def next(self) -> int:
        self._latest += 1
        return self._latest

    def is_current(self, token: int) -> bool:
        return token == self._latest


@dataclass
class AnalysisState:
    resume_id: str | None = None
    analysis: ResumeAnalysis | None = None
    file: ResumeFile | None = None
    loading: bool = False
    errors: list[str] = field(default_factory=list)

    @property
    def error(self) -> str | None:
        """First error to show, if any."""
        return self.errors[0] if self.errors else None


class ResumeAnalyzer:
    """Fetch analysis and file for the selected resume, newest selection wins."""

    def __init__(self, client: CVInsightClient) -> None:
        self._client = client
        self._guard = LatestRequestGuard()
        self.state = AnalysisState()

    async def select(self, resume_id: str) -> AnalysisState:
        """Select *resume_id* and load its analysis and file concurrently.

        Returns the analyzer state after this selection settles.  If a newer
        selection started meanwhile, the state is left to that selection.
        """
        token = self._guard.next()
        self.state = AnalysisState(resume_id=resume_id, loading=True)

        analysis, file = await asyncio.gather(
            self._client.get_analysis(resume_id),
            self._client.get_file(resume_id),
            return_exceptions=True,
        )

        if not self._guard.is_current(token):
            logger.debug("Dropping stale analysis for resume %s", resume_id)
            return self.state

        state = AnalysisState(resume_id=resume_id)
        if isinstance(analysis, BaseException):
            state.errors.append(self._message(analysis, ANALYSIS_ERROR))
        else:
            state.analysis = analysis
        if isinstance(file, BaseException):
            state.errors.append(self._message(file, FILE_ERROR))
        else:
            state.file = file

        self.state = state
        return state

    @staticmethod
    def _message(exc: BaseException, fallback: str) -> str:
        if isinstance(exc, ApiError):
            return exc.message
        # Anything else is a bug; keep the traceback in the logs.
        logger.error("Unexpected error loading resume data", exc_info=exc)
        return fallback
