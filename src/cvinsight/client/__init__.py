"""Client for the external CV storage and AI analysis backend."""

from cvinsight.client.api import ApiError, CVInsightClient
from cvinsight.client.models import ResumeAnalysis, ResumeComparison, ResumeFile, ResumeSummary

__all__ = [
    "ApiError",
    "CVInsightClient",
    "ResumeAnalysis",
    "ResumeComparison",
    "ResumeFile",
    "ResumeSummary",
]
