"""Services"""

from cvinsight.services.comparison import (
    COMPARISON_METRICS,
    ComparisonSelectionError,
    build_stats,
    extract_skills,
    pick_winner,
    skill_overlap,
    validate_selection,
)
from cvinsight.services.extraction import apply_extraction
from cvinsight.services.validation import validate_address, validate_profile

__all__ = [
    "COMPARISON_METRICS",
    "ComparisonSelectionError",
    "apply_extraction",
    "build_stats",
    "extract_skills",
    "pick_winner",
    "skill_overlap",
    "validate_address",
    "validate_profile",
    "validate_selection",
]
