"""Deterministic ATS scoring and suggestions."""

from src.scoring.engine import compute_ats_score, field_matches
from src.scoring.suggestions import generate_suggestions, run_ats_check

__all__ = ["compute_ats_score", "field_matches", "generate_suggestions", "run_ats_check"]
