"""ATS completeness score. Pure code, no LLM."""

from src.fields import DraftFields

POINTS_PER_FIELD = 20
MAX_SCORE = 100


def scored_field_values(fields: DraftFields) -> list[tuple[str, str]]:
    """The five fields the score checks, in scoring order."""
    return [
        ("contact_info", fields.contact_info),
        ("summary", fields.summary),
        ("skills", fields.skills),
        ("experience", fields.experience),
        ("job_title", fields.job_title),
    ]


def field_matches(draft: str, fields: DraftFields, ignore_empty: bool = False) -> dict[str, bool]:
    """
    Per-field presence: True if the field's full value is a contiguous substring of draft.
    Case- and whitespace-sensitive.

    An empty value is a substring of any draft and therefore counts as present,
    unless ignore_empty is set.
    """
    draft = draft or ""
    result = {}
    for name, value in scored_field_values(fields):
        if ignore_empty and not value:
            result[name] = False
        else:
            result[name] = value in draft
    return result


def compute_ats_score(draft: str, fields: DraftFields, ignore_empty: bool = False) -> int:
    """
    20 points per field found verbatim in the draft, over contact info, summary,
    skills, experience and job title. Always one of 0, 20, 40, 60, 80, 100.
    """
    matches = field_matches(draft, fields, ignore_empty=ignore_empty)
    return sum(POINTS_PER_FIELD for matched in matches.values() if matched)
