"""Advisory hints for missing resume sections."""

from src.fields import DraftFields
from src.scoring.engine import compute_ats_score

CONTACT_SUGGESTION = "Add contact information."
SUMMARY_SUGGESTION = "Add a professional summary."
SKILLS_SUGGESTION = "Include a skills section with relevant keywords."
EXPERIENCE_SUGGESTION = "List work experience in bullet format."
JOB_TITLE_SUGGESTION = "Mention your job title ({job_title}) inside the resume text."


def generate_suggestions(draft: str, fields: DraftFields) -> list[str]:
    """
    Ordered suggestions, at most five.

    The first four check whether the field itself is empty, not whether it
    appears in the draft. Only the job title is checked against the draft.
    """
    draft = draft or ""
    suggestions = []
    if not fields.contact_info:
        suggestions.append(CONTACT_SUGGESTION)
    if not fields.summary:
        suggestions.append(SUMMARY_SUGGESTION)
    if not fields.skills:
        suggestions.append(SKILLS_SUGGESTION)
    if not fields.experience:
        suggestions.append(EXPERIENCE_SUGGESTION)
    if fields.job_title not in draft:
        suggestions.append(JOB_TITLE_SUGGESTION.format(job_title=fields.job_title))
    return suggestions


def run_ats_check(draft: str, fields: DraftFields, ignore_empty: bool = False) -> dict:
    """Score and suggestions together, as shown after "Run ATS Check"."""
    return {
        "score": compute_ats_score(draft, fields, ignore_empty=ignore_empty),
        "suggestions": generate_suggestions(draft, fields),
    }
