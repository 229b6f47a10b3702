"""ATS score: 20 points per field found verbatim in the draft."""

from itertools import combinations

from src.fields import DraftFields
from src.scoring import compute_ats_score, field_matches, run_ats_check


STORE_MANAGER = DraftFields(
    contact_info="a@b.com",
    summary="Experienced manager",
    skills="Excel, SQL",
    experience="5 yrs retail",
    job_title="Store Manager",
    job_type="Management",
)

STORE_MANAGER_DRAFT = """Store Manager
a@b.com

Summary: Experienced manager with a track record in high-volume stores.
Skills: Excel, SQL
Experience: 5 yrs retail"""

SCORED = ["contact_info", "summary", "skills", "experience", "job_title"]


def test_all_fields_present_scores_100():
    assert compute_ats_score(STORE_MANAGER_DRAFT, STORE_MANAGER) == 100


def test_each_matched_field_adds_exactly_20():
    """Every subset of matched fields scores 20 per field, whatever the others do."""
    values = {name: getattr(STORE_MANAGER, name) for name in SCORED}
    for size in range(len(SCORED) + 1):
        for subset in combinations(SCORED, size):
            draft = "\n".join(values[name] for name in subset)
            assert compute_ats_score(draft, STORE_MANAGER) == 20 * size, subset


def test_score_is_case_and_whitespace_sensitive():
    draft = STORE_MANAGER_DRAFT.replace("Store Manager", "store manager").replace("Excel, SQL", "Excel,  SQL")
    assert compute_ats_score(draft, STORE_MANAGER) == 60
    matches = field_matches(draft, STORE_MANAGER)
    assert matches["job_title"] is False
    assert matches["skills"] is False
    assert matches["contact_info"] is True


def test_field_must_appear_in_full():
    fields = DraftFields(summary="Experienced manager of teams")
    assert field_matches("Experienced manager", fields)["summary"] is False


def test_empty_fields_count_as_present_by_default():
    """An empty value is a substring of anything, including an empty draft."""
    assert compute_ats_score("", DraftFields()) == 100
    assert compute_ats_score("anything at all", DraftFields()) == 100


def test_ignore_empty_awards_nothing_for_empty_fields():
    assert compute_ats_score("", DraftFields(), ignore_empty=True) == 0
    fields = DraftFields(contact_info="a@b.com", job_title="Store Manager")
    assert compute_ats_score("Store Manager - a@b.com", fields, ignore_empty=True) == 40
    assert compute_ats_score(STORE_MANAGER_DRAFT, STORE_MANAGER, ignore_empty=True) == 100


def test_fields_not_scored_are_ignored():
    fields = DraftFields(job_type="Logistics", job_description="Lead a warehouse team", template="Creative")
    assert compute_ats_score("", fields, ignore_empty=True) == 0


def test_run_ats_check_returns_score_and_suggestions():
    result = run_ats_check(STORE_MANAGER_DRAFT, STORE_MANAGER)
    assert result == {"score": 100, "suggestions": []}


def test_score_determinism():
    scores = {compute_ats_score(STORE_MANAGER_DRAFT[:40], STORE_MANAGER) for _ in range(10)}
    assert len(scores) == 1
    assert scores.pop() in (0, 20, 40, 60, 80, 100)
