"""
Session state for a single user, as an immutable value.

Every user action is a named transition taking a SessionState and returning a
new one. Nothing here performs I/O; the generation call happens between
begin_generation and complete_generation/fail_generation.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime

from src import library as lib
from src.errors import GenerationInProgress
from src.fields import DraftFields
from src.scoring import compute_ats_score, generate_suggestions

STATUS_EMPTY = "empty"
STATUS_GENERATING = "generating"
STATUS_READY = "ready"


@dataclass(frozen=True)
class SessionState:
    fields: DraftFields = field(default_factory=DraftFields)
    draft: str = ""
    status: str = STATUS_EMPTY
    error: str | None = None
    library: lib.Library = field(default_factory=lib.Library)
    search_tag: str = ""
    ats_score: int | None = None
    ats_suggestions: tuple[str, ...] = ()
    viewing_entry_id: str | None = None

    @property
    def is_generating(self) -> bool:
        return self.status == STATUS_GENERATING

    def to_dict(self) -> dict:
        return {
            "fields": self.fields.to_dict(),
            "draft": self.draft,
            "status": self.status,
            "error": self.error,
            "library": self.library.to_list(),
            "visible_entries": [e.to_dict() for e in visible_entries(self)],
            "search_tag": self.search_tag,
            "ats_score": self.ats_score,
            "ats_suggestions": list(self.ats_suggestions),
            "viewing_entry_id": self.viewing_entry_id,
        }


def new_session() -> SessionState:
    return SessionState()


def _status_for(draft: str) -> str:
    return STATUS_READY if draft else STATUS_EMPTY


def update_fields(state: SessionState, updates: dict) -> SessionState:
    return replace(state, fields=state.fields.with_updates(updates))


def begin_generation(state: SessionState, updates: dict | None = None) -> SessionState:
    """
    Enter the generating state, applying any field updates first.

    A request while generating is rejected before the updates are applied, so a
    rejected request leaves the fields as they were.
    """
    if state.is_generating:
        raise GenerationInProgress("A resume is already being generated")
    fields = state.fields.with_updates(updates) if updates else state.fields
    return replace(state, fields=fields, status=STATUS_GENERATING, error=None)


def complete_generation(state: SessionState, draft: str) -> SessionState:
    """Install the generated text as the live draft."""
    return replace(state, draft=draft, status=_status_for(draft), error=None)


def fail_generation(state: SessionState, error: str) -> SessionState:
    """Leave the draft untouched and record the error for the user."""
    return replace(state, status=_status_for(state.draft), error=error)


def _draft_status(state: SessionState, draft: str) -> str:
    """Status after the live draft is replaced. A running generation stays running."""
    return STATUS_GENERATING if state.is_generating else _status_for(draft)


def edit_draft(state: SessionState, draft: str) -> SessionState:
    return replace(state, draft=draft, status=_draft_status(state, draft))


def run_ats_check(state: SessionState, ignore_empty: bool = False) -> SessionState:
    return replace(
        state,
        ats_score=compute_ats_score(state.draft, state.fields, ignore_empty=ignore_empty),
        ats_suggestions=tuple(generate_suggestions(state.draft, state.fields)),
    )


def save_to_library(
    state: SessionState,
    now: datetime | None = None,
    ignore_empty: bool = False,
) -> SessionState:
    """Snapshot fields and draft into the library, freezing the current score."""
    score = compute_ats_score(state.draft, state.fields, ignore_empty=ignore_empty)
    return replace(state, library=lib.save(state.library, state.fields, state.draft, score, now=now))


def load_from_library(state: SessionState, entry_id: str) -> SessionState:
    """Replace the live draft with a saved entry. Unsaved edits are discarded."""
    content = lib.load(lib.get(state.library, entry_id))
    return replace(state, draft=content, status=_draft_status(state, content), error=None)


def delete_from_library(state: SessionState, entry_id: str) -> SessionState:
    library = lib.remove(state.library, entry_id)
    viewing = None if state.viewing_entry_id == entry_id else state.viewing_entry_id
    return replace(state, library=library, viewing_entry_id=viewing)


def set_search_tag(state: SessionState, tag: str) -> SessionState:
    return replace(state, search_tag=tag or "")


def open_view(state: SessionState, entry_id: str) -> SessionState:
    lib.get(state.library, entry_id)
    return replace(state, viewing_entry_id=entry_id)


def close_view(state: SessionState) -> SessionState:
    return replace(state, viewing_entry_id=None)


def visible_entries(state: SessionState) -> list[lib.LibraryEntry]:
    """Library entries matching the current search tag."""
    return lib.find(state.library, state.search_tag)
