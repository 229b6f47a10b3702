"""Service layer: the in-process session store and the generation call around it."""

import logging
import threading

from src.config import MODEL_ID
from src.fields import DraftFields
from src.pipeline.generate import generate_resume
from src.pipeline.prompt import PROMPT_VERSION, build_prompt
from src.session import (
    SessionState,
    begin_generation,
    complete_generation,
    fail_generation,
    new_session,
)
from src.utils import hash_text
from resume_builder.audit import log_generation_run

log = logging.getLogger("resume_builder.service")

MOCK_MODEL = "mock"


def mock_resume(fields: DraftFields) -> str:
    """Offline stand-in for the generation service. Every field appears verbatim."""
    title = fields.job_title or "Professional"
    sections = [
        f"{title.upper()}",
        f"{fields.contact_info}",
        "",
        "PROFESSIONAL SUMMARY",
        f"{fields.summary}",
        "",
        "SKILLS",
        f"{fields.skills}",
        "",
        "EXPERIENCE",
        f"{fields.experience}",
        "",
        f"Target role: {fields.job_title}" + (f" ({fields.job_type})" if fields.job_type else ""),
        f"Template: {fields.template}",
    ]
    return "\n".join(sections).strip() + "\n"


class SessionStore:
    """Holds the single session's current state. Swaps are serialized."""

    def __init__(self, state: SessionState | None = None):
        self._state = state or new_session()
        self._lock = threading.Lock()

    @property
    def state(self) -> SessionState:
        return self._state

    def apply(self, transition, *args, **kwargs) -> SessionState:
        """Run a transition against the current state and store the result."""
        with self._lock:
            self._state = transition(self._state, *args, **kwargs)
            return self._state

    def reset(self) -> SessionState:
        with self._lock:
            self._state = new_session()
            return self._state


def _record_run(**kwargs) -> None:
    """Write the generation run log; a log write failure never changes the session outcome."""
    try:
        log_generation_run(**kwargs)
    except OSError:
        log.exception("Could not write generation run log")


def generate_for_session(
    store: SessionStore,
    api_key: str,
    use_mock: bool = False,
    field_updates: dict | None = None,
) -> SessionState:
    """
    Generate a draft from the session's fields, after applying field_updates.

    The updates and the generating flag are applied together, so a request
    rejected because another generation is running changes nothing. The
    session always leaves the generating state: on success with the new
    draft, on failure with the error recorded and the previous draft kept.
    Failures are re-raised.
    """
    state = store.apply(begin_generation, field_updates)
    fields = state.fields
    model = MOCK_MODEL if use_mock else MODEL_ID
    run = {
        "model": model,
        "use_mock": use_mock,
        "template": fields.template,
        "job_type": fields.job_type,
        "job_title": fields.job_title,
        "input_char_count": 0,
        "prompt_version": PROMPT_VERSION,
    }
    log.info("Generation started (model=%s, template=%s)", model, fields.template)

    try:
        prompt = build_prompt(fields)
        run["input_char_count"] = len(prompt)
        run["prompt_hash"] = hash_text(prompt)
        if use_mock:
            result = {"result": mock_resume(fields), "_audit": {"model_id": MOCK_MODEL, "attempts": 1}}
        else:
            result = generate_resume(api_key, fields)
        draft = result["result"]
    except Exception as e:
        store.apply(fail_generation, str(e))
        _record_run(status="error", attempts=getattr(e, "attempts", None), error=str(e), **run)
        raise

    state = store.apply(complete_generation, draft)
    audit = result.get("_audit", {})
    _record_run(
        status="success",
        attempts=audit.get("attempts"),
        model_params=audit.get("model_params"),
        result_char_count=len(draft),
        result_hash=hash_text(draft),
        **run,
    )
    log.info("Generation complete: output_chars=%d attempts=%s", len(draft), audit.get("attempts"))
    return state
