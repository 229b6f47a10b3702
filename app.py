#!/usr/bin/env python3
"""Flask JSON API for the resume builder - one in-process session."""

from io import BytesIO

import jsonschema
from dotenv import load_dotenv
from flask import Flask, jsonify, request, send_file

from resume_builder.audit import audit_log, setup_app_logging
from resume_builder.exporters import (
    PDF_FILENAME,
    PDF_MIMETYPE,
    TEXT_FILENAME,
    TEXT_MIMETYPE,
    render_pdf,
    render_text,
)
from resume_builder.web_service import MOCK_MODEL, SessionStore, generate_for_session
from src import library as lib
from src import session as sess
from src.config import ATS_IGNORE_EMPTY_FIELDS, MODEL_ID, get_api_key
from src.errors import ExportFailed, GenerationFailed, GenerationInProgress, InvalidIndex
from src.fields import JOB_TYPES, TEMPLATES
from src.validation import validate_draft_fields, validate_draft_text, validate_generate_request

load_dotenv()

log = setup_app_logging()

app = Flask(__name__)
app.config["MAX_CONTENT_LENGTH"] = 2 * 1024 * 1024  # 2MB

store = SessionStore()

NO_API_KEY_MESSAGE = "GROQ_API_KEY is not set. Add it to .env in the project root."


def _invalid_index(e: InvalidIndex, action: str):
    audit_log(action=action, status="error", entry_id=e.entry_id, error=str(e))
    log.warning("%s: unknown library entry %s", action, e.entry_id)
    return jsonify({"error": str(e), "code": "INVALID_INDEX"}), 404


@app.route("/api/options", methods=["GET"])
def api_options():
    """Known job types and templates for the form selects."""
    return jsonify({"job_types": JOB_TYPES, "templates": TEMPLATES})


@app.route("/api/session", methods=["GET"])
def api_session():
    return jsonify(store.state.to_dict())


@app.route("/api/fields", methods=["PUT"])
def api_update_fields():
    """Update any subset of the draft fields."""
    data = request.get_json(silent=True) or {}
    try:
        validate_draft_fields(data)
    except jsonschema.ValidationError as e:
        return jsonify({"error": f"Invalid fields: {e.message}"}), 400
    state = store.apply(sess.update_fields, data)
    return jsonify({"fields": state.fields.to_dict()})


@app.route("/api/generate", methods=["POST"])
def api_generate():
    """Generate a draft from the current fields (optionally updating them first)."""
    data = request.get_json(silent=True) or {}
    try:
        validate_generate_request(data)
        field_updates = data.get("fields") or {}
        validate_draft_fields(field_updates)
    except jsonschema.ValidationError as e:
        return jsonify({"error": f"Invalid request: {e.message}"}), 400
    use_mock = data.get("use_mock", False)
    api_key = get_api_key(data.get("api_key"))
    if not api_key and not use_mock:
        return jsonify({"error": NO_API_KEY_MESSAGE}), 400

    log.info("Generate started (api_key_set=%s, use_mock=%s)", bool(api_key), use_mock)
    try:
        state = generate_for_session(store, api_key, use_mock=use_mock, field_updates=field_updates)
    except GenerationInProgress as e:
        audit_log(action="generate", status="rejected", use_mock=use_mock, error=str(e))
        return jsonify({"error": str(e), "code": "GENERATION_IN_PROGRESS"}), 409
    except GenerationFailed as e:
        audit_log(
            action="generate",
            status="error",
            use_mock=use_mock,
            model=MODEL_ID,
            error=str(e),
            extra={"attempts": e.attempts, "transient": e.transient},
        )
        log.warning("Generate failed after %d attempt(s): %s", e.attempts, e)
        return jsonify({"error": str(e), "code": "GENERATION_FAILED", "retryable": e.transient}), 502
    except Exception as e:
        audit_log(action="generate", status="error", use_mock=use_mock, error=str(e))
        log.exception("Generate failed")
        return jsonify({"error": str(e)}), 500

    audit_log(
        action="generate",
        status="success",
        use_mock=use_mock,
        model=MOCK_MODEL if use_mock else MODEL_ID,
        draft_char_count=len(state.draft),
    )
    return jsonify({"result": state.draft, "status": state.status})


@app.route("/api/draft", methods=["PUT"])
def api_edit_draft():
    data = request.get_json(silent=True) or {}
    try:
        validate_draft_text(data)
    except jsonschema.ValidationError as e:
        return jsonify({"error": f"Invalid draft: {e.message}"}), 400
    state = store.apply(sess.edit_draft, data["draft"])
    return jsonify({"draft": state.draft, "status": state.status})


@app.route("/api/ats-check", methods=["POST"])
def api_ats_check():
    """Score the live draft against the live fields and list suggestions."""
    state = store.apply(sess.run_ats_check, ignore_empty=ATS_IGNORE_EMPTY_FIELDS)
    audit_log(
        action="ats_check",
        status="success",
        draft_char_count=len(state.draft),
        ats_score=state.ats_score,
        extra={"num_suggestions": len(state.ats_suggestions)},
    )
    log.info("ATS check: score=%d%% suggestions=%d", state.ats_score, len(state.ats_suggestions))
    return jsonify({"score": state.ats_score, "suggestions": list(state.ats_suggestions)})


@app.route("/api/library", methods=["GET"])
def api_library():
    """Library entries, filtered by ?tag= (case-insensitive substring)."""
    tag = request.args.get("tag")
    if tag is not None:
        state = store.apply(sess.set_search_tag, tag)
    else:
        state = store.state
    return jsonify({
        "search_tag": state.search_tag,
        "entries": [e.to_dict() for e in sess.visible_entries(state)],
    })


@app.route("/api/library", methods=["POST"])
def api_save_to_library():
    """Snapshot the live draft into the library with its current score."""
    state = store.apply(sess.save_to_library, ignore_empty=ATS_IGNORE_EMPTY_FIELDS)
    entry = state.library.entries[-1]
    audit_log(
        action="save",
        status="success",
        entry_id=entry.id,
        ats_score=entry.score,
        draft_char_count=len(entry.content),
        extra={"tag": entry.tag},
    )
    log.info("Saved library entry %s (score=%d%%)", entry.id, entry.score)
    return jsonify(entry.to_dict()), 201


@app.route("/api/library/<entry_id>", methods=["GET"])
def api_view_entry(entry_id: str):
    try:
        state = store.apply(sess.open_view, entry_id)
    except InvalidIndex as e:
        return _invalid_index(e, "view")
    return jsonify(lib.get(state.library, entry_id).to_dict())


@app.route("/api/library/<entry_id>/view", methods=["DELETE"])
def api_close_view(entry_id: str):
    """Close the entry view. A different or already closed view is left as it is."""
    state = store.state
    if state.viewing_entry_id == entry_id:
        state = store.apply(sess.close_view)
    return jsonify({"viewing_entry_id": state.viewing_entry_id})


@app.route("/api/library/<entry_id>/load", methods=["POST"])
def api_load_entry(entry_id: str):
    """Install a saved entry as the live draft. Unsaved edits are overwritten."""
    try:
        state = store.apply(sess.load_from_library, entry_id)
    except InvalidIndex as e:
        return _invalid_index(e, "load")
    audit_log(action="load", status="success", entry_id=entry_id, draft_char_count=len(state.draft))
    return jsonify({"draft": state.draft, "status": state.status})


@app.route("/api/library/<entry_id>", methods=["DELETE"])
def api_delete_entry(entry_id: str):
    try:
        state = store.apply(sess.delete_from_library, entry_id)
    except InvalidIndex as e:
        return _invalid_index(e, "delete")
    audit_log(action="delete", status="success", entry_id=entry_id)
    log.info("Deleted library entry %s (%d left)", entry_id, len(state.library))
    return "", 204


def _send_export(action: str, render, filename: str, mimetype: str):
    draft = store.state.draft
    if not draft:
        return jsonify({"error": "There is no draft to export"}), 400
    try:
        data = render(draft)
    except ExportFailed as e:
        audit_log(action=action, status="error", filename=filename, error=str(e))
        log.exception("%s failed", action)
        return jsonify({"error": str(e), "code": "EXPORT_FAILED"}), 500
    audit_log(action=action, status="success", filename=filename, extra={"bytes": len(data)})
    return send_file(BytesIO(data), mimetype=mimetype, as_attachment=True, download_name=filename)


@app.route("/api/export/text", methods=["GET"])
def api_export_text():
    return _send_export("export_text", render_text, TEXT_FILENAME, TEXT_MIMETYPE)


@app.route("/api/export/pdf", methods=["GET"])
def api_export_pdf():
    return _send_export("export_pdf", render_pdf, PDF_FILENAME, PDF_MIMETYPE)


if __name__ == "__main__":
    api_key_set = bool(get_api_key())
    log.info(
        "Resume builder starting on http://127.0.0.1:5000 | GROQ_API_KEY set: %s | Logs: logs/app.log | Audit: logs/audit.log",
        api_key_set,
    )
    if not api_key_set:
        log.warning("GROQ_API_KEY not found in .env - generation will fail until it is set (use_mock still works)")
    app.run(debug=True, port=5000)
