"""Audit trail for generation runs and API operations."""

import csv
import json
import logging
from pathlib import Path

from src.config import LOG_DIR, LOG_LEVEL
from src.utils import iso_now

LOGGER_NAME = "resume_builder"

AUDIT_DIR = LOG_DIR
AUDIT_FILE = "audit.log"
RUNS_JSONL = "generation_runs.jsonl"
RUNS_CSV = "generation_runs.csv"
APP_LOG = "app.log"

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

CSV_HEADERS = [
    "timestamp",
    "status",
    "model",
    "use_mock",
    "template",
    "job_type",
    "job_title",
    "prompt_version",
    "prompt_hash",
    "model_params",
    "attempts",
    "input_char_count",
    "result_char_count",
    "result_hash",
    "error",
]


def _log_path(name: str) -> Path:
    """Path of a file under the current audit directory, creating the directory."""
    AUDIT_DIR.mkdir(parents=True, exist_ok=True)
    return AUDIT_DIR / name


def _append_jsonl(name: str, entry: dict) -> None:
    with open(_log_path(name), "a", encoding="utf-8") as f:
        f.write(json.dumps(entry, default=str) + "\n")


def log_generation_run(
    *,
    status: str,
    model: str,
    use_mock: bool,
    template: str,
    job_type: str,
    job_title: str,
    input_char_count: int,
    result_char_count: int = 0,
    attempts: int | None = None,
    prompt_version: str | None = None,
    prompt_hash: str | None = None,
    model_params: dict | None = None,
    result_hash: str | None = None,
    error: str | None = None,
):
    """
    Record one generation request for later review.
    Appends to generation_runs.jsonl and generation_runs.csv (header on first write).
    """
    entry = {
        "timestamp": iso_now(),
        "status": status,
        "model": model,
        "use_mock": use_mock,
        "template": template,
        "job_type": job_type,
        "job_title": job_title,
        "prompt_version": prompt_version,
        "prompt_hash": prompt_hash,
        "model_params": model_params,
        "attempts": attempts,
        "input_char_count": input_char_count,
        "result_char_count": result_char_count,
        "result_hash": result_hash,
        "error": error,
    }
    _append_jsonl(RUNS_JSONL, entry)

    csv_path = _log_path(RUNS_CSV)
    write_header = not csv_path.exists()
    with open(csv_path, "a", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_HEADERS)
        if write_header:
            writer.writeheader()
        row = {k: ("" if v is None else v) for k, v in entry.items()}
        row["model_params"] = json.dumps(model_params or {})
        writer.writerow(row)


def audit_log(
    action: str,
    status: str,
    *,
    use_mock: bool = False,
    model: str | None = None,
    draft_char_count: int | None = None,
    ats_score: int | None = None,
    entry_id: str | None = None,
    filename: str | None = None,
    error: str | None = None,
    extra: dict | None = None,
):
    """Append one user action to audit.log (JSONL). Unset optional keys are omitted."""
    optional = {
        "model": model,
        "draft_char_count": draft_char_count,
        "ats_score": ats_score,
        "entry_id": entry_id,
        "filename": filename,
        "error": error,
    }
    entry = {"timestamp": iso_now(), "action": action, "status": status, "use_mock": use_mock}
    entry.update({k: v for k, v in optional.items() if v not in (None, "")})
    entry.update(extra or {})
    _append_jsonl(AUDIT_FILE, entry)


def setup_app_logging(level: str | None = None) -> logging.Logger:
    """
    Attach console and app.log handlers to the resume_builder logger.

    The console shows `level` (default RESUME_BUILDER_LOG_LEVEL, INFO); app.log
    keeps DEBUG. Child loggers (resume_builder.service, resume_builder.pipeline)
    propagate here. Calling it again returns the configured logger unchanged.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return logger
    logger.setLevel(logging.DEBUG)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)

    handlers = [
        (logging.StreamHandler(), level or LOG_LEVEL),
        (logging.FileHandler(_log_path(APP_LOG), encoding="utf-8"), logging.DEBUG),
    ]
    for handler, handler_level in handlers:
        handler.setLevel(handler_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger
