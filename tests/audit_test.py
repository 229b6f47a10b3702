"""Audit trail: JSONL audit log, generation run log, application logging."""

import json
import logging
import re

import pytest

from resume_builder import audit

RUN = {
    "model": "mock",
    "use_mock": True,
    "template": "Modern",
    "job_type": "Logistics",
    "job_title": "Dispatcher",
    "input_char_count": 120,
}

ISO_UTC = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


@pytest.fixture
def fresh_logger(monkeypatch):
    monkeypatch.setattr(audit, "LOGGER_NAME", "resume_builder_audit_test")
    logger = logging.getLogger("resume_builder_audit_test")
    yield logger
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_audit_log_omits_unset_keys(isolated_audit_dir):
    audit.audit_log("ats_check", "success", ats_score=0, extra={"num_suggestions": 2})
    entry = json.loads((isolated_audit_dir / "audit.log").read_text(encoding="utf-8"))
    assert ISO_UTC.match(entry.pop("timestamp"))
    assert entry == {
        "action": "ats_check",
        "status": "success",
        "use_mock": False,
        "ats_score": 0,
        "num_suggestions": 2,
    }


def test_generation_runs_csv_header_written_once(isolated_audit_dir):
    audit.log_generation_run(status="success", attempts=1, result_char_count=40, **RUN)
    audit.log_generation_run(status="error", attempts=2, error="timeout", **RUN)

    rows = (isolated_audit_dir / "generation_runs.csv").read_text(encoding="utf-8").splitlines()
    assert rows[0] == ",".join(audit.CSV_HEADERS)
    assert len(rows) == 3

    runs = [json.loads(line) for line in (isolated_audit_dir / "generation_runs.jsonl").read_text(encoding="utf-8").splitlines()]
    assert [r["status"] for r in runs] == ["success", "error"]
    assert runs[1]["error"] == "timeout"


def test_setup_app_logging_writes_debug_to_app_log(isolated_audit_dir, fresh_logger):
    logger = audit.setup_app_logging(level="WARNING")
    assert logger is fresh_logger
    assert audit.setup_app_logging() is logger
    assert len(logger.handlers) == 2

    console = [h for h in logger.handlers if not isinstance(h, logging.FileHandler)][0]
    assert console.level == logging.WARNING

    logger.debug("detail for the file only")
    for handler in logger.handlers:
        handler.flush()
    assert "detail for the file only" in (isolated_audit_dir / "app.log").read_text(encoding="utf-8")
