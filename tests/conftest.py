import os
import tempfile

import pytest

# Keep app.log / audit.log out of the repo when app.py is imported by tests
os.environ.setdefault("RESUME_BUILDER_LOG_DIR", tempfile.mkdtemp(prefix="resume_builder_logs_"))


@pytest.fixture(autouse=True)
def isolated_audit_dir(tmp_path, monkeypatch):
    """Each test writes audit and generation-run logs into its own directory."""
    from resume_builder import audit

    log_dir = tmp_path / "logs"
    monkeypatch.setattr(audit, "AUDIT_DIR", log_dir)
    return log_dir
