"""CLI: generate with the mock service, check a draft file, export."""

import json

import pytest

import main


def test_generate_mock_with_check_and_exports(tmp_path, capsys):
    main.main([
        "generate",
        "--mock",
        "--check",
        "--json",
        "--job-title", "Store Manager",
        "--contact", "a@b.com",
        "--summary", "Experienced manager",
        "--skills", "Excel, SQL",
        "--experience", "5 yrs retail",
        "--txt", str(tmp_path),
        "--pdf", str(tmp_path),
    ])
    out = capsys.readouterr().out
    assert "STORE MANAGER" in out
    check = json.loads(out[out.index("{"):])
    assert check == {"score": 100, "suggestions": []}
    assert (tmp_path / "resume.txt").read_text(encoding="utf-8").startswith("STORE MANAGER")
    assert (tmp_path / "resume.pdf").read_bytes().startswith(b"%PDF")


def test_generate_without_key_exits(monkeypatch, capsys):
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    with pytest.raises(SystemExit) as exc_info:
        main.main(["generate", "--job-title", "Buyer"])
    assert exc_info.value.code == 1
    assert "GROQ_API_KEY" in capsys.readouterr().err


def test_check_reads_fields_file_and_flags_override(tmp_path, capsys):
    draft = tmp_path / "draft.txt"
    draft.write_text("Buyer with Excel, SQL", encoding="utf-8")
    fields = tmp_path / "fields.json"
    fields.write_text(json.dumps({"job_title": "Store Manager", "skills": "Excel, SQL"}), encoding="utf-8")

    main.main(["check", str(draft), "--fields", str(fields), "--job-title", "Buyer", "--json"])
    result = json.loads(capsys.readouterr().out)
    # contact, summary, experience are empty and count as present
    assert result["score"] == 100
    assert result["suggestions"] == [
        "Add contact information.",
        "Add a professional summary.",
        "List work experience in bullet format.",
    ]


def test_check_missing_draft_exits(tmp_path, capsys):
    with pytest.raises(SystemExit):
        main.main(["check", str(tmp_path / "nope.txt")])
    assert "Draft file not found" in capsys.readouterr().err
