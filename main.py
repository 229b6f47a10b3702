#!/usr/bin/env python3
"""CLI for the resume builder: generate a draft, run the ATS check, export."""

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

from resume_builder import SessionStore, export_pdf, export_text, generate_for_session
from resume_builder.audit import setup_app_logging
from src import session as sess
from src.config import ATS_IGNORE_EMPTY_FIELDS, get_api_key
from src.errors import ExportFailed, GenerationFailed
from src.fields import DEFAULT_TEMPLATE, DraftFields
from src.scoring import run_ats_check

load_dotenv()

FIELD_FLAGS = [
    ("contact_info", "--contact", "Contact information (phone, email, LinkedIn)"),
    ("job_title", "--job-title", "Job title (e.g. Logistics Manager)"),
    ("job_type", "--job-type", "Job field/category (e.g. Logistics)"),
    ("job_description", "--job-description", "Target job description text"),
    ("summary", "--summary", "Professional summary"),
    ("skills", "--skills", "Key skills (comma-separated)"),
    ("experience", "--experience", "Experience (companies, achievements)"),
    ("template", "--template", f"Resume style template (default: {DEFAULT_TEMPLATE})"),
]


def _add_field_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--fields",
        type=Path,
        default=None,
        help="JSON file with draft fields; individual flags override it",
    )
    for name, flag, help_text in FIELD_FLAGS:
        parser.add_argument(flag, dest=name, default=None, help=help_text)


def _load_fields(args: argparse.Namespace) -> DraftFields:
    data = {}
    if args.fields:
        if not args.fields.exists():
            print(f"Error: Fields file not found: {args.fields}", file=sys.stderr)
            sys.exit(1)
        try:
            data = json.loads(args.fields.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            print(f"Error: Fields file is not valid JSON: {e}", file=sys.stderr)
            sys.exit(1)
    for name, _, _ in FIELD_FLAGS:
        value = getattr(args, name)
        if value is not None:
            data[name] = value
    return DraftFields.from_dict(data)


def _print_check(result: dict, as_json: bool) -> None:
    if as_json:
        print(json.dumps(result, indent=2))
        return
    print(f"=== ATS Optimization Score: {result['score']}% ===")
    for suggestion in result["suggestions"]:
        print(f"  • {suggestion}")


def _export(draft: str, args: argparse.Namespace) -> None:
    try:
        if args.txt:
            path = export_text(draft, args.txt)
            print(f"Text résumé saved to: {path}", file=sys.stderr)
        if args.pdf:
            path = export_pdf(draft, args.pdf)
            print(f"PDF résumé saved to: {path}", file=sys.stderr)
    except ExportFailed as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def cmd_generate(args: argparse.Namespace) -> None:
    """Generate a draft from fields, print it, optionally check and export."""
    api_key = get_api_key(args.api_key)
    if not api_key and not args.mock:
        print("Error: GROQ_API_KEY required. Set in .env, pass --api-key, or use --mock", file=sys.stderr)
        sys.exit(1)

    store = SessionStore()
    try:
        state = generate_for_session(store, api_key, use_mock=args.mock, field_updates=_load_fields(args).to_dict())
    except GenerationFailed as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(state.draft)
    if args.check:
        state = store.apply(sess.run_ats_check, ignore_empty=ATS_IGNORE_EMPTY_FIELDS)
        _print_check({"score": state.ats_score, "suggestions": list(state.ats_suggestions)}, args.json)
    _export(state.draft, args)


def cmd_check(args: argparse.Namespace) -> None:
    """Score an existing draft file against fields."""
    if not args.draft.exists():
        print(f"Error: Draft file not found: {args.draft}", file=sys.stderr)
        sys.exit(1)
    draft = args.draft.read_text(encoding="utf-8")
    fields = _load_fields(args)
    _print_check(run_ats_check(draft, fields, ignore_empty=ATS_IGNORE_EMPTY_FIELDS), args.json)
    _export(draft, args)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Build ATS-optimized résumés with Groq AI")
    parser.add_argument("--api-key", help="Groq API key (or GROQ_API_KEY env)")
    sub = parser.add_subparsers(dest="command", required=True)

    p_gen = sub.add_parser("generate", help="Generate a résumé draft from career details")
    _add_field_arguments(p_gen)
    p_gen.add_argument("--mock", action="store_true", help="Use the offline mock generator")
    p_gen.add_argument("--check", action="store_true", help="Run the ATS check on the generated draft")
    p_gen.set_defaults(func=cmd_generate)

    p_check = sub.add_parser("check", help="Run the ATS check on an existing draft")
    p_check.add_argument("draft", type=Path, help="Path to the draft text file")
    _add_field_arguments(p_check)
    p_check.set_defaults(func=cmd_check)

    for p in (p_gen, p_check):
        p.add_argument("--json", action="store_true", help="Output the ATS check as JSON")
        p.add_argument("--txt", type=Path, default=None, help="Directory to write resume.txt into")
        p.add_argument("--pdf", type=Path, default=None, help="Directory to write resume.pdf into")

    args = parser.parse_args(argv)
    setup_app_logging()
    args.func(args)


if __name__ == "__main__":
    main()
