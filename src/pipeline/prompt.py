"""Prompt rendering for resume generation."""

import re
from pathlib import Path

from src.fields import DraftFields

PROMPT_VERSION = "GENERATE_RESUME_V1"
SYSTEM_PROMPT = (
    "You are an expert resume writer. Write the complete resume as plain text. "
    'Return strictly valid JSON: an object with a single string field "result" containing the resume.'
)
PLACEHOLDER = re.compile(r"\{\{(\w+)\}\}")


def _load_prompt(name: str) -> str:
    prompt_path = Path(__file__).resolve().parent.parent.parent / "prompts" / f"{name}.txt"
    return prompt_path.read_text(encoding="utf-8")


def build_prompt(fields: DraftFields) -> str:
    """
    Interpolate every draft field into the generation template in a single pass,
    so field text that looks like a placeholder is left alone. Empty fields stay empty.
    """
    values = fields.to_dict()
    template = _load_prompt("generate_resume")
    return PLACEHOLDER.sub(lambda m: values.get(m.group(1), m.group(0)), template).strip()
