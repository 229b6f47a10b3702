"""Runtime settings read from the environment (.env supported)."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parent.parent

MODEL_ID = os.environ.get("GROQ_MODEL") or "llama-3.3-70b-versatile"
MODEL_PARAMS = {"temperature": 0.3, "top_p": 1}

# Seconds per attempt; one retry on transient failure
GENERATION_TIMEOUT = float(os.environ.get("GENERATION_TIMEOUT") or 60)
GENERATION_ATTEMPTS = 2

# Off by default: empty fields count as present in the draft
ATS_IGNORE_EMPTY_FIELDS = os.environ.get("ATS_IGNORE_EMPTY_FIELDS", "").strip().lower() in ("1", "true", "yes")

LOG_DIR = Path(os.environ.get("RESUME_BUILDER_LOG_DIR") or PROJECT_ROOT / "logs")
# Console level; app.log always records DEBUG
LOG_LEVEL = (os.environ.get("RESUME_BUILDER_LOG_LEVEL") or "INFO").upper()


def get_api_key(api_key: str | None = None) -> str:
    """Explicit key wins; falls back to GROQ_API_KEY from the environment."""
    return (api_key or "").strip() or os.environ.get("GROQ_API_KEY", "").strip()
