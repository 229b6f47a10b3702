"""Generation pipeline: render prompt -> call the generation service."""

from src.pipeline.prompt import build_prompt
from src.pipeline.generate import generate_resume

__all__ = [
    "build_prompt",
    "generate_resume",
]
