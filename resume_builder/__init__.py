"""Resume Builder - draft, score, save and export resumes generated with Groq AI."""

from resume_builder.exporters import export_pdf, export_text, render_pdf, render_text
from resume_builder.web_service import SessionStore, generate_for_session, mock_resume

__all__ = [
    "SessionStore",
    "export_pdf",
    "export_text",
    "generate_for_session",
    "mock_resume",
    "render_pdf",
    "render_text",
]
