"""Draft export: verbatim text file and a paginated PDF."""

from io import BytesIO
from pathlib import Path

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from src.errors import ExportFailed

TEXT_FILENAME = "resume.txt"
TEXT_MIMETYPE = "text/plain"
PDF_FILENAME = "resume.pdf"
PDF_MIMETYPE = "application/pdf"

MARGIN = 10 * mm
TEXT_WIDTH = 180 * mm
FONT = "Helvetica"
FONT_SIZE = 16
LINE_HEIGHT = FONT_SIZE * 1.15


def render_text(draft: str) -> bytes:
    return draft.encode("utf-8")


def _fit_prefix(word: str, font: str, size: float, max_width: float) -> int:
    """Length of the longest prefix of word that fits max_width (at least one character)."""
    n = 1
    while n < len(word) and stringWidth(word[: n + 1], font, size) <= max_width:
        n += 1
    return n


def wrap_text(text: str, font: str = FONT, size: float = FONT_SIZE, max_width: float = TEXT_WIDTH) -> list[str]:
    """
    Reflow text to fit max_width. Line breaks in the input are kept (blank lines
    included), words wider than a line are broken by character.
    """
    lines = []
    for paragraph in text.replace("\r\n", "\n").split("\n"):
        words = paragraph.split()
        if not words:
            lines.append("")
            continue
        current = ""
        for word in words:
            candidate = f"{current} {word}" if current else word
            if stringWidth(candidate, font, size) <= max_width:
                current = candidate
                continue
            if current:
                lines.append(current)
            while stringWidth(word, font, size) > max_width:
                cut = _fit_prefix(word, font, size, max_width)
                lines.append(word[:cut])
                word = word[cut:]
            current = word
        lines.append(current)
    return lines


def render_pdf(draft: str) -> bytes:
    """A4 pages, text reflowed to a fixed width, a new page whenever the bottom margin is reached."""
    try:
        buffer = BytesIO()
        doc = canvas.Canvas(buffer, pagesize=A4)
        doc.setTitle("Resume")
        _, page_height = A4
        cursor_y = page_height - MARGIN
        doc.setFont(FONT, FONT_SIZE)

        for line in wrap_text(draft):
            if cursor_y < MARGIN:
                doc.showPage()
                doc.setFont(FONT, FONT_SIZE)
                cursor_y = page_height - MARGIN
            if line:
                doc.drawString(MARGIN, cursor_y, line)
            cursor_y -= LINE_HEIGHT

        doc.save()
    except Exception as e:
        raise ExportFailed(f"Could not render PDF: {e}") from e
    buffer.seek(0)
    return buffer.getvalue()


def _write(path: Path, data: bytes) -> Path:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    except OSError as e:
        raise ExportFailed(f"Could not write {path}: {e}") from e
    return path


def export_text(draft: str, directory: str | Path) -> Path:
    """Write the draft verbatim to <directory>/resume.txt."""
    return _write(Path(directory) / TEXT_FILENAME, render_text(draft))


def export_pdf(draft: str, directory: str | Path) -> Path:
    """Write the paginated draft to <directory>/resume.pdf."""
    return _write(Path(directory) / PDF_FILENAME, render_pdf(draft))
