"""PDF generation utilities using WeasyPrint."""
import logging
import re
from io import BytesIO

from django.conf import settings
from django.http import HttpResponse
from django.template.loader import render_to_string

logger = logging.getLogger("backoffice")


def safe_pdf_filename(stem: str, fallback: str = "document") -> str:
    """Build a safe PDF filename from a human-readable stem."""
    safe = re.sub(r'[\\/:*?"<>|]+', "-", (stem or "").strip())
    safe = safe.strip(" .")
    if not safe:
        safe = fallback
    return f"{safe}.pdf"


def _write_pdf(html_string: str) -> bytes:
    try:
        from weasyprint import HTML
    except Exception as exc:
        logger.exception("WeasyPrint is unavailable for PDF rendering.")
        raise RuntimeError("PDF rendering backend unavailable") from exc

    pdf_file = BytesIO()
    HTML(string=html_string, base_url=str(settings.BASE_DIR)).write_pdf(pdf_file)
    return pdf_file.getvalue()


def render_pdf_bytes(template_name: str, context: dict) -> bytes:
    """Render a Django template to PDF and return the raw document."""
    html_string = render_to_string(template_name, context)
    return _write_pdf(html_string)


def pdf_response(content: bytes, filename: str, disposition: str = "inline") -> HttpResponse:
    """Wrap an already rendered PDF in an HttpResponse."""
    response = HttpResponse(content, content_type="application/pdf")
    response["Content-Disposition"] = f'{disposition}; filename="{filename}"'
    return response
