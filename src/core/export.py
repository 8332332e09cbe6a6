"""Archive export utilities."""
import io
import zipfile
from typing import Iterable

from django.http import HttpResponse


def zip_bytes(files: Iterable[tuple[str, bytes]]) -> bytes:
    """Pack ``(arcname, content)`` pairs into an in-memory ZIP archive."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for arcname, content in files:
            archive.writestr(arcname, content)
    return buffer.getvalue()


def zip_response(files: Iterable[tuple[str, bytes]], filename: str) -> HttpResponse:
    """Build a ZIP download from ``(arcname, content)`` pairs.

    Args:
        files: iterable of archive member names and their bytes.
        filename: download filename (without extension)
    """
    response = HttpResponse(zip_bytes(files), content_type="application/zip")
    response["Content-Disposition"] = f'attachment; filename="{filename}.zip"'
    return response
