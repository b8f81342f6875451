"""
File Upload Utility - Store resume files and extract their text.

Supported formats:
- PDF (.pdf) using PyPDF2
- Word (.docx) using python-docx
- Plain Text (.txt)

Max file size: settings.max_upload_mb
"""

import io
import logging
import os
import time
import uuid
from typing import Tuple

from docx import Document
from fastapi import HTTPException, UploadFile
from PyPDF2 import PdfReader

from career_portal.core.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = (".pdf", ".docx", ".txt")
FORMAT_NAMES = {".pdf": "PDF", ".docx": "Word Document", ".txt": "Plain Text"}


def get_file_extension(filename: str) -> str:
    """Lower-cased extension with the dot; empty when there is none."""
    return os.path.splitext(filename)[1].lower()


async def read_upload(file: UploadFile) -> Tuple[bytes, str, str]:
    """
    Validate and read an uploaded resume.

    Returns:
        Tuple of (content, filename, extension)

    Raises:
        HTTPException on validation errors
    """
    if not file.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")

    ext = get_file_extension(file.filename)
    if ext not in ALLOWED_EXTENSIONS:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type '{ext}'. Allowed: PDF, DOCX, TXT"
        )

    content = await file.read()

    if len(content) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum size: {settings.max_upload_mb}MB"
        )

    return content, file.filename, ext


def extract_text(content: bytes, ext: str) -> str:
    """Plain text of a validated upload; 400 when nothing readable is inside."""
    text = EXTRACTORS[ext](content)
    if not text.strip():
        raise HTTPException(
            status_code=400,
            detail="Could not extract text from file. File may be empty or corrupted."
        )
    return text


def extract_from_pdf(content: bytes) -> str:
    try:
        pages = PdfReader(io.BytesIO(content)).pages
        return "\n".join(filter(None, (page.extract_text() for page in pages)))
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Invalid PDF file: {e}")


def extract_from_docx(content: bytes) -> str:
    """Paragraphs first, then table rows as pipe-separated cells."""
    try:
        doc = Document(io.BytesIO(content))
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Invalid DOCX file: {e}")

    lines = [p.text for p in doc.paragraphs if p.text.strip()]
    for table in doc.tables:
        for row in table.rows:
            cells = [c.text.strip() for c in row.cells if c.text.strip()]
            if cells:
                lines.append(" | ".join(cells))
    return "\n".join(lines)


def extract_from_txt(content: bytes) -> str:
    # latin-1 maps every byte, so this never fails
    for encoding in ("utf-8", "cp1252"):
        try:
            return content.decode(encoding)
        except UnicodeDecodeError:
            pass
    return content.decode("latin-1")


EXTRACTORS = {
    ".pdf": extract_from_pdf,
    ".docx": extract_from_docx,
    ".txt": extract_from_txt,
}


def save_resume_file(content: bytes, ext: str) -> str:
    """Write the upload under settings.upload_dir; returns the stored path."""
    os.makedirs(settings.upload_dir, exist_ok=True)
    stored_name = f"resume-{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}{ext}"
    path = os.path.join(settings.upload_dir, stored_name)
    with open(path, 'wb') as f:
        f.write(content)
    return path


def delete_resume_file(path: str) -> None:
    """Remove a stored resume; a missing file is not an error."""
    if path and os.path.exists(path):
        os.remove(path)
        logger.info("Deleted resume file %s", path)


def get_supported_formats() -> dict:
    return {
        "supported_formats": [
            {"extension": ext, "name": FORMAT_NAMES[ext], "available": True}
            for ext in ALLOWED_EXTENSIONS
        ],
        "max_size_mb": settings.max_upload_mb
    }
