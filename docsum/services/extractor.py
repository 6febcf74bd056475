import io
import os
import zipfile
from typing import Callable, Dict

import docx
from docx.opc.exceptions import PackageNotFoundError
from pypdf import PdfReader
from pypdf.errors import PyPdfError

from .validation import InputValidationError, ValidationKind


class ExtractionError(Exception):
    """The upload had a supported extension but its contents could not be parsed."""
    pass


def extract_pdf(data: bytes) -> str:
    reader = PdfReader(io.BytesIO(data))
    return "\n".join((page.extract_text() or "") for page in reader.pages)


def extract_docx(data: bytes) -> str:
    document = docx.Document(io.BytesIO(data))
    return "\n".join(p.text for p in document.paragraphs)


def extract_txt(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


EXTRACTORS: Dict[str, Callable[[bytes], str]] = {
    ".pdf": extract_pdf,
    ".docx": extract_docx,
    ".txt": extract_txt,
}


def file_extension(filename: str) -> str:
    return os.path.splitext(filename or "")[1].lower()


def extract_text(data: bytes, filename: str) -> str:
    """Return the plain text of an uploaded document, chosen by file extension."""
    extractor = EXTRACTORS.get(file_extension(filename))
    if extractor is None:
        raise InputValidationError(
            ValidationKind.UNSUPPORTED_FILE,
            "Unsupported file format. Supported formats: PDF, DOCX, TXT",
        )
    try:
        return extractor(data)
    except (PyPdfError, PackageNotFoundError, zipfile.BadZipFile, ValueError, KeyError) as e:
        raise ExtractionError(f"{file_extension(filename)}_parse_failed: {e}") from e
