import re
from enum import Enum
from typing import Any, Optional


MIN_TEXT_LENGTH = 50
MAX_TEXT_LENGTH = 10_000

# Pattern-based, not an HTML sanitizer: only <script> blocks are removed
_SCRIPT_BLOCK = re.compile(r"<script\b.*?</script\s*>", re.IGNORECASE | re.DOTALL)


class ValidationKind(str, Enum):
    MISSING_TEXT = "missing_text"
    INVALID_TYPE = "invalid_type"
    INVALID_BODY = "invalid_body"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    UNSUPPORTED_FILE = "unsupported_file"
    EMPTY_FILE = "empty_file"
    FILE_TOO_LARGE = "file_too_large"


class InputValidationError(Exception):
    """Input rejected before summarization; the message is safe to show the caller."""

    def __init__(self, kind: ValidationKind, message: str, status_code: int = 400) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code


def strip_scripts(text: str) -> str:
    return _SCRIPT_BLOCK.sub("", text)


def validate_text(
    value: Any,
    *,
    max_length: Optional[int] = MAX_TEXT_LENGTH,
    too_short_message: str = "Please provide at least 50 characters for meaningful summarization",
) -> str:
    """Return the sanitized text or raise InputValidationError.

    The length ceiling is checked against the raw value, before scripts are
    stripped; the floor is checked against the trimmed sanitized text.
    ``max_length=None`` disables the ceiling (used for extracted file text).
    """
    if value is None or (isinstance(value, str) and value == ""):
        raise InputValidationError(ValidationKind.MISSING_TEXT, "No text provided for summarization")
    if not isinstance(value, str):
        raise InputValidationError(ValidationKind.INVALID_TYPE, "Text must be a string")

    if max_length is not None and len(value) > max_length:
        raise InputValidationError(
            ValidationKind.TOO_LONG,
            f"Text is too long. Maximum length is {max_length:,} characters.",
        )

    cleaned = strip_scripts(value)
    if len(cleaned.strip()) < MIN_TEXT_LENGTH:
        raise InputValidationError(ValidationKind.TOO_SHORT, too_short_message)
    return cleaned
