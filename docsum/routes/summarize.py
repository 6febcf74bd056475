from typing import Optional, Tuple

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from ..logging import logger
from ..models import ErrorResponse, SummarizeResponse, SummarizeTextRequest
from ..services.extractor import extract_text, file_extension
from ..services.orchestrator import SummaryService
from ..services.validation import InputValidationError, ValidationKind, validate_text
from ..tiers import LengthTier

router = APIRouter()

FILE_TOO_SHORT_MESSAGE = "File does not contain enough text to summarize (minimum 50 characters)"

SummaryInput = Tuple[str, Optional[str], LengthTier]


def get_summary_service(request: Request) -> SummaryService:
    return request.app.state.summary_service


def _invalid_body() -> InputValidationError:
    return InputValidationError(ValidationKind.INVALID_BODY, "Invalid request body")


async def _from_json(request: Request) -> SummaryInput:
    try:
        body = await request.json()
    except ValueError:
        raise _invalid_body()
    if not isinstance(body, dict):
        raise _invalid_body()
    try:
        req = SummarizeTextRequest.model_validate(body)
    except ValidationError:
        raise _invalid_body()

    text = validate_text(req.text)
    return text, req.language, LengthTier.parse(req.summary_length)


async def _from_upload(request: Request) -> SummaryInput:
    max_bytes = request.app.state.config.max_upload_bytes
    form = await request.form()
    try:
        # first file part wins, whatever the field is called
        upload = next((v for v in form.values() if isinstance(v, UploadFile)), None)
        if upload is None:
            raise InputValidationError(ValidationKind.EMPTY_FILE, "No file uploaded")

        data = await upload.read(max_bytes + 1)
        if len(data) > max_bytes:
            raise InputValidationError(
                ValidationKind.FILE_TOO_LARGE,
                f"File too large. Maximum size is {max_bytes / (1024 * 1024):g}MB.",
                status_code=413,
            )
        if not data:
            raise InputValidationError(ValidationKind.EMPTY_FILE, "No file uploaded")

        filename = upload.filename or ""
        language = form.get("language")
        length = form.get("summaryLength")
    finally:
        await form.close()

    logger.info("summarize.upload_received", ext=file_extension(filename), size_bytes=len(data))
    raw = await run_in_threadpool(extract_text, data, filename)
    if not raw.strip():
        raise InputValidationError(ValidationKind.TOO_SHORT, FILE_TOO_SHORT_MESSAGE)
    text = validate_text(raw, max_length=None, too_short_message=FILE_TOO_SHORT_MESSAGE)
    return (
        text,
        language if isinstance(language, str) else None,
        LengthTier.parse(length),
    )


@router.post(
    "/api/summarize",
    response_model=SummarizeResponse,
    responses={400: {"model": ErrorResponse}, 413: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def summarize(request: Request, service: SummaryService = Depends(get_summary_service)):
    content_type = request.headers.get("content-type", "")
    if "multipart/form-data" in content_type:
        text, language, tier = await _from_upload(request)
    else:
        text, language, tier = await _from_json(request)

    summary = await service.produce_summary(text, language, tier)
    return SummarizeResponse(summary=summary)
