from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class SummarizeTextRequest(BaseModel):
    # text stays untyped so the validator can report missing vs wrong type itself
    model_config = ConfigDict(populate_by_name=True)

    text: Any = None
    language: Optional[str] = None
    summary_length: Optional[Any] = Field(default=None, alias="summaryLength")


class SummarizeResponse(BaseModel):
    summary: str


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str = "OK"
    timestamp: str
