from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

import httpx
from openai import APIConnectionError, APIStatusError, AsyncOpenAI, OpenAIError

from .config import Config
from .tiers import LengthTier, budget_for


class FailureReason(str, Enum):
    HTTP_ERROR = "http_error"
    FORMAT_ERROR = "format_error"
    NETWORK_ERROR = "network_error"


@dataclass(frozen=True)
class RemoteSuccess:
    summary: str


@dataclass(frozen=True)
class RemoteFailure:
    reason: FailureReason
    detail: str
    status_code: Optional[int] = None


RemoteOutcome = Union[RemoteSuccess, RemoteFailure]


def build_prompt(text: str, language: str, tier: LengthTier) -> str:
    return (
        f"Please summarize the following text in {language}. "
        f"Make the summary {tier.value} length:\n\n{text}"
    )


def _extract_content(resp: Any) -> Optional[str]:
    """Pull choices[0].message.content out of whatever the SDK handed back.

    Non-JSON or schema-less bodies come back as plain strings or partially
    constructed models, so every hop is looked up defensively.
    """
    choices = getattr(resp, "choices", None)
    if not isinstance(choices, list) or not choices:
        return None
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    if not isinstance(content, str):
        return None
    return content.strip() or None


class RemoteSummarizer:
    """Single chat-completion call per summary against an OpenAI-compatible proxy.

    Never raises for upstream problems; every failure comes back as a
    RemoteFailure so the caller decides what to do with it.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str,
        model: str,
        temperature: float = 0.5,
        timeout: Optional[float] = 20.0,
        max_retries: int = 0,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.model = model
        self.temperature = temperature
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries,
            http_client=http_client,
        )

    @classmethod
    def from_config(cls, cfg: Config, http_client: Optional[httpx.AsyncClient] = None) -> "RemoteSummarizer":
        if not cfg.llm_api_key:
            raise ValueError("llm_api_key is required for the remote summarizer")
        return cls(
            cfg.llm_api_key,
            base_url=cfg.llm_api_base,
            model=cfg.llm_model,
            temperature=cfg.llm_temperature,
            timeout=cfg.llm_timeout,
            max_retries=cfg.llm_max_retries,
            http_client=http_client,
        )

    async def summarize(self, text: str, language: str, tier: LengthTier) -> RemoteOutcome:
        try:
            resp = await self._client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": build_prompt(text, language, tier)}],
                max_tokens=budget_for(tier).max_tokens,
                temperature=self.temperature,
            )
        except APIStatusError as e:
            reason_phrase = e.response.reason_phrase if e.response is not None else ""
            return RemoteFailure(
                FailureReason.HTTP_ERROR,
                f"API request failed with status {e.status_code}: {reason_phrase}",
                status_code=e.status_code,
            )
        except APIConnectionError as e:
            return RemoteFailure(FailureReason.NETWORK_ERROR, str(e) or e.__class__.__name__)
        except OpenAIError as e:
            # e.g. response validation errors raised by the SDK itself
            return RemoteFailure(FailureReason.FORMAT_ERROR, str(e) or e.__class__.__name__)
        except ValueError as e:
            # body declared as JSON but not decodable
            return RemoteFailure(FailureReason.FORMAT_ERROR, f"json_parse_failed: {e}")

        content = _extract_content(resp)
        if content is None:
            return RemoteFailure(FailureReason.FORMAT_ERROR, "Invalid response format from AI API")
        return RemoteSuccess(content)

    async def aclose(self) -> None:
        await self._client.close()
