import time
from typing import Optional

from ..config import Config
from ..logging import logger
from ..model_client import FailureReason, RemoteFailure, RemoteSummarizer, RemoteSuccess
from ..tiers import LengthTier
from .summarizer import fallback_summarize

DEFAULT_LANGUAGE = "english"


class SummaryService:
    """Chooses between the remote model and the local fallback.

    Once text has passed validation this never fails: a missing credential
    or any upstream failure yields the fallback summary instead.
    """

    def __init__(self, remote: Optional[RemoteSummarizer] = None) -> None:
        self.remote = remote

    @classmethod
    def from_config(cls, cfg: Config) -> "SummaryService":
        remote = RemoteSummarizer.from_config(cfg) if cfg.remote_enabled else None
        return cls(remote)

    async def produce_summary(
        self,
        text: str,
        language: Optional[str] = None,
        tier: LengthTier = LengthTier.MEDIUM,
    ) -> str:
        language = (language or "").strip() or DEFAULT_LANGUAGE

        if self.remote is None:
            logger.warn("summarize.fallback_used", reason="no_api_key", tier=tier, text_len=len(text))
            return fallback_summarize(text, language, tier)

        t0 = time.time()
        outcome = await self.remote.summarize(text, language, tier)
        latency_ms = int((time.time() - t0) * 1000)

        if isinstance(outcome, RemoteSuccess):
            logger.info("summarize.remote_ok", tier=tier, latency_ms=latency_ms, summary_len=len(outcome.summary))
            return outcome.summary

        if isinstance(outcome, RemoteFailure):
            logger.error(
                "summarize.remote_failed",
                reason=outcome.reason,
                status_code=outcome.status_code,
                err=outcome.detail,
                hint=_failure_hint(outcome),
                latency_ms=latency_ms,
            )
        logger.warn("summarize.fallback_used", reason="remote_failed", tier=tier, text_len=len(text))
        return fallback_summarize(text, language, tier)

    async def aclose(self) -> None:
        if self.remote is not None:
            await self.remote.aclose()


def _failure_hint(failure: RemoteFailure) -> Optional[str]:
    if failure.status_code == 401:
        return "invalid_api_key"
    if failure.status_code == 429:
        return "rate_limited"
    if failure.reason is FailureReason.NETWORK_ERROR:
        return "endpoint_unreachable"
    return None
