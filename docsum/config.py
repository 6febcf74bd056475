import os
from dataclasses import dataclass, field
from typing import List, Optional


DEFAULT_LLM_API_BASE = "https://ai.hackclub.com/proxy/v1"
DEFAULT_LLM_MODEL = "openai/gpt-5.2"
DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024


class ConfigError(RuntimeError):
    """Raised when an environment value cannot be parsed."""
    pass


@dataclass(frozen=True)
class Config:
    """Runtime configuration for the summarization service.

    Resolved once at process start and passed to the app factory; request
    handlers never read the environment themselves.
    """

    llm_api_key: Optional[str] = None
    llm_api_base: str = DEFAULT_LLM_API_BASE
    llm_model: str = DEFAULT_LLM_MODEL
    llm_temperature: float = 0.5
    llm_timeout: float = 20.0
    llm_max_retries: int = 0
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "info"

    @property
    def remote_enabled(self) -> bool:
        return bool(self.llm_api_key)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from e


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw.rstrip("s"))
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from e


def load_config() -> Config:
    # Empty string means "not configured", same as unset
    api_key = (os.environ.get("HACKCLUB_API_KEY") or os.environ.get("LLM_API_KEY") or "").strip()
    origins = os.environ.get("CORS_ORIGINS", "*")
    return Config(
        llm_api_key=api_key or None,
        llm_api_base=os.environ.get("LLM_API_BASE") or DEFAULT_LLM_API_BASE,
        llm_model=os.environ.get("LLM_MODEL") or DEFAULT_LLM_MODEL,
        llm_temperature=_env_float("LLM_TEMPERATURE", 0.5),
        llm_timeout=_env_float("LLM_TIMEOUT", 20.0),
        llm_max_retries=_env_int("LLM_MAX_RETRIES", 0),
        max_upload_bytes=_env_int("MAX_UPLOAD_BYTES", DEFAULT_MAX_UPLOAD_BYTES),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()] or ["*"],
        host=os.environ.get("HOST", "0.0.0.0"),
        port=_env_int("PORT", 3000),
        log_level=os.environ.get("LOG_LEVEL", "info").lower(),
    )
