"""HTTP entrypoint for the summarization service.

Run with: python -m docsum.main
"""

import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .config import Config, ConfigError, load_config
from .logging import logger
from .routes import health, summarize
from .services.extractor import ExtractionError
from .services.orchestrator import SummaryService
from .services.validation import InputValidationError


class SetupError(Exception):
    """Raised when service setup fails."""
    pass


def setup_and_validate(cfg: Config) -> None:
    """Reject unusable configuration before the server starts accepting requests."""
    logger.info("setup.starting")

    if not 0 <= cfg.llm_temperature <= 2:
        raise SetupError(f"LLM_TEMPERATURE must be 0-2, got {cfg.llm_temperature}")
    if cfg.llm_max_retries < 0:
        raise SetupError(f"LLM_MAX_RETRIES must be >= 0, got {cfg.llm_max_retries}")
    if cfg.llm_timeout <= 0:
        raise SetupError(f"LLM_TIMEOUT must be > 0, got {cfg.llm_timeout}")
    if cfg.max_upload_bytes < 1:
        raise SetupError(f"MAX_UPLOAD_BYTES must be > 0, got {cfg.max_upload_bytes}")
    if not cfg.llm_api_base.startswith(("http://", "https://")):
        raise SetupError(f"LLM_API_BASE must be a valid URL, got: {cfg.llm_api_base}")

    if cfg.remote_enabled:
        logger.info("setup.llm_ok", mode="api_key_configured", model=cfg.llm_model, api_base=cfg.llm_api_base)
    else:
        # Not an error: the whole process runs on the extractive fallback
        logger.warn("setup.llm_fallback_only", mode="no_api_key")

    logger.info(
        "setup.completed",
        config={
            "llm_model": cfg.llm_model,
            "llm_timeout": cfg.llm_timeout,
            "llm_max_retries": cfg.llm_max_retries,
            "max_upload_bytes": cfg.max_upload_bytes,
            "port": cfg.port,
        },
    )


async def _input_rejected(request: Request, exc: InputValidationError) -> JSONResponse:
    logger.warn("request.rejected", path=request.url.path, kind=exc.kind, status=exc.status_code)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def _extraction_failed(request: Request, exc: ExtractionError) -> JSONResponse:
    logger.exception("request.extraction_failed", path=request.url.path, err=str(exc))
    return JSONResponse(status_code=500, content={"error": "Error processing file"})


async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        return JSONResponse(status_code=404, content={"error": "Route not found"})
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)


async def _unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    # Detail stays in the server log; the caller only gets a generic message
    logger.exception("request.unexpected_error", path=request.url.path, error=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(cfg: Optional[Config] = None, service: Optional[SummaryService] = None) -> FastAPI:
    cfg = cfg or load_config()
    service = service or SummaryService.from_config(cfg)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await service.aclose()

    app = FastAPI(title="docsum", version=__version__, lifespan=lifespan)
    app.state.config = cfg
    app.state.summary_service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(InputValidationError, _input_rejected)
    app.add_exception_handler(ExtractionError, _extraction_failed)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(Exception, _unexpected_error)

    app.include_router(summarize.router)
    app.include_router(health.router)
    return app


def run() -> int:
    try:
        cfg = load_config()
        logger.set_level(cfg.log_level)
        setup_and_validate(cfg)
    except (ConfigError, SetupError) as e:
        logger.error("setup.failed", error=str(e))
        return 1

    logger.info("server.starting", host=cfg.host, port=cfg.port)
    try:
        uvicorn_level = "warning" if cfg.log_level == "warn" else cfg.log_level
        uvicorn.run(create_app(cfg), host=cfg.host, port=cfg.port, log_level=uvicorn_level)
        return 0
    except KeyboardInterrupt:
        logger.info("server.interrupted")
        return 0


if __name__ == "__main__":
    sys.exit(run())
