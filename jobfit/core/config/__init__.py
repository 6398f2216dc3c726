from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    log_level: str
    sentry_dsn: str | None
    ai_provider: str
    ai_model: str
    openai_api_key: str | None
    openai_base_url: str | None
    llm_enabled: bool
    llm_timeout_s: float
    llm_max_retries: int
    llm_temperature: float
    llm_max_output_tokens: int
    max_upload_bytes: int
    document_store_path: str


def load_settings() -> Settings:
    return Settings(
        log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
        sentry_dsn=_get_env("SENTRY_DSN"),
        ai_provider=(_get_env("AI_PROVIDER", "openai") or "openai").strip().lower(),
        ai_model=(_get_env("AI_MODEL") or _get_env("OPENAI_MODEL") or "gpt-4o-mini").strip(),
        openai_api_key=_get_env("OPENAI_API_KEY"),
        openai_base_url=_get_env("OPENAI_BASE_URL"),
        llm_enabled=_get_env_bool("LLM_ENABLED", True),
        llm_timeout_s=_get_env_float("LLM_TIMEOUT_S", 120.0),
        llm_max_retries=_get_env_int("LLM_MAX_RETRIES", 0),
        llm_temperature=_get_env_float("LLM_TEMPERATURE", 0.2),
        llm_max_output_tokens=_get_env_int("LLM_MAX_OUTPUT_TOKENS", 4096),
        max_upload_bytes=_get_env_int("MAX_UPLOAD_BYTES", 2 * 1024 * 1024),
        document_store_path=_get_env("DOCUMENT_STORE_PATH", "data/jobfit.db") or "data/jobfit.db",
    )


settings = load_settings()

if settings.llm_max_retries < 0:
    raise RuntimeError("LLM_MAX_RETRIES must not be negative.")

__all__ = ["Settings", "load_settings", "settings"]
