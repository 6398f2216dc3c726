from __future__ import annotations

from functools import lru_cache

from jobfit.ai.providers.openai_provider import OpenAIProvider
from jobfit.ai.types import LLMClient
from jobfit.core.config import Settings, settings
from jobfit.errors import ConfigurationFailure


def _looks_like_placeholder(value: str) -> bool:
    lower = value.strip().lower()
    return lower.startswith("your_") or lower.startswith("replace_") or lower in {"changeme", "todo"}


def build_ai_client(cfg: Settings) -> LLMClient:
    if not cfg.llm_enabled:
        raise ConfigurationFailure("LLM calls are disabled (LLM_ENABLED=0).")

    if cfg.ai_provider != "openai":
        raise ConfigurationFailure(f"Unsupported AI_PROVIDER='{cfg.ai_provider}'")

    api_key = (cfg.openai_api_key or "").strip()
    if not api_key or _looks_like_placeholder(api_key):
        raise ConfigurationFailure("OPENAI_API_KEY is missing")

    return OpenAIProvider(
        model=cfg.ai_model,
        api_key=api_key,
        base_url=cfg.openai_base_url,
        timeout_s=cfg.llm_timeout_s,
        max_retries=cfg.llm_max_retries,
        temperature=cfg.llm_temperature,
        max_output_tokens=cfg.llm_max_output_tokens,
    )


@lru_cache(maxsize=1)
def get_ai_client() -> LLMClient:
    return build_ai_client(settings)
