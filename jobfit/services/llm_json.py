from __future__ import annotations

import json
import logging
import re
import time
import uuid
from typing import Any

from jobfit.ai.factory import get_ai_client
from jobfit.ai.types import ChatMessage, LLMClient
from jobfit.errors import ParseFailure, UpstreamFailure

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```", re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    match = _FENCE_RE.search(text)
    if match:
        return match.group(1).strip()
    return text.strip()


def parse_json_object(text: str) -> dict[str, Any]:
    """Decode a delegate reply into a dict. Raises ValueError on anything else."""
    parsed = json.loads(strip_code_fences(text))
    if not isinstance(parsed, dict):
        raise ValueError(f"expected a JSON object, got {type(parsed).__name__}")
    return parsed


def json_completion(
    *,
    system_prompt: str,
    user_prompt: str,
    tool_slug: str,
    parse_error: type[ParseFailure],
    upstream_error: type[UpstreamFailure],
    client: LLMClient | None = None,
) -> dict[str, Any]:
    """Run one delegate call and return its reply as an untyped dict.

    Exactly one call is made. Transport errors surface as `upstream_error`,
    undecodable replies as `parse_error`; ConfigurationFailure from the client
    factory propagates unchanged.
    """
    llm = client or get_ai_client()
    run_id = uuid.uuid4().hex
    started = time.perf_counter()
    messages = [
        ChatMessage(role="system", content=system_prompt),
        ChatMessage(role="user", content=user_prompt),
    ]

    try:
        content = llm.complete(messages)
    except Exception as exc:  # noqa: BLE001 - any SDK/transport error is an upstream failure
        logger.warning(
            "llm_call_failed run_id=%s tool=%s model=%s latency_ms=%s: %s",
            run_id,
            tool_slug,
            getattr(llm, "model", "unknown"),
            int((time.perf_counter() - started) * 1000),
            exc,
        )
        raise upstream_error(f"{tool_slug} call failed: {exc}") from exc

    latency_ms = int((time.perf_counter() - started) * 1000)
    if not content or not content.strip():
        logger.warning("llm_empty_response run_id=%s tool=%s latency_ms=%s", run_id, tool_slug, latency_ms)
        raise parse_error(f"{tool_slug} returned an empty response")

    try:
        payload = parse_json_object(content)
    except ValueError as exc:
        logger.warning(
            "llm_invalid_json run_id=%s tool=%s latency_ms=%s response_len=%s: %s",
            run_id,
            tool_slug,
            latency_ms,
            len(content),
            exc,
        )
        raise parse_error(f"Failed to parse {tool_slug} response as JSON") from exc

    logger.info("llm_call_ok run_id=%s tool=%s latency_ms=%s", run_id, tool_slug, latency_ms)
    return payload
