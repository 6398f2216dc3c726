from __future__ import annotations

from typing import Optional, Sequence

from openai import OpenAI

from jobfit.ai.types import ChatMessage


class OpenAIProvider:
    def __init__(
        self,
        model: str,
        api_key: str,
        base_url: Optional[str] = None,
        timeout_s: float = 120.0,
        max_retries: int = 0,
        temperature: float = 0.2,
        max_output_tokens: int = 4096,
    ):
        self.model = model
        self._temperature = temperature
        self._max_output_tokens = max_output_tokens
        self._client = OpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout_s,
            max_retries=max_retries,
        )

    def complete(self, messages: Sequence[ChatMessage]) -> str:
        response = self._client.chat.completions.create(
            model=self.model,
            messages=[{"role": m.role, "content": m.content} for m in messages],
            temperature=self._temperature,
            response_format={"type": "json_object"},
            max_tokens=self._max_output_tokens,
        )
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""
