"""Thin client for the text-generation service (Groq's OpenAI-compatible API)."""
from __future__ import annotations

import openai

from apptrack.config import llm_settings
from apptrack.errors import GenerationError
from apptrack.log import get_logger

log = get_logger(__name__)


class GenerationClient:
    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str,
        *,
        max_tokens: int = 1500,
        timeout: float = 60.0,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self.max_tokens = max_tokens
        self.timeout = timeout
        self._client: openai.OpenAI | None = None

    @classmethod
    def from_env(cls, api_key_override: str = "") -> GenerationClient:
        s = llm_settings(api_key_override)
        return cls(api_key=s["api_key"], model=s["model"], base_url=s["base_url"])

    def _get_client(self) -> openai.OpenAI:
        if self._client is None:
            # Failures are surfaced to the user, never retried.
            self._client = openai.OpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                max_retries=0,
                timeout=self.timeout,
            )
        return self._client

    def generate(self, prompt: str, *, json_mode: bool = False) -> str:
        """Return the completion text for a single-turn *prompt*.

        With json_mode the service is asked to constrain output to a JSON
        object; whether the text actually parses is the caller's concern.
        """
        if not self.api_key:
            raise GenerationError(None, "No GROQ_API_KEY configured")

        kwargs: dict = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": self.max_tokens,
        }
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}
            kwargs["temperature"] = 0.1

        try:
            r = self._get_client().chat.completions.create(**kwargs)
        except openai.APIStatusError as exc:
            log.error("Generation call failed with status %s", exc.status_code)
            raise GenerationError(exc.status_code) from exc
        except openai.APIError as exc:
            log.error("Generation call failed: %s", exc)
            raise GenerationError(None, f"Generation service unavailable: {exc}") from exc

        if not r.choices:
            return ""
        return (r.choices[0].message.content or "").strip()
