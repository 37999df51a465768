"""LLM API clients used by the move-selection agent.

Supports any OpenAI-compatible chat completion endpoint (Groq by default)
and Anthropic's messages API behind one ``complete`` call.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Optional

logger = logging.getLogger("draughts.play")


class LLMClient:
    """Client for chat-style LLM APIs.

    The request timeout is passed to the provider SDK; the engine itself
    never waits on anything.
    """

    def __init__(self, provider: str = "openai",
                 base_url: Optional[str] = None,
                 api_key: Optional[str] = None,
                 api_key_env: str = "OPENAI_API_KEY",
                 model: str = "llama-3.3-70b-versatile",
                 temperature: float = 0.0,
                 max_tokens: int = 256,
                 timeout: float = 30.0):
        self.provider = provider
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self._client = None

        api_key = api_key or os.environ.get(api_key_env, "")
        if provider == "openai":
            self._init_openai(base_url, api_key)
        elif provider == "anthropic":
            self._init_anthropic(api_key)
        else:
            raise ValueError(f"Unknown provider: {provider}. Use 'openai' or 'anthropic'.")

    def _init_openai(self, base_url: Optional[str], api_key: str):
        try:
            from openai import OpenAI
            self._client = OpenAI(
                base_url=base_url or "https://api.openai.com/v1",
                api_key=api_key,
                timeout=self.timeout,
            )
        except ImportError:
            raise ImportError("openai package required: pip install openai")

    def _init_anthropic(self, api_key: str):
        try:
            import anthropic
            self._client = anthropic.Anthropic(api_key=api_key, timeout=self.timeout)
        except ImportError:
            raise ImportError("anthropic package required: pip install anthropic")

    def complete(self, system: str, prompt: str) -> str:
        """Send one system + user exchange and return the response text.

        Raises:
            Exception: Whatever the provider SDK raises (network, auth, timeout).
        """
        if self.provider == "openai":
            return self._openai_complete(system, prompt)
        return self._anthropic_complete(system, prompt)

    def _openai_complete(self, system: str, prompt: str) -> str:
        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": prompt},
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except Exception as e:
            logger.error(f"OpenAI API error ({self.model}): {e}")
            raise

        content = response.choices[0].message.content
        return (content or "").strip()

    def _anthropic_complete(self, system: str, prompt: str) -> str:
        kwargs: dict[str, Any] = {
            "model": self.model,
            "system": system,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }
        try:
            response = self._client.messages.create(**kwargs)
        except Exception as e:
            logger.error(f"Anthropic API error ({self.model}): {e}")
            raise

        text_parts = [block.text for block in response.content if block.type == "text"]
        return "\n".join(text_parts).strip()
