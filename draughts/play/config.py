"""Configuration for move selection and game management."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import yaml

# Groq serves an OpenAI-compatible API
DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"

DEFAULT_MODELS = (
    "llama-3.3-70b-versatile",
    "openai/gpt-oss-120b",
    "openai/gpt-oss-20b",
)


class InvalidModel(ValueError):
    """Raised when a requested model is not in the allowed list."""


@dataclass
class SelectionConfig:
    """How external move-selection agents are built.

    ``provider`` is one of "openai" (any OpenAI-compatible endpoint),
    "anthropic", "random", or "first".
    """
    provider: str = "openai"
    base_url: Optional[str] = DEFAULT_BASE_URL
    api_key_env: str = "GROQ_API_KEY"
    allowed_models: tuple[str, ...] = DEFAULT_MODELS
    default_model: str = DEFAULT_MODELS[0]
    temperature: float = 0.0
    max_tokens: int = 256
    timeout: float = 30.0
    include_rules: bool = False  # append the full rules text to the system prompt

    @classmethod
    def from_dict(cls, d: Optional[dict]) -> SelectionConfig:
        d = d or {}
        models = tuple(d.get("allowed_models", DEFAULT_MODELS))
        return cls(
            provider=d.get("provider", "openai"),
            base_url=d.get("base_url", DEFAULT_BASE_URL),
            api_key_env=d.get("api_key_env", "GROQ_API_KEY"),
            allowed_models=models,
            default_model=d.get("default_model", models[0] if models else ""),
            temperature=float(d.get("temperature", 0.0)),
            max_tokens=int(d.get("max_tokens", 256)),
            timeout=float(d.get("timeout", 30.0)),
            include_rules=bool(d.get("include_rules", False)),
        )

    def check_model(self, model: Optional[str]) -> str:
        """Return ``model`` (or the default) if allowed.

        Raises:
            InvalidModel: If the model is not allowed.
        """
        model = model or self.default_model
        if model not in self.allowed_models:
            raise InvalidModel(f"Invalid model {model!r}")
        return model


@dataclass
class GameConfig:
    """Limits for managed games."""
    max_moves: int = 400  # half-moves before a game is drawn
    max_concurrent: int = 50
    first_side: str = "b"

    @classmethod
    def from_dict(cls, d: Optional[dict]) -> GameConfig:
        d = d or {}
        return cls(
            max_moves=int(d.get("max_moves", 400)),
            max_concurrent=int(d.get("max_concurrent", 50)),
            first_side=d.get("first_side", "b"),
        )


@dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8000
    selection: SelectionConfig = field(default_factory=SelectionConfig)
    games: GameConfig = field(default_factory=GameConfig)

    @classmethod
    def from_dict(cls, d: Optional[dict]) -> ServerConfig:
        d = d or {}
        server = d.get("server", {})
        return cls(
            host=server.get("host", "0.0.0.0"),
            port=int(server.get("port", 8000)),
            selection=SelectionConfig.from_dict(d.get("selection")),
            games=GameConfig.from_dict(d.get("games")),
        )


def load_config(path: str) -> dict:
    """Load a YAML config file into a dict (empty file -> {})."""
    with open(path) as f:
        return yaml.safe_load(f) or {}
