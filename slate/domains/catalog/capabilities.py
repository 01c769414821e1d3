"""Lookup tables for model ids: chat filtering, display names, reasoning support.

These are substring heuristics over provider ids, not facts reported by the
providers. Everything the catalog needs to know about an id goes through the
functions here so a real capability registry can replace them in one place.
"""

from slate.schemas.catalog import AIModel
from slate.schemas.settings import APIProvider

# Model families kept from a provider listing
CHAT_MODEL_MARKERS = ("gpt", "claude", "llama")

# Ids containing any of these are treated as reasoning-capable
REASONING_MARKERS = ("o1", "reasoning")

# First match wins, so more specific ids come first
DISPLAY_NAME_PATTERNS = (
    ("gpt-4o", "GPT-4o"),
    ("gpt-4-turbo", "GPT-4 Turbo"),
    ("gpt-4", "GPT-4"),
    ("gpt-3.5", "GPT-3.5 Turbo"),
    ("claude-3.5-sonnet", "Claude 3.5 Sonnet"),
    ("claude-3-opus", "Claude 3 Opus"),
)

FALLBACK_MODELS: dict[APIProvider, tuple[AIModel, ...]] = {
    APIProvider.OPENAI: (
        AIModel(id="gpt-4", display_name="GPT-4", supports_thinking=False),
        AIModel(id="gpt-4-turbo", display_name="GPT-4 Turbo", supports_thinking=False),
        AIModel(id="gpt-3.5-turbo", display_name="GPT-3.5 Turbo", supports_thinking=False),
    ),
    APIProvider.OPENROUTER: (
        AIModel(id="anthropic/claude-3.5-sonnet", display_name="Claude 3.5 Sonnet", supports_thinking=False),
        AIModel(id="openai/gpt-4", display_name="GPT-4", supports_thinking=False),
        AIModel(
            id="meta-llama/llama-3.1-8b-instruct", display_name="Llama 3.1 8B", supports_thinking=False
        ),
    ),
}


def is_chat_model(model_id: str) -> bool:
    return any(marker in model_id for marker in CHAT_MODEL_MARKERS)


def supports_thinking(model_id: str) -> bool:
    return any(marker in model_id for marker in REASONING_MARKERS)


def format_model_name(model_id: str) -> str:
    """Turn a provider id into a name for the model picker."""
    for pattern, name in DISPLAY_NAME_PATTERNS:
        if pattern in model_id:
            return name
    words = model_id.replace("_", "-").split("-")
    # Vendor-prefixed ids keep the slash, each side capitalised
    return " ".join("/".join(part.capitalize() for part in word.split("/")) for word in words if word)


def fallback_models(provider: APIProvider) -> list[AIModel]:
    return list(FALLBACK_MODELS[provider])


def build_catalog(model_ids: list[str]) -> list[AIModel]:
    """Filter a provider listing to chat models, keeping the provider's order."""
    return [
        AIModel(
            id=model_id,
            display_name=format_model_name(model_id),
            supports_thinking=supports_thinking(model_id),
        )
        for model_id in model_ids
        if is_chat_model(model_id)
    ]
