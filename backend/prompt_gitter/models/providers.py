"""Provider catalogue: display names and known model identifiers."""

from dataclasses import dataclass

from .enums import Provider


@dataclass(frozen=True)
class ProviderConfig:
    name: str
    models: tuple[str, ...]


PROVIDERS: dict[Provider, ProviderConfig] = {
    Provider.OPENAI: ProviderConfig(
        name="OpenAI",
        models=("gpt-4-turbo", "gpt-4", "gpt-3.5-turbo", "gpt-3.5"),
    ),
    Provider.ANTHROPIC: ProviderConfig(
        name="Anthropic",
        models=("claude-3-opus", "claude-3-sonnet", "claude-2.1", "claude-2"),
    ),
    Provider.GOOGLE: ProviderConfig(
        name="Google",
        models=("gemini-pro", "gemini-ultra"),
    ),
    Provider.XAI: ProviderConfig(
        name="xAI",
        models=("grok-1",),
    ),
    Provider.META: ProviderConfig(
        name="Meta",
        models=("llama-2-70b", "llama-2-13b", "llama-2-7b"),
    ),
    Provider.MISTRAL: ProviderConfig(
        name="Mistral",
        models=("mistral-large", "mistral-medium", "mistral-small"),
    ),
}

DEFAULT_PROVIDER = Provider.OPENAI


def default_model(provider: Provider) -> str:
    """Return the first listed model for a provider."""
    return PROVIDERS[provider].models[0]


def is_known_model(provider: Provider, model: str) -> bool:
    """Check whether a model identifier is listed for a provider."""
    return model in PROVIDERS[provider].models
