"""LLM provider factory with auto-detection."""

import os

from .base import LLMError, LLMProvider

PROVIDER_ENV_KEYS = {
    "gemini": ("GOOGLE_API_KEY", "GEMINI_API_KEY"),
    "claude": ("ANTHROPIC_API_KEY",),
    "openai": ("OPENAI_API_KEY",),
}

_AUTO_DETECT_ORDER = ["gemini", "claude", "openai"]


def resolve_api_key(provider: str | None = None) -> str | None:
    """First non-empty env var for the provider (or any provider for auto)."""
    names = _AUTO_DETECT_ORDER if provider in (None, "auto") else [provider]
    for name in names:
        for env_var in PROVIDER_ENV_KEYS.get(name, ()):
            val = os.getenv(env_var)
            if val:
                return val
    return None


def create_llm_provider(
    provider: str | None = None,
    api_key: str | None = None,
    model: str | None = None,
    client=None,
    timeout: float = 30.0,
) -> LLMProvider:
    """Create an LLM provider instance.

    Args:
        provider: "gemini", "claude", "openai", "auto", or None (auto-detect)
        api_key: Explicit API key (overrides env var)
        model: Model name (None = provider default)
        client: Pre-built SDK client for testing/DI
        timeout: Per-request timeout in seconds

    Returns:
        LLMProvider instance
    """
    resolved = provider or "auto"

    if resolved == "auto":
        resolved = _auto_detect_provider(api_key)

    if not api_key and not client:
        api_key = resolve_api_key(resolved)

    if resolved == "gemini":
        from .providers.gemini import GeminiProvider

        return GeminiProvider(api_key=api_key, model=model, client=client, timeout=timeout)
    elif resolved == "claude":
        from .providers.claude import ClaudeProvider

        return ClaudeProvider(api_key=api_key, model=model, client=client, timeout=timeout)
    elif resolved == "openai":
        from .providers.openai import OpenAIProvider

        return OpenAIProvider(api_key=api_key, model=model, client=client, timeout=timeout)
    else:
        raise LLMError(f"Unknown provider: {resolved}. Use: gemini, claude, openai")


def _detect_provider_from_key(api_key: str) -> str | None:
    """Infer provider from API key prefix."""
    if api_key.startswith("sk-ant-"):
        return "claude"
    if api_key.startswith("sk-"):
        return "openai"
    if api_key.startswith("AI"):
        return "gemini"
    return None


def _auto_detect_provider(api_key: str | None = None) -> str:
    """Detect provider from explicit key prefix, then env vars."""
    if api_key:
        inferred = _detect_provider_from_key(api_key)
        if inferred:
            return inferred

    for name in _AUTO_DETECT_ORDER:
        if any(os.getenv(v) for v in PROVIDER_ENV_KEYS[name]):
            return name
    # Default provider when nothing is configured; the missing key surfaces at call time
    return "gemini"
