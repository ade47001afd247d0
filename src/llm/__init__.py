"""Multi-provider LLM abstraction layer."""

from .base import (
    LLMAuthError,
    LLMError,
    LLMProvider,
    LLMRateLimitError,
    LLMTimeoutError,
)
from .factory import PROVIDER_ENV_KEYS, create_llm_provider, resolve_api_key

__all__ = [
    "LLMProvider",
    "create_llm_provider",
    "resolve_api_key",
    "PROVIDER_ENV_KEYS",
    "LLMError",
    "LLMRateLimitError",
    "LLMAuthError",
    "LLMTimeoutError",
]
