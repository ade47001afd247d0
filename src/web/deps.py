"""Dependency injection for FastAPI routes."""

from functools import lru_cache
from zoneinfo import ZoneInfo

import structlog

from cli.config import load_config_model
from cli.config_models import IntelConfig
from intelligence.ai_bridge import AIBridge, AIBridgeConfig
from intelligence.orchestrator import IntelligenceOrchestrator
from tracker.store import TrackerStore

logger = structlog.get_logger()


@lru_cache
def get_config() -> IntelConfig:
    """Load shared config (config.yaml + env overrides)."""
    return load_config_model()


@lru_cache
def get_store() -> TrackerStore:
    config = get_config()
    return TrackerStore(config.store.db_path, timeout=config.store.read_timeout_seconds)


def get_orchestrator() -> IntelligenceOrchestrator:
    """Fresh orchestrator per request; the store is shared and stateless."""
    config = get_config()
    return IntelligenceOrchestrator(
        get_store(),
        tz=ZoneInfo(config.timezone),
        read_timeout=config.store.read_timeout_seconds,
    )


@lru_cache
def get_ai_bridge() -> AIBridge:
    bridge_config = AIBridgeConfig.from_llm_config(get_config().llm)
    if not bridge_config.api_key:
        logger.warning("ai_bridge.no_credential", provider=bridge_config.provider)
    return AIBridge(bridge_config)
