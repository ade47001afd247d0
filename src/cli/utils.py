"""Shared CLI utilities."""

from zoneinfo import ZoneInfo

import structlog
from rich.console import Console

console = Console()
logger = structlog.get_logger()


def get_components(skip_ai: bool = False):
    """Initialize store, orchestrator and AI bridge from config.

    Args:
        skip_ai: If True, skip AI bridge init (for commands that don't need an LLM)
    """
    from cli.config import load_config_model
    from intelligence.ai_bridge import AIBridge, AIBridgeConfig
    from intelligence.orchestrator import IntelligenceOrchestrator
    from tracker.store import TrackerStore

    config = load_config_model()
    store = TrackerStore(config.store.db_path, timeout=config.store.read_timeout_seconds)
    orchestrator = IntelligenceOrchestrator(
        store,
        tz=ZoneInfo(config.timezone),
        read_timeout=config.store.read_timeout_seconds,
    )

    bridge = None
    if not skip_ai:
        bridge = AIBridge(AIBridgeConfig.from_llm_config(config.llm))

    return {
        "config": config,
        "store": store,
        "orchestrator": orchestrator,
        "bridge": bridge,
    }


def score_style(score: int) -> str:
    if score >= 75:
        return "green"
    if score >= 50:
        return "yellow"
    return "red"
