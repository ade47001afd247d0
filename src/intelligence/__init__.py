"""Routine intelligence: scores, charts and insights derived from tracker records."""

from .ai_bridge import (
    AIBridge,
    AIBridgeConfig,
    ExternalAIChatUnavailable,
    ExternalAIUnavailable,
    MissingCredentialError,
)
from .insights import InsightBundle, Recommendation, evaluate
from .normalizer import MetricSet, global_score, normalize
from .orchestrator import AggregatedData, AggregationFailed, IntelligenceOrchestrator

__all__ = [
    "AIBridge",
    "AIBridgeConfig",
    "AggregatedData",
    "AggregationFailed",
    "ExternalAIChatUnavailable",
    "ExternalAIUnavailable",
    "InsightBundle",
    "IntelligenceOrchestrator",
    "MetricSet",
    "MissingCredentialError",
    "Recommendation",
    "evaluate",
    "global_score",
    "normalize",
]
