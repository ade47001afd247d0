"""Shared fixtures for web API tests."""

from datetime import timezone

import pytest
from fastapi.testclient import TestClient

from intelligence.ai_bridge import AIBridge, AIBridgeConfig
from intelligence.orchestrator import IntelligenceOrchestrator
from llm import LLMProvider
from web.app import app
from web.deps import get_ai_bridge, get_orchestrator


class StubLLM(LLMProvider):
    """Returns a canned reply, or raises when `error` is set."""

    provider_name = "stub"

    def __init__(self):
        self.reply = ""
        self.error = None

    def generate(self, messages, system=None, max_tokens=2000):
        if self.error:
            raise self.error
        return self.reply


@pytest.fixture
def llm():
    return StubLLM()


@pytest.fixture
def orchestrator(store, now):
    return IntelligenceOrchestrator(store, tz=timezone.utc, clock=lambda: now)


@pytest.fixture
def bridge(llm):
    return AIBridge(AIBridgeConfig(timeout_seconds=2), llm=llm)


@pytest.fixture
def client(orchestrator, bridge):
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    app.dependency_overrides[get_ai_bridge] = lambda: bridge
    yield TestClient(app)
    app.dependency_overrides.clear()
