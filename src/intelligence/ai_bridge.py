"""Best-effort bridge to an external language model for narrative insights and chat.

The model's answer is untrusted: the first balanced ``{...}`` block is extracted
from whatever prose surrounds it and validated against a strict schema. Any
failure is reported as ExternalAIUnavailable; there is no silent fallback to the
rule engine (the /core payload is the durable fallback for callers).
"""

import asyncio
import json
from dataclasses import dataclass
from typing import Annotated, Literal, Optional

import structlog
from pydantic import BaseModel, ConfigDict, Field, StringConstraints, ValidationError

from llm import LLMAuthError, LLMError, LLMProvider, create_llm_provider, resolve_api_key

from .prompts import PromptTemplates

logger = structlog.get_logger()

CHAT_APOLOGY = "I'm having a little brain fog right now, friend. Could you try asking again?"

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class ExternalAIUnavailable(Exception):
    """The external model could not produce a usable answer."""

    cause = "provider_error"

    def __init__(self, message: str, details: Optional[str] = None, cause: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        if cause:
            self.cause = cause


class MissingCredentialError(ExternalAIUnavailable):
    """No API key configured for the language-model provider."""

    cause = "missing_credential"


class ExternalAIChatUnavailable(ExternalAIUnavailable):
    """Chat-scoped failure; callers degrade to CHAT_APOLOGY."""


@dataclass(frozen=True)
class AIBridgeConfig:
    provider: str = "auto"
    api_key: Optional[str] = None
    model: Optional[str] = None
    timeout_seconds: float = 20.0
    max_tokens: int = 2000
    chat_max_tokens: int = 600

    @classmethod
    def from_llm_config(cls, llm_config) -> "AIBridgeConfig":
        """Build from the `llm` config section; env vars fill a missing key."""
        return cls(
            provider=llm_config.provider,
            api_key=llm_config.api_key or resolve_api_key(llm_config.provider),
            model=llm_config.model,
            timeout_seconds=llm_config.timeout_seconds,
            max_tokens=llm_config.max_tokens,
            chat_max_tokens=llm_config.chat_max_tokens,
        )


# --- Response schema ---


class AIPrediction(BaseModel):
    type: NonEmptyStr
    label: NonEmptyStr
    value: str | int | float


class AIRecommendation(BaseModel):
    title: NonEmptyStr
    impact: int = Field(ge=0, le=100)
    risk: Literal["Low", "Medium", "High"]
    icon: NonEmptyStr = "Sparkles"
    action: NonEmptyStr


class AIInsightReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    dynamic_title: NonEmptyStr = Field(alias="DynamicTitle")
    priority_label: NonEmptyStr = Field(alias="PriorityLabel")
    synthesis: NonEmptyStr = Field(alias="AISynthesis")
    bullet_insights: list[NonEmptyStr] = Field(alias="BulletInsights", min_length=5, max_length=5)
    causal_chain: NonEmptyStr = Field(alias="CausalChain")
    predictions: list[AIPrediction] = Field(alias="AIPredictions", min_length=1)
    weekly_summary: NonEmptyStr = Field(alias="WeeklySummary")
    monthly_outlook: NonEmptyStr = Field(alias="MonthlyOutlook")
    recommendations: list[AIRecommendation] = Field(
        alias="Recommendations", min_length=3, max_length=3
    )

    def to_payload(self) -> dict:
        payload = self.model_dump(by_alias=True)
        for rec in payload["Recommendations"]:
            rec["source"] = "ai"
        return payload


def extract_json_block(text: str) -> Optional[str]:
    """Return the first balanced {...} block in text, ignoring braces inside strings."""
    start = text.find("{")
    if start == -1:
        return None
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start : i + 1]
    return None


def parse_insight_report(text: str) -> AIInsightReport:
    block = extract_json_block(text or "")
    if block is None:
        logger.warning("ai_bridge.no_json_block", response=(text or "")[:200])
        raise ExternalAIUnavailable(
            "Model response contained no JSON object", cause="malformed_response"
        )
    try:
        data = json.loads(block)
    except json.JSONDecodeError as e:
        logger.warning("ai_bridge.parse_failed", error=str(e), response=block[:200])
        raise ExternalAIUnavailable(
            "Model response was not valid JSON", details=str(e), cause="malformed_response"
        ) from e
    try:
        return AIInsightReport.model_validate(data)
    except ValidationError as e:
        logger.warning("ai_bridge.schema_mismatch", errors=e.error_count())
        raise ExternalAIUnavailable(
            "Model response is missing expected fields",
            details=str(e),
            cause="incomplete_response",
        ) from e


class AIBridge:
    """Calls the configured language model for insight reports and chat replies."""

    def __init__(self, config: AIBridgeConfig, llm: Optional[LLMProvider] = None):
        self.config = config
        self._llm = llm

    def _provider(self, error_cls: type[ExternalAIUnavailable]) -> LLMProvider:
        if self._llm is not None:
            return self._llm
        if not self.config.api_key:
            raise MissingCredentialError(
                "Language-model API key is not configured",
                details="Set llm.api_key or GOOGLE_API_KEY / ANTHROPIC_API_KEY / OPENAI_API_KEY",
            )
        try:
            self._llm = create_llm_provider(
                provider=self.config.provider,
                api_key=self.config.api_key,
                model=self.config.model,
                timeout=self.config.timeout_seconds,
            )
        except LLMError as e:
            raise error_cls("Language-model provider unavailable", details=str(e)) from e
        return self._llm

    async def _complete(
        self,
        prompt: str,
        max_tokens: int,
        error_cls: type[ExternalAIUnavailable],
    ) -> str:
        llm = self._provider(error_cls)
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(
                    llm.generate,
                    [{"role": "user", "content": prompt}],
                    PromptTemplates.SYSTEM,
                    max_tokens,
                ),
                self.config.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise error_cls(
                f"Language model did not answer within {self.config.timeout_seconds}s",
                cause="timeout",
            ) from e
        except LLMAuthError as e:
            raise error_cls("Language-model credential rejected", details=str(e), cause="auth") from e
        except Exception as e:
            raise error_cls("Language-model request failed", details=str(e)) from e

    async def generate_insights(self, metrics: dict) -> dict:
        """Full AI insight report for a metric snapshot; raises ExternalAIUnavailable."""
        prompt = PromptTemplates.INSIGHT_REPORT.format(
            metrics_json=json.dumps(metrics, indent=2, default=str)
        )
        text = await self._complete(prompt, self.config.max_tokens, ExternalAIUnavailable)
        report = parse_insight_report(text)
        logger.info("ai_bridge.report_generated", title=report.dynamic_title)
        return report.to_payload()

    async def _chat(self, message: str, metrics: dict) -> str:
        prompt = PromptTemplates.CHAT.format(
            metrics_json=json.dumps(metrics, default=str), message=message
        )
        reply = await self._complete(
            prompt, self.config.chat_max_tokens, ExternalAIChatUnavailable
        )
        if not reply or not reply.strip():
            raise ExternalAIChatUnavailable("Empty chat reply", cause="malformed_response")
        return reply.strip()

    async def chat(self, message: str, metrics: dict) -> str:
        """Answer a free-form question; any failure degrades to CHAT_APOLOGY."""
        try:
            return await self._chat(message, metrics)
        except ExternalAIUnavailable as e:
            logger.warning(
                "ai_bridge.chat_degraded", cause=e.cause, error=e.message, details=e.details
            )
            return CHAT_APOLOGY
