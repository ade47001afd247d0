"""Pydantic request/response schemas for the web API."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# --- Shared ---


class Metrics(BaseModel):
    consistency: int = Field(..., ge=0, le=100)
    focus: int = Field(..., ge=0, le=100)
    studyLoad: int = Field(..., ge=0, le=100)
    financial: int = Field(..., ge=0, le=100)


class MetricsPayload(Metrics):
    """Metric snapshot sent back by the client; extra context keys pass through."""

    model_config = ConfigDict(extra="allow")

    globalScore: Optional[int] = Field(None, ge=0, le=100)


class ErrorResponse(BaseModel):
    error: str
    cause: Optional[str] = None
    details: Optional[str] = None


# --- Dashboard / core ---


class DashboardResponse(BaseModel):
    globalScore: int
    metrics: Metrics
    miniInsight: str


class DomainStatus(BaseModel):
    domain: str
    score: int
    status: str


class PerformancePoint(BaseModel):
    date: str
    focus: int
    load: int
    study: int


class ModulePerformance(BaseModel):
    name: str
    score: int


class DistributionSlice(BaseModel):
    name: str
    value: int
    fill: str


class Charts(BaseModel):
    performanceData: list[PerformancePoint] = Field(..., min_length=7, max_length=7)
    modulePerformance: list[ModulePerformance]
    performanceDistribution: list[DistributionSlice] = Field(..., min_length=1, max_length=5)


class RecommendationOut(BaseModel):
    title: str
    impact: int
    risk: str
    icon: str
    action: str
    source: str


class AILayer(BaseModel):
    humanReadableSummary: str
    causeEffectChains: list[str]
    recommendations: list[RecommendationOut] = Field(..., min_length=3, max_length=3)


class PredictionsOut(BaseModel):
    nextRiskDay: str
    burnoutProbability: int
    financialRisk: str


class CoreResponse(BaseModel):
    globalScore: int
    metrics: Metrics
    domainStatus: list[DomainStatus]
    charts: Charts
    heatIndicator: list[int] = Field(..., min_length=7, max_length=7)
    aiLayer: AILayer
    predictions: PredictionsOut


# --- AI bridge ---


class GenerateAIRequest(BaseModel):
    metrics: MetricsPayload


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=5000)
    metrics: dict = Field(default_factory=dict)


class ChatResponse(BaseModel):
    reply: str
