"""Routine intelligence routes: dashboard, core, AI report and chat."""

import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from cli.logging_config import redact
from intelligence.ai_bridge import CHAT_APOLOGY, AIBridge, ExternalAIUnavailable
from intelligence.orchestrator import AggregationFailed, IntelligenceOrchestrator
from web.cancellation import ClientDisconnected, run_until_disconnect
from web.deps import get_ai_bridge, get_orchestrator
from web.models import (
    ChatRequest,
    ChatResponse,
    CoreResponse,
    DashboardResponse,
    ErrorResponse,
    GenerateAIRequest,
)

logger = structlog.get_logger()

router = APIRouter(prefix="/api/intelligence", tags=["intelligence"])


def _error(message: str, status_code: int = 500, **extra) -> JSONResponse:
    body = ErrorResponse(error=message, **extra).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    request: Request,
    orchestrator: IntelligenceOrchestrator = Depends(get_orchestrator),
):
    """Lightweight view: global score, metrics and a one-line insight."""
    try:
        return await run_until_disconnect(request, orchestrator.dashboard())
    except AggregationFailed as e:
        logger.error("intelligence.dashboard_error", error=str(e))
        return _error("Failed to fetch dashboard intelligence")


@router.get("/core", response_model=CoreResponse)
async def get_core(
    request: Request,
    orchestrator: IntelligenceOrchestrator = Depends(get_orchestrator),
):
    """Full view: domain status, charts, heat indicator, rule-based insights."""
    try:
        return await run_until_disconnect(request, orchestrator.core())
    except AggregationFailed as e:
        logger.error("intelligence.core_error", error=str(e))
        return _error("Failed to fetch core intelligence")


@router.post("/generate-ai", responses={500: {"model": ErrorResponse}})
async def generate_ai(
    body: GenerateAIRequest,
    request: Request,
    bridge: AIBridge = Depends(get_ai_bridge),
):
    metrics = body.metrics.model_dump(exclude_none=True)
    try:
        return await run_until_disconnect(request, bridge.generate_insights(metrics))
    except ExternalAIUnavailable as e:
        logger.error(
            "intelligence.generate_ai_error", cause=e.cause, error=e.message, details=e.details
        )
        return _error(
            e.message,
            cause=e.cause,
            details=redact(e.details) if e.details else None,
        )


@router.post("/chat", response_model=ChatResponse)
async def chat(
    body: ChatRequest,
    request: Request,
    bridge: AIBridge = Depends(get_ai_bridge),
):
    """Free-form question to the mentor; always answers, degrading to an apology."""
    try:
        reply = await run_until_disconnect(request, bridge.chat(body.message, body.metrics))
    except ClientDisconnected:
        raise
    except Exception as e:
        logger.error("intelligence.chat_error", error=str(e))
        reply = CHAT_APOLOGY
    return ChatResponse(reply=reply)
