"""FastAPI application entry point."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from cli.logging_config import setup_logging
from observability import log_run_summary, metrics
from web.cancellation import CLIENT_CLOSED_REQUEST, ClientDisconnected
from web.deps import get_config, get_store
from web.routes import intelligence

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = get_config()
    setup_logging(json_mode=config.logging.json_mode, level=config.logging.level)
    store = get_store()
    logger.info("web.startup", db_path=str(store.db_path), timezone=config.timezone)
    yield
    log_run_summary()
    logger.info("web.shutdown")


app = FastAPI(
    title="Routine Intelligence",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS: allow the SPA origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=[get_config().cors.frontend_origin],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(intelligence.router)


@app.exception_handler(ClientDisconnected)
async def client_disconnected(request: Request, exc: ClientDisconnected):
    metrics.counter("web.client_disconnected")
    return Response(status_code=CLIENT_CLOSED_REQUEST)


@app.get("/api/health")
async def health():
    return {"status": "ok", "metrics": metrics.summary()}
