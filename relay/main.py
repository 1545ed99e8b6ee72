"""FastAPI relay between the note-taking app and the AI gateway.

Keeps the gateway credentials server-side.

Endpoints:
  POST    /ai-explain   — Explain, summarize or generate flashcards
  OPTIONS /ai-explain   — CORS preflight (empty 200)
  GET     /health       — Relay status and gateway configuration
  GET     /metrics      — Prometheus metrics
"""

from __future__ import annotations

import logging
import time
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from pydantic import BaseModel, Field
from starlette.middleware.base import BaseHTTPMiddleware

from relay.config import settings
from relay.gateway import GatewayError, call_gateway
from relay.metrics import AI_REQUESTS, GATEWAY_DURATION, HTTP_DURATION, HTTP_REQUESTS
from relay.prompts import RequestType, build_prompts

logger = logging.getLogger(__name__)

# Endpoints excluded from HTTP metrics to avoid cardinality explosion
_METRICS_EXCLUDE = {"/metrics", "/openapi.json", "/docs", "/redoc"}


class MetricsMiddleware(BaseHTTPMiddleware):
    """Record HTTP request count and duration for Prometheus."""

    async def dispatch(self, request: Request, call_next):
        """Wrap each request with timing and counting."""
        path = request.url.path
        if path in _METRICS_EXCLUDE:
            return await call_next(request)

        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start

        HTTP_REQUESTS.labels(
            method=request.method,
            endpoint=path,
            status_code=response.status_code,
        ).inc()
        HTTP_DURATION.labels(endpoint=path).observe(elapsed)
        return response


class EmptyPreflightCORSMiddleware(CORSMiddleware):
    """CORS middleware whose successful preflight answer has an empty body."""

    def preflight_response(self, request_headers) -> Response:
        response = super().preflight_response(request_headers)
        if response.status_code != 200:
            return response
        headers = {
            key: value
            for key, value in response.headers.items()
            if key not in ("content-length", "content-type")
        }
        return Response(status_code=200, headers=headers)


app = FastAPI(title="LectureMate AI Relay", version="1.0.0")

app.add_middleware(MetricsMiddleware)
app.add_middleware(
    EmptyPreflightCORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Request / Response models ---


class AIRequest(BaseModel):
    """Relay request body."""

    text: str = Field(..., min_length=1)
    context: str | None = None
    type: RequestType


class AIResponse(BaseModel):
    """Relay success body."""

    content: str


class ErrorResponse(BaseModel):
    """Relay failure body."""

    error: str
    code: str


@app.exception_handler(GatewayError)
async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    """Render gateway failures as ``{error, code}`` with the matching status."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "code": exc.code},
    )


# --- Endpoints ---


@app.post(
    "/ai-explain",
    response_model=AIResponse,
    responses={
        402: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def ai_explain(request: AIRequest) -> AIResponse:
    """Forward a type-specific prompt pair to the gateway."""
    system_prompt, user_prompt = build_prompts(
        request.type, request.text, request.context
    )
    logger.info("AI request type: %s, text length: %d", request.type, len(request.text))

    start = time.perf_counter()
    try:
        content = await call_gateway(settings, system_prompt, user_prompt)
    except GatewayError as exc:
        AI_REQUESTS.labels(type=request.type, status=exc.code).inc()
        logger.warning("AI request type=%s failed: %s", request.type, exc.message)
        raise
    finally:
        GATEWAY_DURATION.labels(type=request.type).observe(time.perf_counter() - start)

    AI_REQUESTS.labels(type=request.type, status="success").inc()
    return AIResponse(content=content)


@app.options("/ai-explain")
async def ai_explain_preflight() -> Response:
    """Answer a bare OPTIONS request with an empty body."""
    return Response(status_code=200)


@app.get("/health")
async def health() -> dict[str, Any]:
    """Report relay status and whether the gateway can be reached at all."""
    return {
        "status": "healthy" if settings.gateway_configured else "degraded",
        "model": settings.ai_model,
        "gateway_configured": settings.gateway_configured,
    }


@app.get("/metrics")
async def metrics() -> Response:
    """Prometheus metrics endpoint."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    )
    uvicorn.run(app, host=settings.host, port=settings.port)
