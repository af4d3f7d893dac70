"""FastAPI surface for the contract generation service.

Endpoints:
- GET /health
- ANY /api/generate-contract  { "type": "token", "params": {...} }
"""
from __future__ import annotations
import json
import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from contractgen.common.config import Settings, load_settings
from contractgen.common.logging_setup import setup_logging
from contractgen.serve.service import ContractPromptService

LOGGER = logging.getLogger("contractgen.serve.app")

GENERATE_PATH = "/api/generate-contract"
ROUTE_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]

CORS_HEADERS = {
    "Access-Control-Allow-Credentials": "true",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,OPTIONS,PATCH,DELETE,POST,PUT",
    "Access-Control-Allow-Headers": (
        "X-CSRF-Token, X-Requested-With, Accept, Accept-Version, Content-Length, "
        "Content-MD5, Content-Type, Date, X-Api-Version"
    ),
}


async def _read_json(request: Request) -> Any:
    """Decode the request body; None when it is empty or not JSON."""
    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw)
    except (ValueError, UnicodeDecodeError):
        LOGGER.debug("Ignoring undecodable request body")
        return None


def create_app(settings: Settings | None = None, service: ContractPromptService | None = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Configuration; loaded from YAML/env when omitted.
        service: Pre-built service, mainly for tests.
    """
    settings = settings or load_settings()
    service = service or ContractPromptService(settings)
    app = FastAPI(title="contractgen")
    app.state.service = service

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "model": service.settings.model}

    @app.api_route(GENERATE_PATH, methods=ROUTE_METHODS)
    async def generate_contract(request: Request) -> Response:
        body = await _read_json(request) if request.method == "POST" else None
        result = await service.handle(request.method, body)
        if result.body is None:
            return Response(status_code=result.status_code, headers=CORS_HEADERS)
        return JSONResponse(result.body, status_code=result.status_code, headers=CORS_HEADERS)

    return app


_settings = load_settings()
setup_logging(_settings.log_level)
app = create_app(_settings)
