"""Contract generation request handler.

Validates a generation request, renders the prompt for its contract type,
calls the Anthropic Messages API and returns the cleaned Solidity source.
"""
from __future__ import annotations
import logging
import time
from typing import Any

import httpx

from contractgen.common.config import Settings
from contractgen.common.errors import (
    ClientInputError,
    ConfigurationError,
    ContractGenError,
    UpstreamError,
)
from contractgen.common.schema import (
    ContractType,
    GenerationRequest,
    GenerationResult,
    ServiceResponse,
)
from contractgen.common.templates import missing_fields, render_prompt, strip_code_fences

LOGGER = logging.getLogger("contractgen.serve.service")


def parse_request(body: Any) -> GenerationRequest:
    """Validate a decoded JSON body into a GenerationRequest."""
    if not isinstance(body, dict):
        raise ClientInputError()
    contract_type, params = body.get("type"), body.get("params")
    if not contract_type or not isinstance(params, dict):
        raise ClientInputError()

    try:
        selected = ContractType(contract_type)
    except ValueError:
        allowed = ", ".join(t.value for t in ContractType)
        raise ClientInputError(
            f"Unknown contract type {contract_type!r}; expected one of: {allowed}",
            error="Unsupported contract type",
        )

    missing = missing_fields(selected, params)
    if missing:
        raise ClientInputError(f"{selected.value} contract requires: {', '.join(missing)}")
    return GenerationRequest(type=selected, params=params)


class ContractPromptService:
    """Stateless handler; one instance may serve any number of requests."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.settings = settings
        self._transport = transport

    async def handle(self, method: str, body: Any = None) -> ServiceResponse:
        """
        Serve one request.

        Args:
            method: HTTP method of the inbound request.
            body: Decoded JSON body, or None when absent or undecodable.
        """
        method = method.upper()
        if method == "OPTIONS":
            return ServiceResponse(200)
        if method != "POST":
            return ServiceResponse.error(405, "Method not allowed")

        try:
            request = parse_request(body)
            code = await self.generate(request)
            return ServiceResponse(200, GenerationResult(code=code).model_dump())
        except UpstreamError as e:
            LOGGER.error("Completion API error (%s): %s", e.status_code, e.body)
            return ServiceResponse.error(e.status_code, e.error)
        except ContractGenError as e:
            return ServiceResponse.error(e.status_code, e.error, e.message)
        except Exception as e:
            LOGGER.exception("Server error: %s", e)
            return ServiceResponse.error(500, "Internal server error", str(e))

    async def generate(self, request: GenerationRequest) -> str:
        """Render, send and clean up a single generation. Raises ContractGenError."""
        if not self.settings.api_key:
            raise ConfigurationError()

        prompt = render_prompt(request.type, request.params)
        start = time.time()
        text = await self.complete(prompt)
        latency = int((time.time() - start) * 1000)
        LOGGER.info("Generated %s contract in %sms", request.type.value, latency)
        return strip_code_fences(text)

    async def complete(self, prompt: str) -> str:
        """Send one user message to the completion API and return its first text block."""
        headers = {
            "Content-Type": "application/json",
            "x-api-key": self.settings.api_key or "",
            "anthropic-version": self.settings.api_version,
        }
        payload = {
            "model": self.settings.model,
            "max_tokens": self.settings.max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }

        async with httpx.AsyncClient(timeout=self.settings.timeout, transport=self._transport) as client:
            r = await client.post(self.settings.api_url, headers=headers, json=payload)
            if not r.is_success:
                raise UpstreamError(r.status_code, r.text)
            data = r.json()

        return data["content"][0]["text"]
