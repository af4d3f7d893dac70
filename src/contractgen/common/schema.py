"""Pydantic models and dataclasses for request/response types."""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel


class ContractType(str, Enum):
    TOKEN = "token"
    NFT = "nft"
    VOTING = "voting"
    CUSTOM = "custom"


class GenerationRequest(BaseModel):
    type: ContractType
    params: dict[str, Any]


class GenerationResult(BaseModel):
    success: bool = True
    code: str


class ErrorResult(BaseModel):
    error: str
    message: str | None = None


@dataclass
class ServiceResponse:
    """Status code and JSON body produced for a single request."""
    status_code: int
    body: dict[str, Any] | None = None

    @classmethod
    def error(cls, status_code: int, error: str, message: str | None = None) -> "ServiceResponse":
        return cls(status_code, ErrorResult(error=error, message=message).model_dump(exclude_none=True))
