from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ValidationRequest(BaseModel):
    address: str = Field(..., min_length=1, description="Wallet address to prove control of")


class StarSubmitRequest(BaseModel):
    address: str = Field(..., min_length=1)
    message: str = Field(..., description="Challenge returned by /requestValidation")
    signature: str = Field(..., description="Wallet signature over the challenge")
    star: Any = Field(..., description="Star claim; any JSON value")


class IssueResponse(BaseModel):
    kind: str
    height: int
    digest: str | None = None
    declared_previous: str | None = None
    actual_previous: str | None = None
