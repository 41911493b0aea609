"""
Pydantic schemas for the Calabozos API envelopes.
"""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel


class ClassSummary(BaseModel):
    index: str
    name: str
    url: str
    created_at: Optional[float] = None
    updated_at: Optional[float] = None


class ClassListData(BaseModel):
    classes: list[ClassSummary]


class ClassListResponse(BaseModel):
    status: Literal["success"] = "success"
    data: ClassListData


class DetailResponse(BaseModel):
    status: Literal["success"] = "success"
    data: dict[str, Any]


class ErrorResponse(BaseModel):
    status: Literal["error"] = "error"
    message: str


class HealthResponse(BaseModel):
    status: Literal["ok"]
    env: str
