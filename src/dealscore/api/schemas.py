# src/dealscore/api/schemas.py
from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel
from pydantic import ConfigDict


# --------------------------------------------
# Analyze
# --------------------------------------------

class AnalyzeRequest(BaseModel):
    """
    Request body for /api/analyze.

    Fields stay loosely typed on purpose: the form posts numbers, strings
    or nothing, and validate_deal_payload decides what is usable (so a
    missing price becomes our 400 instead of a framework 422).
    """
    model_config = ConfigDict(extra="allow")

    address: Any = None
    price: Any = None
    arv: Any = None
    rent: Any = None
    repairs: Any = None


class MetricItem(BaseModel):
    label: str
    value: str
    status: Literal["good", "warning", "bad"]


class AnalyzeResponse(BaseModel):
    score: int
    verdict: str
    summary: str
    breakdown: list[MetricItem]
    risks: list[str]
    opportunities: list[str]


class ErrorResponse(BaseModel):
    error: str
