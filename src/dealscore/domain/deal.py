from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional

Status = Literal["good", "warning", "bad"]


@dataclass(frozen=True)
class DealInput:
    price: float                    # purchase price, must be > 0 (checked by callers)
    address: Optional[str] = None   # informational only
    arv: Optional[float] = None     # after-repair value
    rent: Optional[float] = None    # monthly rent
    repairs: Optional[float] = None # repair budget


@dataclass(frozen=True)
class Metric:
    label: str
    value: str
    status: Status

    def to_dict(self) -> dict[str, str]:
        return {"label": self.label, "value": self.value, "status": self.status}


@dataclass(frozen=True)
class ScoreResult:
    metrics: tuple[Metric, ...] = field(default_factory=tuple)
    score: int = 50

    def breakdown(self) -> list[dict[str, str]]:
        return [m.to_dict() for m in self.metrics]
