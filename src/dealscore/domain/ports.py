# src/dealscore/domain/ports.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, Sequence

from dealscore.domain.deal import DealInput, Metric


# ----------------------------
# Narrative augmentation
# ----------------------------

@dataclass(frozen=True)
class NarrativeContext:
    deal: DealInput
    metrics: Sequence[Metric]
    score: int


@dataclass
class NarrativeResult:
    verdict: str
    summary: str
    risks: list[str] = field(default_factory=list)
    opportunities: list[str] = field(default_factory=list)


class NarrativeUnavailable(RuntimeError):
    """Raised by a NarrativeProvider when it cannot produce text for any reason."""


class NarrativeProvider(Protocol):
    def generate(self, context: NarrativeContext) -> NarrativeResult:
        ...
