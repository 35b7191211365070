from __future__ import annotations

from typing import Any

from dealscore.adapters.logging_utils import get_logger
from dealscore.analysis.scoring import evaluate
from dealscore.domain.deal import DealInput
from dealscore.domain.ports import NarrativeContext, NarrativeProvider
from dealscore.services.narrative import StaticNarrativeProvider, narrate
from dealscore.services.validation import validate_deal_payload

logger = get_logger(__name__)


def analyze_deal_input(deal: DealInput, narrator: NarrativeProvider | None = None) -> dict[str, Any]:
    """
    Score an already-validated deal and layer narrative text on top.

    The narrative step can never change the score or the breakdown, and
    never raises.
    """
    result = evaluate(deal)

    context = NarrativeContext(deal=deal, metrics=result.metrics, score=result.score)
    narrative = narrate(narrator or StaticNarrativeProvider(), context)

    logger.info(
        "deal_analyzed",
        extra={"context": {"score": result.score, "n_metrics": len(result.metrics), "verdict": narrative.verdict}},
    )

    return {
        "score": result.score,
        "verdict": narrative.verdict,
        "summary": narrative.summary,
        "breakdown": result.breakdown(),
        "risks": list(narrative.risks),
        "opportunities": list(narrative.opportunities),
    }


def analyze_deal(raw_payload: dict[str, Any], narrator: NarrativeProvider | None = None) -> dict[str, Any]:
    """
    Main analysis entrypoint: validate -> score -> narrate.

    Raises DealValidationError (a ValueError) before any scoring happens
    when the payload is unusable.
    """
    deal = validate_deal_payload(raw_payload)
    return analyze_deal_input(deal, narrator)
