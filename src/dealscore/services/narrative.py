# src/dealscore/services/narrative.py
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from dealscore.adapters.config import AppConfig
from dealscore.adapters.logging_utils import get_logger
from dealscore.adapters.mistral_client import MistralClient, MistralError, make_mistral_client
from dealscore.analysis.formatting import fmt_currency
from dealscore.domain.ports import (
    NarrativeContext,
    NarrativeProvider,
    NarrativeResult,
    NarrativeUnavailable,
)

logger = get_logger(__name__)

DEFAULT_RISKS = [
    "Market conditions may affect projected values",
    "Repair estimates may be understated",
    "Vacancy risk not fully modeled",
]

DEFAULT_OPPORTUNITIES = [
    "Value-add potential through renovations",
    "Rental income provides cash flow stability",
    "Appreciation in growing markets",
]


def verdict_for_score(score: int) -> str:
    if score >= 75:
        return "Strong Buy"
    if score >= 60:
        return "Good Deal"
    if score >= 45:
        return "Proceed with Caution"
    return "Pass"


def default_narrative(score: int) -> NarrativeResult:
    return NarrativeResult(
        verdict=verdict_for_score(score),
        summary=f"This property scores {score}/100 based on standard investment metrics.",
        risks=list(DEFAULT_RISKS),
        opportunities=list(DEFAULT_OPPORTUNITIES),
    )


def build_prompt(context: NarrativeContext) -> str:
    deal = context.deal

    lines = [
        "You are an expert real estate investment analyst. Analyze this deal and provide insights.",
        "",
        f"Property: {deal.address or 'Not specified'}",
        f"Purchase Price: {fmt_currency(deal.price)}",
    ]
    if deal.arv:
        lines.append(f"After Repair Value (ARV): {fmt_currency(deal.arv)}")
    if deal.rent:
        lines.append(f"Monthly Rent: {fmt_currency(deal.rent)}")
    if deal.repairs:
        lines.append(f"Estimated Repairs: {fmt_currency(deal.repairs)}")

    lines += ["", "Computed metrics:"]
    lines += [f"- {m.label}: {m.value} ({m.status})" for m in context.metrics]
    lines += [
        f"Overall score: {context.score}/100",
        "",
        "Respond in JSON format only:",
        "{",
        '  "verdict": "one line verdict (e.g., \'Strong Buy\', \'Proceed with Caution\', \'Pass\')",',
        '  "summary": "2-3 sentence summary of the deal",',
        '  "risks": ["risk 1", "risk 2", "risk 3"],',
        '  "opportunities": ["opportunity 1", "opportunity 2", "opportunity 3"]',
        "}",
    ]
    return "\n".join(lines)


def _text_list(value: Any) -> list[str] | None:
    if not isinstance(value, list) or not value:
        return None
    out = [str(v).strip() for v in value if str(v).strip()]
    return out or None


def parse_narrative(raw: str, fallback: NarrativeResult) -> NarrativeResult:
    """
    Merge the model's JSON answer over `fallback`. Missing or empty fields
    keep the fallback value. Raises NarrativeUnavailable if `raw` is not a
    JSON object.
    """
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise NarrativeUnavailable(f"model returned non-JSON content: {e}") from e
    if not isinstance(parsed, dict):
        raise NarrativeUnavailable(f"model returned {type(parsed).__name__}, expected object")

    verdict = str(parsed.get("verdict") or "").strip()
    summary = str(parsed.get("summary") or "").strip()

    return NarrativeResult(
        verdict=verdict or fallback.verdict,
        summary=summary or fallback.summary,
        risks=_text_list(parsed.get("risks")) or fallback.risks,
        opportunities=_text_list(parsed.get("opportunities")) or fallback.opportunities,
    )


class StaticNarrativeProvider:
    """Deterministic narrative keyed off the score. Never fails."""

    def generate(self, context: NarrativeContext) -> NarrativeResult:
        return default_narrative(context.score)


@dataclass
class MistralNarrativeProvider:
    """
    Mistral-backed narrative.

    Every failure (network, HTTP status, bad payload) is raised as
    NarrativeUnavailable so the caller can fall back.
    """

    client: MistralClient

    def generate(self, context: NarrativeContext) -> NarrativeResult:
        prompt = build_prompt(context)
        try:
            raw = self.client.chat_json(prompt)
        except MistralError as e:
            raise NarrativeUnavailable(str(e)) from e
        return parse_narrative(raw, fallback=default_narrative(context.score))


def narrate(provider: NarrativeProvider, context: NarrativeContext) -> NarrativeResult:
    """
    Run `provider` and recover locally from any failure with the static
    narrative. The user always gets a complete result.
    """
    try:
        return provider.generate(context)
    except NarrativeUnavailable as e:
        logger.warning(
            "narrative_unavailable_fallback",
            extra={"context": {"error": str(e), "score": context.score}},
        )
    except Exception as e:
        logger.exception(
            "narrative_provider_crashed_fallback",
            extra={"context": {"error": str(e), "score": context.score}},
        )
    return default_narrative(context.score)


def make_narrative_provider(cfg: AppConfig) -> NarrativeProvider:
    if not cfg.MISTRAL_API_KEY:
        logger.info("mistral_api_key_missing_static_narrative")
        return StaticNarrativeProvider()
    return MistralNarrativeProvider(client=make_mistral_client(cfg))
