# src/dealscore/analysis/scoring.py
from __future__ import annotations

from dealscore.analysis.formatting import fmt_currency, fmt_pct
from dealscore.domain.deal import DealInput, Metric, ScoreResult, Status
from dealscore.domain.finance import (
    DEFAULT_ASSUMPTIONS,
    ScoringAssumptions,
    annuity_payment,
    safe_div,
)

BASE_SCORE = 50
MIN_SCORE = 0
MAX_SCORE = 100

# score deltas per status, (good, warning, bad)
_FLIP_OFFER_DELTAS = (20, 5, -15)
_FLIP_PROFIT_DELTAS = (15, 5, -15)
_RENTAL_DELTAS = (15, 5, -10)


def _delta(status: Status, deltas: tuple[int, int, int]) -> int:
    good, warning, bad = deltas
    if status == "good":
        return good
    if status == "warning":
        return warning
    return bad


def _at_least(value: float, good: float, warning: float) -> Status:
    if value >= good:
        return "good"
    if value >= warning:
        return "warning"
    return "bad"


def _at_most(value: float, good: float, warning: float) -> Status:
    if value <= good:
        return "good"
    if value <= warning:
        return "warning"
    return "bad"


def clamp_score(raw: float) -> int:
    return int(max(MIN_SCORE, min(MAX_SCORE, raw)))


# ---------------------------------------------------------------------------
# Metric groups. Each returns (metrics, score delta).
# ---------------------------------------------------------------------------


def _flip_value_metrics(
    price: float, arv: float, repairs: float, a: ScoringAssumptions
) -> tuple[list[Metric], int]:
    max_offer = arv * a.max_offer_arv_pct - repairs
    ratio = safe_div(price, arv)

    if price <= max_offer:
        offer_status: Status = "good"
    elif price <= arv * a.warning_offer_arv_pct - repairs:
        offer_status = "warning"
    else:
        offer_status = "bad"

    # ratio is informational only, it does not move the score
    ratio_status = _at_most(ratio, a.max_offer_arv_pct, a.warning_offer_arv_pct)

    metrics = [
        Metric("70% Rule Max Offer", fmt_currency(max_offer), offer_status),
        Metric("Price-to-ARV Ratio", fmt_pct(ratio * 100), ratio_status),
    ]
    return metrics, _delta(offer_status, _FLIP_OFFER_DELTAS)


def _cap_rate_metric(price: float, rent: float, a: ScoringAssumptions) -> tuple[list[Metric], int]:
    annual_noi = rent * 12 * a.income_ratio
    cap_rate = safe_div(annual_noi, price) * 100
    status = _at_least(cap_rate, 8.0, 5.0)
    return [Metric("Cap Rate (est)", fmt_pct(cap_rate), status)], _delta(status, _RENTAL_DELTAS)


def _one_percent_rule_metric(price: float, rent: float) -> tuple[list[Metric], int]:
    ratio = safe_div(rent, price) * 100
    status = _at_least(ratio, 1.0, 0.7)
    return [Metric("1% Rule", fmt_pct(ratio, 2), status)], _delta(status, _RENTAL_DELTAS)


def _cash_on_cash_metrics(
    price: float, rent: float, repairs: float | None, a: ScoringAssumptions
) -> tuple[list[Metric], int]:
    down_payment = price * a.down_payment_pct + (repairs or 0.0)
    monthly_payment = annuity_payment(a.interest_rate / 12, a.amort_months, price * a.ltv)
    monthly_cash_flow = rent * a.income_ratio - monthly_payment
    annual_cash_flow = monthly_cash_flow * 12
    coc = safe_div(annual_cash_flow, down_payment) * 100

    status = _at_least(coc, 10.0, 5.0)

    # cash flow gets its own status but only CoC is scored
    if monthly_cash_flow > 200:
        cf_status: Status = "good"
    elif monthly_cash_flow > 0:
        cf_status = "warning"
    else:
        cf_status = "bad"

    metrics = [
        Metric("Cash-on-Cash Return", fmt_pct(coc), status),
        Metric("Monthly Cash Flow", fmt_currency(monthly_cash_flow), cf_status),
    ]
    return metrics, _delta(status, _RENTAL_DELTAS)


def _flip_profit_metrics(
    price: float, arv: float, repairs: float, a: ScoringAssumptions
) -> tuple[list[Metric], int]:
    selling_costs = arv * a.selling_cost_rate
    profit = arv - price - repairs - selling_costs
    roi = safe_div(profit, price + repairs) * 100
    status = _at_least(roi, 20.0, 10.0)
    metrics = [
        Metric("Flip Profit (est)", fmt_currency(profit), status),
        Metric("Flip ROI", fmt_pct(roi), status),
    ]
    return metrics, _delta(status, _FLIP_PROFIT_DELTAS)


# ---------------------------------------------------------------------------
# Public entrypoint
# ---------------------------------------------------------------------------


def evaluate(deal: DealInput, assumptions: ScoringAssumptions = DEFAULT_ASSUMPTIONS) -> ScoreResult:
    """
    Score a single deal.

    Metric groups run only when their inputs are present:
      - flip value + flip profit: arv and repairs
      - cap rate, 1% rule, cash-on-cash: rent

    Output order is fixed:
      70% rule -> price/ARV -> cap rate -> 1% rule -> CoC -> cash flow
      -> flip profit -> flip ROI

    The score starts at 50, each scored metric adds its delta, and only
    the final value is clamped to [0, 100]. Pure function; callers must
    check price > 0 beforehand (non-positive prices give inf/nan ratios,
    never an exception).
    """
    price = float(deal.price)
    has_flip = deal.arv is not None and deal.repairs is not None
    has_rent = deal.rent is not None

    groups: list[tuple[list[Metric], int]] = []

    if has_flip:
        groups.append(_flip_value_metrics(price, float(deal.arv), float(deal.repairs), assumptions))

    if has_rent:
        rent = float(deal.rent)
        groups.append(_cap_rate_metric(price, rent, assumptions))
        groups.append(_one_percent_rule_metric(price, rent))
        groups.append(_cash_on_cash_metrics(price, rent, deal.repairs, assumptions))

    if has_flip:
        groups.append(_flip_profit_metrics(price, float(deal.arv), float(deal.repairs), assumptions))

    metrics: list[Metric] = []
    raw_score = BASE_SCORE
    for group_metrics, delta in groups:
        metrics.extend(group_metrics)
        raw_score += delta

    return ScoreResult(metrics=tuple(metrics), score=clamp_score(raw_score))
