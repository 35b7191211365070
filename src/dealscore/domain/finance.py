from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class ScoringAssumptions:
    # flip heuristics
    max_offer_arv_pct: float = 0.70     # 70% rule
    warning_offer_arv_pct: float = 0.80
    selling_cost_rate: float = 0.08     # agent + closing on resale

    # rental heuristics
    expense_ratio: float = 0.40         # share of gross rent lost to opex
    down_payment_pct: float = 0.25
    interest_rate: float = 0.07         # annual
    amort_months: int = 360

    @property
    def income_ratio(self) -> float:
        return 1.0 - self.expense_ratio

    @property
    def ltv(self) -> float:
        return 1.0 - self.down_payment_pct


DEFAULT_ASSUMPTIONS = ScoringAssumptions()


def annuity_payment(rate_monthly: float, n_months: int, principal: float) -> float:
    """
    Level monthly payment that amortizes `principal` over `n_months`:

        P * r / (1 - (1 + r) ** -n)
    """
    r = rate_monthly
    if r == 0:
        return principal / n_months
    return principal * r / (1 - (1 + r) ** -n_months)


def safe_div(num: float, den: float) -> float:
    """
    IEEE-style division: x/0 gives +/-inf and 0/0 gives nan instead of raising.
    """
    if den == 0:
        if num == 0:
            return float("nan")
        return math.copysign(math.inf, num) * math.copysign(1.0, den)
    return num / den
