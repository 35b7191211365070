from __future__ import annotations


def fmt_currency(value: float) -> str:
    """$ with thousands separators, rounded to whole dollars: 205000 -> '$205,000'."""
    return f"${value:,.0f}"


def fmt_pct(value: float, decimals: int = 1) -> str:
    """`value` is already in percent units: 7.2 -> '7.2%'."""
    return f"{value:.{decimals}f}%"
