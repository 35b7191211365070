# src/dealscore/services/validation.py

import math
from typing import Any

from dealscore.domain.deal import DealInput

OPTIONAL_NUMERIC_FIELDS = ("arv", "rent", "repairs")


class DealValidationError(ValueError):
    pass


def _to_num(val: Any, field_name: str) -> float:
    """
    Coerce values like:
      - 250000
      - "250000"
      - "$250,000"
    into float.
    """
    if isinstance(val, bool):
        raise DealValidationError(f"Invalid number for {field_name}")
    if isinstance(val, (int, float)):
        f = float(val)
    elif isinstance(val, str):
        s = val.strip().replace("$", "").replace(",", "")
        try:
            f = float(s)
        except ValueError:
            raise DealValidationError(f"Invalid number for {field_name}") from None
    else:
        raise DealValidationError(f"Invalid number for {field_name}")
    if not math.isfinite(f):
        raise DealValidationError(f"Invalid number for {field_name}")
    return f


def _is_blank(val: Any) -> bool:
    # the web form sends empty / zero inputs as "not provided"
    if val is None:
        return True
    if isinstance(val, str):
        return not val.strip()
    return val == 0


def validate_deal_payload(raw: dict[str, Any]) -> DealInput:
    """
    Turn an incoming JSON payload into a DealInput.

    - price is required and must be > 0
    - arv / rent / repairs are optional; blank or zero means absent
    - address is free text, never used in the math
    """
    if not isinstance(raw, dict):
        raise DealValidationError("Request body must be a JSON object")

    price_raw = raw.get("price")
    if _is_blank(price_raw):
        raise DealValidationError("Price is required")
    price = _to_num(price_raw, "price")
    if price <= 0:
        raise DealValidationError("Price must be greater than zero")

    optional: dict[str, float | None] = {}
    for field in OPTIONAL_NUMERIC_FIELDS:
        val = raw.get(field)
        if _is_blank(val):
            optional[field] = None
            continue
        f = _to_num(val, field)
        if f < 0:
            raise DealValidationError(f"{field} must not be negative")
        optional[field] = f if f != 0 else None

    address = raw.get("address")
    address = str(address).strip() if address is not None else None

    return DealInput(
        price=price,
        address=address or None,
        arv=optional["arv"],
        rent=optional["rent"],
        repairs=optional["repairs"],
    )
