import math
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Optional, Union

from pydantic import BaseModel, StrictFloat, StrictInt

from .errors import InvalidInput

# Pricing constants and request/response schemas live here.

PROTECTION_THRESHOLD = 100
PROTECTION_FIXED_PRICE = 2.17
PROTECTION_PERCENT = 0.03
PROTECTION_BASE_INCREMENT = 0.01

_CENT = Decimal("0.01")
# enough digits to quantize any finite float to the cent
_ROUND_PRECISION = 400

class UpdateRequest(BaseModel):
    subtotal: Union[StrictInt, StrictFloat]

class PriceOut(BaseModel):
    price: float

class UpdateOut(BaseModel):
    updated: bool = True
    price: float

def round2(value: float) -> float:
    # repr() gives the shortest decimal form, so 3.0100000000000002 -> 3.01
    with localcontext() as ctx:
        ctx.prec = _ROUND_PRECISION
        return float(Decimal(repr(value)).quantize(_CENT, rounding=ROUND_HALF_UP))

def validate_subtotal(subtotal) -> float:
    if isinstance(subtotal, bool) or not isinstance(subtotal, (int, float)):
        raise InvalidInput()
    try:
        subtotal = float(subtotal)
    except OverflowError:
        raise InvalidInput()
    if not math.isfinite(subtotal) or subtotal < 0:
        raise InvalidInput()
    return subtotal

def parse_subtotal(raw: Optional[str]) -> float:
    """Parse a subtotal from a query string value."""
    if raw is None or not raw.strip():
        raise InvalidInput()
    try:
        value = float(raw)
    except ValueError:
        raise InvalidInput()
    return validate_subtotal(value)

def calculate_protection_price(subtotal: float) -> float:
    """
    Protection price for an order subtotal.

    Below the threshold the price is fixed; at or above it the price is a
    percentage of the subtotal plus a base increment, rounded to the cent.
    """
    subtotal = validate_subtotal(subtotal)
    if subtotal < PROTECTION_THRESHOLD:
        return PROTECTION_FIXED_PRICE
    return round2(subtotal * PROTECTION_PERCENT + PROTECTION_BASE_INCREMENT)

def format_price(price: float) -> str:
    return f"{round2(price):.2f}"
