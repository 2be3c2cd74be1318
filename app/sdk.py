import logging
from typing import Optional, Protocol

from .core import (
    PROTECTION_THRESHOLD, UpdateOut, PriceOut,
    calculate_protection_price, parse_subtotal, validate_subtotal
)
from .locks import KeyedLock
from .models import Variant

# This file contains the core logic for the protection endpoints.

logger = logging.getLogger(__name__)

class PriceUpdater(Protocol):
    async def update_variant_price(self, variant_id: str, price: float) -> Variant: ...

# Price quote
async def quote_price_logic(raw_subtotal: Optional[str]) -> PriceOut:
    logger.info("Price check request -> Subtotal: %s", raw_subtotal)
    subtotal = parse_subtotal(raw_subtotal)
    price = calculate_protection_price(subtotal)
    logger.info("Calculated price: $%.2f", price)
    return PriceOut(price=price)

# Price update (serialized per variant)
async def update_price_logic(subtotal, variant_id: str, gate: KeyedLock, remote: PriceUpdater) -> UpdateOut:
    logger.info("Update request received -> Subtotal: %s", subtotal)
    subtotal = validate_subtotal(subtotal)
    target_price = calculate_protection_price(subtotal)
    if subtotal < PROTECTION_THRESHOLD:
        logger.info("Subtotal below threshold -> Fixed price $%.2f", target_price)
    else:
        logger.info("Subtotal above threshold -> Dynamic price $%.2f", target_price)

    variant = await gate.run_exclusive(
        variant_id, lambda: remote.update_variant_price(variant_id, target_price)
    )

    committed = float(variant.price)
    logger.info("Shopify updated successfully -> New price $%.2f", committed)
    return UpdateOut(updated=True, price=committed)
