# app/shopify.py
import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from .config import Settings
from .core import format_price
from .errors import RemoteError
from .models import Variant

logger = logging.getLogger(__name__)

class ShopifyClient:
    """Minimal Shopify Admin REST client: the only call is a variant price update."""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = f"https://{settings.shop_domain}/admin/api/{settings.api_version}"
        self.access_token = settings.access_token
        self.timeout = settings.timeout
        self.transport = transport

    def _headers(self):
        headers = {"Content-Type": "application/json"}
        if self.access_token:
            headers["X-Shopify-Access-Token"] = self.access_token
        return headers

    async def update_variant_price(self, variant_id: str, price: float) -> Variant:
        url = f"{self.base_url}/variants/{variant_id}.json"
        body = {"variant": {"id": int(variant_id), "price": format_price(price)}}
        logger.info("Sending PUT to Shopify -> Variant %s, Price: $%s", variant_id, body["variant"]["price"])

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                r = await client.put(url, json=body, headers=self._headers())
        except httpx.HTTPError as e:
            raise RemoteError(f"Shopify request failed: {e}") from e

        if not r.is_success:
            raise RemoteError(
                f"Shopify API error: {r.status_code} {r.reason_phrase} - {r.text}",
                status_code=r.status_code,
            )

        try:
            variant = Variant.model_validate(r.json()["variant"])
            float(variant.price)
        except (ValueError, KeyError, TypeError, ValidationError) as e:
            raise RemoteError(f"Shopify API returned an unexpected body: {r.text}", status_code=r.status_code) from e
        return variant
