# tests/test_shopify.py
import asyncio
import json
import httpx
import pytest

from app.config import Settings
from app.errors import RemoteError
from app.shopify import ShopifyClient

VARIANT_ID = "45626932789401"

def _client(handler):
    settings = Settings(shop_domain="test-shop.myshopify.com", api_version="2025-07", access_token="shpat_test")
    return ShopifyClient(settings, transport=httpx.MockTransport(handler))

def test_update_sends_put_with_two_decimal_price():
    seen = {}

    def handler(request: httpx.Request):
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["token"] = request.headers.get("X-Shopify-Access-Token")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"variant": {"id": int(VARIANT_ID), "price": "3.00", "title": "Protection"}})

    variant = asyncio.run(_client(handler).update_variant_price(VARIANT_ID, 3))

    assert seen["method"] == "PUT"
    assert seen["url"] == f"https://test-shop.myshopify.com/admin/api/2025-07/variants/{VARIANT_ID}.json"
    assert seen["token"] == "shpat_test"
    assert seen["body"] == {"variant": {"id": int(VARIANT_ID), "price": "3.00"}}
    assert variant.id == int(VARIANT_ID)
    assert variant.price == "3.00"

def test_non_success_status_raises_remote_error():
    def handler(request):
        return httpx.Response(422, text='{"errors":{"price":["is invalid"]}}')

    with pytest.raises(RemoteError) as exc:
        asyncio.run(_client(handler).update_variant_price(VARIANT_ID, 2.17))
    assert exc.value.status_code == 422
    assert exc.value.message.startswith("Shopify API error: 422")
    assert "is invalid" in exc.value.message

def test_network_failure_raises_remote_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(RemoteError) as exc:
        asyncio.run(_client(handler).update_variant_price(VARIANT_ID, 2.17))
    assert exc.value.status_code is None
    assert "connection refused" in exc.value.message

@pytest.mark.parametrize("payload", [{"product": {}}, {"variant": {"id": 1}}, {"variant": {"id": 1, "price": "free"}}])
def test_unexpected_body_raises_remote_error(payload):
    def handler(request):
        return httpx.Response(200, json=payload)

    with pytest.raises(RemoteError):
        asyncio.run(_client(handler).update_variant_price(VARIANT_ID, 2.17))

def test_missing_token_omits_header():
    seen = {}

    def handler(request):
        seen["has_token"] = "X-Shopify-Access-Token" in request.headers
        return httpx.Response(401, text="Unauthorized")

    client = ShopifyClient(Settings(access_token=None), transport=httpx.MockTransport(handler))
    with pytest.raises(RemoteError) as exc:
        asyncio.run(client.update_variant_price(VARIANT_ID, 2.17))
    assert seen["has_token"] is False
    assert exc.value.status_code == 401
