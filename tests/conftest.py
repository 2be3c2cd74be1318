# tests/conftest.py
import asyncio
import time
import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.locks import KeyedLock
from app.main import create_app
from app.errors import RemoteError
from app.models import Variant

TEST_SETTINGS = Settings(access_token="shpat_test", variant_id="45626932789401")

class FakeShopify:
    """Stands in for ShopifyClient; records every call and its wall-clock interval."""

    def __init__(self, delay: float = 0.0, fail: bool = False, committed: str = None):
        self.delay = delay
        self.fail = fail
        self.committed = committed
        self.calls = []
        self.intervals = []
        self.active = 0
        self.max_active = 0

    async def update_variant_price(self, variant_id, price):
        self.calls.append((variant_id, price))
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        start = time.monotonic()
        try:
            await asyncio.sleep(self.delay)
            if self.fail:
                raise RemoteError("Shopify API error: 502 Bad Gateway - upstream down", status_code=502)
            return Variant(id=int(variant_id), price=self.committed or f"{price:.2f}")
        finally:
            self.intervals.append((start, time.monotonic()))
            self.active -= 1

@pytest.fixture
def fake_shopify():
    return FakeShopify()

@pytest.fixture
def gate():
    return KeyedLock()

@pytest.fixture
def protection_app(fake_shopify, gate):
    return create_app(TEST_SETTINGS, remote=fake_shopify, gate=gate)

@pytest.fixture
def client(protection_app):
    return TestClient(protection_app)
