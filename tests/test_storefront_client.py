from __future__ import annotations

import json

import httpx
import pytest

from storefront.client.entitlement import EntitlementFlag
from storefront.client.storefront_client import StorefrontClient
from storefront.domain.exceptions import CheckoutRequestError
from storefront.infrastructure.storage.entitlement_store import InMemoryEntitlementStore


def _client(handler) -> StorefrontClient:
    http_client = httpx.Client(base_url="https://shop.example", transport=httpx.MockTransport(handler))
    return StorefrontClient(
        base_url="https://shop.example",
        flag=EntitlementFlag(InMemoryEntitlementStore()),
        http_client=http_client,
    )


def test_start_checkout_posts_price_and_email():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.url.path, json.loads(request.content)))
        return httpx.Response(200, json={"sessionId": "cs_test_1"})

    with _client(handler) as client:
        session_id = client.start_checkout(price_id="price_123", customer_email="buyer@example.com")

    assert session_id == "cs_test_1"
    assert seen == [("/api/checkout", {"priceId": "price_123", "customerEmail": "buyer@example.com"})]


def test_start_checkout_omits_missing_email():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return httpx.Response(200, json={"sessionId": "cs_test_2"})

    _client(handler).start_checkout(price_id="price_123")

    assert seen == [{"priceId": "price_123"}]


def test_start_checkout_surfaces_server_error():
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": "Failed to create checkout session"})

    with pytest.raises(CheckoutRequestError) as exc_info:
        _client(handler).start_checkout(price_id="price_123")

    assert exc_info.value.status_code == 500
    assert str(exc_info.value) == "Failed to create checkout session"


def test_get_publishable_key():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/checkout/config"
        return httpx.Response(200, json={"publishableKey": "pk_test_1"})

    assert _client(handler).get_publishable_key() == "pk_test_1"


def test_redirect_then_downgrade_round_trip():
    client = _client(lambda _request: httpx.Response(404))

    assert client.handle_redirect("https://shop.example/payment/success?session_id=cs_test_9") == "cs_test_9"
    assert client.flag.get() is True

    client.downgrade()
    assert client.flag.get() is False
