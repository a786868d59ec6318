from __future__ import annotations

from datetime import datetime, timezone

import pytest

from storefront.application.dto.billing import CreateCheckoutSessionInput, StripeCheckoutSessionRequest
from storefront.application.use_cases.create_checkout_session import CreateCheckoutSessionUseCase
from storefront.domain.entities.checkout_session import CheckoutSession
from storefront.domain.entities.customer import RemoteCustomer
from storefront.domain.exceptions import BillingError


FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class FakeStripePort:
    def __init__(self, customers: list[RemoteCustomer] | None = None):
        self.customers = list(customers or [])
        self.created: list[RemoteCustomer] = []
        self.session_requests: list[StripeCheckoutSessionRequest] = []
        self.fail_at: str | None = None

    def find_customer_by_email(self, *, email: str) -> RemoteCustomer | None:
        if self.fail_at == "customer_lookup":
            raise BillingError("lookup failed", code="customer_lookup")
        matches = [customer for customer in self.customers if customer.email == email]
        return matches[0] if matches else None

    def create_customer(self, *, email: str, metadata: dict[str, str]) -> RemoteCustomer:
        if self.fail_at == "customer_create":
            raise BillingError("create failed", code="customer_create")
        customer = RemoteCustomer(id=f"cus_new_{len(self.created) + 1}", email=email, metadata=metadata)
        self.customers.append(customer)
        self.created.append(customer)
        return customer

    def create_checkout_session(self, request: StripeCheckoutSessionRequest) -> CheckoutSession:
        self.session_requests.append(request)
        if self.fail_at == "session_create" or not request.price_id:
            raise BillingError("session failed", code="session_create")
        return CheckoutSession(id="cs_test_123", redirect_url="https://checkout.stripe.com/c/cs_test_123")

    def verify_webhook(self, *, signature: str, payload: bytes):
        raise NotImplementedError


def _use_case(port: FakeStripePort) -> CreateCheckoutSessionUseCase:
    return CreateCheckoutSessionUseCase(
        stripe_port=port,
        customer_source="storefront_web",
        session_source="storefront_pricing_page",
        clock=lambda: FIXED_NOW,
    )


def _input(*, price_id: str | None = "price_123", email: str | None = None) -> CreateCheckoutSessionInput:
    return CreateCheckoutSessionInput(price_id=price_id, customer_email=email, origin="https://shop.example")


def test_without_email_creates_session_without_customer():
    port = FakeStripePort()

    output = _use_case(port).execute(_input())

    assert output.session_id == "cs_test_123"
    assert port.created == []
    request = port.session_requests[0]
    assert request.customer_id is None
    assert request.price_id == "price_123"
    assert "customer_email" not in request.metadata


def test_unseen_email_creates_exactly_one_customer_and_uses_it():
    port = FakeStripePort()

    _use_case(port).execute(_input(email="new@example.com"))

    assert len(port.created) == 1
    created = port.created[0]
    assert created.email == "new@example.com"
    assert created.metadata == {"source": "storefront_web", "created_at": "2024-05-01T12:00:00Z"}
    assert port.session_requests[0].customer_id == created.id


def test_existing_email_reuses_first_match():
    port = FakeStripePort(
        customers=[
            RemoteCustomer(id="cus_first", email="known@example.com"),
            RemoteCustomer(id="cus_second", email="known@example.com"),
        ]
    )

    _use_case(port).execute(_input(email="known@example.com"))

    assert port.created == []
    assert port.session_requests[0].customer_id == "cus_first"


def test_session_request_carries_redirect_urls_and_metadata():
    port = FakeStripePort()

    _use_case(port).execute(_input(email="buyer@example.com"))

    request = port.session_requests[0]
    assert request.success_url == "https://shop.example/payment/success?session_id={CHECKOUT_SESSION_ID}"
    assert request.cancel_url == "https://shop.example/payment/cancel"
    assert request.metadata == {
        "source": "storefront_pricing_page",
        "timestamp": "2024-05-01T12:00:00Z",
        "customer_email": "buyer@example.com",
    }


def test_missing_price_id_is_passed_through_to_remote_call():
    port = FakeStripePort()

    with pytest.raises(BillingError) as exc_info:
        _use_case(port).execute(_input(price_id=None))

    assert exc_info.value.code == "session_create"
    assert port.session_requests[0].price_id is None


@pytest.mark.parametrize("site", ["customer_lookup", "customer_create", "session_create"])
def test_remote_failures_keep_their_failure_site(site: str):
    port = FakeStripePort()
    port.fail_at = site

    with pytest.raises(BillingError) as exc_info:
        _use_case(port).execute(_input(email="new@example.com"))

    assert exc_info.value.code == site
