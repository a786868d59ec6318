from __future__ import annotations

import logging

import httpx

from storefront.client.entitlement import EntitlementFlag, observe_checkout_redirect
from storefront.domain.exceptions import CheckoutRequestError


logger = logging.getLogger(__name__)

CHECKOUT_PATH = "/api/checkout"
CHECKOUT_CONFIG_PATH = "/api/checkout/config"


class StorefrontClient:
    def __init__(
        self,
        *,
        base_url: str,
        flag: EntitlementFlag | None = None,
        timeout_seconds: float = 10,
        http_client: httpx.Client | None = None,
    ):
        self._flag = flag or EntitlementFlag()
        self._http = http_client or httpx.Client(base_url=base_url, timeout=timeout_seconds)

    @property
    def flag(self) -> EntitlementFlag:
        return self._flag

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "StorefrontClient":
        return self

    def __exit__(self, *_exc_info) -> None:
        self.close()

    def get_publishable_key(self) -> str:
        response = self._http.get(CHECKOUT_CONFIG_PATH)
        payload = _json_or_empty(response)
        if response.status_code != 200:
            raise CheckoutRequestError(
                str(payload.get("error", "Failed to load checkout config")),
                status_code=response.status_code,
            )
        return str(payload["publishableKey"])

    def start_checkout(self, *, price_id: str, customer_email: str | None = None) -> str:
        body: dict = {"priceId": price_id}
        if customer_email:
            body["customerEmail"] = customer_email

        response = self._http.post(CHECKOUT_PATH, json=body)
        payload = _json_or_empty(response)
        if response.status_code != 200 or not payload.get("sessionId"):
            logger.warning(
                "storefront_client: checkout_failed status=%s body=%s",
                response.status_code,
                payload,
            )
            raise CheckoutRequestError(
                str(payload.get("error", "Failed to create checkout session")),
                status_code=response.status_code,
            )
        return str(payload["sessionId"])

    def handle_redirect(self, url: str) -> str | None:
        return observe_checkout_redirect(url, self._flag)

    def downgrade(self) -> None:
        self._flag.reset_to_default()


def _json_or_empty(response: httpx.Response) -> dict:
    try:
        payload = response.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}
