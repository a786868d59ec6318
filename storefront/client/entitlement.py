from __future__ import annotations

import logging
from urllib.parse import parse_qs, urlparse

from storefront.application.ports.entitlement_store_port import EntitlementStorePort
from storefront.domain.services.entitlements import can_use, get_tier
from storefront.infrastructure.storage.entitlement_store import InMemoryEntitlementStore


logger = logging.getLogger(__name__)

DEFAULT_IS_PRO = False
SUCCESS_PATH = "/payment/success"


class EntitlementFlag:
    """Client-side ``isPro`` flag.

    Gates what the UI shows and nothing else: it has no server-side mirror
    and is never reconciled with webhook-confirmed payments.
    """

    def __init__(self, store: EntitlementStorePort | None = None):
        self._store = store or InMemoryEntitlementStore()
        stored = self._store.load()
        self._value = DEFAULT_IS_PRO if stored is None else stored

    def get(self) -> bool:
        return self._value

    def set(self, value: bool) -> None:
        self._value = bool(value)
        self._store.save(is_pro=self._value)

    def reset_to_default(self) -> None:
        self.set(DEFAULT_IS_PRO)

    @property
    def tier(self) -> str:
        return get_tier(self._value)

    def can_use(self, feature: str) -> bool:
        return can_use(is_pro=self._value, feature=feature)


def observe_checkout_redirect(url: str, flag: EntitlementFlag) -> str | None:
    """Returns the checkout session id of a success redirect and upgrades the flag.

    Only the presence of ``session_id`` is checked; the session is not
    confirmed with the server.
    """
    parsed = urlparse(url)
    if not parsed.path.rstrip("/").endswith(SUCCESS_PATH):
        return None

    session_id = (parse_qs(parsed.query).get("session_id") or [""])[0]
    if not session_id:
        return None

    flag.set(True)
    logger.info("entitlement: upgraded_from_redirect session_id=%s", session_id)
    return session_id
