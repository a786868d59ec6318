from __future__ import annotations

import json
import logging
from pathlib import Path

from storefront.application.ports.entitlement_store_port import EntitlementStorePort


logger = logging.getLogger(__name__)

STATE_KEY = "isPro"


class InMemoryEntitlementStore(EntitlementStorePort):
    def __init__(self, initial: bool | None = None):
        self._value = initial

    def load(self) -> bool | None:
        return self._value

    def save(self, *, is_pro: bool) -> None:
        self._value = is_pro


class JsonFileEntitlementStore(EntitlementStorePort):
    """Persists the flag as ``{"isPro": <bool>}`` so it survives restarts."""

    def __init__(self, path: str | Path):
        self._path = Path(path)

    def load(self) -> bool | None:
        if not self._path.exists():
            return None
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("entitlement_store: unreadable_state path=%s error=%s", self._path, exc)
            return None

        value = raw.get(STATE_KEY) if isinstance(raw, dict) else None
        if not isinstance(value, bool):
            return None
        return value

    def save(self, *, is_pro: bool) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp_path.write_text(json.dumps({STATE_KEY: is_pro}), encoding="utf-8")
        tmp_path.replace(self._path)
