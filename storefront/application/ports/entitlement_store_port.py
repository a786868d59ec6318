from __future__ import annotations

from typing import Protocol


class EntitlementStorePort(Protocol):
    def load(self) -> bool | None:
        ...

    def save(self, *, is_pro: bool) -> None:
        ...
