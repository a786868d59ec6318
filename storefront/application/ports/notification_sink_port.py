from __future__ import annotations

from typing import Any, Protocol


class NotificationSinkPort(Protocol):
    def record(self, *, kind: str, fields: dict[str, Any]) -> None:
        ...
