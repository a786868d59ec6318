from __future__ import annotations

import logging
from typing import Any

from storefront.application.ports.notification_sink_port import NotificationSinkPort


logger = logging.getLogger(__name__)

WARNING_KINDS = frozenset({"payment_failed"})


class LoggingNotificationSink(NotificationSinkPort):
    def __init__(self, *, log: logging.Logger | None = None):
        self._logger = log or logger

    def record(self, *, kind: str, fields: dict[str, Any]) -> None:
        level = logging.WARNING if kind in WARNING_KINDS else logging.INFO
        rendered = " ".join(f"{key}={value}" for key, value in fields.items())
        self._logger.log(level, "stripe_webhook: %s %s", kind, rendered)
