from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class WebhookEvent:
    id: str
    type: str
    created_at: datetime | None
    payload: dict = field(default_factory=dict)
