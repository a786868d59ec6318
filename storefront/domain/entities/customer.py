from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class RemoteCustomer:
    id: str
    email: str | None
    metadata: dict[str, str] = field(default_factory=dict)
    created_at: datetime | None = None
