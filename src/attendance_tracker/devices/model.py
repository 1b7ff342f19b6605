from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet


@dataclass(frozen=True)
class Device:
    """Domain entity: a physical fingerprint/card reader."""

    device_id: int
    device_mac: str
    description: str
    user_ids: FrozenSet[int] = field(default_factory=frozenset)

    def has_user(self, user_id: int) -> bool:
        return int(user_id) in self.user_ids
