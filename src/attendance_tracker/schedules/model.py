from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from ..core.constants import WEEKDAY_NAMES
from ..core.exceptions import ValidationError


def normalize_day_mapping(raw: Any) -> Dict[str, int]:
    """Turn any stored encoding of a weekday -> shift mapping into ``{"Monday": 3, ...}``.

    Accepts a mapping, an iterable of ``(day, shift_id)`` pairs or a JSON object string.
    Day names are matched case-insensitively; days mapped to nothing are dropped.
    """
    if raw is None or raw == "":
        return {}
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8")
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            raise ValidationError("Work schedule shifts must be a JSON object") from None

    items = raw.items() if isinstance(raw, Mapping) else raw
    canonical = {name.lower(): name for name in WEEKDAY_NAMES}

    out: Dict[str, int] = {}
    try:
        for day, shift_id in items:
            name = canonical.get(str(day).strip().lower())
            if name is None:
                raise ValidationError(f"Unknown weekday: {day!r}")
            if shift_id in (None, ""):
                continue
            out[name] = int(shift_id)
    except (TypeError, ValueError):
        raise ValidationError("Work schedule shifts must map weekday names to shift ids") from None
    return out


@dataclass(frozen=True)
class WorkSchedule:
    """Domain entity: a weekly template assigning a shift to each weekday."""

    schedule_id: int
    schedule_name: str
    shifts: Dict[str, int] = field(default_factory=dict)
    note: Optional[str] = None

    def get_shift_for_day(self, day_name: str) -> Optional[int]:
        return self.shifts.get(day_name)
