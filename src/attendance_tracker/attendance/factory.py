from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import CheckInPolicy
from .strategies.base import CheckInStrategy
from .strategies.deferred_strategy import DeferredCheckInStrategy
from .strategies.strict_strategy import StrictCheckInStrategy


@dataclass
class CheckInStrategyFactory:
    """Factory Pattern: choose the check-in classifier for the configured policy."""

    def for_policy(self, policy: CheckInPolicy | str) -> CheckInStrategy:
        policy = CheckInPolicy(policy)
        if policy == CheckInPolicy.STRICT:
            return StrictCheckInStrategy()
        return DeferredCheckInStrategy()
