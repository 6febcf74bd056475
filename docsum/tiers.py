from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class LengthTier(str, Enum):
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"

    @classmethod
    def parse(cls, value: Any) -> "LengthTier":
        """Map a client-supplied length to a tier; anything unrecognised is medium."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.MEDIUM


@dataclass(frozen=True)
class TierBudget:
    max_tokens: int  # remote completion ceiling
    truncate_chars: int  # fallback ceiling when the text has too few sentences
    summary_chars: int  # fallback ceiling for the joined extract


# Shared by the remote client and the fallback so the two paths agree on tiers
TIER_BUDGETS: Dict[LengthTier, TierBudget] = {
    LengthTier.SHORT: TierBudget(max_tokens=100, truncate_chars=100, summary_chars=150),
    LengthTier.MEDIUM: TierBudget(max_tokens=200, truncate_chars=200, summary_chars=300),
    LengthTier.LONG: TierBudget(max_tokens=400, truncate_chars=400, summary_chars=500),
}


def budget_for(tier: LengthTier) -> TierBudget:
    return TIER_BUDGETS[tier]
