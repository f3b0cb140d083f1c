from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Mapping

from studiofinder.core.config import Settings

RenewalType = Literal["early", "standard", "5year"]

RENEWAL_EARLY = "early"
RENEWAL_STANDARD = "standard"
RENEWAL_FIVE_YEAR = "5year"

RENEWAL_TYPES: frozenset[str] = frozenset({RENEWAL_EARLY, RENEWAL_STANDARD, RENEWAL_FIVE_YEAR})

FIVE_YEAR_MONTHS = 60


# Month counts are data, not branches: adding a tier means adding a row here.
@dataclass(frozen=True)
class MembershipTerms:
    new_membership_months: int = 12
    renewal_months: Mapping[str, int] = field(
        default_factory=lambda: {
            RENEWAL_EARLY: 13,  # 1 year + 30 day bonus
            RENEWAL_STANDARD: 12,
            RENEWAL_FIVE_YEAR: FIVE_YEAR_MONTHS,
        }
    )

    @classmethod
    def from_settings(cls, settings: Settings) -> "MembershipTerms":
        return cls(
            new_membership_months=settings.membership_new_term_months,
            renewal_months={
                RENEWAL_EARLY: settings.membership_early_renewal_months,
                RENEWAL_STANDARD: settings.membership_standard_renewal_months,
                RENEWAL_FIVE_YEAR: FIVE_YEAR_MONTHS,
            },
        )

    def months_for_renewal(self, renewal_type: str | None) -> int:
        # renewals without a tier are credited like a standard renewal
        return self.renewal_months[renewal_type or RENEWAL_STANDARD]
