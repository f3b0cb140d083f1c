"""
Checkout metadata classification.

Stripe hands us back whatever string metadata we attached when the checkout
session was created. This module turns that bag into one of:

- MembershipIntent (new membership or renewal, with its ParsedMembershipConfig)
- FeaturedUpgradeMetadata
- a MetadataError value

Errors are returned, not raised, so the webhook can acknowledge a malformed
event instead of letting Stripe retry it forever. Nothing in here touches the
database or the network.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Literal, Mapping, Optional, Union

from studiofinder.core.membership_terms import RENEWAL_TYPES, MembershipTerms, RenewalType
from studiofinder.core.payment_purposes import (
    MEMBERSHIP_PURPOSES,
    PURPOSE_FEATURED_UPGRADE,
    PURPOSE_MEMBERSHIP_RENEWAL,
    MembershipPurpose,
)


# -----------------------------
# Metadata shapes
# -----------------------------
@dataclass(frozen=True)
class MembershipPaymentMetadata:
    user_id: str
    user_email: str
    purpose: MembershipPurpose
    user_name: Optional[str] = None
    # only meaningful for membership_renewal
    renewal_type: Optional[RenewalType] = None
    current_expiry: Optional[str] = None


@dataclass(frozen=True)
class FeaturedUpgradeMetadata:
    user_id: str
    user_email: str
    studio_id: str
    purpose: Literal["featured_upgrade"] = "featured_upgrade"


@dataclass(frozen=True)
class ParsedMembershipConfig:
    is_renewal: bool
    membership_months: int
    coupon_code: Optional[str]  # None means "no coupon", never ""


@dataclass(frozen=True)
class MembershipIntent:
    metadata: MembershipPaymentMetadata
    config: ParsedMembershipConfig

    @property
    def kind(self) -> str:
        return "renewal" if self.config.is_renewal else "new_membership"


# -----------------------------
# Error values
# -----------------------------
@dataclass(frozen=True)
class MetadataError:
    code: ClassVar[str] = "invalid_metadata"

    @property
    def message(self) -> str:
        return self.code


@dataclass(frozen=True)
class UnknownPurposeError(MetadataError):
    code: ClassVar[str] = "unknown_purpose"
    purpose: Optional[str] = None

    @property
    def message(self) -> str:
        if self.purpose is None:
            return "metadata has no purpose"
        return f"unrecognized purpose: {self.purpose!r}"


@dataclass(frozen=True)
class MissingRequiredFieldError(MetadataError):
    code: ClassVar[str] = "missing_required_field"
    field: str = ""

    @property
    def message(self) -> str:
        return f"required metadata field missing or empty: {self.field}"


@dataclass(frozen=True)
class InvalidRenewalTypeError(MetadataError):
    code: ClassVar[str] = "invalid_renewal_type"
    renewal_type: str = ""

    @property
    def message(self) -> str:
        return f"unrecognized renewal_type: {self.renewal_type!r}"


Classification = Union[MembershipIntent, FeaturedUpgradeMetadata, MetadataError]


# -----------------------------
# Helpers
# -----------------------------
def _clean(value: object) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


# -----------------------------
# Public API
# -----------------------------
def parse_membership_config(
    metadata: MembershipPaymentMetadata,
    *,
    coupon_code: Optional[str],
    terms: MembershipTerms,
) -> ParsedMembershipConfig:
    is_renewal = metadata.purpose == PURPOSE_MEMBERSHIP_RENEWAL
    if is_renewal:
        months = terms.months_for_renewal(metadata.renewal_type)
    else:
        months = terms.new_membership_months

    return ParsedMembershipConfig(
        is_renewal=is_renewal,
        membership_months=months,
        coupon_code=_clean(coupon_code),
    )


def classify_metadata(
    metadata: Mapping[str, Optional[str]],
    purpose: Optional[str] = None,
    *,
    terms: Optional[MembershipTerms] = None,
) -> Classification:
    """
    Classify a checkout metadata bag.

    `purpose` defaults to metadata["purpose"]. `terms` defaults to the built-in
    month table; the webhook passes the configured one.
    """
    terms = terms or MembershipTerms()

    user_id = _clean(metadata.get("user_id"))
    if user_id is None:
        return MissingRequiredFieldError(field="user_id")
    user_email = _clean(metadata.get("user_email"))
    if user_email is None:
        return MissingRequiredFieldError(field="user_email")

    purpose = _clean(purpose if purpose is not None else metadata.get("purpose"))
    if purpose != PURPOSE_FEATURED_UPGRADE and purpose not in MEMBERSHIP_PURPOSES:
        return UnknownPurposeError(purpose=purpose)

    renewal_type = _clean(metadata.get("renewal_type"))
    if renewal_type is not None and renewal_type not in RENEWAL_TYPES:
        return InvalidRenewalTypeError(renewal_type=renewal_type)

    if purpose == PURPOSE_FEATURED_UPGRADE:
        studio_id = _clean(metadata.get("studio_id"))
        if studio_id is None:
            return MissingRequiredFieldError(field="studio_id")
        return FeaturedUpgradeMetadata(
            user_id=user_id,
            user_email=user_email,
            studio_id=studio_id,
        )

    is_renewal = purpose == PURPOSE_MEMBERSHIP_RENEWAL
    membership = MembershipPaymentMetadata(
        user_id=user_id,
        user_email=user_email,
        purpose=purpose,  # type: ignore[arg-type]
        user_name=_clean(metadata.get("user_name")),
        renewal_type=renewal_type if is_renewal else None,  # type: ignore[arg-type]
        current_expiry=_clean(metadata.get("current_expiry")) if is_renewal else None,
    )
    config = parse_membership_config(
        membership,
        coupon_code=metadata.get("coupon_code"),
        terms=terms,
    )
    return MembershipIntent(metadata=membership, config=config)
