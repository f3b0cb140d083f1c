from typing import Final, Literal

# "purpose" discriminator written into checkout metadata when the session is created
PURPOSE_MEMBERSHIP: Final[str] = "membership"
PURPOSE_MEMBERSHIP_RENEWAL: Final[str] = "membership_renewal"
PURPOSE_FEATURED_UPGRADE: Final[str] = "featured_upgrade"

MembershipPurpose = Literal["membership", "membership_renewal"]

MEMBERSHIP_PURPOSES: Final[set[str]] = {
    PURPOSE_MEMBERSHIP,
    PURPOSE_MEMBERSHIP_RENEWAL,
}

PAYMENT_PURPOSES: Final[set[str]] = MEMBERSHIP_PURPOSES | {PURPOSE_FEATURED_UPGRADE}

# Stripe events that carry a completed checkout we reconcile against
RECONCILED_EVENT_TYPES: Final[set[str]] = {
    "checkout.session.completed",
    "checkout.session.async_payment_succeeded",
}

# checkout.session.payment_status values that mean the money is in
PAID_STATUSES: Final[set[str]] = {"paid", "no_payment_required"}
