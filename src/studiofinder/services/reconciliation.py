from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

import structlog
from dateutil.relativedelta import relativedelta
from sqlalchemy.orm import Session

from studiofinder.core.membership_terms import RENEWAL_EARLY, RENEWAL_STANDARD, MembershipTerms
from studiofinder.models.membership import Membership
from studiofinder.models.studio import Studio
from studiofinder.services.metadata_classifier import (
    FeaturedUpgradeMetadata,
    MembershipIntent,
)

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ReconcileResult:
    applied: bool
    outcome: str
    detail: dict[str, Any] = field(default_factory=dict)


# -----------------------------
# Date helpers
# -----------------------------
def _as_utc(dt: Optional[datetime]) -> Optional[datetime]:
    # sqlite hands back naive datetimes even for timezone=True columns
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _parse_iso(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return _as_utc(datetime.fromisoformat(value))
    except ValueError:
        return None


def _extend_from(base: Optional[datetime], now: datetime, months: int) -> Optional[datetime]:
    # an expired (or missing) term restarts from now; None when the result
    # falls outside what datetime can hold
    start = base if base is not None and base > now else now
    try:
        return start + relativedelta(months=months)
    except (OverflowError, ValueError):
        return None


# -----------------------------
# Membership
# -----------------------------
def apply_membership(
    db: Session,
    intent: MembershipIntent,
    *,
    terms: Optional[MembershipTerms] = None,
    now: Optional[datetime] = None,
) -> ReconcileResult:
    """
    Create or extend the account's membership. Flushes only: the caller owns
    the transaction.
    """
    now = _as_utc(now) or datetime.now(timezone.utc)
    terms = terms or MembershipTerms()
    meta = intent.metadata
    config = intent.config

    row = db.query(Membership).filter(Membership.user_id == meta.user_id).one_or_none()

    if config.is_renewal:
        base = _as_utc(row.expires_at) if row is not None else _parse_iso(meta.current_expiry)
    else:
        # a new purchase never stacks on an old term
        base = None

    months = config.membership_months
    bonus_dropped = False
    if meta.renewal_type == RENEWAL_EARLY and (base is None or base <= now):
        # the early bonus only applies on top of a running term
        months = terms.months_for_renewal(RENEWAL_STANDARD)
        bonus_dropped = True

    previous_expiry = _as_utc(row.expires_at) if row is not None else None
    new_expiry = _extend_from(base, now, months)
    if new_expiry is None:
        logger.warning(
            "membership_expiry_out_of_range",
            user_id=meta.user_id,
            current_expiry=meta.current_expiry,
            months=months,
        )
        return ReconcileResult(
            applied=False,
            outcome="expiry_out_of_range",
            detail={"user_id": meta.user_id, "current_expiry": meta.current_expiry},
        )

    if row is None:
        row = Membership(user_id=meta.user_id, user_email=meta.user_email)
        db.add(row)

    row.user_email = meta.user_email
    if meta.user_name:
        row.user_name = meta.user_name
    row.status = "active"
    row.expires_at = new_expiry
    row.last_renewal_type = meta.renewal_type
    row.last_coupon_code = config.coupon_code
    db.flush()

    logger.info(
        "membership_applied",
        user_id=meta.user_id,
        kind=intent.kind,
        months=months,
        expires_at=new_expiry.isoformat(),
    )

    return ReconcileResult(
        applied=True,
        outcome="membership_renewed" if config.is_renewal else "membership_activated",
        detail={
            "user_id": meta.user_id,
            "previous_expiry": previous_expiry.isoformat() if previous_expiry else None,
            "expires_at": new_expiry.isoformat(),
            "months": months,
            "early_bonus_dropped": bonus_dropped,
            "coupon_code": config.coupon_code,
        },
    )


# -----------------------------
# Featured upgrade
# -----------------------------
def apply_featured_upgrade(
    db: Session,
    metadata: FeaturedUpgradeMetadata,
    *,
    featured_months: int,
    now: Optional[datetime] = None,
) -> ReconcileResult:
    now = _as_utc(now) or datetime.now(timezone.utc)

    studio = db.get(Studio, metadata.studio_id)
    if studio is None or studio.owner_id != metadata.user_id:
        logger.warning(
            "featured_upgrade_studio_not_found",
            studio_id=metadata.studio_id,
            user_id=metadata.user_id,
        )
        return ReconcileResult(
            applied=False,
            outcome="studio_not_found",
            detail={"studio_id": metadata.studio_id, "user_id": metadata.user_id},
        )

    if studio.is_featured and studio.featured_until is None:
        # featured indefinitely; a dated period would only shorten it
        logger.info("featured_upgrade_already_indefinite", studio_id=studio.id)
        return ReconcileResult(
            applied=False,
            outcome="already_featured",
            detail={"studio_id": studio.id, "featured_until": None},
        )

    current = _as_utc(studio.featured_until) if studio.is_featured else None
    featured_until = _extend_from(current, now, featured_months)
    if featured_until is None:
        return ReconcileResult(
            applied=False,
            outcome="expiry_out_of_range",
            detail={"studio_id": studio.id},
        )

    studio.is_featured = True
    studio.featured_until = featured_until
    db.flush()

    logger.info(
        "featured_upgrade_applied",
        studio_id=studio.id,
        featured_until=featured_until.isoformat(),
    )

    return ReconcileResult(
        applied=True,
        outcome="studio_featured",
        detail={"studio_id": studio.id, "featured_until": featured_until.isoformat()},
    )
