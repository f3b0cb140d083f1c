from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

import structlog
from sqlalchemy.orm import Session

from studiofinder.core.membership_terms import MembershipTerms
from studiofinder.core.payment_purposes import PAID_STATUSES, RECONCILED_EVENT_TYPES
from studiofinder.models.event import Event
from studiofinder.services.events_ingest import mark_outcome
from studiofinder.services.metadata_classifier import (
    FeaturedUpgradeMetadata,
    MembershipIntent,
    MetadataError,
    classify_metadata,
)
from studiofinder.services.reconciliation import (
    ReconcileResult,
    apply_featured_upgrade,
    apply_membership,
)

logger = structlog.get_logger(__name__)


def process_checkout_event(
    db: Session,
    row: Event,
    raw: dict[str, Any],
    *,
    terms: MembershipTerms,
    featured_months: int,
    now: Optional[datetime] = None,
) -> ReconcileResult:
    """
    Reconcile one stored, verified Stripe event.

    Never raises for bad metadata: the result (and the event row's outcome)
    says what happened, and the webhook still answers 2xx. Only flushes; the
    caller commits the event row and its effects together.
    """
    event_type = raw.get("type")
    log = logger.bind(provider_event_id=row.provider_event_id, event_type=event_type)

    if event_type not in RECONCILED_EVENT_TYPES:
        mark_outcome(db, row, "ignored")
        return ReconcileResult(applied=False, outcome="ignored")

    session = (raw.get("data") or {}).get("object") or {}
    payment_status = session.get("payment_status")
    if payment_status not in PAID_STATUSES:
        # async methods (bank debits) complete later via async_payment_succeeded
        log.info("checkout_awaiting_payment", payment_status=payment_status)
        mark_outcome(db, row, "awaiting_payment")
        return ReconcileResult(
            applied=False,
            outcome="awaiting_payment",
            detail={"payment_status": payment_status},
        )

    classification = classify_metadata(session.get("metadata") or {}, terms=terms)

    if isinstance(classification, MetadataError):
        log.warning(
            "checkout_metadata_rejected",
            code=classification.code,
            reason=classification.message,
            checkout_session_id=session.get("id"),
        )
        outcome = f"rejected:{classification.code}"
        mark_outcome(db, row, outcome)
        return ReconcileResult(
            applied=False,
            outcome=outcome,
            detail={"reason": classification.message},
        )

    if isinstance(classification, MembershipIntent):
        result = apply_membership(db, classification, terms=terms, now=now)
    elif isinstance(classification, FeaturedUpgradeMetadata):
        result = apply_featured_upgrade(
            db, classification, featured_months=featured_months, now=now
        )
    else:  # pragma: no cover
        raise TypeError(f"unexpected classification: {classification!r}")

    mark_outcome(db, row, result.outcome)
    return result
