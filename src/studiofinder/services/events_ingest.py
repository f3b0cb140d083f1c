from datetime import datetime, timezone
from typing import Any

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from studiofinder.models.event import Event

logger = structlog.get_logger(__name__)


def save_verified_event(
    db: Session,
    *,
    provider_event_id: str,
    event_type: str,
    raw: dict,
    signature: str | None,
) -> dict[str, Any]:
    created = raw.get("created")
    row = Event(
        source="stripe",
        provider_event_id=provider_event_id,
        event_type=event_type,
        status="verified",
        raw=raw,
        signature=signature,
        livemode=raw.get("livemode"),
        created_at_provider=(
            datetime.fromtimestamp(created, tz=timezone.utc) if created is not None else None
        ),
    )

    # UNIQUE(provider_event_id) makes Stripe redeliveries a no-op.
    # Flush only: the row is committed together with its reconciliation.
    try:
        db.add(row)
        db.flush()
    except IntegrityError:
        db.rollback()
        logger.info("stripe_event_deduped", provider_event_id=provider_event_id)
        return {"saved": False, "deduped": True, "event": None}

    return {"saved": True, "deduped": False, "event": row}


def save_invalid_event(
    db: Session,
    *,
    payload: bytes,
    signature: str | None,
    reason: str,
) -> None:
    """
    Record a delivery that failed verification. Never raises: a storage
    failure here must not turn into a non-2xx for Stripe.
    """
    try:
        row = Event(
            source="stripe",
            provider_event_id=None,
            event_type=None,
            status="invalid",
            raw={
                "error": reason,
                "payload": payload.decode("utf-8", errors="replace"),
            },
            signature=signature,
        )
        db.add(row)
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("stripe_invalid_event_not_saved", reason=reason)


def mark_outcome(db: Session, row: Event, outcome: str) -> Event:
    row.outcome = outcome
    db.flush()
    return row
