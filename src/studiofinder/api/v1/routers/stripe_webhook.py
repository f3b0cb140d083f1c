import structlog
from fastapi import APIRouter, Depends, Header, HTTPException, Request
from sqlalchemy.orm import Session

from studiofinder.api.deps import db_session
from studiofinder.core.config import settings
from studiofinder.core.membership_terms import MembershipTerms
from studiofinder.integrations.stripe.webhook import construct_event
from studiofinder.services.events_ingest import save_invalid_event, save_verified_event
from studiofinder.services.payment_events import process_checkout_event

router = APIRouter(prefix="/stripe", tags=["stripe"])

logger = structlog.get_logger(__name__)


@router.post("/webhook")
async def stripe_webhook(
    request: Request,
    db: Session = Depends(db_session),
    stripe_signature: str | None = Header(default=None, alias="Stripe-Signature"),
):
    if not stripe_signature:
        raise HTTPException(status_code=400, detail="Missing Stripe-Signature header")

    payload = await request.body()

    # 1) Verify + parse
    try:
        event = construct_event(payload, stripe_signature)
    except Exception as e:
        # invalid deliveries are still recorded; answer 2xx so Stripe stops retrying
        logger.warning("stripe_webhook_invalid", reason=str(e))
        save_invalid_event(db, payload=payload, signature=stripe_signature, reason=str(e))
        return {"ok": False, "invalid": True, "reason": str(e)}

    provider_event_id = event["id"]
    event_type = event["type"]

    # 2) Save (idempotent)
    result = save_verified_event(
        db,
        provider_event_id=provider_event_id,
        event_type=event_type,
        raw=event,
        signature=stripe_signature,
    )

    if result["deduped"]:
        return {"ok": True, "deduped": True, "provider_event_id": provider_event_id}

    # 3) Reconcile (only first delivery gets here), then commit event + effects at once.
    # On failure nothing is kept, so Stripe's redelivery is processed from scratch.
    try:
        outcome = process_checkout_event(
            db,
            result["event"],
            event,
            terms=MembershipTerms.from_settings(settings),
            featured_months=settings.featured_upgrade_months,
        )
        db.commit()
    except Exception:
        db.rollback()
        logger.exception(
            "stripe_event_reconcile_failed",
            provider_event_id=provider_event_id,
            event_type=event_type,
        )
        raise HTTPException(status_code=500, detail="Event processing failed, retry later")

    return {
        "ok": True,
        "saved": True,
        "provider_event_id": provider_event_id,
        "event_type": event_type,
        "applied": outcome.applied,
        "outcome": outcome.outcome,
    }
