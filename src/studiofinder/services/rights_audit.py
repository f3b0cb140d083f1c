from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

import structlog
from sqlalchemy.orm import Session

from studiofinder.models.rights_confirmation import RightsConfirmation

logger = structlog.get_logger(__name__)


def record_confirmation(
    db: Session,
    *,
    actor_id: str,
    confirmation_text: str,
    client_ip: Optional[str],
    now: Optional[datetime] = None,
) -> RightsConfirmation:
    row = RightsConfirmation(
        actor_id=actor_id,
        confirmation_text=confirmation_text,
        client_ip=client_ip,
        confirmed_at=now or datetime.now(timezone.utc),
    )
    db.add(row)
    db.commit()
    db.refresh(row)

    logger.info("rights_confirmation_recorded", actor_id=actor_id, has_ip=client_ip is not None)
    return row
