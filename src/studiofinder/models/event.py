from datetime import datetime
from sqlalchemy import Boolean, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column
from typing import Optional

from studiofinder.db.base import Base, JSONType


class Event(Base):
    __tablename__ = "events"

    id: Mapped[int] = mapped_column(primary_key=True)
    source: Mapped[str] = mapped_column(String(50), default="stripe", index=True)

    # nullable so invalid (unverifiable) deliveries can be stored too
    provider_event_id: Mapped[Optional[str]] = mapped_column(
        String(100), unique=True, index=True, nullable=True
    )
    event_type: Mapped[Optional[str]] = mapped_column(
        String(100), index=True, nullable=True
    )

    # verified / invalid
    status: Mapped[str] = mapped_column(String(20), default="verified", index=True)

    # what reconciliation did with it: applied / ignored / awaiting_payment / rejected:<code> ...
    outcome: Mapped[Optional[str]] = mapped_column(String(60), nullable=True, index=True)

    signature: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    livemode: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    created_at_provider: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    raw: Mapped[dict] = mapped_column(JSONType)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
