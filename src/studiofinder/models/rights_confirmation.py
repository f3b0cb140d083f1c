from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from studiofinder.db.base import Base


class RightsConfirmation(Base):
    __tablename__ = "rights_confirmations"

    id: Mapped[int] = mapped_column(primary_key=True)
    actor_id: Mapped[str] = mapped_column(String(100), index=True)

    # full wording at time of action, not a version pointer
    confirmation_text: Mapped[str] = mapped_column(Text)
    client_ip: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    confirmed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), index=True
    )
