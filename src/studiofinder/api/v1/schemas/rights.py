from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RightsConfirmationIn(BaseModel):
    actor_id: str = Field(min_length=1, max_length=100)
    confirmed: bool


class RightsConfirmationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    actor_id: str
    confirmation_text: str
    client_ip: Optional[str] = None
    confirmed_at: datetime
