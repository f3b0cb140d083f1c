from __future__ import annotations

from sqlalchemy.engine import Engine

from studiofinder.db.base import Base
from studiofinder.db.session import engine as default_engine

# model import (registers tables on Base)
from studiofinder.models import event, membership, rights_confirmation, studio  # noqa: F401


def create_all(bind: Engine | None = None) -> None:
    Base.metadata.create_all(bind=bind or default_engine)
