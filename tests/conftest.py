"""
Pytest configuration and fixtures.
"""
import os

# must be set before studiofinder.core.config builds its settings singleton
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite://")
os.environ.setdefault("STRIPE_WEBHOOK_SECRET", "whsec_test_fake_secret")

import hashlib  # noqa: E402
import hmac  # noqa: E402
import json  # noqa: E402
import time  # noqa: E402
from datetime import datetime, timezone  # noqa: E402
from typing import Any, Optional  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from studiofinder.api.deps import db_session  # noqa: E402
from studiofinder.db.init_db import create_all  # noqa: E402
from studiofinder.main import app  # noqa: E402

WEBHOOK_SECRET = os.environ["STRIPE_WEBHOOK_SECRET"]


def utc(dt: Optional[datetime]) -> Optional[datetime]:
    """sqlite drops tzinfo on the way back out."""
    if dt is None or dt.tzinfo is not None:
        return dt
    return dt.replace(tzinfo=timezone.utc)


def sign_payload(payload: bytes, *, secret: str = WEBHOOK_SECRET, timestamp: Optional[int] = None) -> str:
    """Build a Stripe-Signature header the way Stripe does."""
    ts = int(time.time()) if timestamp is None else timestamp
    signed = f"{ts}.{payload.decode('utf-8')}".encode("utf-8")
    digest = hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()
    return f"t={ts},v1={digest}"


def make_checkout_event(
    metadata: dict[str, Any],
    *,
    event_id: str = "evt_test_1",
    event_type: str = "checkout.session.completed",
    payment_status: str = "paid",
) -> dict[str, Any]:
    return {
        "id": event_id,
        "object": "event",
        "type": event_type,
        "created": int(time.time()),
        "livemode": False,
        "data": {
            "object": {
                "id": "cs_test_123",
                "object": "checkout.session",
                "mode": "payment",
                "payment_status": payment_status,
                "metadata": metadata,
            }
        },
    }


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine) -> Session:
    factory = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    session = factory()
    yield session
    session.close()


@pytest.fixture
def client(db: Session) -> TestClient:
    def _override():
        yield db

    app.dependency_overrides[db_session] = _override
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def post_event(client: TestClient):
    """POST a signed Stripe event to the webhook."""

    def _post(event: dict[str, Any], *, signature: Optional[str] = None):
        payload = json.dumps(event).encode("utf-8")
        headers = {
            "Content-Type": "application/json",
            "Stripe-Signature": signature or sign_payload(payload),
        }
        return client.post("/api/v1/stripe/webhook", content=payload, headers=headers)

    return _post
