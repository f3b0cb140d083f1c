import json

import stripe

from studiofinder.core.config import settings


def construct_event(payload: bytes, signature: str) -> dict:
    """
    Verify the Stripe signature and parse the event body into a plain dict.
    Raises stripe.SignatureVerificationError or ValueError on failure.
    """
    secret = settings.stripe_webhook_secret
    if secret is None:
        raise ValueError("STRIPE_WEBHOOK_SECRET is not set")

    body = payload.decode("utf-8")
    stripe.WebhookSignature.verify_header(
        body,
        signature,
        secret.get_secret_value(),
        tolerance=settings.stripe_webhook_tolerance_sec,
    )
    return json.loads(body)
