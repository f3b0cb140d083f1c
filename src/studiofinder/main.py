from fastapi import FastAPI

from studiofinder.api.v1.routers.health import router as health_router
from studiofinder.api.v1.routers.places import router as places_router
from studiofinder.api.v1.routers.rights import router as rights_router
from studiofinder.api.v1.routers.stripe_webhook import router as stripe_router
from studiofinder.core.config import settings
from studiofinder.core.logging import setup_logging

app = FastAPI(title="Studio Finder", version="0.1.0")
app.include_router(health_router, prefix="/api/v1")
app.include_router(stripe_router, prefix="/api/v1")
app.include_router(rights_router, prefix="/api/v1")
app.include_router(places_router, prefix="/api/v1")

@app.on_event("startup")
def validate_settings() -> None:
    setup_logging(settings)
    if settings.env != "local" and not settings.stripe_webhook_secret:
        raise RuntimeError("STRIPE_WEBHOOK_SECRET is missing. Check your .env file.")
