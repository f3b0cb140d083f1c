from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from studiofinder.api.deps import db_session
from studiofinder.api.v1.schemas.rights import RightsConfirmationIn, RightsConfirmationOut
from studiofinder.core.config import settings
from studiofinder.services.client_ip import extract_client_ip
from studiofinder.services.rights_audit import record_confirmation

router = APIRouter(prefix="/rights-confirmations", tags=["rights"])


@router.post("", response_model=RightsConfirmationOut, status_code=201)
def confirm_rights(
    payload: RightsConfirmationIn,
    request: Request,
    db: Session = Depends(db_session),
):
    if not payload.confirmed:
        raise HTTPException(
            status_code=400,
            detail="You must confirm you hold the rights to the uploaded images",
        )

    row = record_confirmation(
        db,
        actor_id=payload.actor_id,
        confirmation_text=settings.rights_confirmation_text,
        client_ip=extract_client_ip(request.headers),
    )
    return RightsConfirmationOut.model_validate(row)
