from typing import Optional

from fastapi import APIRouter, Query

from studiofinder.api.v1.schemas.places import PlaceLabelOut
from studiofinder.services.place_label import format_place_label

router = APIRouter(prefix="/places", tags=["places"])


@router.get("/label", response_model=PlaceLabelOut)
def place_label(
    name: Optional[str] = Query(default=None),
    formatted_address: Optional[str] = Query(default=None),
    description: Optional[str] = Query(default=None),
):
    label = format_place_label(
        {"name": name, "formatted_address": formatted_address, "description": description}
    )
    return PlaceLabelOut(label=label)
