from pydantic import BaseModel


class PlaceLabelOut(BaseModel):
    label: str
