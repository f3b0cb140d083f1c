from __future__ import annotations

from typing import Any, Mapping


def _field(place: Any, key: str) -> str | None:
    if isinstance(place, Mapping):
        value = place.get(key)
    else:
        value = getattr(place, key, None)
    return value or None


def format_place_label(place: Any) -> str:
    """
    Single display line for a location search result.

    Establishments (a name that isn't just the start of the address) render as
    "Name - Address"; everything else falls back to address, name, description.
    """
    name = _field(place, "name")
    address = _field(place, "formatted_address")

    if name and address and not address.startswith(name):
        return f"{name} - {address}"

    return address or name or _field(place, "description") or ""
