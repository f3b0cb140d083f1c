from __future__ import annotations

from typing import Mapping, Optional


def _get_header(headers: Mapping[str, str], name: str) -> Optional[str]:
    # starlette Headers are already case-insensitive, plain dicts are not
    value = headers.get(name)
    if value is not None:
        return value
    for key, val in headers.items():
        if key.lower() == name:
            return val
    return None


def extract_client_ip(headers: Mapping[str, str]) -> Optional[str]:
    """
    Originating client IP for audit records.

    x-forwarded-for (first hop) wins over x-real-ip. Returns None when neither
    header yields a value; never raises.
    """
    forwarded = _get_header(headers, "x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    real_ip = (_get_header(headers, "x-real-ip") or "").strip()
    return real_ip or None
