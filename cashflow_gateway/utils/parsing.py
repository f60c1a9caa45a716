"""Lenient parsing of raw query parameters"""

from typing import Optional

TRUTHY = {"1", "true", "yes", "on"}


def parse_int(value: Optional[str], default: Optional[int] = None) -> Optional[int]:
    """Integer value of a query parameter, default when missing or non-numeric"""
    if value is None:
        return default
    try:
        return int(str(value).strip())
    except ValueError:
        return default


def parse_bool(value: Optional[str]) -> bool:
    """'1', 'true', 'yes' and 'on' (any case) are true, everything else is false"""
    return value is not None and str(value).strip().lower() in TRUTHY
