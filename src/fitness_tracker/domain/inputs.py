"""Parsing of numeric values entered by the user."""

import math


def parse_non_negative(raw: object) -> float | None:
    """Return raw as a non-negative float, or None when it is not one."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int | float):
        value = float(raw)
    elif isinstance(raw, str):
        try:
            value = float(raw.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return value
