"""
Delivery time resolution.

A shop stores its delivery window as a JSON triple
{"from": ..., "to": ..., "type": ...}. Updates may carry any subset of the
three sub-fields; the ones left out keep their persisted values.
"""

from typing import Any, Optional

DELIVERY_TIME_KEYS = ("from", "to", "type")


def merge_delivery_time(
    current: Optional[dict[str, Any]] = None,
    time_from: Optional[str] = None,
    time_to: Optional[str] = None,
    time_type: Optional[str] = None,
) -> dict[str, Any]:
    """
    Merge a partial delivery window onto the current value.

    Args:
        current: Persisted value (None or {} for a new shop)
        time_from: New start of the window, None keeps the current one
        time_to: New end of the window, None keeps the current one
        time_type: New window type, None keeps the current one

    Returns:
        A new dict; `current` is never mutated. Once any sub-field is set the
        result always holds all three keys (missing ones as None).
    """
    merged = dict(current or {})

    for key, value in zip(DELIVERY_TIME_KEYS, (time_from, time_to, time_type)):
        if value is not None:
            merged[key] = value

    if merged:
        for key in DELIVERY_TIME_KEYS:
            merged.setdefault(key, None)

    return merged
