# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Interval arithmetic over availability slots.
Pure functions: no I/O, no metrics, no logging.

Slots are half-open ``[start_time, end_time)``: two slots that merely
touch (one ends exactly when the next starts) do not overlap.
"""

from datetime import datetime
from typing import Any, Iterable

from studio.core.clock import parse_datetime


def overlaps(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    return a_start < b_end and a_end > b_start


def slot_bounds(slot: dict[str, Any]) -> tuple[datetime, datetime]:
    return parse_datetime(slot["start_time"]), parse_datetime(slot["end_time"])


def slot_hours(slot: dict[str, Any]) -> float:
    start, end = slot_bounds(slot)
    return (end - start).total_seconds() / 3600


def total_hours(slots: Iterable[dict[str, Any]], slot_type: str) -> float:
    return sum(slot_hours(s) for s in slots if s.get("type") == slot_type)


def percentage(part: float, whole: float) -> float:
    """``part / whole * 100`` rounded to two decimals; 0 when ``whole`` is 0."""
    if not whole:
        return 0.0
    return round(part / whole * 100, 2)


def pairwise_overlaps(slots: list[dict[str, Any]]) -> list[tuple[dict[str, Any], dict[str, Any]]]:
    """Every pair of slots whose intervals intersect, in input order."""
    bounds = [slot_bounds(s) for s in slots]
    pairs = []
    for i in range(len(slots)):
        for j in range(i + 1, len(slots)):
            if overlaps(*bounds[i], *bounds[j]):
                pairs.append((slots[i], slots[j]))
    return pairs
