"""Lenient numeric parsing for free-form catalog fields.

Catalog documents are hand-edited and imported from spreadsheets, so player
counts look like ``"4"``, ``4`` or ``"10+"``, ages like ``"8+"`` and
complexities like ``"2.35"``. Every helper here returns a neutral default
instead of raising.
"""
from __future__ import annotations

import re
from typing import Any

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_LEADING_FLOAT = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+))")
_NON_DIGITS = re.compile(r"\D")

UNBOUNDED_PLAYERS = 99


def parse_int(value: Any, default: int = 0) -> int:
    """Parse the leading integer of *value* (``"10+"`` -> 10)."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return int(value)
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else default


def parse_float(value: Any, default: float = 0.0) -> float:
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value)
    match = _LEADING_FLOAT.match(str(value))
    return float(match.group(1)) if match else default


def parse_age(value: Any) -> int:
    """Strip every non-digit from an age label; 0 when nothing remains."""
    digits = _NON_DIGITS.sub("", str(value or ""))
    return int(digits) if digits else 0


def effective_max_players(min_players: int, max_players: Any) -> int:
    """Max player count, falling back to *min_players* when absent or zero."""
    return parse_int(max_players) or min_players


def open_ended_max_players(min_players: int, max_players: Any) -> int:
    """Like :func:`effective_max_players` but ``"N+"`` means unbounded."""
    if "+" in str(max_players or ""):
        return UNBOUNDED_PLAYERS
    return effective_max_players(min_players, max_players)


def average_play_time(min_minutes: int, max_minutes: Any) -> float:
    return (min_minutes + (parse_int(max_minutes) or min_minutes)) / 2
