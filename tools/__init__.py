"""Jyotishi Baje Tools Module.

Deterministic helpers that need no model call.

Tools:
    RASHI_LIST: The twelve rashi with icon and status line.
    is_rashi: Check a label against the twelve.
    nepali_date: Approximate Bikram Sambat date in Nepali.
    to_nepali_digits: Render digits as Devanagari numerals.
"""
from tools.rashi import RASHI_LIST, RASHI_LABELS, is_rashi
from tools.nepali_calendar import nepali_date, to_nepali_digits

__all__ = [
    "RASHI_LIST",
    "RASHI_LABELS",
    "is_rashi",
    "nepali_date",
    "to_nepali_digits",
]
