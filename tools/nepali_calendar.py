"""Approximate Bikram Sambat date for the dashboard header.

This is not an ephemeris-backed conversion: BS months are taken to begin on
the 14th of each Gregorian month and the new year on 14 April, which is
within a day or two of the real calendar.
"""
from datetime import date
from typing import Optional, Union

BS_MONTHS = ["बैशाख", "जेठ", "असार", "साउन", "भदौ", "असोज",
             "कात्तिक", "मंसिर", "पुष", "माघ", "फागुन", "चैत"]

# Indexed by date.weekday(): Monday first
WEEKDAYS = ["सोमबार", "मंगलबार", "बुधबार", "बिहीबार", "शुक्रबार", "शनिबार", "आइतबार"]

NEPALI_DIGITS = str.maketrans("0123456789", "०१२३४५६७८९")

MONTH_START_DAY = 14


def to_nepali_digits(value: Union[int, str]) -> str:
    """Render ASCII digits as Devanagari numerals, leaving other characters alone."""
    return str(value).translate(NEPALI_DIGITS)


def nepali_date(today: Optional[date] = None) -> str:
    """Return "<weekday>, <day> <month> <year>" in Nepali for `today`."""
    today = today or date.today()

    after_new_year = (today.month, today.day) >= (4, MONTH_START_DAY)
    bs_year = today.year + (57 if after_new_year else 56)

    # Baishakh starts mid-April, so April 14 maps to month index 0
    if today.day >= MONTH_START_DAY:
        month_index = (today.month - 4) % 12
        bs_day = today.day - MONTH_START_DAY + 1
    else:
        month_index = (today.month - 5) % 12
        # Days carried over from the previous Gregorian month (treated as 30 long)
        bs_day = today.day + 30 - MONTH_START_DAY + 1

    weekday = WEEKDAYS[today.weekday()]
    return f"{weekday}, {to_nepali_digits(bs_day)} {BS_MONTHS[month_index]} {to_nepali_digits(bs_year)}"
