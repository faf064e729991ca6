"""The twelve rashi (zodiac signs) offered on the dashboard.

Each entry carries the label sent to the astrologer, its glyph and the static
status line shown beside it.
"""
from typing import Dict, List

RASHI_LIST: List[Dict[str, str]] = [
    {"name": "मेष (Aries)", "icon": "♈", "status": "शुभ फल"},
    {"name": "वृष (Taurus)", "icon": "♉", "status": "सामान्य"},
    {"name": "मिथुन (Gemini)", "icon": "♊", "status": "आर्थिक लाभ"},
    {"name": "कर्कट (Cancer)", "icon": "♋", "status": "यात्रा योग"},
    {"name": "सिंह (Leo)", "icon": "♌", "status": "कार्य सिद्धि"},
    {"name": "कन्या (Virgo)", "icon": "♍", "status": "सामान्य"},
    {"name": "तुला (Libra)", "icon": "♎", "status": "पारिवारिक सुख"},
    {"name": "वृश्चिक (Scorpio)", "icon": "♏", "status": "स्वास्थ्य लाभ"},
    {"name": "धनु (Sagittarius)", "icon": "♐", "status": "शुभ समाचार"},
    {"name": "मकर (Capricorn)", "icon": "♑", "status": "व्यवसाय वृद्धि"},
    {"name": "कुम्भ (Aquarius)", "icon": "♒", "status": "सामान्य"},
    {"name": "मीन (Pisces)", "icon": "♓", "status": "आध्यात्मिक लाभ"},
]

RASHI_LABELS = tuple(r["name"] for r in RASHI_LIST)


def is_rashi(label: str) -> bool:
    return label in RASHI_LABELS
