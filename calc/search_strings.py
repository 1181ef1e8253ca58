import re
from typing import Any, Dict, Iterable, List, Optional

from common.utils import now_ms, instant_iso
from .elapsed_days import elapsed_days
from .event_windows import EventWindow, DEFAULT_WINDOWS

DEFAULT_LANG = "en"

# In-game search keyword for "days since caught", per client language.
AGE_KEYWORDS = {
    "en": "age",
    "ja": "経過日数",
    "de": "alter",
    "fr": "âge",
    "es": "edad",
}

def primary_subtag(lang) -> str:
    return re.split(r"[-_]", str(lang or "").strip().lower())[0]

def is_known_lang(lang) -> bool:
    return primary_subtag(lang) in AGE_KEYWORDS

def norm_lang(lang) -> str:
    """'en-US' / 'EN_gb' -> 'en'. Unknown or empty tags map to DEFAULT_LANG."""
    primary = primary_subtag(lang)
    return primary if primary in AGE_KEYWORDS else DEFAULT_LANG

def age_keyword(lang) -> str:
    return AGE_KEYWORDS[norm_lang(lang)]

def range_string(window: EventWindow, lang=DEFAULT_LANG, now: Optional[int] = None) -> str:
    if now is None:
        now = now_ms()
    lo = elapsed_days(window.end, now)
    hi = elapsed_days(window.start, now)
    return f"{age_keyword(lang)}{lo}-{hi}"

def build_search_strings(windows: Iterable[EventWindow] = DEFAULT_WINDOWS, lang=DEFAULT_LANG, now: Optional[int] = None) -> List[Dict[str, Any]]:
    if now is None:
        now = now_ms()
    rows = []
    for w in windows:
        rows.append({
            "Event": w.name,
            "Start": instant_iso(w.start),
            "End": instant_iso(w.end),
            "Min Days": elapsed_days(w.end, now),
            "Max Days": elapsed_days(w.start, now),
            "Search String": range_string(w, lang, now),
        })
    return rows

def combined_search_string(rows) -> str:
    # ',' is OR in the in-game search bar
    return ",".join(r["Search String"] for r in rows)
