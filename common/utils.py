import os, json, time
from datetime import datetime, timedelta, timezone

import yaml
from dateutil import parser as dateparser

ISO_Z = "%Y-%m-%dT%H:%M:%SZ"
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
ONE_MS = timedelta(milliseconds=1)

def now_ms() -> int:
    return time.time_ns() // 1_000_000

def now_iso() -> str:
    return datetime.now(timezone.utc).strftime(ISO_Z)

def dt_to_instant(d: datetime) -> int:
    # naive datetimes are read as UTC
    if d.tzinfo is None:
        d = d.replace(tzinfo=timezone.utc)
    return (d - EPOCH) // ONE_MS

def utc_instant(year, month, day, hour=0, minute=0, second=0) -> int:
    """Epoch milliseconds for a UTC calendar reading (months are 1-based)."""
    return dt_to_instant(datetime(year, month, day, hour, minute, second, tzinfo=timezone.utc))

def to_instant(value) -> int:
    if isinstance(value, bool):
        raise ValueError(f"not an instant: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, datetime):
        return dt_to_instant(value)
    s = (str(value) if value is not None else "").strip()
    if not s:
        raise ValueError("empty date string")
    try:
        return dt_to_instant(dateparser.parse(s))
    except (ValueError, OverflowError) as e:
        raise ValueError(f"unparseable date {s!r}: {e}") from e

def instant_to_dt(t: int) -> datetime:
    return EPOCH + timedelta(milliseconds=t)

def instant_iso(t: int) -> str:
    return instant_to_dt(t).strftime(ISO_Z)

def load_yaml(path):
    if not path or not os.path.exists(path):
        return {}
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}

def save_json(path, obj):
    d = os.path.dirname(path)
    if d:
        os.makedirs(d, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(obj, f, ensure_ascii=False, indent=2)
