import sys
from dataclasses import dataclass
from typing import Any, Dict, List

from common.utils import utc_instant, to_instant, instant_iso

@dataclass(frozen=True)
class EventWindow:
    name: str
    start: int
    end: int

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(f"window {self.name!r}: start {instant_iso(self.start)} is after end {instant_iso(self.end)}")

    @classmethod
    def from_utc(cls, name, start, end):
        """Build from (year, month, day, hour, minute, second) UTC tuples."""
        return cls(name, utc_instant(*start), utc_instant(*end))

DEFAULT_WINDOWS = (
    EventWindow.from_utc("wild_area_global", (2024, 11, 16, 0, 0, 0), (2024, 11, 17, 23, 59, 59)),
    EventWindow.from_utc("wild_area_weekend", (2024, 11, 23, 0, 0, 0), (2024, 11, 24, 23, 59, 59)),
)

def load_windows(cfg: Dict[str, Any]) -> List[EventWindow]:
    entries = cfg.get("windows")
    if not entries:
        return list(DEFAULT_WINDOWS)
    out = []
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            print(f"[warn] windows[{i}] is not a mapping, skipped", file=sys.stderr)
            continue
        if not entry.get("enabled", True):
            continue
        name = entry.get("name") or f"window_{i + 1}"
        if entry.get("start") in (None, "") or entry.get("end") in (None, ""):
            print(f"[warn] window {name!r} needs both start and end, skipped", file=sys.stderr)
            continue
        out.append(EventWindow(name, to_instant(entry["start"]), to_instant(entry["end"])))
    return out
