"""
Daily refresh timer for the search strings.

The age numbers roll over once a day, so whatever shows them has to be
re-rendered after midnight. RefreshScheduler keeps exactly one pending
timer on an asyncio loop: fire -> callback -> re-arm for the next midnight.

Note the boundary: elapsed days are counted in absolute UTC milliseconds,
but by default the refresh follows the host's LOCAL midnight. Between the
two midnights the rendered strings can be stale by up to a UTC-offset's
worth of hours. Pass boundary="utc" to line the refresh up with the day
count instead.
"""

from __future__ import annotations
import asyncio
from datetime import datetime, timedelta, timezone, time as dtime
from typing import Callable, Optional

from dateutil import tz as dtz

IDLE = "IDLE"
ARMED = "ARMED"
BOUNDARIES = ("local", "utc")
SAFETY_MARGIN_MS = 1000
ONE_MS = timedelta(milliseconds=1)

def utc_now() -> datetime:
    return datetime.now(timezone.utc)

def next_midnight(now: datetime, zone) -> datetime:
    """First 00:00 in ``zone`` strictly after ``now``."""
    local = now.astimezone(zone)
    nxt = datetime.combine(local.date() + timedelta(days=1), dtime(0), tzinfo=zone)
    # zones that skip midnight on DST days
    return dtz.resolve_imaginary(nxt)

class RefreshScheduler:
    def __init__(self, callback: Callable[[], None], loop: Optional[asyncio.AbstractEventLoop] = None,
                 boundary: str = "local", tz=None, safety_margin_ms: int = SAFETY_MARGIN_MS,
                 clock: Callable[[], datetime] = utc_now):
        if boundary not in BOUNDARIES:
            raise ValueError(f"boundary must be one of {BOUNDARIES}, got {boundary!r}")
        if safety_margin_ms <= 0:
            raise ValueError("safety_margin_ms must be positive")
        self._callback = callback
        self._loop = loop
        self.boundary = boundary
        if boundary == "utc":
            self.zone = timezone.utc
        else:
            self.zone = tz if tz is not None else dtz.tzlocal()
        self.safety_margin_ms = safety_margin_ms
        self._clock = clock
        self._handle = None

    @property
    def state(self) -> str:
        return ARMED if self._handle is not None else IDLE

    @property
    def armed(self) -> bool:
        return self._handle is not None

    def next_delay_ms(self) -> int:
        now = self._clock()
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        nxt = next_midnight(now, self.zone)
        delta = nxt.astimezone(timezone.utc) - now.astimezone(timezone.utc)
        return delta // ONE_MS + self.safety_margin_ms

    def cancel(self):
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def arm(self) -> int:
        self.cancel()
        delay = self.next_delay_ms()
        loop = self._loop or asyncio.get_running_loop()
        self._handle = loop.call_later(delay / 1000.0, self._fire)
        return delay

    def start(self) -> int:
        """Render now, then keep re-rendering every midnight."""
        self._callback()
        return self.arm()

    def _fire(self):
        self._handle = None
        try:
            self._callback()
        finally:
            self.arm()
