from typing import Optional

from common.utils import now_ms

MS_PER_DAY = 86_400_000

def elapsed_days(t: int, now: Optional[int] = None) -> int:
    """Whole days elapsed since instant ``t`` (floored, so negative when ``t`` is ahead of ``now``).

    Works on absolute milliseconds only; the host timezone never enters into it.
    """
    if now is None:
        now = now_ms()
    return (now - t) // MS_PER_DAY
