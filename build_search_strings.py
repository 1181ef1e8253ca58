#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Build the in-game "age" search strings for the configured event windows.

Outputs:
  outputs/search_strings.json
  outputs/search_strings.csv

Shape:
{
  "_meta": {...},
  "rows": [ ... ],        # event, start/end, min/max days, search string
  "combined": "age9-11,age2-4"
}

Notes:
- Window dates are UTC. Day counts use absolute time, so the host timezone
  does not change them.
- --watch keeps running and rewrites the outputs after every midnight
  (local by default, see --boundary).
"""

from __future__ import annotations
import argparse, asyncio, os, sys
from typing import Any, Dict, List, Optional

import pandas as pd
from dateutil import tz as dtz

from common.utils import load_yaml, save_json, now_iso, now_ms, to_instant, instant_iso
from calc.event_windows import load_windows
from calc.search_strings import build_search_strings, combined_search_string, is_known_lang, norm_lang, DEFAULT_LANG
from calc.refresh import RefreshScheduler, BOUNDARIES, SAFETY_MARGIN_MS

CONFIG_PATH = "sources/search.yaml"
OUT_DIR = "outputs"

def write_outputs(rows: List[Dict[str, Any]], lang: str, now: int, out_dir: str = OUT_DIR) -> Dict[str, Any]:
    payload = {
        "_meta": {"generated_at": now_iso(), "as_of": instant_iso(now), "lang": lang},
        "rows": rows,
        "combined": combined_search_string(rows),
    }
    os.makedirs(out_dir, exist_ok=True)
    save_json(os.path.join(out_dir, "search_strings.json"), payload)
    df = pd.DataFrame(rows, columns=["Event", "Start", "End", "Min Days", "Max Days", "Search String"])
    df.to_csv(os.path.join(out_dir, "search_strings.csv"), index=False)
    return payload

def render(windows, lang: str, now: Optional[int] = None, out_dir: str = OUT_DIR) -> Dict[str, Any]:
    if now is None:
        now = now_ms()
    rows = build_search_strings(windows, lang, now)
    payload = write_outputs(rows, lang, now, out_dir)
    for r in rows:
        print(f"{r['Event']}: {r['Search String']}")
    print(f"[ok] wrote {out_dir}/search_strings.json rows={len(rows)} combined={payload['combined']}")
    return payload

def parse_args(argv=None):
    ap = argparse.ArgumentParser(description="Build Pokemon GO age search strings for event windows.")
    ap.add_argument("--config", default=CONFIG_PATH, help="YAML config (default: %(default)s)")
    ap.add_argument("--lang", default=None, help="client language tag, e.g. en, ja, de-DE")
    ap.add_argument("--now", default=None, help="pretend the current time is this (naive = UTC)")
    ap.add_argument("--boundary", choices=BOUNDARIES, default=None, help="which midnight triggers a refresh in --watch")
    ap.add_argument("--tz", default=None, help="timezone name for the local boundary (default: host zone)")
    ap.add_argument("--out", default=OUT_DIR, help="output directory (default: %(default)s)")
    ap.add_argument("--watch", action="store_true", help="keep running and refresh daily")
    return ap.parse_args(argv)

def resolve_lang(args, cfg) -> str:
    raw = args.lang or cfg.get("lang") or DEFAULT_LANG
    if not is_known_lang(raw):
        print(f"[warn] unknown language {raw!r}, using {DEFAULT_LANG}", file=sys.stderr)
    return norm_lang(raw)

def make_scheduler(args, cfg, callback, loop=None) -> RefreshScheduler:
    rcfg = cfg.get("refresh") or {}
    boundary = args.boundary or rcfg.get("boundary") or "local"
    tz_name = args.tz or rcfg.get("tz")
    zone = None
    if tz_name:
        zone = dtz.gettz(tz_name)
        if zone is None:
            raise ValueError(f"unknown timezone {tz_name!r}")
    margin = int(rcfg.get("safety_margin_ms") or SAFETY_MARGIN_MS)
    return RefreshScheduler(callback, loop=loop, boundary=boundary, tz=zone, safety_margin_ms=margin)

async def watch(args, cfg, windows, lang, stop: Optional[asyncio.Event] = None):
    if stop is None:
        stop = asyncio.Event()
    sched = make_scheduler(args, cfg, lambda: render(windows, lang, out_dir=args.out))
    delay = sched.start()
    print(f"[info] next refresh in {delay / 1000:.0f}s ({sched.boundary} midnight)")
    try:
        await stop.wait()
    finally:
        sched.cancel()

def main(argv=None):
    args = parse_args(argv)
    cfg = load_yaml(args.config)
    windows = load_windows(cfg)
    lang = resolve_lang(args, cfg)

    if args.watch:
        if args.now:
            print("[warn] --now is ignored with --watch", file=sys.stderr)
        try:
            asyncio.run(watch(args, cfg, windows, lang))
        except KeyboardInterrupt:
            print("[info] stopped")
        return

    now = to_instant(args.now) if args.now else None
    render(windows, lang, now, out_dir=args.out)

if __name__ == "__main__":
    main()
