import os, sys

from common.utils import load_yaml, save_json, now_iso, now_ms, instant_iso
from calc.event_windows import load_windows
from calc.search_strings import AGE_KEYWORDS, build_search_strings, combined_search_string

CONFIG_PATH = "sources/search.yaml"

def export_all(windows, now=None, out_dir="api"):
    if now is None:
        now = now_ms()
    meta = {"generated_at": now_iso(), "as_of": instant_iso(now)}
    by_lang = {}
    for lang in AGE_KEYWORDS:
        rows = build_search_strings(windows, lang, now)
        by_lang[lang] = {"rows": rows, "combined": combined_search_string(rows)}
        save_json(os.path.join(out_dir, f"search_strings_{lang}.json"), {"_meta": dict(meta, lang=lang), **by_lang[lang]})
    save_json(os.path.join(out_dir, "search_strings.json"), {"_meta": meta, "langs": by_lang})
    return by_lang

def main():
    cfg = load_yaml(sys.argv[1] if len(sys.argv) > 1 else CONFIG_PATH)
    by_lang = export_all(load_windows(cfg))
    print(f"[ok] wrote api/search_strings.json langs={len(by_lang)}")

if __name__ == "__main__":
    main()
