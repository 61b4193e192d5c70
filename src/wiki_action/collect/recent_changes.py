from datetime import datetime, timezone
from itertools import islice
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence

import pandas as pd
from dateutil import parser as dparser
from tqdm import tqdm

from wiki_action.action.session import Session
from wiki_action.common.log import log

RC_COLUMNS = ["rcid", "type", "ns", "title", "user", "userid", "timestamp",
              "revid", "old_revid", "oldlen", "newlen", "comment", "tags"]

def _utc(ts: str) -> datetime:
    dt = dparser.parse(ts)
    # Timestamps without an offset are taken as UTC, like the API returns them.
    return dt.replace(tzinfo=timezone.utc) if dt.tzinfo is None else dt.astimezone(timezone.utc)

def iso(ts: str) -> str:
    # Normalize to strict UTC ISO8601 (MediaWiki format)
    return _utc(ts).strftime("%Y-%m-%dT%H:%M:%SZ")

def iter_records(session: Session, params: Mapping, list_name: str,
                 max_pages: Optional[int] = None, progress: bool = False) -> Iterator[Dict]:
    """
    Stream `params` and yield the rows of query[list_name] from every page.
    Stops pulling after `max_pages` pages, so no request is made past the cap.
    """
    pages: Iterable = session.stream(params)
    if max_pages is not None:
        pages = islice(pages, max_pages)
    if progress:
        pages = tqdm(pages, desc=list_name, unit="page", total=max_pages)
    for page in pages:
        yield from page.get("query", {}).get(list_name, [])

def records_frame(records: Iterable[Mapping], columns: Sequence[str],
                  time_columns: Sequence[str] = ("timestamp",)) -> pd.DataFrame:
    """DataFrame with exactly `columns`; list cells are pipe-joined, time columns parsed to UTC."""
    rows: List[Dict] = []
    for rec in records:
        row = {}
        for c in columns:
            v = rec.get(c)
            row[c] = "|".join(map(str, v)) if isinstance(v, list) else v
        rows.append(row)
    df = pd.DataFrame(rows, columns=list(columns))
    for c in time_columns:
        if c in df.columns:
            df[c] = df[c].map(lambda ts: _utc(ts) if isinstance(ts, str) else pd.NaT)
    return df

def recent_changes(session: Session, start_iso: str, end_iso: str, limit: int = 500,
                   max_pages: Optional[int] = None, namespace: Optional[int] = None,
                   progress: bool = True) -> pd.DataFrame:
    """
    Recent changes between start and end, both bounds inclusive, newest first.
    The API walks backwards in time, so rcstart is the newer bound.
    """
    start_iso, end_iso = iso(start_iso), iso(end_iso)
    params = {
        "action": "query",
        "list": "recentchanges",
        "rcstart": end_iso,
        "rcend": start_iso,
        "rcdir": "older",
        "rctype": ["edit", "new"],
        "rcprop": ["user", "userid", "title", "ids", "timestamp", "comment", "sizes", "flags", "tags"],
        "rclimit": limit,
        "rcnamespace": namespace if namespace is not None else False,
    }
    log(f"[recentchanges] window {start_iso} .. {end_iso}")
    df = records_frame(iter_records(session, params, "recentchanges", max_pages, progress), RC_COLUMNS)
    log(f"[recentchanges] {len(df)} rows")
    return df

if __name__ == "__main__":
    import argparse, os
    from wiki_action.action.session import new
    from wiki_action.common.config import load_settings

    settings = load_settings()
    ap = argparse.ArgumentParser()
    ap.add_argument("--start", required=True, help="e.g., 2024-09-01T00:00:00Z")
    ap.add_argument("--end", required=True, help="e.g., 2024-10-01T00:00:00Z")
    ap.add_argument("--api", default=settings.api_url)
    ap.add_argument("--out", default="data/raw/recent_changes.csv")
    ap.add_argument("--namespace", type=int, default=None)
    ap.add_argument("--max-pages", type=int, default=None)
    ap.add_argument("--login", action="store_true", help="authenticate with WIKI_ACTION_USERNAME/PASSWORD first")
    args = ap.parse_args()

    session = new(args.api)
    if args.login:
        session = session.authenticate(settings.username, settings.password)
        log(f"[login] {settings.username}")
    df = recent_changes(session, args.start, args.end, namespace=args.namespace, max_pages=args.max_pages)
    os.makedirs(os.path.dirname(args.out) or ".", exist_ok=True)
    df.to_csv(args.out, index=False)
    log(f"[save] {len(df)} rows → {args.out}")
