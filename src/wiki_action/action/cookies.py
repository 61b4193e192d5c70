from typing import Iterable, List, Optional, Tuple

def set_cookie_headers(headers: Iterable[Tuple[str, str]]) -> List[str]:
    return [v for k, v in headers if k.lower() == "set-cookie"]

def parse_set_cookie(header: str) -> Optional[Tuple[str, str]]:
    """Name and value of one Set-Cookie header; Path, Expires and friends are dropped."""
    pair = header.split(";", 1)[0]
    name, sep, value = pair.partition("=")
    name = name.strip()
    if not sep or not name:
        return None
    return name, value.strip()

def serialize(cookies: Iterable[Tuple[str, str]]) -> str:
    return "; ".join(f"{k}={v}" for k, v in cookies)

def extract_cookies(headers: Iterable[Tuple[str, str]]) -> Optional[str]:
    """All Set-Cookie headers of a response packed into one Cookie value, or None."""
    pairs = [p for p in map(parse_set_cookie, set_cookie_headers(headers)) if p]
    return serialize(pairs) if pairs else None

def merge_cookies(new: Optional[str], old: Optional[str]) -> Optional[str]:
    """
    Newest cookies first. This is plain concatenation: a name sent again
    keeps its stale assignment further down the string.
    """
    if new is None:
        return old
    if old is None:
        return new
    return new + "; " + old
