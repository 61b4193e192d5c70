import re
from http.cookiejar import DefaultCookiePolicy
from typing import Any, Dict, List, NamedTuple, Optional, Tuple
from urllib.parse import urlsplit

import requests

from wiki_action.common.config import TIMEOUT, UA
from wiki_action.common.errors import ConfigurationError, InvalidParameterError, TransportError

# A comma followed by "name=" starts the next cookie; commas in Expires dates do not.
_FOLDED_COOKIE = re.compile(r",\s*(?=[^;,\s=]+=)")

class Response(NamedTuple):
    headers: List[Tuple[str, str]]
    body: Any

def check_url(url: str) -> str:
    """Reject anything that is not an absolute http(s) URL requests can prepare."""
    parts = urlsplit(url or "")
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ConfigurationError(f"not an http(s) API endpoint: {url!r}")
    try:
        requests.Request("GET", url).prepare()
    except requests.RequestException as e:
        raise ConfigurationError(f"invalid API endpoint {url!r}: {e}") from e
    return url

def _response_headers(r: requests.Response) -> List[Tuple[str, str]]:
    # requests folds repeated headers into one comma-joined value, which
    # breaks Set-Cookie (expiry dates contain commas). Read those from urllib3.
    headers = [(k, v) for k, v in r.headers.items() if k.lower() != "set-cookie"]
    raw = getattr(r.raw, "headers", None)
    if raw is not None and hasattr(raw, "getlist"):
        headers.extend(("Set-Cookie", v) for v in raw.getlist("Set-Cookie"))
    elif "Set-Cookie" in r.headers:
        headers.extend(("Set-Cookie", v) for v in _FOLDED_COOKIE.split(r.headers["Set-Cookie"]))
    return headers

class HttpTransport:
    def __init__(self, url: str, user_agent: str = UA, timeout: Optional[float] = TIMEOUT):
        self.url = check_url(url)
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": user_agent})
        # Cookies travel in Session values; the shared requests jar must stay empty.
        self.session.cookies.set_policy(DefaultCookiePolicy(allowed_domains=[]))

    def send(self, method: str, payload: Dict[str, Dict], headers: Dict[str, str]) -> Response:
        """One round trip. GET sends payload["query"], POST form-encodes payload["body"]."""
        if method == "GET":
            kwargs = {"params": payload.get("query", {})}
        elif method == "POST":
            kwargs = {"data": payload.get("body", {})}
        else:
            raise InvalidParameterError(f"unsupported HTTP method: {method!r}")
        try:
            r = self.session.request(method, self.url, headers=headers, timeout=self.timeout, **kwargs)
            r.raise_for_status()
            body = r.json()
        except requests.RequestException as e:
            raise TransportError(f"{method} {self.url} failed: {e}") from e
        except ValueError as e:
            raise TransportError(f"{method} {self.url} returned invalid JSON: {e}") from e
        return Response(_response_headers(r), body)
