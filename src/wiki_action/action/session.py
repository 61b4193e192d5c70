from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional

from wiki_action.action.cookies import extract_cookies, merge_cookies
from wiki_action.action.merge import recursive_merge
from wiki_action.action.params import ParamValue, normalize
from wiki_action.action.stream import ContinuationStream
from wiki_action.common.config import load_settings
from wiki_action.common.errors import AuthenticationError
from wiki_action.common.log import debug
from wiki_action.common.mw import HttpTransport, check_url

@dataclass(frozen=True)
class Options:
    # When set, each response replaces `result` instead of merging into it.
    overwrite: bool = False

@dataclass(frozen=True)
class Session:
    """
    One state in a chain of API calls. Never modified: get, post and
    authenticate hand back a new Session carrying the same transport and
    options, the cookies received so far and the merged results. Merged
    results never share containers with an earlier session's result.
    """
    transport: Any
    cookie: Optional[str] = None
    options: Options = field(default_factory=Options)
    result: Any = field(default_factory=dict)

    def get(self, params: Mapping[str, ParamValue]) -> "Session":
        """API GET; `params` go on the query string."""
        return dispatch(self, "GET", {"query": normalize(params)})

    def post(self, params: Mapping[str, ParamValue]) -> "Session":
        """API POST; `params` are sent form-encoded. Use an authenticated session for edits."""
        return dispatch(self, "POST", {"body": normalize(params)})

    def authenticate(self, username: str, password: str) -> "Session":
        """
        Log in with a bot password (Special:BotPasswords). Fetches a login
        token, then posts the credentials with it; the returned session holds
        the login cookies.

        A refused login raises AuthenticationError; its `session` holds the
        server's reply and `reason` the message.
        """
        s1 = self.get({"action": "query", "format": "json", "meta": "tokens", "type": "login"})
        try:
            token = s1.result["query"]["tokens"]["logintoken"]
        except (KeyError, TypeError) as e:
            raise AuthenticationError(f"no login token in response: {s1.result!r}", session=s1) from e
        s2 = s1.post({
            "action": "login",
            "format": "json",
            "lgname": username,
            "lgpassword": password,
            "lgtoken": token,
        })
        login = s2.result.get("login") if isinstance(s2.result, Mapping) else None
        if isinstance(login, Mapping) and login.get("result", "Success") != "Success":
            reason = login.get("reason", login["result"])
            raise AuthenticationError(f"login as {username!r} refused: {reason}", session=s2, reason=reason)
        return s2

    def stream(self, params: Mapping[str, ParamValue]) -> ContinuationStream:
        """Lazy iterator of raw result chunks, following "continue" until the server stops sending it."""
        return ContinuationStream(self, params)

def new(url: str, overwrite: bool = False, user_agent: Optional[str] = None,
        timeout: Optional[float] = None, transport: Any = None) -> Session:
    """
    Session for the api.php endpoint at `url`, e.g.
    "https://en.wikipedia.org/w/api.php". No request is made.

    overwrite=True keeps only the latest response in `result` instead of
    accumulating; stream() turns it on by itself.
    """
    check_url(url)
    if transport is None:
        settings = load_settings()
        transport = HttpTransport(
            url,
            user_agent=user_agent or settings.user_agent,
            timeout=settings.timeout if timeout is None else timeout,
        )
    return Session(transport=transport, options=Options(overwrite=overwrite))

def dispatch(session: Session, method: str, payload: Dict[str, Dict]) -> Session:
    """Send one request and fold the response into a new Session."""
    headers = {"Cookie": session.cookie} if session.cookie is not None else {}
    params = payload.get("query", payload.get("body", {}))
    debug(f"[{method.lower()}] action={params.get('action')} cookie={'yes' if headers else 'no'}")

    response = session.transport.send(method, payload, headers)

    cookie = merge_cookies(extract_cookies(response.headers), session.cookie)
    if session.options.overwrite:
        result = response.body
    else:
        result = recursive_merge(session.result, response.body)
    return replace(session, cookie=cookie, result=result)

def get(session: Session, params: Mapping[str, ParamValue]) -> Session:
    return session.get(params)

def post(session: Session, params: Mapping[str, ParamValue]) -> Session:
    return session.post(params)

def authenticate(session: Session, username: str, password: str) -> Session:
    return session.authenticate(username, password)

def stream(session: Session, params: Mapping[str, ParamValue]) -> ContinuationStream:
    return session.stream(params)
