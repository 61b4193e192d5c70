from wiki_action.action.cookies import extract_cookies, merge_cookies
from wiki_action.action.merge import recursive_merge
from wiki_action.action.params import normalize
from wiki_action.action.session import Options, Session, authenticate, dispatch, get, new, post, stream
from wiki_action.action.stream import ContinuationStream
from wiki_action.common.errors import (
    AuthenticationError,
    ConfigurationError,
    InvalidParameterError,
    MergeConflictError,
    TransportError,
    WikiActionError,
)
from wiki_action.common.mw import HttpTransport, Response

__version__ = "0.1.0"
