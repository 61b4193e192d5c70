class WikiActionError(Exception):
    """Base class for every error raised by wiki_action."""
    pass

class ConfigurationError(WikiActionError):
    """Bad base URL or settings, raised while building a session."""
    pass

class InvalidParameterError(WikiActionError):
    """A parameter value that cannot be put on the wire."""
    pass

class TransportError(WikiActionError):
    """Network, TLS, timeout, HTTP status or undecodable response body."""
    pass

class AuthenticationError(WikiActionError):
    """Login token missing from a response, or the login was refused."""

    def __init__(self, message, session=None, reason=None):
        self.session = session
        self.reason = reason
        super().__init__(message)

class MergeConflictError(WikiActionError):
    """Two results disagree at the same key and cannot be combined."""

    def __init__(self, path, left, right):
        self.path = tuple(path)
        self.left = left
        self.right = right
        where = "/".join(str(p) for p in self.path) or "<root>"
        super().__init__(f"cannot merge {left!r} with {right!r} at {where}")
