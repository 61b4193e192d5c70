from dataclasses import replace
from enum import Enum
from typing import Any, Dict, Mapping

from wiki_action.common.log import debug

class State(Enum):
    START = "start"
    CONTINUE = "continue"
    DONE = "done"

class ContinuationStream:
    """
    Iterator over the result chunks of a paginated query.

    Each next() makes exactly one GET, yields its result and keeps the
    server's "continue" mapping for the following request. Nothing is sent
    before the first next(); once a response comes back without "continue"
    (or a request fails) the stream is done for good.
    """

    def __init__(self, session, params: Mapping[str, Any]):
        self.session = replace(session, options=replace(session.options, overwrite=True))
        self.params = dict(params)
        self.continuation: Dict[str, Any] = {}
        self.state = State.START
        self.pages = 0

    def __iter__(self):
        return self

    def __next__(self):
        if self.state is State.DONE:
            raise StopIteration
        try:
            self.session = self.session.get({**self.params, **self.continuation})
        except Exception:
            self.state = State.DONE
            raise
        self.pages += 1
        result = self.session.result
        cont = result.get("continue") if isinstance(result, Mapping) else None
        if isinstance(cont, Mapping):
            self.continuation = dict(cont)
            self.state = State.CONTINUE
            debug(f"[stream] page {self.pages}: continue {self.continuation}")
        else:
            self.state = State.DONE
            debug(f"[stream] page {self.pages}: done.")
        return result
