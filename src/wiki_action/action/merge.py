from copy import deepcopy
from typing import Any, Mapping, Tuple

from wiki_action.common.errors import MergeConflictError

def _is_sequence(v: Any) -> bool:
    return isinstance(v, (list, tuple))

def _same_scalar(a: Any, b: Any) -> bool:
    # JSON true and 1 are different values even though Python calls them equal.
    return a == b and isinstance(a, bool) == isinstance(b, bool)

def recursive_merge(a: Any, b: Any, path: Tuple = ()) -> Any:
    """
    Combine two JSON trees into a new one that shares no containers with
    either input, so neither operand changes when the result is edited.

    mappings     -> key union, shared keys merged recursively
    sequences    -> a followed by b
    equal values -> the value
    anything else raises MergeConflictError with the key path.
    """
    if isinstance(a, Mapping) and isinstance(b, Mapping):
        merged = {k: deepcopy(v) for k, v in a.items()}
        for key, value in b.items():
            merged[key] = recursive_merge(a[key], value, path + (key,)) if key in a else deepcopy(value)
        return merged
    if _is_sequence(a) and _is_sequence(b):
        return deepcopy(list(a)) + deepcopy(list(b))
    if isinstance(a, Mapping) or isinstance(b, Mapping) or _is_sequence(a) or _is_sequence(b):
        raise MergeConflictError(path, a, b)
    if _same_scalar(a, b):
        return a
    raise MergeConflictError(path, a, b)
