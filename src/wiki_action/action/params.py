from typing import Dict, Mapping, Sequence, Union

from wiki_action.common.errors import InvalidParameterError

Scalar = Union[str, int, float, bool]
# False means "leave this parameter out"; lists and tuples are pipe-joined.
ParamValue = Union[Scalar, Sequence[Scalar]]

def _wire_value(key: str, value: ParamValue) -> Scalar:
    if isinstance(value, (list, tuple)):
        for item in value:
            if item is None or not isinstance(item, (str, int, float)):
                raise InvalidParameterError(f"{key}: list items must be scalars, got {item!r}")
        return "|".join(str(item) for item in value)
    if isinstance(value, (str, int, float)):
        return value
    raise InvalidParameterError(f"{key}: unsupported parameter value {value!r}")

def normalize(params: Mapping[str, ParamValue]) -> Dict[str, Scalar]:
    """
    Wire-ready copy of `params`: format defaults to json, False values are
    dropped, list values become "a|b|c". The input is left untouched.
    """
    out: Dict[str, Scalar] = {}
    for key, value in {**params, "format": params.get("format", "json")}.items():
        if not isinstance(key, str):
            raise InvalidParameterError(f"parameter names must be strings, got {key!r}")
        if value is False:
            continue
        out[key] = _wire_value(key, value)
    return out
