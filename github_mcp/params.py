"""
Argument Extraction

Turns the untyped `arguments` map of a tool call into typed values.

Every tool reads its arguments through `required_value` / `optional_value`
so that missing, null and mistyped values are reported the same way
everywhere, and always before GitHub is contacted.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, List, Mapping, Optional, TypeVar

from .errors import MissingParameterError, OutOfRangeError, WrongTypeError

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 30
MAX_PER_PAGE = 100


class Kind(str, Enum):
    """JSON schema types a tool parameter can be declared with."""
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"


_ZERO_VALUES = {
    Kind.STRING: "",
    Kind.NUMBER: 0.0,
    Kind.INTEGER: 0,
    Kind.BOOLEAN: False,
}


def zero_value(kind: Kind) -> Any:
    """Value an optional argument takes when the caller leaves it out."""
    if kind is Kind.ARRAY:
        return []
    if kind is Kind.OBJECT:
        return {}
    return _ZERO_VALUES[kind]


def describe(value: Any) -> str:
    """Name of the JSON type of `value`, for error messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a JSON number
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _coerce(key: str, value: Any, kind: Kind, items: Optional[Kind] = None) -> Any:
    """Check `value` against `kind` and return it in canonical form."""
    if kind is Kind.STRING:
        if isinstance(value, str):
            return value
    elif kind is Kind.BOOLEAN:
        if isinstance(value, bool):
            return value
    elif kind is Kind.NUMBER:
        if _is_number(value):
            return float(value)
    elif kind is Kind.INTEGER:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, float) and math.isfinite(value) and value.is_integer():
            return int(value)
        if _is_number(value):
            raise WrongTypeError(key, "integer", "non-integral number")
    elif kind is Kind.ARRAY:
        if isinstance(value, (list, tuple)):
            if items is None:
                return list(value)
            return [_coerce(f"{key}[{i}]", item, items) for i, item in enumerate(value)]
    elif kind is Kind.OBJECT:
        if isinstance(value, Mapping):
            return dict(value)

    raise WrongTypeError(key, kind.value, describe(value))


def is_present(args: Mapping[str, Any], key: str) -> bool:
    """A key counts as supplied only when it carries a non-null value."""
    return args.get(key) is not None


def required_value(
    args: Mapping[str, Any],
    key: str,
    kind: Kind,
    items: Optional[Kind] = None,
) -> Any:
    """
    Return `args[key]` as `kind`.

    Raises MissingParameterError when the key is absent or null, and
    WrongTypeError when it holds anything other than `kind`. An empty
    string is a valid string.
    """
    if not is_present(args, key):
        raise MissingParameterError(key)
    return _coerce(key, args[key], kind, items)


_NO_DEFAULT = object()


def optional_value(
    args: Mapping[str, Any],
    key: str,
    kind: Kind,
    default: Any = _NO_DEFAULT,
    items: Optional[Kind] = None,
) -> Any:
    """
    Return `args[key]` as `kind`, or a fallback when it was not supplied.

    The fallback is `default` when given, else the zero value of `kind`.
    A supplied value of the wrong kind still raises WrongTypeError.
    """
    if not is_present(args, key):
        return zero_value(kind) if default is _NO_DEFAULT else default
    return _coerce(key, args[key], kind, items)


@dataclass(frozen=True)
class Supplied(Generic[T]):
    """An optional argument together with whether the caller sent it."""
    present: bool
    value: Optional[T] = None


def lookup(args: Mapping[str, Any], key: str, kind: Kind) -> Supplied:
    """Like optional_value, but keeps "not sent" apart from the zero value."""
    if not is_present(args, key):
        return Supplied(present=False)
    return Supplied(present=True, value=_coerce(key, args[key], kind))


def build_patch(args: Mapping[str, Any], fields: Mapping[str, Kind]) -> Dict[str, Any]:
    """
    Build a sparse update payload.

    Only fields the caller actually sent are included, so `False` and `""`
    are forwarded while omitted fields stay untouched on the server.
    """
    patch: Dict[str, Any] = {}
    for key, kind in fields.items():
        supplied = lookup(args, key, kind)
        if supplied.present:
            patch[key] = supplied.value
    return patch


def check_enum(key: str, value: str, allowed: List[str]) -> str:
    if value not in allowed:
        raise OutOfRangeError(key, f"must be one of {', '.join(allowed)}, got {value!r}")
    return value


@dataclass(frozen=True)
class Pagination:
    """Resolved paging for a list-style GitHub call."""
    page: int = DEFAULT_PAGE
    per_page: int = DEFAULT_PER_PAGE

    def as_query(self) -> Dict[str, int]:
        return {"page": self.page, "per_page": self.per_page}


def resolve_pagination(args: Mapping[str, Any]) -> Pagination:
    """
    Resolve the optional `page` / `perPage` arguments.

    page defaults to 1 and must be >= 1. perPage defaults to 30 and must
    lie in [1, 100]. Out-of-range values raise OutOfRangeError instead of
    being clamped.
    """
    page = optional_value(args, "page", Kind.INTEGER, DEFAULT_PAGE)
    if page < 1:
        raise OutOfRangeError("page", f"must be at least 1, got {page}")

    per_page = optional_value(args, "perPage", Kind.INTEGER, DEFAULT_PER_PAGE)
    if not 1 <= per_page <= MAX_PER_PAGE:
        raise OutOfRangeError(
            "perPage", f"must be between 1 and {MAX_PER_PAGE}, got {per_page}"
        )

    return Pagination(page=page, per_page=per_page)
