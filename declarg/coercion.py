"""
Token coercion: turn one raw token into one typed value.

Supported kinds
- bool:  case-sensitive spellings, see TRUTHY / FALSY.
- str:   the token itself, never altered.
- int:   optional '-' followed by decimal digits, nothing else.
- float: optional '-', then a plain or exponent decimal ('1', '1.', '.5',
         '2.5e-3') or one of inf / infinity / nan (any letter case).
         A finite spelling outside double range fails, whether it overflows
         to infinity ('1e400') or a non-zero mantissa underflows to 0.0
         ('1e-400'); subnormal results are kept.

Every converter is total: it returns the converted value or Unset, it never
raises on user input and never has side effects. The grammars are
locale-independent and must consume the entire token; leading or trailing
unconsumed characters (including whitespace) make the conversion fail.

Optional-wrapped fields ('T | None') are handled by FieldType, which unwraps the
annotation once so the parser only ever coerces against the inner kind.
"""
import functools
import math
import re
import types
import typing
from typing import NamedTuple

from .utils import *

TRUTHY = frozenset({"true", "1", "yes", "on", "y"})
FALSY = frozenset({"false", "0", "no", "off", "n"})

_INTEGER = re.compile(r"-?[0-9]+")
_DECIMAL = re.compile(r"-?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_SPECIAL = re.compile(r"-?(?:inf|infinity|nan)", re.IGNORECASE)
_EXPONENT = re.compile(r"[eE]")
_NONZERO = re.compile(r"[1-9]")


def _to_bool(token):
    if token in TRUTHY:
        return True
    if token in FALSY:
        return False
    return Unset


def _to_str(token):
    return token


def _to_int(token):
    if not _INTEGER.fullmatch(token):
        return Unset
    return int(token)


def _to_float(token):
    if _SPECIAL.fullmatch(token):
        return float(token)
    if not _DECIMAL.fullmatch(token):
        return Unset
    value = float(token)
    # out of range: overflow to infinity, or a non-zero mantissa flushed to zero
    if math.isinf(value) or (value == 0.0 and _NONZERO.search(_EXPONENT.split(token, 1)[0])):
        return Unset
    return value


# exact-type lookup: bool must never fall through to int
_converters = {
    bool: _to_bool,
    str: _to_str,
    int: _to_int,
    float: _to_float,
}


def convertible(kind, /):
    """
    return True when coerce() has logic for `kind`.
    """
    return kind in _converters


def coerce(kind, token, /):
    """
    convert `token` into a value of `kind`.

    parameters
    - kind: bool | str | int | float
      the target type (already unwrapped from any optional wrapper).
    - token: str
      the raw token.

    returns
    - the converted value on success, Unset on failure.

    raises
    - TypeError: when `kind` is not a supported type. This is a declaration
      error, never the consequence of user input.
    """
    try:
        converter = _converters[kind]
    except (KeyError, TypeError):
        raise TypeError(f"coerce() has no conversion for {kind!r}") from None
    return converter(token)


class FieldType(NamedTuple):
    """
    a declared field type split into its inner kind and its optional wrapper.

    - inner: the kind coerce() converts to (bool, str, int, float, ...).
    - optional: True when the field was declared as 'inner | None'.
    """
    inner: type
    optional: bool

    def coerce(self, token, /):
        return coerce(self.inner, token)

    @property
    def zero(self):
        """
        the value of a default-initialized field of this type.
        """
        return None if self.optional else self.inner()


@functools.cache
def resolve(annotation, /):
    """
    split an annotation into a FieldType.

    accepted forms
    - a plain type: int, str, ...
    - an optional wrapper: int | None, Optional[int], Union[int, None]

    raises
    - TypeError: for unions of several non-None members, or when the annotation
      is not a type at all.
    """
    if typing.get_origin(annotation) in (typing.Union, types.UnionType):
        members = [member for member in typing.get_args(annotation) if member is not type(None)]
        if len(members) != 1 or len(typing.get_args(annotation)) != 2:
            raise TypeError(f"unsupported field annotation {annotation!r} (only 'T | None' unions are allowed)")
        return FieldType(members[0], True)
    if not isinstance(annotation, type):
        raise TypeError(f"unsupported field annotation {annotation!r}")
    return FieldType(annotation, False)


__all__ = (
    "TRUTHY",
    "FALSY",
    "FieldType",
    "coerce",
    "convertible",
    "resolve",
)
