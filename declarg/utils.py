import functools
from typing import final


@final
class UnsetType:
    """
    sentinel for "no value given", distinct from None and every falsy value.

    - keyword defaults: Option(..., default=Unset) means "use the field type's
      zero value", so default=None stays expressible.
    - coercion failures: converters answer Unset when a token does not convert,
      since False, 0 and "" are all legitimate results.

    Unset is falsy, prints as "Unset", exists once per process, and may appear
    in unions (str | Unset) for isinstance checks.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __init_subclass__(cls):
        raise TypeError("UnsetType cannot be subclassed")

    def __or__(self, other, /):
        try:
            return UnsetType | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | UnsetType
        except TypeError:
            return NotImplemented

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"


Unset = UnsetType()


def nullify(object, default=None, /):
    """
    `object`, or `default` in its place when it is Unset.
    """
    if object is Unset:
        return default
    return object


def rename(x, /, name=None):
    """
    give a generated function a readable name.

    rename(function, name) renames in place and returns the function;
    rename(name) returns a decorator doing the same.

    raises
    - TypeError: when the name is not a string.
    """
    if isinstance(x, str):
        return functools.partial(rename, name=x)
    if not isinstance(name, str):
        raise TypeError(f"rename() expects a string name, got {type(name).__name__}")
    x.__name__ = x.__qualname__ = name
    return x


def mirror(name):
    """
    read-only property exposing the private attribute '_<name>'.
    """

    @rename(name)
    def getter(self):
        return getattr(self, "_" + name)

    return property(getter)


__all__ = (
    "UnsetType",
    "Unset",
    "nullify",
    "rename",
    "mirror",
)
