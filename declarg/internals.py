"""
Internal plumbing between declaration specs and result records.

A spec never owns the record it writes into: it only knows the attribute name
it was assigned to. The accessor pair built here is the whole relation. It is
built once per attribute name and shared by every spec (and every record type)
bound to that name.

Records keep parsed values in their instance __dict__, so record classes must
not declare __slots__.
"""
import functools
import typing

from .utils import rename


@functools.cache
def accessors(name, /):
    """
    build and cache the (getter, setter, deleter) triple for attribute `name`.

    - getter(record, default) → the stored value, or `default` when the field
      was never written.
    - setter(record, value) → store `value` for the field.
    - deleter(record) → forget the stored value (the field reads its default again).

    the functions go straight to the instance storage, so they can back the
    data descriptor that owns `name` without recursing into it.
    """

    @rename("get_" + name)
    def getter(record, default, /):
        return vars(record).get(name, default)

    @rename("set_" + name)
    def setter(record, value, /):
        vars(record)[name] = value

    @rename("del_" + name)
    def deleter(record, /):
        vars(record).pop(name, None)

    return getter, setter, deleter


@functools.cache
def annotations(owner, /):
    """
    resolved type hints of a record class (postponed annotations included).

    raises
    - TypeError: when an annotation cannot be evaluated.
    """
    try:
        return typing.get_type_hints(owner)
    except NameError as error:
        raise TypeError(f"cannot resolve annotations of {owner.__qualname__!r}: {error}") from error
