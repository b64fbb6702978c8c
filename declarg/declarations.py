"""
Ordered declaration list of a record type.

declarations(Record) collects every spec of the record (base classes first,
then class-body order), resolves each field type once, and exposes the
per-category views the parser and the help renderer walk. The result is cached
per record type.

Well-formedness is not enforced. Duplicate option names, a required positional
declared after an optional one, and several variadic sinks are all accepted;
each emits a DeclarationWarning so the author notices. Parsing stays
deterministic in those cases: option lookup is first-match-wins, and the last
declared variadic sink receives the leftover tokens.
"""
import functools
import inspect
import warnings
from collections.abc import Sequence

from .arguments import Option, Cardinal, Variadic
from .faults import DeclarationWarning
from .utils import *


def _collect(record, /):
    seen = set()
    for owner in reversed(record.__mro__):
        for name, object in vars(owner).items():
            if isinstance(object, Option | Cardinal | Variadic) and object not in seen:
                seen.add(object)
                # a subclass may shadow a base spec with a plain attribute
                if getattr(record, name, None) is object:
                    yield object


def _describe(record, /):
    descr = getattr(record, "__description__", Unset)
    if descr is Unset:
        descr = vars(record).get("__doc__")
        descr = inspect.cleandoc(descr) if isinstance(descr, str) else None
    if descr is not None and not isinstance(descr, str):
        raise TypeError(f"{record.__qualname__}.__description__ must be a string")
    return descr or None


class Declarations(Sequence):
    """
    the fixed, ordered list of specs of one record type.

    sequence protocol
    - iterating / indexing walks every spec in declaration order.

    views
    - options, cardinals: per-category tuples, in declaration order.
    - variadic: the sink receiving leftover tokens (None when not declared).
    - option_count, cardinal_count, has_variadic, variadic_index.
    - description: the record's __description__, else its own docstring.
    """

    def __init__(self, record, /):
        if not isinstance(record, type):
            raise TypeError("declarations() argument must be a record class")
        self._record = record
        self._arguments = tuple(_collect(record))
        self._description = _describe(record)

        # resolve every field type now: malformed records fail here, not mid-parse
        for argument in self._arguments:
            argument.kind

        self._options = tuple(x for x in self._arguments if isinstance(x, Option))
        self._cardinals = tuple(x for x in self._arguments if isinstance(x, Cardinal))
        variadics = [index for index, x in enumerate(self._arguments) if isinstance(x, Variadic)]
        self._variadic_index = variadics[-1] if variadics else None

        self._inspect(variadics)

    def _inspect(self, variadics, /):
        qualname = self._record.__qualname__
        names = {}
        for option in self._options:
            for name in option.names:
                if name in names and names[name] is not option:
                    warnings.warn(DeclarationWarning(
                        f"{qualname}: option name {name!r} of field {option.field!r} is shadowed "
                        f"by field {names[name].field!r} (first declared wins)"
                    ), stacklevel=4)
                names.setdefault(name, option)

        optional = None
        for cardinal in self._cardinals:
            if cardinal.optional:
                optional = optional or cardinal
            elif optional is not None:
                warnings.warn(DeclarationWarning(
                    f"{qualname}: required positional {cardinal.name!r} is declared after "
                    f"optional positional {optional.name!r}"
                ), stacklevel=4)

        if len(variadics) > 1:
            warnings.warn(DeclarationWarning(
                f"{qualname}: {len(variadics)} variadic sinks declared, "
                f"only {self._arguments[variadics[-1]].field!r} receives leftover tokens"
            ), stacklevel=4)

    def __len__(self):
        return len(self._arguments)

    def __getitem__(self, index, /):
        return self._arguments[index]

    def __repr__(self):
        return f"declarations({self._record.__qualname__})"

    def __rich_repr__(self):
        yield from self._arguments

    @property
    def record(self):
        return self._record

    @property
    def description(self):
        return self._description

    @property
    def options(self):
        return self._options

    @property
    def cardinals(self):
        return self._cardinals

    @property
    def option_count(self):
        return len(self._options)

    @property
    def cardinal_count(self):
        return len(self._cardinals)

    @property
    def has_variadic(self):
        return self._variadic_index is not None

    @property
    def variadic_index(self):
        """
        position of the variadic sink in the full declaration list.

        raises
        - LookupError: when no variadic sink is declared.
        """
        if self._variadic_index is None:
            raise LookupError(f"{self._record.__qualname__} declares no variadic sink")
        return self._variadic_index

    @property
    def variadic(self):
        if self._variadic_index is None:
            return None
        return self._arguments[self._variadic_index]

    def find(self, name, /):
        """
        first declared option matching `name` exactly, or None.
        """
        for option in self._options:
            if option.matches(name):
                return option
        return None


@functools.cache
def declarations(record, /):
    """
    the cached Declarations of a record class.
    """
    return Declarations(record)


__all__ = (
    "Declarations",
    "declarations",
)
