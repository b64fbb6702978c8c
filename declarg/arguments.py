r"""
Declaration specs and their binding to result-record fields.

Overview
- Specs
  • Option: named argument with a primary name and an optional alternate name
    (e.g., -c/--count). Boolean fields make it a flag; any other field needs a value.
  • Cardinal: positional argument, filled strictly in declaration order. It is
    optional when its field is declared as 'T | None'.
  • Variadic: the trailing sink holding an ArgSpan over the leftover tokens.

- Records
  A record is any plain class whose body assigns specs to annotated attributes:

    >>> class Settings:
    ...     verbose: bool = Option("-v", "--verbose", descr="Enable verbose output")
    ...     count: int = Option("-c", "--count", descr="Set count")
    ...     name: str = Cardinal(descr="The name to use")

  Each spec is a data descriptor. On the class it returns itself (for
  introspection); on an instance it reads/writes that instance's value through
  the cached accessor pair (see internals.accessors). A default-initialized
  record (Settings()) reads the explicit `default` of each spec, or the zero value
  of its type (False, 0, 0.0, "", None for optional fields, an empty ArgSpan).

Metadata (sanitized on construction)
- descr: Unset | str (short help), non-empty when provided.
- default: any value; when Unset the field type decides.
- type: Unset | annotation, overrides the field annotation when provided.
- Option names: non-empty strings starting with '-' and containing no '='
  (a name with '=' could never match a token, which is split at the first '=').

Field type resolution
- happens lazily, once, on first use of `kind` (declarations() forces it for a
  whole record, so malformed records fail before the first parse).
- unsupported types raise TypeError: this is a declaration error, never a parse error.

Public API
- Classes: Option, Cardinal, Variadic
"""
import re

from .coercion import FieldType, convertible, resolve
from .internals import accessors, annotations
from .span import ArgSpan
from .utils import *


class ArgumentType(type):
    """
    Metaclass that turns specs into introspectable descriptors.

    Responsibilities
    - Derive __typename__ from the class name ("Option" → "option") for messages.
    - Expose every name listed in __introspectable__ as a read-only property
      backed by the private '_<name>' field (see utils.mirror).
    - Provide stable __repr__/__rich_repr__ implementations for diagnostics.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Render the spec with its introspectable fields.

            Example
            - option(name='-v', altname='--verbose', field='verbose', descr=None)
            """
            fields = ", ".join(f"{name}={value!r}" for name, value in self.__rich_repr__())
            return f"{type(self).__typename__}({fields})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate the metadata shared by every spec.

    - descr: Unset becomes None; a string must be non-empty after trimming.
    - type: Unset or anything usable as an annotation (checked on resolution).

    Raises
    - TypeError: when 'descr' is not a string (explicit None included).
    - ValueError: when 'descr' is empty after trimming.
    """
    if not isinstance(descr := metadata["descr"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = nullify(descr)


def _sanitize_named_metadata(cls, metadata, /):
    """
    Internal: validate the names of an Option.

    - name: required, non-empty, starts with '-', no '='.
    - altname: Unset (becomes None) or the same rules as name.
    Both names being equal is tolerated: first-match lookup makes it harmless.
    """
    for key in ("name", "altname"):
        if (name := metadata[key]) is Unset:
            metadata[key] = None
            continue
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} {key} must be a string")
        elif not (name := name.strip()):
            raise ValueError(f"{cls.__typename__} {key} cannot be blank")
        elif not name.startswith("-"):
            raise ValueError(f"{cls.__typename__} name {name!r} must start with '-'")
        elif "=" in name:
            raise ValueError(f"{cls.__typename__} name {name!r} cannot contain '='")
        metadata[key] = name


class Argument(metaclass=ArgumentType):
    """
    Base of every spec: owns the binding to one attribute of one record class.

    Binding
    - __set_name__ records the owner class and attribute name and fetches the
      cached accessor pair for that name.
    - a spec binds exactly once; assigning the same spec object to a second
      attribute (or class) raises TypeError.

    Access
    - read(record) / write(record, value) / reset(record) go through the accessor
      pair; the descriptor protocol (__get__/__set__/__delete__) delegates to them.
    """

    def __new__(cls, metadata, /):
        _sanitize_metadata(cls, metadata)
        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        self._owner = None
        self._field = None
        self._kind = Unset
        self._accessors = Unset
        return self

    def __set_name__(self, owner, name, /):
        if self._owner is not None:
            raise TypeError(
                f"{type(self).__typename__} is already bound to "
                f"{self._owner.__qualname__}.{self._field} and cannot be reused for {owner.__qualname__}.{name}"
            )
        self._owner = owner
        self._field = name
        self._accessors = accessors(name)

    @property
    def owner(self):
        """
        the record class this spec was declared in (None while unbound).
        """
        return self._owner

    @property
    def kind(self):
        """
        the resolved FieldType of the bound field.

        raises
        - TypeError: when the spec is unbound, the field has no annotation and no
          explicit type, or the type is not supported by this kind of spec.
        """
        if self._kind is Unset:
            if self._owner is None:
                raise TypeError(f"{type(self).__typename__} is not bound to a record field")
            if (annotation := self._type) is Unset:
                try:
                    annotation = annotations(self._owner)[self._field]
                except KeyError:
                    raise TypeError(
                        f"field {self._owner.__qualname__}.{self._field} must be annotated or declare 'type'"
                    ) from None
            self._kind = self._validate(resolve(annotation))
        return self._kind

    @property
    def default(self):
        """
        value read back from a record whose field was never written.
        """
        return self.kind.zero if self._default is Unset else self._default

    def _validate(self, kind, /):
        if kind.inner is ArgSpan or not convertible(kind.inner):
            raise TypeError(
                f"{type(self).__typename__} field {self._owner.__qualname__}.{self._field} "
                f"has unsupported type {kind.inner!r}"
            )
        return kind

    def read(self, record, /):
        getter, _, _ = self._accessors
        return getter(record, self.default)

    def write(self, record, value, /):
        _, setter, _ = self._accessors
        setter(record, value)

    def reset(self, record, /):
        _, _, deleter = self._accessors
        deleter(record)

    def __get__(self, record, owner=None, /):
        if record is None:
            return self
        return self.read(record)

    def __set__(self, record, value, /):
        self.write(record, value)

    def __delete__(self, record, /):
        self.reset(record)


class Option(Argument):
    """
    Named argument bound to one record field.

    Matching
    - matches(token) compares exactly against the primary name, then the
      alternate name. No prefix/abbreviation matching.

    Value
    - needs_value is False only when the field's inner type is bool (bare flag:
      its presence alone sets the field to True).
    """

    __introspectable__ = (
        "name",
        "altname",
        "field",
        "descr",
    )

    def __new__(cls, name, altname=Unset, /, *, descr=Unset, default=Unset, type=Unset):
        """
        Construct an Option spec.

        Parameters
        - name: str
          primary name, e.g. "-c" or "--count".
        - altname: Unset | str
          alternate name, e.g. "--count" when name is "-c".
        - descr: Unset | str
          short description for help output.
        - default: any
          value read from a default-initialized record; the field type's zero
          value when Unset.
        - type: Unset | annotation
          overrides the field annotation (e.g. type=int | None).
        """
        metadata = {
            "name": name,
            "altname": altname,
            "descr": descr,
            "default": default,
            "type": type,
        }
        _sanitize_named_metadata(cls, metadata)
        return super().__new__(cls, metadata)

    @property
    def names(self):
        """
        declared names in lookup order (primary first).
        """
        return tuple(name for name in (self._name, self._altname) if name is not None)

    @property
    def needs_value(self):
        return self.kind.inner is not bool

    def matches(self, token, /):
        return token == self._name or (self._altname is not None and token == self._altname)


class Cardinal(Argument):
    """
    Positional argument bound to one record field.

    - name: the label used in usage/help and in MISSING_REQUIRED_ARG context;
      defaults to the attribute name.
    - optional: True iff the field is declared as 'T | None'. Optional slots are
      never reported as missing.
    """

    __introspectable__ = (
        "name",
        "field",
        "descr",
    )

    def __new__(cls, name=Unset, /, *, descr=Unset, default=Unset, type=Unset):
        if not isinstance(name, str | Unset):
            raise TypeError(f"{cls.__typename__} name must be a string")
        elif isinstance(name, str) and not (name := name.strip()):
            raise ValueError(f"{cls.__typename__} name cannot be empty")
        return super().__new__(cls, {
            "name": name,
            "descr": descr,
            "default": default,
            "type": type,
        })

    def __set_name__(self, owner, name, /):
        super().__set_name__(owner, name)
        if self._name is Unset:
            self._name = name

    @property
    def optional(self):
        return self.kind.optional


class Variadic(Argument):
    """
    Trailing sink for leftover tokens, bound to an ArgSpan field.

    The parser assigns it a borrowed view over the token sequence (no copy),
    either everything after '--' or everything from the first positional token
    that found no declared slot.
    """

    __introspectable__ = (
        "field",
        "descr",
    )

    def __new__(cls, descr=Unset, /):
        return super().__new__(cls, {
            "descr": descr,
            "default": Unset,
            "type": Unset,
        })

    def _validate(self, kind, /):
        if kind != FieldType(ArgSpan, False):
            raise TypeError(
                f"{type(self).__typename__} field {self._owner.__qualname__}.{self._field} must be typed ArgSpan"
            )
        return kind


__all__ = (
    "Option",
    "Cardinal",
    "Variadic",
)

del ArgumentType
