"""
Parse outcomes, error taxonomy and rendering.

Scope
- ParseError: the closed set of runtime parse failures (plus NONE for success).
- ParseResult: the outcome of one parse, an error kind plus the offending token.
- ParseException family: the same taxonomy as exceptions, for callers that
  prefer raising over checking (ParseResult.raise_for_error()).
- DeclarationWarning: emitted through the warnings module when a record's
  declarations look malformed (they are still accepted).

Rendering
- ParseResult.render() builds "Error: <message>" or
  "Error: <message> '<context>'" as rich Text.
- ParseResult.print() writes it to stderr through the module console, looked up
  at call time so replacing declarg.faults.console redirects it. It never
  exits nor sets an exit code; mapping outcomes to exit codes is the caller's job.
- Palette entries can be overridden from the host program with a __styles__
  mapping in __main__ (keys: error-label, error-message, error-context).
"""
from collections import defaultdict
from enum import IntEnum
from typing import NamedTuple

from rich.console import Console
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


def _console():
    return console


class ParseError(IntEnum):
    """
    closed taxonomy of parse failures.

    - MISSING_VALUE: an option requiring a value found no inline or following token.
    - INVALID_VALUE: a token failed coercion for an option's or positional's type.
    - UNKNOWN_OPTION: a dash-prefixed token matched no declared option name.
    - MISSING_REQUIRED_ARG: a required positional was never filled.
    - TOO_MANY_ARGS: a positional token arrived with no free slot and no variadic sink.
    """
    NONE                 = 0
    MISSING_VALUE        = 1
    INVALID_VALUE        = 2
    UNKNOWN_OPTION       = 3
    MISSING_REQUIRED_ARG = 4
    TOO_MANY_ARGS        = 5

    @property
    def message(self):
        return _MESSAGES[self]


_MESSAGES = {
    ParseError.NONE: "Success",
    ParseError.MISSING_VALUE: "Missing value for option",
    ParseError.INVALID_VALUE: "Invalid value",
    ParseError.UNKNOWN_OPTION: "Unknown option",
    ParseError.MISSING_REQUIRED_ARG: "Missing required argument",
    ParseError.TOO_MANY_ARGS: "Too many arguments",
}


class ParseException(Exception):
    """
    base of the raising counterpart of ParseError.

    attributes
    - error: the ParseError kind.
    - context: the offending token ("" when none applies).
    """
    error = ParseError.NONE

    def __init__(self, context="", /):
        self.context = context
        super().__init__(str(ParseResult(self.error, context)))


class MissingValueError(ParseException):
    error = ParseError.MISSING_VALUE


class InvalidValueError(ParseException):
    error = ParseError.INVALID_VALUE


class UnknownOptionError(ParseException):
    error = ParseError.UNKNOWN_OPTION


class MissingRequiredArgError(ParseException):
    error = ParseError.MISSING_REQUIRED_ARG


class TooManyArgsError(ParseException):
    error = ParseError.TOO_MANY_ARGS


_EXCEPTIONS = {
    ParseError.MISSING_VALUE: MissingValueError,
    ParseError.INVALID_VALUE: InvalidValueError,
    ParseError.UNKNOWN_OPTION: UnknownOptionError,
    ParseError.MISSING_REQUIRED_ARG: MissingRequiredArgError,
    ParseError.TOO_MANY_ARGS: TooManyArgsError,
}


class DeclarationWarning(UserWarning):
    """
    a record declares something the parser accepts but probably should not see
    (duplicate option names, required positional after an optional one, several
    variadic sinks).
    """


class ParseResult(NamedTuple):
    """
    outcome of one parse: success, or one error kind plus its context token.

    truthiness follows success, so `if not parser.parse(): ...` reads naturally.
    """
    error: ParseError = ParseError.NONE
    context: str = ""

    @classmethod
    def success(cls):
        return cls()

    @classmethod
    def failure(cls, error, context="", /):
        if not isinstance(error, ParseError) or error is ParseError.NONE:
            raise TypeError("failure() requires a ParseError other than NONE")
        return cls(error, context)

    @property
    def ok(self):
        return self.error == ParseError.NONE

    def __bool__(self):
        return self.ok

    @property
    def message(self):
        return self.error.message

    def __str__(self):
        if self.context:
            return f"{self.message} '{self.context}'"
        return self.message

    def exception(self):
        """
        the ParseException matching this outcome, or None on success.
        """
        if self.ok:
            return None
        return _EXCEPTIONS[self.error](self.context)

    def raise_for_error(self):
        """
        raise the matching ParseException when this outcome is a failure.
        """
        if (exception := self.exception()) is not None:
            raise exception

    def render(self, *, colorful=True):
        """
        the error line as rich Text (empty on success).
        """
        if self.ok:
            return Text("")

        styles = defaultdict(str, {
            "error-label": "bold red",
            "error-message": "",
            "error-context": "bold",
        } | getattr(__import__("__main__"), "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        text = Text.assemble(("Error:", styler("error-label")), " ", (self.message, styler("error-message")))
        if self.context:
            text.append(" ").append(f"'{self.context}'", styler("error-context"))
        return text

    def __rich__(self):
        return self.render()

    def print(self, console=Unset, *, colorful=True):
        """
        write the error line to stderr (or to `console`); no-op on success.
        """
        if self.ok:
            return
        console = _console() if console is Unset else console
        console.print(self.render(colorful=colorful), highlight=False, soft_wrap=True)


__all__ = (
    "ParseError",
    "ParseResult",
    "ParseException",
    "MissingValueError",
    "InvalidValueError",
    "UnknownOptionError",
    "MissingRequiredArgError",
    "TooManyArgsError",
    "DeclarationWarning",
)
