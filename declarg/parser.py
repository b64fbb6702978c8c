"""
The parser: one record type, one token sequence, one pass.

What this module provides
- ArgParser: binds a record class to a raw token sequence (argv-like, element 0
  is the program invocation), default-initializes one record, and fills it in a
  single left-to-right scan with parse().

Quick start
    from declarg import ArgParser, ArgSpan, Cardinal, Option, Variadic

    class Run:
        '''Run a command in a sandbox.'''
        verbose: bool = Option("-v", "--verbose", descr="Enable verbose output")
        jobs: int = Option("-j", "--jobs", descr="Parallel jobs")
        command: str = Cardinal(descr="Command to run")
        args: ArgSpan = Variadic("Arguments passed to the command")

    parser = ArgParser(Run)          # argv defaults to sys.argv
    if not (result := parser.parse()):
        result.print()
        parser.print_help()
    run = parser.result

Token grammar
- '--' ends scanning; every later token goes to the variadic sink verbatim.
- '-x', '--long', '-x=value', '--long=value', '-x value', '--long value'.
  Bare names are only valid for boolean fields and always set True.
- anything else is positional; when every positional slot is filled, the token
  and all remaining ones go to the variadic sink (or fail with TOO_MANY_ARGS).

Failure model
- fail-fast: the first error ends the parse and is returned as a ParseResult.
- no rollback: fields written before the failure keep their values.
"""
import os.path
import sys
from collections.abc import Sequence

from .declarations import declarations
from .faults import ParseError, ParseResult
from .helper import print_help, render
from .span import ArgSpan
from .utils import *


def _program_name(argv, /):
    if not argv:
        return ""
    invocation = argv[0]
    # "/" always separates, plus the native separator
    return invocation[max(invocation.rfind("/"), invocation.rfind(os.path.sep)) + 1:]


class ArgParser[_R]:
    """
    single-use parser binding a record class to a token sequence.

    lifecycle
    - construction resolves the record's declarations (cached per class),
      default-initializes one record and derives the program name.
    - parse() scans once; it is meant to run at most once per instance.
    - result stays readable and writable after parsing, whatever the outcome.

    the token sequence is borrowed, never copied: the variadic sink receives an
    ArgSpan over it, so the sequence must outlive the record.
    """

    def __init__(self, record, argv=Unset, /):
        if argv is Unset:
            argv = sys.argv
        if isinstance(argv, str) or not isinstance(argv, Sequence):
            raise TypeError("ArgParser() argument must be a sequence of strings")
        self._declarations = declarations(record)
        self._argv = argv
        self._result = record()
        self._program_name = _program_name(argv)
        self._index = 1
        self._filled = 0

    @property
    def declarations(self):
        return self._declarations

    @property
    def result(self):
        return self._result

    @property
    def program_name(self):
        return self._program_name

    def parse(self):
        """
        scan every token after the program invocation and fill the record.

        returns
        - ParseResult: success, or the first failure with its context token.
        """
        argv = self._argv
        start = Unset

        self._index = 1
        self._filled = 0

        while self._index < len(argv):
            token = argv[self._index]

            if token == "--":
                if self._index + 1 < len(argv):
                    start = self._index + 1
                break

            if token.startswith("-"):
                result = self._parse_option(token)
            elif self._filled < self._declarations.cardinal_count:
                result = self._parse_cardinal(token)
            elif self._declarations.has_variadic:
                # overflow: this token and everything after it is leftover input
                start = self._index
                break
            else:
                return ParseResult.failure(ParseError.TOO_MANY_ARGS, token)

            if not result:
                return result
            self._index += 1

        if start is not Unset and (variadic := self._declarations.variadic) is not None:
            variadic.write(self._result, ArgSpan(argv, start))

        return self._check_required()

    def _parse_option(self, token):
        """
        resolve one dash-prefixed token (plus its spaced value, if it takes one).

        - the name is everything before the first '='; the rest is the inline value.
        - boolean fields: inline value coerced as bool, bare name sets True.
        - other fields: inline value, else the next token whatever it looks like.
        """
        name, equal, inline = token.partition("=")

        if (option := self._declarations.find(name)) is None:
            return ParseResult.failure(ParseError.UNKNOWN_OPTION, name)

        if not option.needs_value:
            if not equal:
                option.write(self._result, True)
                return ParseResult.success()
            value = inline
        elif equal:
            value = inline
        elif self._index + 1 < len(self._argv):
            self._index += 1
            value = self._argv[self._index]
        else:
            return ParseResult.failure(ParseError.MISSING_VALUE, name)

        if (value := option.kind.coerce(value)) is Unset:
            return ParseResult.failure(ParseError.INVALID_VALUE, token)
        option.write(self._result, value)
        return ParseResult.success()

    def _parse_cardinal(self, token):
        cardinal = self._declarations.cardinals[self._filled]
        if (value := cardinal.kind.coerce(token)) is Unset:
            return ParseResult.failure(ParseError.INVALID_VALUE, token)
        cardinal.write(self._result, value)
        self._filled += 1
        return ParseResult.success()

    def _check_required(self):
        for index, cardinal in enumerate(self._declarations.cardinals):
            if not cardinal.optional and index >= self._filled:
                return ParseResult.failure(ParseError.MISSING_REQUIRED_ARG, cardinal.name)
        return ParseResult.success()

    def help(self, *, colorful=True):
        """
        the help text as rich Text (see declarg.helper.render).
        """
        return render(self._declarations, self._program_name, colorful=colorful)

    def print_help(self, console=Unset, *, colorful=True):
        """
        print the help text to stdout (or to `console`).
        """
        print_help(self._declarations, self._program_name, console, colorful=colorful)


__all__ = ("ArgParser",)
