import sys

from rich.pretty import pprint

from declarg import *


class Copy:
    """Copy a file, optionally passing extra arguments to the backend."""
    verbose: bool = Option("-v", "--verbose", descr="Enable verbose output")
    retries: int = Option("-r", "--retries", descr="Number of retries", default=3)
    ratio: float | None = Option("--ratio", descr="Compression ratio")
    source: str = Cardinal("SOURCE", descr="File to copy")
    destination: str | None = Cardinal("DEST", descr="Target path")
    extra: ArgSpan = Variadic("Arguments passed to the backend")


if __name__ == '__main__':
    parser = ArgParser(Copy)
    if not (result := parser.parse()):
        result.print()
        parser.print_help()
        sys.exit(1)
    pprint({argument.field: argument.read(parser.result) for argument in parser.declarations})
