"""
Help/usage rendering over a record's declarations.

Layout
    <description>
    Usage: <prog> [OPTIONS] <required> [optional] [...]

    Arguments:
      <name>: <description>
      [...]: <description>

    Options:
      <altname>, <name> <value>: <description>

- the description line appears only when the record has one.
- [OPTIONS] appears iff at least one option is declared; [...] iff a variadic
  sink is declared.
- the Arguments block appears when positionals or a variadic sink exist; the
  Options block when options exist. Both list specs in declaration order.
- an option shows ' <value>' when it needs a value, and ': <description>' only
  when it has one (same rule for arguments).

Palette keys
- usage-label, section-label, program-name, description-section
- argument-name, option-name, metavar, argument-description

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- Define __prog__ in __main__ to override the program name shown in usage.
- colorful=False strips every style (plain text output).
"""
from collections import defaultdict

from rich.console import Console
from rich.text import Text

from .utils import *


def render(declarations, program, /, *, colorful=True):
    """
    build the help text of `declarations` for program name `program`.

    returns
    - rich.text.Text: pure formatting, no side effects.
    """
    main = __import__("__main__")
    styles = defaultdict(str, {
        "usage-label": "bold underline",
        "section-label": "bold underline",
        "program-name": "",
        "description-section": "",
        "argument-name": "bold",
        "option-name": "bold",
        "metavar": "",
        "argument-description": "",
    } | getattr(main, "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        return Text(str(fragment), styler(style))

    def described(line, descr):
        if descr:
            line.append(": ").append(text(descr, "argument-description"))
        return line

    help = Text()

    if declarations.description:
        help.append(text(declarations.description, "description-section")).append("\n")

    usage = Text.assemble(text("Usage:", "usage-label"), " ", text(getattr(main, "__prog__", program), "program-name"))
    if declarations.option_count:
        usage.append(" [OPTIONS]")
    for cardinal in declarations.cardinals:
        usage.append(f" [{cardinal.name}]" if cardinal.optional else f" <{cardinal.name}>")
    if declarations.has_variadic:
        usage.append(" [...]")
    help.append(usage).append("\n")

    if declarations.cardinal_count or declarations.has_variadic:
        help.append("\n").append(text("Arguments:", "section-label")).append("\n")
        for cardinal in declarations.cardinals:
            line = Text.assemble("  ", text(cardinal.name, "argument-name"))
            help.append(described(line, cardinal.descr)).append("\n")
        if variadic := declarations.variadic:
            line = Text.assemble("  ", text("[...]", "argument-name"))
            help.append(described(line, variadic.descr)).append("\n")

    if declarations.option_count:
        help.append("\n").append(text("Options:", "section-label")).append("\n")
        for option in declarations.options:
            line = Text("  ")
            if option.altname is not None:
                line.append(text(f"{option.altname}, {option.name}", "option-name"))
            else:
                line.append(text(option.name, "option-name"))
            if option.needs_value:
                line.append(" ").append(text("<value>", "metavar"))
            help.append(described(line, option.descr)).append("\n")

    help.rstrip()
    return help


def print_help(declarations, program, /, console=Unset, *, colorful=True):
    """
    print the help text of `declarations` to stdout (or to `console`).
    """
    console = Console() if console is Unset else console
    console.print(render(declarations, program, colorful=colorful), highlight=False, soft_wrap=True)


__all__ = (
    "render",
    "print_help",
)
