# python
"""
Help renderer behavioral tests.

Scope
- usage line markers ([OPTIONS], <required>, [optional], [...]).
- Arguments and Options blocks: order, value placeholders, descriptions.
- description line, styling toggles and __main__ overrides.

Conventions
- Test method names follow CamelCase per project convention.
- Layout is asserted on plain text (colorful=False) unless styles are the subject.
"""

import io
import unittest
from unittest import TestCase, mock

from rich.console import Console

from declarg import ArgParser, ArgSpan, Cardinal, Option, Variadic, declarations
from declarg.helper import print_help, render


class Runner:
    """Run a command in a sandbox."""
    verbose: bool = Option("-v", "--verbose", descr="Enable verbose output")
    jobs: int = Option("-j", descr="Parallel jobs")
    config: str = Option("--config")
    command: str = Cardinal(descr="Command to run")
    workdir: str | None = Cardinal("DIR", descr="Working directory")
    args: ArgSpan = Variadic("Arguments passed to the command")


class Bare:
    name: str = Cardinal()


class TestRender(TestCase):

    def testFullLayout(self):
        text = render(declarations(Runner), "runner", colorful=False)
        self.assertEqual(
            text.plain,
            "Run a command in a sandbox.\n"
            "Usage: runner [OPTIONS] <command> [DIR] [...]\n"
            "\n"
            "Arguments:\n"
            "  command: Command to run\n"
            "  DIR: Working directory\n"
            "  [...]: Arguments passed to the command\n"
            "\n"
            "Options:\n"
            "  --verbose, -v: Enable verbose output\n"
            "  -j <value>: Parallel jobs\n"
            "  --config <value>",
        )

    def testMinimalLayout(self):
        text = render(declarations(Bare), "bare", colorful=False)
        self.assertEqual(
            text.plain,
            "Usage: bare <name>\n"
            "\n"
            "Arguments:\n"
            "  name",
        )

    def testEmptyRecord(self):
        class Record:
            pass

        text = render(declarations(Record), "empty", colorful=False)
        self.assertEqual(text.plain, "Usage: empty")

    def testVariadicOnly(self):
        class Record:
            rest: ArgSpan = Variadic()

        text = render(declarations(Record), "tool", colorful=False)
        self.assertEqual(
            text.plain,
            "Usage: tool [...]\n"
            "\n"
            "Arguments:\n"
            "  [...]",
        )

    def testOptionalValueOptionNeedsValue(self):
        class Record:
            limit: int | None = Option("-n", "--limit")
            quiet: bool | None = Option("-q")

        text = render(declarations(Record), "tool", colorful=False)
        self.assertIn("  --limit, -n <value>\n", text.plain)
        self.assertTrue(text.plain.endswith("  -q"))

    def testColorfulCarriesStyles(self):
        text = render(declarations(Runner), "runner")
        self.assertEqual(text.plain, render(declarations(Runner), "runner", colorful=False).plain)
        self.assertTrue([span for span in text.spans if span.style])

    def testPlainHasNoStyles(self):
        text = render(declarations(Runner), "runner", colorful=False)
        self.assertFalse([span for span in text.spans if span.style])

    def testProgOverride(self):
        main = __import__("__main__")
        with mock.patch.object(main, "__prog__", "override", create=True):
            text = render(declarations(Bare), "bare", colorful=False)
        self.assertTrue(text.plain.startswith("Usage: override <name>"))

    def testStylesOverride(self):
        main = __import__("__main__")
        with mock.patch.object(main, "__styles__", {"usage-label": "italic"}, create=True):
            text = render(declarations(Bare), "bare")
        styles = {str(span.style) for span in text.spans}
        self.assertIn("italic", styles)


class TestPrintHelp(TestCase):

    def testPrintToConsole(self):
        console = Console(file=io.StringIO(), force_terminal=False, color_system=None, width=120)
        print_help(declarations(Bare), "bare", console, colorful=False)
        self.assertEqual(
            console.file.getvalue(),
            "Usage: bare <name>\n\nArguments:\n  name\n",
        )

    def testParserHelpUsesProgramName(self):
        parser = ArgParser(Runner, ["/opt/tools/runner", "--bogus"])
        self.assertTrue(parser.help(colorful=False).plain.startswith(
            "Run a command in a sandbox.\nUsage: runner [OPTIONS]"
        ))


if __name__ == "__main__":
    unittest.main()
