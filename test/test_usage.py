"""
Usage rendering tests.

Scope
- Validate the plain usage layout: banner, then one aligned line per option.
- Validate placeholders and annotations for each kind of option.
- Validate printing through rich and the __styles__ palette hook.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase

from optline import CommandLine
from optline.usage import render


class TestUsageLayout(TestCase):
    """Plain text layout of the usage output."""

    def setUp(self) -> None:
        self.commandline = CommandLine([
            ":help,h|display this help and exit",
            ":max-count,m=int|stop after NUM matches",
            "*:include,I=string|include path",
            ":mode?string,fast|scan mode",
        ], banner="usage: grep [OPTIONS] PATTERN [FILE...]")

    def testFullLayout(self):
        self.assertEqual(self.commandline.format_usage(), "\n".join([
            "usage: grep [OPTIONS] PATTERN [FILE...]",
            "  -h, --help" + " " * 14 + "display this help and exit",
            "  -m, --max-count=<int>" + " " * 3 + "stop after NUM matches",
            "  -I, --include=<string>" + " " * 2 + "include path (multiple)",
            "  --mode[=<string>]" + " " * 7 + "scan mode (default: fast)",
        ]))

    def testStrIsUsage(self):
        self.assertEqual(str(self.commandline), self.commandline.format_usage())

    def testDeclarationOrderIsKept(self):
        lines = self.commandline.format_usage().splitlines()
        self.assertIn("--help", lines[1])
        self.assertIn("--mode", lines[-1])

    def testUsagePrintsToFile(self):
        stream = io.StringIO()
        self.commandline.usage(stream)
        self.assertEqual(stream.getvalue(), self.commandline.format_usage() + "\n")


class TestUsageLines(TestCase):
    """Placeholders and annotations."""

    def testOptionWithoutHelpHasNoTrailingSpaces(self):
        self.assertEqual(CommandLine([":verbose"]).format_usage(), "  --verbose")

    def testRequiredAnnotation(self):
        self.assertEqual(
            CommandLine(["!:out=string|output file"]).format_usage(),
            "  --out=<string>  output file (required)"
        )

    def testAnnotationsWithoutHelp(self):
        self.assertEqual(
            CommandLine(["!*:jobs,j=int,4"]).format_usage(),
            "  -j, --jobs=<int>  (default: 4) (required) (multiple)"
        )

    def testBannerOnly(self):
        self.assertEqual(CommandLine([], banner="usage: prog").format_usage(), "usage: prog")

    def testEmpty(self):
        self.assertEqual(CommandLine([]).format_usage(), "")


class TestUsageStyles(TestCase):
    """Colors follow the palette and can be disabled."""

    def testColorlessRenderHasNoSpans(self):
        text = render(CommandLine([":verbose,v|be chatty"], banner="usage"), colorful=False)
        self.assertEqual(text.spans, [])

    def testColorfulRenderHasSpans(self):
        text = render(CommandLine([":verbose,v|be chatty"], banner="usage"))
        self.assertTrue(text.spans)

    def testPaletteOverrideFromMain(self):
        main = __import__("__main__")
        previous = getattr(main, "__styles__", None)
        main.__styles__ = {"flag-name": "bold red"}
        try:
            text = render(CommandLine([":verbose"]))
        finally:
            if previous is None:
                del main.__styles__
            else:
                main.__styles__ = previous
        self.assertIn("bold red", [str(span.style) for span in text.spans])


if __name__ == "__main__":
    unittest.main()
