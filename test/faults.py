"""
Fault layer tests (codes, rendering, trigger).

Scope
- FaultCode normalization with and without a host __codes__ mapping.
- Rich rendering of parse faults (plain and fancy), host __styles__/__docs__ hooks.
- trigger(): option merging, raising, shell-mode rendering on stderr.
"""
import io
import sys
import unittest
from contextlib import redirect_stderr
from unittest import TestCase
from unittest.mock import patch

from rich.console import Console

from argvscan import (
    FaultCode,
    Kind,
    NotRegisteredError,
    ParseException,
    Parser,
    PositionalIndexError,
    TooManyPositionalsError,
    UnknownOptionError,
    getdoc,
    trigger,
)


def render(renderable):
    console = Console(file=io.StringIO(), width=120, color_system=None)
    console.print(renderable)
    return console.file.getvalue()


class TestFaultCode(TestCase):

    def testCodesAreStable(self):
        self.assertEqual(FaultCode.UNKNOWN_SWITCH, 11112)
        self.assertEqual(FaultCode.TOO_MANY_POSITIONALS, 11121)
        self.assertEqual(FaultCode.NOT_REGISTERED, 11131)

    def testNormalizeDefaultsToNumber(self):
        self.assertEqual(FaultCode.UNCASTABLE_VALUE.normalize(), "11119")

    def testNormalizeHonorsHostCodes(self):
        with patch.object(sys.modules["__main__"], "__codes__", {FaultCode.UNKNOWN_SWITCH: "E-UNK"}, create=True):
            self.assertEqual(FaultCode.UNKNOWN_SWITCH.normalize(), "E-UNK")
            self.assertEqual(FaultCode.FLAG_ASSIGNMENT.normalize(), "11113")

    def testClassCodes(self):
        self.assertIs(UnknownOptionError.code, FaultCode.UNKNOWN_SWITCH)
        self.assertIs(NotRegisteredError.code, FaultCode.NOT_REGISTERED)
        self.assertIs(PositionalIndexError.code, FaultCode.POSITIONAL_INDEX)


class TestGetdoc(TestCase):

    def testMissingDocs(self):
        self.assertIsNone(getdoc(FaultCode.UNKNOWN_SWITCH))

    def testHostDocs(self):
        docs = {FaultCode.UNKNOWN_SWITCH: "see the manual"}
        with patch.object(sys.modules["__main__"], "__docs__", docs, create=True):
            self.assertEqual(getdoc(FaultCode.UNKNOWN_SWITCH), "see the manual")

    def testRejectsNonCodes(self):
        with self.assertRaises(TypeError):
            getdoc(11112)


class TestRendering(TestCase):

    def setUp(self):
        self.fault = UnknownOptionError(
            "unknown option '--nope'",
            prog="tool",
            code=FaultCode.UNKNOWN_SWITCH,
            title="unknown option",
            hint="check the spelling",
        )

    def testPlainRendering(self):
        output = render(self.fault)
        self.assertIn("[ tool — 11112 | Unknown Option ]", output)
        self.assertIn("unknown option '--nope'", output)
        self.assertIn(" → check the spelling", output)

    def testFancyRendering(self):
        output = render(self.fault.__replace__(fancy=True))
        self.assertIn("tool — 11112 | Unknown Option", output)
        self.assertIn("╭", output)

    def testColorlessTextHasNoStyle(self):
        group = self.fault.__replace__(colorful=False).__rich__()
        self.assertTrue(all(not renderable.style for renderable in group.renderables))

    def testDocsLineRendered(self):
        output = render(self.fault.__replace__(docs="see the manual"))
        self.assertIn("see the manual", output)

    def testHostStylesOverride(self):
        with patch.object(sys.modules["__main__"], "__styles__", {"error-message": "bold"}, create=True):
            group = self.fault.__rich__()
        self.assertEqual(str(group.renderables[1].style), "bold")

    def testStrIncludesProg(self):
        self.assertEqual(str(self.fault), "tool: unknown option '--nope'")
        self.assertEqual(str(ParseException("bare")), "bare")


class TestTrigger(TestCase):

    def testTriggerRaisesMergedFault(self):
        with self.assertRaises(TooManyPositionalsError) as context:
            trigger(TooManyPositionalsError("too many", index=3), prog="tool", shell=False)
        self.assertEqual(context.exception.options["index"], 3)
        self.assertEqual(context.exception.options["prog"], "tool")

    def testTriggerRequiresProtocol(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("plain"))

    def testReplaceKeepsType(self):
        fault = UnknownOptionError("x", input="-x")
        replaced = fault.__replace__(index=4)
        self.assertIsInstance(replaced, UnknownOptionError)
        self.assertEqual(dict(replaced.options), {"input": "-x", "index": 4})
        self.assertEqual(dict(fault.options), {"input": "-x"})

    def testReplaceRejectsPositionals(self):
        with self.assertRaises(AssertionError):
            UnknownOptionError("x").__replace__("y")

    def testShellModeRendersOnStderr(self):
        parser = Parser("tool", shell=True, colorful=False)
        parser.add_option("n", "count", Kind.INTEGER)
        stderr = io.StringIO()
        with redirect_stderr(stderr), self.assertRaises(UnknownOptionError):
            parser.parse(["tool", "--nope"])
        output = stderr.getvalue()
        self.assertIn("tool", output)
        self.assertIn("unknown option '--nope'", output)

    def testQuietModeRendersNothing(self):
        parser = Parser("tool", shell=False)
        stderr = io.StringIO()
        with redirect_stderr(stderr), self.assertRaises(UnknownOptionError):
            parser.parse(["tool", "-q"])
        self.assertEqual(stderr.getvalue(), "")

    def testQueryErrorsAreNotRendered(self):
        parser = Parser("tool", shell=True)
        stderr = io.StringIO()
        with redirect_stderr(stderr), self.assertRaises(NotRegisteredError):
            parser.bool_result("q")
        self.assertEqual(stderr.getvalue(), "")


if __name__ == "__main__":
    unittest.main()
