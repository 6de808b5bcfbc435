"""
Validators module behavioral tests.

Scope
- Validate integer/boolean/string predicates on raw argv strings.
- Validate check() dispatch on grammar type tokens.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from optline.validators import boolean, check, integer, string


class TestValidators(TestCase):
    """Pure predicates over raw argument strings."""

    def testIntegerAcceptsSignedDecimal(self):
        for value in ("0", "42", "-7", "+3", "007"):
            self.assertTrue(integer(value), value)

    def testIntegerRejectsExtraneousCharacters(self):
        for value in ("", "abc", "4 2", " 1", "1 ", "1.0", "0x10", "--1", "١٢"):
            self.assertFalse(integer(value), value)

    def testBooleanIsCaseInsensitive(self):
        for value in ("0", "1", "true", "false", "TRUE", "False"):
            self.assertTrue(boolean(value), value)

    def testBooleanRejectsOtherWords(self):
        for value in ("", "yes", "no", "2", "t", "truth"):
            self.assertFalse(boolean(value), value)

    def testStringAcceptsAnything(self):
        for value in ("", "anything", "--looks-like-an-option"):
            self.assertTrue(string(value), value)


class TestCheck(TestCase):
    """check() dispatches on the grammar type token."""

    def testDispatch(self):
        self.assertTrue(check("12", "int"))
        self.assertFalse(check("twelve", "int"))
        self.assertTrue(check("true", "bool"))
        self.assertFalse(check("yes", "bool"))
        self.assertTrue(check("yes", "string"))

    def testMissingTypeConforms(self):
        self.assertTrue(check("whatever"))

    def testUnknownTypeRejected(self):
        with self.assertRaises(ValueError):
            check("1.5", "float")

    def testNonStringValueRejected(self):
        with self.assertRaises(TypeError):
            check(12, "int")


if __name__ == "__main__":
    unittest.main()
