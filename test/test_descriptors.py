"""
Descriptors module behavioral tests.

Scope
- Validate Descriptor construction from description lines and its read-only fields.
- Validate derived queries (has_argument, is_argument_optional, names, matches, check).
- Validate immutability, sealing, equality and representation.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from optline import ArgumentKind, Descriptor, OptionSyntaxError


class TestDescriptorFields(TestCase):
    """Fields mirror the compiled description line."""

    def testFieldsFromDescription(self):
        descriptor = Descriptor("*inc:include,I=string,/usr/include|include path")
        self.assertEqual(descriptor.source, "*inc:include,I=string,/usr/include|include path")
        self.assertEqual(descriptor.config_key, "inc")
        self.assertEqual(descriptor.long_name, "include")
        self.assertEqual(descriptor.short_name, "I")
        self.assertEqual(descriptor.help_text, "include path")
        self.assertEqual(descriptor.argument_kind, ArgumentKind.STRING | ArgumentKind.DEFAULT)
        self.assertTrue(descriptor.is_multiple)
        self.assertFalse(descriptor.is_required)
        self.assertEqual(descriptor.default_value, "/usr/include")

    def testConfigKeyDefaultsToLongName(self):
        self.assertEqual(Descriptor(":verbose,v").config_key, "verbose")

    def testPresenceOnlyQueries(self):
        descriptor = Descriptor(":verbose,v")
        self.assertFalse(descriptor.has_argument)
        self.assertFalse(descriptor.is_argument_optional)
        self.assertFalse(descriptor.has_default)
        self.assertIsNone(descriptor.typename)
        self.assertIsNone(descriptor.default_value)

    def testOptionalArgumentQueries(self):
        descriptor = Descriptor(":level?int,3")
        self.assertTrue(descriptor.has_argument)
        self.assertTrue(descriptor.is_argument_optional)
        self.assertTrue(descriptor.has_default)
        self.assertEqual(descriptor.typename, "int")

    def testMandatoryArgumentQueries(self):
        descriptor = Descriptor(":count,c=int")
        self.assertTrue(descriptor.has_argument)
        self.assertFalse(descriptor.is_argument_optional)
        self.assertFalse(descriptor.has_default)

    def testNames(self):
        self.assertEqual(Descriptor(":include,I=string").names, ("--include", "-I"))
        self.assertEqual(Descriptor(":include=string").names, ("--include",))

    def testMatches(self):
        descriptor = Descriptor(":include,I=string")
        self.assertTrue(descriptor.matches("include"))
        self.assertTrue(descriptor.matches("I"))
        self.assertFalse(descriptor.matches("i"))
        self.assertFalse(descriptor.matches("--include"))

    def testCheckDelegatesToDeclaredType(self):
        self.assertTrue(Descriptor(":count=int").check("-12"))
        self.assertFalse(Descriptor(":count=int").check("abc"))
        self.assertTrue(Descriptor(":flag=bool").check("TRUE"))
        self.assertTrue(Descriptor(":name=string").check("anything"))

    def testMalformedDescriptionRaises(self):
        with self.assertRaises(OptionSyntaxError):
            Descriptor(":x?int")


class TestDescriptorBehavior(TestCase):
    """Immutability, identity and representation."""

    def testSameLineGivesEqualDescriptors(self):
        first = Descriptor("!:out,o=string|output file")
        second = Descriptor("!:out,o=string|output file")
        self.assertIsNot(first, second)
        self.assertEqual(first, second)
        self.assertEqual(hash(first), hash(second))

    def testDifferentLinesAreNotEqual(self):
        self.assertNotEqual(Descriptor(":a"), Descriptor(":b"))
        self.assertNotEqual(Descriptor(":a"), ":a")

    def testDescriptorPassThrough(self):
        descriptor = Descriptor(":a")
        self.assertIs(Descriptor(descriptor), descriptor)

    def testFieldsAreReadOnly(self):
        descriptor = Descriptor(":a")
        with self.assertRaises(AttributeError):
            descriptor.long_name = "b"
        with self.assertRaises(AttributeError):
            descriptor._long_name = "b"
        with self.assertRaises(AttributeError):
            del descriptor._long_name
        self.assertEqual(descriptor.long_name, "a")

    def testSubclassingIsRejected(self):
        with self.assertRaises(TypeError):
            class Custom(Descriptor):  # NOQA: F-841
                pass

    def testRepr(self):
        text = repr(Descriptor(":count,c=int"))
        self.assertTrue(text.startswith("descriptor("))
        self.assertIn("long_name='count'", text)
        self.assertIn("short_name='c'", text)

    def testRichRepr(self):
        fields = dict(Descriptor(":count,c=int").__rich_repr__())
        self.assertEqual(fields["config_key"], "count")
        self.assertEqual(fields["argument_kind"], ArgumentKind.INTEGER)


if __name__ == "__main__":
    unittest.main()
