"""
Utils module behavioral tests (Unset sentinel, coalesce, rename, mirror).

Scope
- Validate the Unset singleton: falsey, printable, non-subclassable, union-friendly.
- Validate coalesce() keeps legitimate falsey values.
- Validate rename() in its direct and decorator forms.
- Validate mirror() exposes read-only copies of container state.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from parley.utils import Unset, UnsetType, coalesce, rename, mirror


class TestUnset(TestCase):
    """Behavioral tests for the Unset sentinel."""

    def testUnsetIsFalsey(self):
        self.assertFalse(Unset)

    def testUnsetRepr(self):
        self.assertEqual(repr(Unset), "Unset")

    def testUnsetIsSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testUnsetCannotBeSubclassed(self):
        with self.assertRaises(TypeError):
            class Subclass(UnsetType):  # NOQA: F-841
                pass

    def testUnsetSupportsUnions(self):
        """str | Unset can be used directly in isinstance checks."""
        self.assertTrue(isinstance("text", str | Unset))
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertFalse(isinstance(1, str | Unset))


class TestCoalesce(TestCase):
    """Behavioral tests for coalesce()."""

    def testCoalesceReplacesUnset(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")

    def testCoalescePreservesFalseyValues(self):
        for value in (None, 0, "", []):
            with self.subTest(value=value):
                self.assertIs(coalesce(value, "fallback"), value)

    def testCoalesceDefaultsToNone(self):
        self.assertIsNone(coalesce(Unset))


class TestRename(TestCase):
    """Behavioral tests for rename()."""

    def testRenameDirectForm(self):
        def helper():
            pass

        self.assertIs(rename(helper, "renamed"), helper)
        self.assertEqual(helper.__name__, "renamed")
        self.assertEqual(helper.__qualname__, "renamed")

    def testRenameDecoratorForm(self):
        @rename("decorated")
        def helper():
            pass

        self.assertEqual(helper.__name__, "decorated")

    def testRenameRejectsNonCallable(self):
        with self.assertRaises(TypeError):
            rename(1, "name")

    def testRenameRejectsNonStringName(self):
        with self.assertRaises(TypeError):
            rename(lambda: None, 1)

    def testRenameRejectsBuiltins(self):
        with self.assertRaises(TypeError):
            rename(len, "length")

    def testRenameRejectsWrongArity(self):
        with self.assertRaises(TypeError):
            rename()


class TestMirror(TestCase):
    """Behavioral tests for mirror()."""

    class Holder:
        items = mirror("items")
        table = mirror("table")
        pair = mirror("pair")

        def __init__(self):
            self._items = ["a", "b"]
            self._table = {"key": ["value"]}
            self._pair = ("left", "right")

    def testMirrorReturnsCopies(self):
        holder = self.Holder()
        holder.items.append("c")
        holder.table["key"].append("other")
        self.assertEqual(holder.items, ["a", "b"])
        self.assertEqual(holder.table, {"key": ["value"]})

    def testMirrorKeepsTuples(self):
        holder = self.Holder()
        self.assertIs(holder.pair, holder._pair)

    def testMirrorIsReadOnly(self):
        with self.assertRaises(AttributeError):
            self.Holder().items = []

    def testMirrorRejectsNonStringName(self):
        with self.assertRaises(TypeError):
            mirror(1)


if __name__ == "__main__":
    unittest.main()
