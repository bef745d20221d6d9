"""
Definitions module behavioral tests (Definition normalization, definition store).

Scope
- Validate Definition construction: aliases, argument rules, flag mapping, data.
- Validate the content-must-be-last rule and its error message.
- Validate duplicated flags (last write wins, DuplicatedFlagWarning).
- Validate mapping descriptors through Definition.from_descriptor.
- Validate the Definitions multimap (append order, shared objects, distinct()).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from parley import Definition, Definitions, Argument, Flag, Kind, DuplicatedFlagWarning


class TestDefinition(TestCase):
    """Behavioral tests for Definition."""

    def testMinimalDefinition(self):
        definition = Definition("simple")
        self.assertEqual(definition.name, "simple")
        self.assertEqual(definition.aliases, ())
        self.assertEqual(definition.args, ())
        self.assertEqual(definition.flags, {})
        self.assertIsNone(definition.data)

    def testNameValidation(self):
        with self.assertRaises(ValueError):
            Definition("")
        with self.assertRaises(TypeError):
            Definition(None)

    def testAliasString(self):
        self.assertEqual(Definition("simple", alias="easy").aliases, ("easy",))

    def testAliasIterable(self):
        self.assertEqual(Definition("ban", alias=["b", "kick"]).aliases, ("b", "kick"))

    def testAliasValidation(self):
        with self.assertRaises(TypeError):
            Definition("ban", alias=1)
        with self.assertRaises(TypeError):
            Definition("ban", alias=[1])
        with self.assertRaises(ValueError):
            Definition("ban", alias=[""])
        with self.assertRaises(ValueError):
            Definition("ban", alias=["b", "b"])

    def testKeys(self):
        self.assertEqual(Definition("ban", alias=["b", "kick"]).keys, ("ban", "b", "kick"))

    def testArgsShorthand(self):
        definition = Definition("ban", args=["member", {"name": "reason", "kind": "content"}])
        self.assertEqual(definition.args, (Argument("member"), Argument("reason", kind=Kind.CONTENT)))

    def testArgsCannotBeEmpty(self):
        with self.assertRaises(ValueError):
            Definition("ban", args=[])

    def testArgsMustBeSequence(self):
        with self.assertRaises(TypeError):
            Definition("ban", args="member")
        with self.assertRaises(TypeError):
            Definition("ban", args={"name": "member"})
        with self.assertRaises(TypeError):
            Definition("ban", args=1)

    def testArgNamesAreUnique(self):
        with self.assertRaises(ValueError):
            Definition("ban", args=["member", "member"])

    def testArgsRejectBoolean(self):
        with self.assertRaises(ValueError):
            Definition("ban", args=[{"name": "silent", "kind": "boolean"}])

    def testContentArgumentMustBeLast(self):
        with self.assertRaisesRegex(
                TypeError,
                "definition argument 'reason' must be defined last because it matches content",
        ):
            Definition("ban", args=[{"name": "reason", "kind": "content"}, "member"])

    def testContentArgumentErrorIgnoresFollowers(self):
        """The failure is identical however many arguments follow the content one."""
        messages = []
        for followers in (["a"], ["a", "b", "c"]):
            with self.assertRaises(TypeError) as context:
                Definition("ban", args=[{"name": "reason", "kind": "content"}, *followers])
            messages.append(str(context.exception))
        self.assertEqual(messages[0], messages[1])

    def testSingleContentArgument(self):
        self.assertIs(Definition("say", args=[{"name": "text", "kind": "content"}]).args[0].kind, Kind.CONTENT)

    def testFlagsMapping(self):
        definition = Definition("ban", flags=["delay", {"name": "silent", "kind": "boolean"}])
        self.assertEqual(definition.flags, {
            "delay": Flag("delay"),
            "silent": Flag("silent", kind=Kind.BOOLEAN),
        })

    def testFlagsCannotBeEmpty(self):
        with self.assertRaises(ValueError):
            Definition("ban", flags=())

    def testDuplicatedFlagLastWriteWins(self):
        with self.assertWarns(DuplicatedFlagWarning):
            definition = Definition("ban", flags=["delay", {"name": "delay", "kind": "boolean"}])
        self.assertIs(definition.flags["delay"].kind, Kind.BOOLEAN)

    def testDataIsPassedThrough(self):
        data = {"handler": object()}
        self.assertIs(Definition("simple", data=data).data, data)

    def testFlagsAreReadOnlyCopies(self):
        definition = Definition("ban", flags=["delay"])
        definition.flags.pop("delay")
        self.assertIn("delay", definition.flags)

    def testRepr(self):
        self.assertEqual(
            repr(Definition("simple")),
            "definition(name='simple', aliases=(), args=(), flags={}, data=None)",
        )


class TestFromDescriptor(TestCase):
    """Behavioral tests for Definition.from_descriptor()."""

    def testMappingDescriptor(self):
        definition = Definition.from_descriptor({
            "name": "ban",
            "alias": "b",
            "args": ["member"],
            "flags": ["delay"],
            "data": 1,
        })
        self.assertEqual(definition.name, "ban")
        self.assertEqual(definition.aliases, ("b",))
        self.assertEqual(definition.args, (Argument("member"),))
        self.assertEqual(definition.flags, {"delay": Flag("delay")})
        self.assertEqual(definition.data, 1)

    def testDefinitionPassesThrough(self):
        definition = Definition("simple")
        self.assertIs(Definition.from_descriptor(definition), definition)

    def testUnknownKeys(self):
        with self.assertRaisesRegex(TypeError, "unknown keys: 'aliases'"):
            Definition.from_descriptor({"name": "ban", "aliases": ["b"]})

    def testMissingName(self):
        with self.assertRaises(TypeError):
            Definition.from_descriptor({"args": ["member"]})

    def testNonMapping(self):
        with self.assertRaises(TypeError):
            Definition.from_descriptor("ban")


class TestDefinitions(TestCase):
    """Behavioral tests for the Definitions multimap."""

    def setUp(self):
        self.store = Definitions()
        self.first = Definition("ban", alias="b")
        self.second = Definition("ban", args=["member"])
        self.store.register(self.first)
        self.store.register(self.second)

    def testOverloadsKeepRegistrationOrder(self):
        self.assertEqual(self.store["ban"], (self.first, self.second))

    def testAliasSharesTheSameObject(self):
        self.assertIs(self.store["b"][0], self.first)
        self.assertEqual(len(self.store["b"]), 1)

    def testMissingKey(self):
        with self.assertRaises(KeyError):
            self.store["kick"]
        self.assertEqual(self.store.get("kick", ()), ())
        self.assertNotIn("kick", self.store)

    def testIterationAndLength(self):
        self.assertEqual(list(self.store), ["ban", "b"])
        self.assertEqual(len(self.store), 2)

    def testDistinct(self):
        self.assertEqual(list(self.store.distinct()), [self.first, self.second])

    def testAddAppends(self):
        self.store.add("kick", self.first)
        self.store.add("kick", self.second)
        self.assertEqual(self.store["kick"], (self.first, self.second))

    def testRegisterRequiresDefinition(self):
        with self.assertRaises(TypeError):
            self.store.register({"name": "ban"})


if __name__ == "__main__":
    unittest.main()
