"""
Descriptor builder and registry behavioral tests.

Scope
- Validate the option doc grammar (short name, type override, description).
- Validate kind resolution and type names from storage types.
- Validate registry invariants: unique names, all-or-nothing grouping, public fields,
  default snapshots and the fresh list given to None list storage.

Conventions
- Test method names follow CamelCase per project convention.
- Declaring classes live at module level and are scanned as instances.
"""
import enum
import pathlib
import re
import unittest
from unittest import TestCase

from fieldopts import (
    Config,
    Group,
    Kind,
    Option,
    Registry,
    AccessError,
    GroupingError,
    MalformedDocError,
    NameCollisionError,
    UnsupportedTypeError,
    integer,
    char,
    parse_doc,
)


class Mode(enum.Enum):
    FAST = 1
    SAFE_AND_SLOW = 2


class Program:
    outfile: pathlib.Path = Option("-o <filename> the output file", default=pathlib.Path("/tmp/out"))
    ignore_case: bool = Option("-i ignore case", default=False)
    temperature: float = Option("set the initial temperature", default=75.0)
    libs: list[str] = Option("-l library to load")
    mode: Mode = Option("<speed> how to run", default=Mode.FAST)
    match: re.Pattern = Option("lines to keep")
    count: integer = Option("a bounded count", default=integer(7))
    separator: char = Option("field separator", default=",")
    tags: list[str] = Option("a tag", default=["a", "b"], aliases=("-T", "--label"))


class Collide:
    alpha: int = Option("-a first", default=0)
    again: int = Option("-a second", default=0)


class AliasCollide:
    alpha: int = Option("first", default=0)
    beta: int = Option("second", default=0, aliases=("--alpha",))


class Private:
    visible: int = Option("shown", default=0)
    _secret: int = Option("hidden", default=0)


class General:
    verbose: bool = Option("-v be chatty", default=False, group="general")
    jobs: int = Option("-j number of jobs", default=1)


class Output:
    outfile: str = Option("<file> where to write", group="output")
    secret: str = Option("internal knob", unpublicized=True)


class Debugging:
    trace: bool = Option("trace everything", default=False, group=Group("debugging", unpublicized=True))


class Ungrouped:
    quiet: bool = Option("be quiet", default=False)


class LateGroup:
    first: bool = Option("first one", default=False)
    second: bool = Option("second one", default=False, group="late")


class Again:
    other: bool = Option("other one", default=False, group="general")


def build(*sources, **changes):
    return Registry.build(*sources, config=Config().replace(**changes))


class TestParseDoc(TestCase):
    """Behavioral tests for the option doc grammar."""

    def testShortNameTypeAndDescription(self):
        self.assertEqual(parse_doc("-o <filename> the output file"), ("o", "filename", "the output file"))

    def testTypeOverrideOnly(self):
        self.assertEqual(parse_doc("<n> how many"), (None, "n", "how many"))

    def testDescriptionOnly(self):
        self.assertEqual(parse_doc("set the temperature"), (None, None, "set the temperature"))

    def testShortestShortNameForm(self):
        self.assertEqual(parse_doc("-o x"), ("o", None, "x"))

    def testMalformedShortNameRejected(self):
        for doc in ("-o", "-o ", "-ox text", "--output the file"):
            with self.subTest(doc=doc):
                with self.assertRaises(MalformedDocError):
                    parse_doc(doc)


class TestDescriptors(TestCase):
    """Behavioral tests for descriptors built from declarations."""

    def setUp(self):
        self.program = Program()
        self.registry = build(self.program)
        self.descriptors = {descriptor.identifier: descriptor for descriptor in self.registry}

    def testKindsFromStorageTypes(self):
        kinds = {identifier: descriptor.kind.tag for identifier, descriptor in self.descriptors.items()}
        self.assertEqual(kinds["outfile"], Kind.CONSTRUCTIBLE)
        self.assertEqual(kinds["ignore_case"], Kind.BOOLEAN)
        self.assertEqual(kinds["temperature"], Kind.DOUBLE)
        self.assertEqual(kinds["libs"], Kind.LIST)
        self.assertEqual(kinds["mode"], Kind.ENUM)
        self.assertEqual(kinds["match"], Kind.PATTERN)
        self.assertEqual(kinds["count"], Kind.INT)
        self.assertEqual(kinds["separator"], Kind.CHAR)
        self.assertEqual(self.descriptors["libs"].kind.element.tag, Kind.CONSTRUCTIBLE)

    def testTypeNames(self):
        names = {identifier: descriptor.type_name for identifier, descriptor in self.descriptors.items()}
        self.assertEqual(names["outfile"], "filename")
        self.assertEqual(names["ignore_case"], "boolean")
        self.assertEqual(names["temperature"], "float")
        self.assertEqual(names["libs"], "string")
        self.assertEqual(names["mode"], "speed")
        self.assertEqual(names["match"], "regex")
        self.assertEqual(names["count"], "integer")
        self.assertEqual(names["separator"], "char")

    def testLongNameHyphenated(self):
        self.assertEqual(self.descriptors["ignore_case"].long_name, "ignore-case")

    def testLongNameKeepsUnderscoresWithoutDashes(self):
        registry = build(Program(), use_dashes=False)
        self.assertEqual(registry.lookup("--ignore_case").long_name, "ignore_case")

    def testDefaultTextSnapshots(self):
        texts = {identifier: descriptor.default_text for identifier, descriptor in self.descriptors.items()}
        self.assertEqual(texts["outfile"], "/tmp/out")
        self.assertEqual(texts["ignore_case"], "false")
        self.assertEqual(texts["temperature"], "75.0")
        self.assertEqual(texts["mode"], "FAST")
        self.assertEqual(texts["tags"], "[a, b]")
        self.assertIsNone(texts["match"])
        self.assertIsNone(texts["libs"])

    def testNoneListStorageGetsFreshList(self):
        self.assertEqual(self.program.libs, [])
        other = Program()
        build(other)
        self.assertIsNot(other.libs, self.program.libs)

    def testBooleanWithoutDefaultStartsFalse(self):
        class Flags:
            flag: bool = Option("a flag")
            maybe: bool | None = Option("an optional flag")

        flags = Flags()
        registry = build(flags)
        self.assertIs(flags.flag, False)
        self.assertEqual(registry.lookup("--flag").default_text, "false")
        self.assertIsNone(flags.maybe)
        self.assertIsNone(registry.lookup("--maybe").default_text)

    def testDiagnosticFields(self):
        descriptor = self.descriptors["outfile"]
        self.assertEqual(descriptor.source, "Program")
        self.assertEqual(descriptor.qualname, "Program.outfile")
        self.assertEqual(descriptor.short_name, "o")
        self.assertEqual(descriptor.description, "the output file")


class TestUnsupportedTypes(TestCase):
    """Behavioral tests for storage types that cannot hold an option."""

    def assertUnsupported(self, hint, default=None):
        class Holder:
            value = Option("a value", hint, default=default)

        with self.assertRaises(UnsupportedTypeError):
            build(Holder())

    def testTupleRejected(self):
        self.assertUnsupported(tuple[int, int])

    def testBareListRejected(self):
        self.assertUnsupported(list)

    def testNestedListRejected(self):
        self.assertUnsupported(list[list[int]])

    def testOtherGenericRejected(self):
        self.assertUnsupported(dict[str, int])

    def testTypeWithoutStringConstructorRejected(self):
        class NoArguments:
            def __init__(self):
                pass

        self.assertUnsupported(NoArguments)

    def testUnknownTypeRejected(self):
        class Holder:
            value = Option("a value")

        with self.assertRaises(UnsupportedTypeError):
            build(Holder())

    def testListStorageMustBeList(self):
        class Holder:
            values: list[int] = Option("some values", default=3)

        with self.assertRaises(UnsupportedTypeError):
            build(Holder())


class TestRegistry(TestCase):
    """Behavioral tests for the registry invariants and accessors."""

    def testEveryNameSpellingResolves(self):
        registry = build(Program())
        descriptor = registry.lookup("--ignore-case")
        self.assertIs(registry.lookup("--ignore_case"), descriptor)
        self.assertIs(registry.lookup("-i"), descriptor)
        self.assertIs(registry.lookup("-T"), registry.lookup("--tags"))
        self.assertIs(registry.lookup("--label"), registry.lookup("--tags"))
        self.assertIsNone(registry.lookup("--nothing"))

    def testSingleDashNames(self):
        registry = build(Program(), single_dash=True)
        self.assertIn("-ignore-case", registry)
        self.assertNotIn("--ignore-case", registry)
        self.assertIn("-i", registry)

    def testContainerProtocol(self):
        registry = build(Program())
        self.assertEqual(len(registry), 9)
        self.assertEqual([descriptor.identifier for descriptor in registry][:2], ["outfile", "ignore_case"])
        self.assertIn("--libs", registry)
        self.assertFalse(registry.grouped)
        self.assertEqual(dict(registry.groups), {})

    def testShortNameCollision(self):
        with self.assertRaises(NameCollisionError):
            build(Collide())

    def testAliasCollision(self):
        with self.assertRaises(NameCollisionError):
            build(AliasCollide())

    def testRepeatedAliasRejected(self):
        class Holder:
            value: int = Option("a value", default=0, aliases=("-z", "-z"))

        with self.assertRaises(NameCollisionError):
            build(Holder())

    def testAliasRepeatingOwnLongNameRejected(self):
        class Holder:
            value: int = Option("a value", default=0, aliases=("--value",))

        with self.assertRaises(NameCollisionError):
            build(Holder())

    def testSingleDashShortEqualsLongRejected(self):
        class Holder:
            v: bool = Option("-v be chatty", default=False)

        with self.assertRaises(NameCollisionError):
            build(Holder(), single_dash=True)
        self.assertIn("--v", build(Holder()))

    def testCollisionAcrossSources(self):
        with self.assertRaises(NameCollisionError):
            build(Program(), Program())

    def testMalformedAliasRejected(self):
        class Holder:
            value: int = Option("a value", default=0, aliases=("value",))

        with self.assertRaises(MalformedDocError):
            build(Holder())

    def testPrivateFieldRejected(self):
        with self.assertRaises(AccessError):
            build(Private())

    def testGroupsInDeclarationOrder(self):
        registry = build(General(), Debugging(), Output())
        self.assertTrue(registry.grouped)
        self.assertEqual(list(registry.groups), ["general", "debugging", "output"])
        output = registry.groups["output"]
        self.assertEqual([descriptor.identifier for descriptor in output.descriptors], ["outfile", "secret"])
        self.assertTrue(output.publicized)
        self.assertFalse(registry.groups["debugging"].publicized)
        self.assertEqual(registry.lookup("--secret").group, "output")

    def testGroupedUnitMustOpenGroup(self):
        with self.assertRaises(GroupingError):
            build(General(), Ungrouped())

    def testUngroupedRegistryRejectsMarkers(self):
        with self.assertRaises(GroupingError):
            build(LateGroup())
        with self.assertRaises(GroupingError):
            build(Ungrouped(), General())

    def testGroupNamesUnique(self):
        with self.assertRaises(GroupingError):
            build(General(), Again())


if __name__ == "__main__":
    unittest.main()
