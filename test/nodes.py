"""
Command node behavioral tests.

Scope
- Validate defaults at construction, independently of any parent.
- Validate the author API: set/unset/is_set by member, by name and by composite.
- Validate that failing calls leave the node untouched.
- Validate tree wiring (children, root, path) and register isolation.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from cliflags import (
    AppSettings,
    DEFAULTS,
    DeprecatedSettingWarning,
    FlagSet,
    Node,
    UnknownSettingError,
)
from cliflags.internals import ParseState


class TestNodeDefaults(TestCase):
    """Fresh nodes start from DEFAULTS."""

    def testFreshNodeHasExactlyDefaults(self):
        node = Node("app")
        self.assertEqual(node.settings, FlagSet.of(AppSettings.AllowInvalidUtf8, AppSettings.ColorAuto))
        self.assertEqual(len(node.settings), 2)
        self.assertTrue(node.is_set(AppSettings.AllowInvalidUtf8))
        self.assertTrue(node.is_set("colorauto"))
        self.assertFalse(node.is_set(AppSettings.ColoredHelp))

    def testChildDefaultsIgnoreParent(self):
        root = Node("app", settings=[AppSettings.ColoredHelp, AppSettings.SubcommandRequired])
        root.unset(AppSettings.ColorAuto)
        child = root.command("build")
        self.assertEqual(child.settings, FlagSet.of(*DEFAULTS))

    def testSettingsAppliedAtConstruction(self):
        node = Node("app", settings=("ColoredHelp", AppSettings.NextLineHelp))
        self.assertTrue(node.is_set(AppSettings.ColoredHelp))
        self.assertTrue(node.is_set("nextlinehelp"))


class TestNodeAuthorApi(TestCase):
    """set/unset/is_set through members and names."""

    def setUp(self):
        self.node = Node("app")

    def testSetByName(self):
        self.node.set("coloredhelp")
        self.assertTrue(self.node.is_set(AppSettings.ColoredHelp))

    def testSetByMember(self):
        self.node.set(AppSettings.WaitOnError)
        self.assertTrue(self.node.is_set("WaitOnError"))

    def testSetMany(self):
        self.node.set("hidden", AppSettings.TrailingVarArg)
        self.assertTrue(self.node.is_set(AppSettings.Hidden))
        self.assertTrue(self.node.is_set(AppSettings.TrailingVarArg))

    def testUnset(self):
        self.node.unset("ColorAuto")
        self.assertFalse(self.node.is_set(AppSettings.ColorAuto))
        self.assertTrue(self.node.is_set(AppSettings.AllowInvalidUtf8))

    def testCompositeByName(self):
        self.node.set("DisableHelpAndVersion")
        self.assertTrue(self.node.is_set(AppSettings.DisableHelp))
        self.assertTrue(self.node.is_set(AppSettings.DisableVersion))
        self.node.unset(AppSettings.DisableHelpAndVersion)
        self.assertFalse(self.node.is_set(AppSettings.DisableHelp))
        self.assertFalse(self.node.is_set(AppSettings.DisableVersion))

    def testCompositeIsNotTestable(self):
        with self.assertRaises(TypeError):
            self.node.is_set(AppSettings.DisableHelpAndVersion)

    def testUnknownNameHasNoPartialEffect(self):
        before = self.node.settings
        with self.assertRaises(UnknownSettingError):
            self.node.set("coloredhelp", "bogus-setting")
        self.assertEqual(self.node.settings, before)
        with self.assertRaises(UnknownSettingError):
            self.node.unset("colorauto", "bogus-setting")
        self.assertEqual(self.node.settings, before)

    def testUnknownNameOnIsSet(self):
        with self.assertRaises(UnknownSettingError):
            self.node.is_set("bogus-setting")

    def testHiddenNameRejected(self):
        for name in ("trailingvalues", "ValidNegNumFound", "propagated", "validargfound"):
            with self.subTest(name=name):
                with self.assertRaises(UnknownSettingError):
                    self.node.set(name)
        self.assertEqual(self.node.settings, FlagSet.of(*DEFAULTS))

    def testHiddenMemberRejected(self):
        with self.assertRaises(TypeError):
            self.node.set(ParseState.Propagated)
        with self.assertRaises(TypeError):
            self.node.is_set(ParseState.TrailingValues)
        with self.assertRaises(TypeError):
            self.node.unset(ParseState.ValidArgFound)

    def testDeprecatedNameSetsReplacement(self):
        with self.assertWarns(DeprecatedSettingWarning):
            self.node.set("VersionlessSubcommands")
        self.assertTrue(self.node.is_set(AppSettings.DisableVersion))

    def testNonSettingRejected(self):
        with self.assertRaises(TypeError):
            self.node.set(8)
        self.assertEqual(self.node.settings, FlagSet.of(*DEFAULTS))

    def testSettingsIsSnapshot(self):
        snapshot = self.node.settings
        snapshot.set(AppSettings.Hidden)
        self.assertFalse(self.node.is_set(AppSettings.Hidden))
        self.node.set(AppSettings.WaitOnError)
        self.assertFalse(snapshot.is_set(AppSettings.WaitOnError))

    def testReset(self):
        self.node.set(AppSettings.ColoredHelp)
        self.node.unset(AppSettings.ColorAuto)
        self.node.reset()
        self.assertEqual(self.node.settings, FlagSet.of(*DEFAULTS))


class TestNodeTree(TestCase):
    """children, root, path and per-node isolation."""

    def testCommandAttachesChild(self):
        root = Node("app")
        child = root.command("build")
        self.assertIs(child.parent, root)
        self.assertIs(root.children["build"], child)

    def testChildrenIsCopy(self):
        root = Node("app")
        root.command("build")
        root.children.clear()
        self.assertIn("build", root.children)

    def testDuplicateChildRejected(self):
        root = Node("app")
        first = root.command("build")
        with self.assertRaises(ValueError):
            root.command("build")
        self.assertIs(root.children["build"], first)

    def testFailedConstructionIsNotAttached(self):
        root = Node("app")
        with self.assertRaises(UnknownSettingError):
            root.command("build", settings=["bogus-setting"])
        self.assertNotIn("build", root.children)

    def testRootAndPath(self):
        root = Node("app")
        leaf = root.command("remote").command("add")
        self.assertIs(leaf.root, root)
        self.assertEqual([node.name for node in leaf.path], ["app", "remote", "add"])
        self.assertIs(root.root, root)
        self.assertIsNone(root.parent)
        self.assertEqual(root.path, (root,))

    def testSiblingsAreIsolated(self):
        root = Node("app")
        left, right = root.command("left"), root.command("right")
        left.set(AppSettings.Hidden)
        self.assertFalse(right.is_set(AppSettings.Hidden))
        self.assertFalse(root.is_set(AppSettings.Hidden))

    def testParentWritesDoNotReachChildren(self):
        root = Node("app")
        child = root.command("build")
        root.set(AppSettings.ColoredHelp)
        self.assertFalse(child.is_set(AppSettings.ColoredHelp))

    def testNameValidation(self):
        with self.assertRaises(TypeError):
            Node(1)
        with self.assertRaises(ValueError):
            Node("   ")
        self.assertEqual(Node("  app ").name, "app")

    def testParentValidation(self):
        with self.assertRaises(TypeError):
            Node("build", "app")

    def testSettingsMustNotBeString(self):
        with self.assertRaises(TypeError):
            Node("app", settings="coloredhelp")

    def testRichReprFields(self):
        node = Node("app")
        self.assertEqual([field for field, _ in node.__rich_repr__()], ["name", "settings", "children"])

    def testRepr(self):
        root = Node("app", settings=[AppSettings.Hidden])
        root.command("build")
        self.assertEqual(
            repr(root),
            "node(name='app', settings=('AllowInvalidUtf8', 'Hidden', 'ColorAuto'), children=('build',))"
        )


if __name__ == "__main__":
    unittest.main()
