"""
Node helper behavioral tests.

Scope
- Validate that mirror() properties are read-only and hand out copies of the
  children mapping, never the mapping itself.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from cliflags import Node
from cliflags.utils import mirror


class TestMirror(TestCase):
    """mirror() properties on nodes."""

    def testChildrenCannotBeAttachedThroughCopy(self):
        root = Node("app")
        root.children["build"] = Node("build")
        self.assertEqual(root.children, {})

    def testChildrenCannotBeDetachedThroughCopy(self):
        root = Node("app")
        child = root.command("build")
        root.children.pop("build")
        self.assertIs(root.children["build"], child)

    def testNodesAreNotCopied(self):
        root = Node("app")
        child = root.command("build")
        self.assertIs(child.parent, root)
        self.assertIs(next(iter(root.children.values())), child)

    def testReadOnly(self):
        root = Node("app")
        with self.assertRaises(AttributeError):
            root.name = "other"
        with self.assertRaises(AttributeError):
            root.parent = Node("other")

    def testPropertyName(self):
        self.assertEqual(Node.children.fget.__name__, "children")

    def testNameMustBeString(self):
        with self.assertRaises(TypeError):
            mirror(1)


if __name__ == "__main__":
    unittest.main()
