"""
cliflags command layer: one settings store per level of a command tree.

What this module provides
- Node: one command or subcommand. It owns two registers:
  • configuration: author-set settings, starting from DEFAULTS at construction.
  • parse state: facts latched by the parsing engine during one pass, starting clear.
  Only the configuration register takes part in defaults and propagation; the parse
  state is reachable through cliflags.internals only.

Author API
- set(*settings) / unset(*settings) / is_set(setting), where a setting is an
  AppSettings member or a setting name (resolved with cliflags.resolve).
- command(name, ...) to create and attach a child node.
- reset() to reuse a node from its documented defaults.

Isolation
- registers are never shared between nodes; propagation copies values (see
  cliflags.internals.descend), so later writes on a parent never reach its children.
"""
import functools
import operator

from .flagset import FlagSet
from .settings import AppSettings, DEFAULTS, members, resolve
from .utils import mirror


def _coerce(cls, setting):
    """
    Turn an author-supplied setting (member or name) into an AppSettings member.
    """
    if isinstance(setting, str):
        return resolve(setting)
    if isinstance(setting, AppSettings):
        return setting
    raise TypeError(f"{cls.__typename__} setting must be an app setting or its name, not {type(setting).__name__!r}")


def _attach_to_parent(self, parent):
    """
    Register this node under its parent, enforcing unique names.
    """
    if parent._children.setdefault(name := self._name, self) is self:
        return
    typeof = "subcommand" if parent.parent else "command"
    raise ValueError(f"{type(self).__typename__} {typeof} name {name!r} is already in use")


class Node:
    """
    One level of a command/subcommand tree and its settings.

    Lifecycle
    - Constructed with the DEFAULTS configuration and a clear parse state, independently
      of any ancestor.
    - Configured by the author before parsing.
    - Receives propagated settings from its parent when the engine descends into it.
    - Read-only after a parse pass, until reset() for reuse.
    """
    __typename__ = "node"

    name = mirror("name")
    parent = mirror("parent")
    children = mirror("children")

    def __init__(self, name, /, parent=None, settings=()):
        if not isinstance(name, str):
            raise TypeError(f"{self.__typename__} 'name' must be a string")
        elif not (name := name.strip()):
            raise ValueError(f"{self.__typename__} 'name' cannot be empty")
        if not isinstance(parent, Node | None):
            raise TypeError(f"{self.__typename__} 'parent' must be a node")
        if isinstance(settings, str):
            raise TypeError(f"{self.__typename__} 'settings' must be an iterable of settings")

        self._name = name
        self._parent = parent
        self._children = {}
        self._settings = FlagSet.of(*DEFAULTS)
        self._state = FlagSet()

        # Settings first: an unknown name must not leave a half-built child attached.
        self.set(*settings)
        if self._parent is not None:
            _attach_to_parent(self, self._parent)

    @property
    def settings(self):
        """
        A snapshot of the configuration register.
        """
        return self._settings.copy()

    @property
    def root(self):
        child, parent = self, self.parent
        while parent:
            child, parent = parent, parent.parent
        return child

    @property
    def path(self):
        path = [node := self]
        while node.parent:
            path.append(node := node.parent)
        return tuple(reversed(path))

    def set(self, *settings):
        """
        Enable each setting. Composite settings enable every member bit.

        All names are resolved before anything is written, so an unknown name leaves
        the node untouched.
        """
        for setting in [_coerce(type(self), setting) for setting in settings]:
            self._settings.set(setting)

    def unset(self, *settings):
        """
        Disable each setting. Composite settings disable every member bit.
        """
        for setting in [_coerce(type(self), setting) for setting in settings]:
            self._settings.unset(setting)

    def is_set(self, setting, /):
        return self._settings.is_set(_coerce(type(self), setting))

    def command(self, name, /, settings=()):
        """
        Create a child node named `name` under this node and return it.
        """
        return type(self)(name, self, settings)

    def reset(self):
        """
        Restore the configuration to DEFAULTS and clear the parse state.
        """
        self._settings = FlagSet.of(*DEFAULTS)
        self._state.clear()

    def __rich_repr__(self):
        yield "name", self.name
        yield "settings", tuple(setting.name for setting in members(self._settings))
        yield "children", tuple(self._children)

    def __repr__(self):
        return f"{type(self).__typename__}({
            ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
        })"


__all__ = (
    "Node",
)
