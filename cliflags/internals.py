"""
Parsing-engine surface of the settings store (internal).

Scope
- ParseState: hidden settings latched by the engine while it parses one invocation.
  They live in the node's parse-state register, have no name in the resolver table,
  and are rejected by the author API (Node.set/unset/is_set).
- begin(node): start a parse pass over node and its subtree (parse state cleared).
- latch(node, state) / latched(node, state): monotonic write and read of a hidden bit.
- descend(parent, child): the propagation step, run when the engine delegates from
  parent to a child that was selected on the command line.

Important
- This module is not re-exported by the package. Application code configures nodes
  through Node and AppSettings; only the engine should import from here.

Propagation
- the parent's value of every PROPAGATING setting is OR-ed into the child's
  configuration. Bits the child already set explicitly are kept, nothing is cleared.
- at most once per pass: the first call latches Propagated on the child and later
  calls in the same pass are no-ops. begin() starts a new pass.
"""
from enum import unique

from .nodes import Node
from .settings import AppSettings, Kind, PROPAGATING, SettingType, verify


@unique
class ParseState(SettingType):
    """
    Facts discovered during a single parse pass.

    - TrailingValues: an explicit end-of-options marker ('--') was consumed.
    - ValidNegNumFound: a negative-number-shaped token was accepted as a value.
    - Propagated: propagation from the parent already ran for this node.
    - ValidArgFound: a recognized argument value was accepted.
    """
    TrailingValues = Kind.HIDDEN, 31
    ValidNegNumFound = Kind.HIDDEN, 32
    Propagated = Kind.HIDDEN, 33
    ValidArgFound = Kind.HIDDEN, 34


# Positions are unique across the author-facing and the internal catalogs together.
verify(AppSettings, ParseState)


def _check_node(name, node):
    if not isinstance(node, Node):
        raise TypeError(f"{name}() argument must be a node")


def _check_state(name, state):
    if not isinstance(state, ParseState):
        raise TypeError(f"{name}() state must be a parse state, not {type(state).__name__!r}")


def begin(node, /):
    """
    Clear the parse state of node and of every node below it.
    """
    _check_node("begin", node)
    pending = [node]
    while pending:
        current = pending.pop()
        current._state.clear()
        pending.extend(current._children.values())


def latch(node, state, /):
    _check_node("latch", node)
    _check_state("latch", state)
    node._state.set(state)


def latched(node, state, /):
    _check_node("latched", node)
    _check_state("latched", state)
    return node._state.is_set(state)


def descend(parent, child, /):
    """
    Copy the parent's propagating settings into an invoked child.

    returns
    - True when the settings were copied, False when this child was already
      propagated to during the current pass.

    errors
    - TypeError when either argument is not a node.
    - ValueError when child is not attached under parent.
    """
    _check_node("descend", parent)
    _check_node("descend", child)
    if parent._children.get(child.name) is not child:
        raise ValueError(f"descend() node {child.name!r} is not a child of {parent.name!r}")

    if child._state.is_set(ParseState.Propagated):
        return False
    child._settings |= parent._settings.select(*PROPAGATING)
    child._state.set(ParseState.Propagated)
    return True


__all__ = (
    "ParseState",
    "begin",
    "latch",
    "latched",
    "descend",
)
