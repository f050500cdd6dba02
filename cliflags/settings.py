"""
cliflags catalog: the closed set of settings, their bits, and name resolution.

What this module provides
- Kind: primitive, composite, hidden and deprecated settings.
- SettingType: memberless Enum base shared by every catalog. A member's value is a
  tuple (kind, *operands):
  • primitive / hidden → (kind, position)
  • composite          → (kind, member-name, member-name, ...)
  • deprecated         → (kind, replacement-name, since)
- AppSettings: the author-facing catalog.
- DEFAULTS / PROPAGATING: the settings a fresh node starts with, and the settings an
  invoked child copies from its parent.
- resolve(name): case-insensitive (ASCII) exact lookup of a setting by its key.
- names(): the canonical name table.
- verify(*catalogs): bit assignment checks, run at import.

Name table
- every primitive and composite author-facing setting has one canonical key, its
  member name lowercased ("ColoredHelp" → "coloredhelp").
- deprecated names resolve to their replacement and emit DeprecatedSettingWarning.
- hidden settings (see cliflags.internals) have no key: resolving their names fails
  the same way an unknown name does.

Bit assignment
- positions are unique across every catalog for the lifetime of the program, and
  retired positions are never handed out again.
"""
import difflib
import functools
import operator
import string
from enum import Enum, unique
from types import MappingProxyType

from .faults import *
from .flagset import WIDTH

# positions of retired settings; never reassigned
RETIRED = frozenset({
    4,  # VersionlessSubcommands had its own bit before it became a redirect
})

_FOLD = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


class Kind(Enum):
    PRIMITIVE = "primitive"
    COMPOSITE = "composite"
    HIDDEN = "hidden"
    DEPRECATED = "deprecated"


def _deprecated(setting, input, /):
    """
    Emit the deprecation notice for a deprecated setting reached by name or identity.
    """
    replacement = setting.replacement
    trigger(DeprecatedSettingWarning(
        "setting %r is deprecated since %s" % (input, setting.since),
        title="deprecated setting",
        code=FaultCode.DEPRECATED_SETTING,
        input=input,
        setting=setting,
        replacement=replacement,
        hint="use %r instead" % replacement.key,
        docs=getdoc(FaultCode.DEPRECATED_SETTING)
    ))


class SettingType(Enum):
    """
    Base of every settings catalog (no members of its own).

    Members are mask-resoluble (see cliflags.flagset): __mask__() answers with the
    bits the member writes. Deprecated members emit their notice on every use.
    """

    def __init__(self, kind, *operands):
        self.kind = kind
        self.operands = operands

    @property
    def positions(self):
        """
        The bit positions this member stands for, lowest first.
        """
        match self.kind:
            case Kind.PRIMITIVE | Kind.HIDDEN:
                return self.operands[:1]
            case Kind.COMPOSITE:
                return tuple(sorted({
                    position for name in self.operands for position in type(self)[name].positions
                }))
            case Kind.DEPRECATED:
                return self.replacement.positions
        raise RuntimeError("unreachable")

    @property
    def mask(self):
        return functools.reduce(operator.or_, (1 << position for position in self.positions), 0)

    @property
    def key(self):
        if self.kind in (Kind.PRIMITIVE, Kind.COMPOSITE):
            return self.name.translate(_FOLD)
        return None

    @property
    def members(self):
        """
        The primitive members of a composite; a one-tuple of itself otherwise.
        """
        if self.kind is Kind.COMPOSITE:
            return tuple(type(self)[name] for name in self.operands)
        return (self,)

    @property
    def replacement(self):
        if self.kind is Kind.DEPRECATED:
            return type(self)[self.operands[0]]
        return None

    @property
    def since(self):
        if self.kind is Kind.DEPRECATED:
            return self.operands[1]
        return None

    @property
    def propagating(self):
        return self in PROPAGATING

    def __mask__(self):
        if self.kind is Kind.DEPRECATED:
            _deprecated(self, self.name)
        return self.mask

    def __repr__(self):
        return f"{type(self).__name__}.{self.name}"


@unique
class AppSettings(SettingType):
    """
    Author-facing settings of a command node.

    Unless listed in PROPAGATING, a setting applies to the node it is set on only and
    is never inherited by child commands.

    VersionlessSubcommands used to hide the version flag of every subcommand. It now
    redirects to DisableVersion, which is local: set on a parent it disables the
    parent's own version flag and leaves the children alone. Set DisableVersion on
    each subcommand to get the old behavior.
    """
    # --- parsing ---
    AllowExternalSubcommands = Kind.PRIMITIVE, 12
    AllowInvalidUtf8 = Kind.PRIMITIVE, 14  # default
    AllowLeadingHyphen = Kind.PRIMITIVE, 15
    AllowMissingPositional = Kind.PRIMITIVE, 30
    AllowNegativeNumbers = Kind.PRIMITIVE, 24
    ArgRequiredElseHelp = Kind.PRIMITIVE, 2
    ArgsNegateSubcommands = Kind.PRIMITIVE, 28
    ContainsLast = Kind.PRIMITIVE, 36
    DontDelimitTrailingValues = Kind.PRIMITIVE, 23
    InferSubcommands = Kind.PRIMITIVE, 35
    LowIndexMultiplePositional = Kind.PRIMITIVE, 25
    NoBinaryName = Kind.PRIMITIVE, 11
    PropagateGlobalValuesDown = Kind.PRIMITIVE, 29
    StrictUtf8 = Kind.PRIMITIVE, 13
    SubcommandRequired = Kind.PRIMITIVE, 1
    SubcommandRequiredElseHelp = Kind.PRIMITIVE, 7
    SubcommandsNegateReqs = Kind.PRIMITIVE, 0
    TrailingVarArg = Kind.PRIMITIVE, 10

    # --- help and version ---
    DeriveDisplayOrder = Kind.PRIMITIVE, 18
    DisableHelp = Kind.PRIMITIVE, 37
    DisableHelpSubcommand = Kind.PRIMITIVE, 26
    DisableVersion = Kind.PRIMITIVE, 8
    DontCollapseArgsInUsage = Kind.PRIMITIVE, 27
    GlobalVersion = Kind.PRIMITIVE, 3
    Hidden = Kind.PRIMITIVE, 9  # hides the subcommand from its parent's help
    HidePossibleValuesInHelp = Kind.PRIMITIVE, 16
    NextLineHelp = Kind.PRIMITIVE, 17
    UnifiedHelpMessage = Kind.PRIMITIVE, 5
    WaitOnError = Kind.PRIMITIVE, 6

    # --- color ---
    ColoredHelp = Kind.PRIMITIVE, 19
    ColorAlways = Kind.PRIMITIVE, 20
    ColorAuto = Kind.PRIMITIVE, 21  # default
    ColorNever = Kind.PRIMITIVE, 22

    # --- composites ---
    DisableHelpAndVersion = Kind.COMPOSITE, "DisableHelp", "DisableVersion"

    # --- deprecations ---
    VersionlessSubcommands = Kind.DEPRECATED, "DisableVersion", "2.26.0"


DEFAULTS = frozenset({
    AppSettings.AllowInvalidUtf8,
    AppSettings.ColorAuto,
})

# disjoint from DEFAULTS
PROPAGATING = frozenset({
    AppSettings.ColoredHelp,
    AppSettings.ColorAlways,
    AppSettings.ColorNever,
    AppSettings.DeriveDisplayOrder,
    AppSettings.DontCollapseArgsInUsage,
    AppSettings.GlobalVersion,
    AppSettings.HidePossibleValuesInHelp,
    AppSettings.NextLineHelp,
    AppSettings.PropagateGlobalValuesDown,
    AppSettings.StrictUtf8,
    AppSettings.UnifiedHelpMessage,
})


def verify(*catalogs):
    """
    Check the bit assignment of one or more catalogs taken together.

    rules
    - primitive and hidden members own exactly one position in [0, WIDTH), not retired,
      and not owned by any other member of any given catalog.
    - composites name at least two distinct primitive members of their own catalog.
    - deprecated members name an existing, non-deprecated replacement.
    - canonical keys are unique.

    errors
    - ValueError on the first violation; these are definition defects, never runtime
      conditions, so they surface at import.

    returns
    - dict[int, member]: the owner of every assigned position.
    """
    owners = {}
    keys = {}
    for catalog in catalogs:
        if not isinstance(catalog, type) or not issubclass(catalog, SettingType):
            raise TypeError("verify() arguments must be setting catalogs")
        for member in catalog:
            match member.kind:
                case Kind.PRIMITIVE | Kind.HIDDEN:
                    if len(member.operands) != 1:
                        raise ValueError(f"{member!r} must own exactly one position")
                    position, = member.operands
                    if not isinstance(position, int) or isinstance(position, bool):
                        raise ValueError(f"{member!r} position must be an integer")
                    if not 0 <= position < WIDTH:
                        raise ValueError(f"{member!r} position {position} does not fit in {WIDTH} bits")
                    if position in RETIRED:
                        raise ValueError(f"{member!r} position {position} is retired")
                    if position in owners:
                        raise ValueError(f"{member!r} position {position} is already owned by {owners[position]!r}")
                    owners[position] = member
                case Kind.COMPOSITE:
                    if len(set(member.operands)) < 2:
                        raise ValueError(f"{member!r} must combine at least two settings")
                    for name in member.operands:
                        try:
                            part = catalog[name]
                        except KeyError:
                            raise ValueError(f"{member!r} refers to unknown setting {name!r}") from None
                        if part.kind is not Kind.PRIMITIVE:
                            raise ValueError(f"{member!r} can only combine primitive settings")
                case Kind.DEPRECATED:
                    if len(member.operands) != 2:
                        raise ValueError(f"{member!r} must name a replacement and a version")
                    try:
                        replacement = catalog[member.operands[0]]
                    except KeyError:
                        raise ValueError(f"{member!r} refers to unknown setting {member.operands[0]!r}") from None
                    if replacement.kind is Kind.DEPRECATED:
                        raise ValueError(f"{member!r} cannot be replaced by a deprecated setting")
                case _:
                    raise ValueError(f"{member!r} has an unknown kind")
            if (key := member.key) is not None:
                if key in keys:
                    raise ValueError(f"{member!r} key {key!r} is already used by {keys[key]!r}")
                keys[key] = member
    return owners


verify(AppSettings)

_table = {setting.key: setting for setting in AppSettings if setting.key is not None}
_redirects = {
    setting.name.translate(_FOLD): setting for setting in AppSettings if setting.kind is Kind.DEPRECATED
}


def names():
    """
    Return the canonical name table: key → setting (read-only).
    """
    return MappingProxyType(_table)


def resolve(name, /):
    """
    Resolve a setting name to its catalog member.

    rules
    - ASCII letters are folded to lowercase; nothing else is normalized.
    - exact match only: no prefixes and no fuzzy matching.
    - deprecated names resolve to their replacement and emit a DeprecatedSettingWarning.
    - hidden and unknown names raise UnknownSettingError. close matches are offered in
      the hint only.
    """
    if not isinstance(name, str):
        raise TypeError("resolve() argument must be a string")
    key = name.translate(_FOLD)

    try:
        return _table[key]
    except KeyError:
        pass

    try:
        setting = _redirects[key]
    except KeyError:
        suggestions = difflib.get_close_matches(key, _table.keys(), 5)
        try:
            hint = "did you mean %r?" % suggestions[0]
        except IndexError:
            hint = "see cliflags.names() for every available setting"
        trigger(UnknownSettingError(
            "unknown setting %r" % name,
            title="unknown setting",
            code=FaultCode.UNKNOWN_SETTING,
            input=name,
            suggestions=suggestions,
            hint=hint,
            docs=getdoc(FaultCode.UNKNOWN_SETTING)
        ))
        raise RuntimeError("unreachable")

    _deprecated(setting, name)
    return setting.replacement


def members(flagset, /, catalog=AppSettings):
    """
    Return the primitive (or hidden) members of catalog whose bit is on in flagset.
    """
    return tuple(
        setting for setting in catalog
        if setting.kind in (Kind.PRIMITIVE, Kind.HIDDEN) and flagset.is_set(setting)
    )


__all__ = (
    # Types
    "Kind",
    "SettingType",
    "AppSettings",

    # Constants
    "DEFAULTS",
    "PROPAGATING",
    "RETIRED",

    # Functions
    "resolve",
    "names",
    "members",
    "verify",
)
