"""
Fixed-width bit register holding the settings of one command node.

What this module provides
- WIDTH: the register capacity in bits. Every catalog position lives in [0, WIDTH).
- FlagSet: a mutable register with set/unset/test/union primitives.

Setting protocol
- The register knows nothing about names or kinds. Anything stored in it must be
  mask-resoluble: it exposes __mask__() returning a non-zero int that fits in the
  register. Catalog members implement it (composites answer with the union of their
  member bits, deprecated members with their replacement's bits).
- Testing requires a single-bit mask: a composite is never one testable bit, so
  is_set() rejects it and callers test the member bits directly.

Equality is by bit pattern. The register is mutable, so it is not hashable; use
copy() to hand out snapshots.
"""

WIDTH = 64

_LIMIT = 1 << WIDTH


def _resolve_mask(x):
    """
    Return the int mask of a mask-resoluble object, validating its shape.
    """
    if not hasattr(x, "__mask__") or not callable(x.__mask__):
        raise TypeError(f"flag-set argument must be a setting, not {type(x).__name__!r}")
    mask = x.__mask__()
    if not isinstance(mask, int) or isinstance(mask, bool):
        raise TypeError("__mask__() non-int returned")
    if not 0 < mask < _LIMIT:
        raise ValueError(f"__mask__() returned a mask outside the {WIDTH}-bit register")
    return mask


class FlagSet:
    """
    One fixed-width register of boolean settings.

    Operations
    - is_set(setting): whether the (single) bit of setting is on.
    - set(setting) / unset(setting): idempotent writes, composites expand to every member bit.
    - union(other) / `|`: bitwise OR into a new register; `|=` merges in place.
    - select(*settings): a new register keeping only the bits of the given settings.

    union() is commutative and associative and FlagSet() (all bits clear) is its identity.
    """
    __slots__ = ("_bits",)
    __hash__ = None

    def __init__(self, bits=0, /):
        if not isinstance(bits, int) or isinstance(bits, bool):
            raise TypeError("flag-set bits must be an integer")
        if not 0 <= bits < _LIMIT:
            raise ValueError(f"flag-set bits must fit in {WIDTH} unsigned bits")
        self._bits = bits

    @classmethod
    def of(cls, *settings):
        """
        Build a register with exactly the bits of the given settings set.
        """
        self = cls()
        for setting in settings:
            self.set(setting)
        return self

    @property
    def bits(self):
        return self._bits

    def is_set(self, setting, /):
        mask = _resolve_mask(setting)
        if mask.bit_count() != 1:
            raise TypeError(f"{setting!r} spans {mask.bit_count()} bits and cannot be tested as one; test its members")
        return bool(self._bits & mask)

    def set(self, setting, /):
        self._bits |= _resolve_mask(setting)

    def unset(self, setting, /):
        self._bits &= ~_resolve_mask(setting)

    def clear(self):
        self._bits = 0

    def union(self, other, /):
        if not isinstance(other, FlagSet):
            raise TypeError("union() argument must be a flag-set")
        return type(self)(self._bits | other._bits)

    def select(self, *settings):
        mask = 0
        for setting in settings:
            mask |= _resolve_mask(setting)
        return type(self)(self._bits & mask)

    def copy(self):
        return type(self)(self._bits)

    def __or__(self, other, /):
        if not isinstance(other, FlagSet):
            return NotImplemented
        return self.union(other)

    def __ior__(self, other, /):
        if not isinstance(other, FlagSet):
            return NotImplemented
        self._bits |= other._bits
        return self

    def __eq__(self, other, /):
        if not isinstance(other, FlagSet):
            return NotImplemented
        return self._bits == other._bits

    def __contains__(self, setting, /):
        return self.is_set(setting)

    def __iter__(self):
        """
        Yield the positions of the bits that are on, lowest first.
        """
        bits = self._bits
        while bits:
            lowest = bits & -bits
            yield lowest.bit_length() - 1
            bits ^= lowest

    def __len__(self):
        return self._bits.bit_count()

    def __bool__(self):
        return bool(self._bits)

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo, /):
        return self.copy()

    def __repr__(self):
        return f"{type(self).__name__}({self._bits:#x})"

    def __rich_repr__(self):
        yield "bits", hex(self._bits)
        yield "positions", tuple(self)


__all__ = (
    "WIDTH",
    "FlagSet",
)
