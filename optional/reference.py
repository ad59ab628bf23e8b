"""
References: the pointer analogue handed out and accepted by Optional.

This module defines `Reference`, a mutable cell with a single `value` slot.
Python has no address-of operator, so a container that must "return a pointer
to a copy" returns a fresh Reference instead, and a container "built from a
pointer" reads the handle stored in one. None plays the null reference.

Semantics
- A Reference stores a handle, not a copy of the object behind it. Rebinding
  `ref.value` replaces the handle inside this cell only; mutating the object
  reachable through `ref.value` is seen by every other holder of that handle.
- No deep copy is ever taken. Immutable objects (int, str, tuple, NamedTuple,
  frozen dataclasses) therefore behave as values, while lists, dicts, queues,
  callables and other mutable objects behave as shared resources.

Example
    >>> ref = Reference(5)
    >>> ref.value = 6
    >>> ref
    Reference(6)
"""
from rich.text import Text


class Reference:
    """
    A mutable single-slot cell.

    Notes
    - There is no equality beyond identity: two References holding the same
      value are two different cells.
    - `Reference()` holds None; there is no "empty" reference, use None instead.
    """

    __slots__ = ("value",)

    def __init__(self, value=None, /):
        self.value = value

    def __class_getitem__(cls, item, /):
        """
        Allow `Reference[int]` in annotations and at runtime.
        """
        return __import__("types").GenericAlias(cls, item)

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, self.value)

    def __rich__(self):
        """
        Rich protocol hook: render as &<value>, with a highlighted ampersand.
        """
        return Text.assemble(("&", "bold cyan"), repr(self.value))


__all__ = (
    "Reference",
)
