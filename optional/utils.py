"""
Optional utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the container, the codecs, and the
  serialization adapter.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “argument not provided” without conflating it
    with None. `Optional()` and `Optional(None)` must mean different things: the
    first is absent, the second holds None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values
    like None/0/""/[].

- zero(type)
  • The default representation of a value type: what an absent container keeps
    in its slot.

- typename(type)
  • Short, readable name of a value type for reprs and messages.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce(None, "fallback") is None
    True
    >>> zero(int), zero(list[str]), zero(int | None)
    (0, [], None)
    >>> typename(dict[str, int])
    'dict[str, int]'
"""
import builtins
import dataclasses
import functools
import typing
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing an argument that was not provided.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Non-subclassable: this type is sealed; do not subclass.
    - Singleton per process: UnsetType() always yields the same instance.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in annotations (e.g., int | UnsetType).
        """
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        """
        Support reversed PEP 604 unions when UnsetType appears on the right.
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        """
        Ensure a single instance for this sentinel type.
        """
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __reduce__(self):
        # Pickle and copy resolve back to the module-level singleton.
        return "Unset"

    def __init_subclass__(cls, **options):
        """
        Disallow subclassing to preserve sentinel semantics.
        """
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Returns the given object unless it is Unset, in which case `default` is
    returned. Falsey values like None, 0, "" or [] are preserved as-is; they are
    values, not absences.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


VALUE_TYPES = frozenset((bool, int, float, complex, str, bytes, bytearray, tuple, list, dict, set, frozenset))
"""
Builtin value types whose no-argument call is their zero value.
"""


def zero(type, /):
    """
    Return a fresh default representation of `type`.

    Rules
    - Builtin value types (int → 0, str → "", bytes → b"", list → [], …) → type().
    - Parameterized builtins (list[int], dict[str, int], …) → origin() (an empty container).
    - Dataclasses whose init fields all have a default or a default factory → type().
    - Anything else → None: typing.Any, unions, Literal, TypeVar, dataclasses
      with required fields, and arbitrary classes, whose constructor may
      validate, raise or acquire a resource.

    A new object is built on every call, so two absent containers never share
    a mutable default.
    """
    type = typing.get_origin(type) or type
    if type in VALUE_TYPES:
        return type()
    if isinstance(type, builtins.type) and dataclasses.is_dataclass(type):
        for field in dataclasses.fields(type):
            if field.init and field.default is dataclasses.MISSING and field.default_factory is dataclasses.MISSING:
                return None
        return type()
    return None


def typename(type, /):
    """
    Readable name of a value type (`int`, `list[int]`, `Any`, `int | None`).
    """
    if type is Unset or type is typing.Any:
        return "Any"
    if isinstance(type, builtins.type) and typing.get_origin(type) is None:
        return type.__qualname__
    return repr(type).removeprefix("typing.")


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Use Unset as a default when None is a valid, user-meaningful value but you still
need to distinguish “no input” from “explicitly passed None”.
"""


__all__ = (
    # Functions
    "coalesce",
    "zero",
    "typename",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
