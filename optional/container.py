"""
The optional-value container.

This module defines `Optional`, a container that tells "a value is present"
apart from "no value is present" without borrowing a value of the held type as
a marker. `Optional[int](0)` holds zero, `Optional[str]("")` holds the empty
string and `Optional(None)` holds None; all three are present.

State
- Two slots: `_present` (the discriminant) and `_value`.
- `_present` is the only source of truth for emptiness.
- While absent, `_value` holds a fresh default representation of the value type
  (see utils.zero), never a stale value.

Parameterization
- `Optional[int]` is a cached subclass of Optional whose `__type__` is int. It
  decides what an absent container keeps in its slot (0) and which codec reads
  and writes the value (JSONCodec(int)).
- Bare `Optional` behaves like `Optional[Any]`: its default representation is None.

Construction
    >>> Optional(5)
    Optional(5)
    >>> Optional[int]()
    Optional[int](null)
    >>> Optional[int].from_reference(None)
    Optional[int](null)

References and shallow copies (sharp edge)
- `to_reference()` returns a new Reference per call, and `from_reference()`
  reads the handle stored in one. Both copy the handle, never the object.
- For immutable values (int, str, tuple, frozen dataclasses) the container and
  the reference are fully independent.
- For mutable values (list, dict, queue.Queue, callables, any object with
  state) both designate the same object: mutating it through `ref.value` is
  visible through `get()`, but rebinding `ref.value` to another object is not.
- No deep copy is taken anywhere. Do not add one: code that shares a buffer
  through a reference relies on seeing its writes.

    >>> items = Optional([1, 2, 3])
    >>> ref = items.to_reference()
    >>> ref.value[0] = 99
    >>> items.get()
    ([99, 2, 3], True)
    >>> ref.value = []
    >>> items.get()
    ([99, 2, 3], True)

Embedding
- As a dataclass field, a container is written by OptionalEncoder through
  `__json__` and read back by JSONCodec through the pydantic hook: null
  gives an absent container, anything else a present one.

Concurrency
- The container has no internal locking. Guard shared instances externally.
"""
import builtins
import functools
import typing

from pydantic_core import core_schema
from rich.text import Text

from .codecs import ABSENCE, default_codec, isabsent
from .reference import Reference
from .utils import Unset, coalesce, typename, zero


class Optional:
    """
    A value slot plus a presence flag.

    Notes
    - No equality, ordering or truthiness is defined: compare `get()` results
      instead. `bool(Optional[int](0))` would otherwise be ambiguous.
    - Calling the class with no argument yields an absent container; `empty()`
      only spells the same thing out.
    """

    __slots__ = ("_value", "_present")
    __type__ = Unset

    def __init__(self, value=Unset, /):
        if value is Unset:
            self._present = False
            self._value = zero(self.__type__)
        else:
            self._present = True
            self._value = value

    def __class_getitem__(cls, type, /):
        """
        Return the subclass of `cls` bound to the value type `type`.

        The same subclass is returned for the same (cls, type) pair, so
        `Optional[int] is Optional[int]`.
        """
        if cls.__type__ is not Unset:
            raise TypeError("%s is already parameterized" % cls.__name__)
        return _parameterize(cls, type)

    @classmethod
    def of(cls, value, /):
        """
        Present container holding `value`.
        """
        return cls(value)

    @classmethod
    def empty(cls):
        """
        Absent container; same as calling the class with no argument.
        """
        return cls()

    @classmethod
    def from_reference(cls, reference, /):
        """
        Build a container from a Reference, or from None.

        - None → absent.
        - Reference → present, holding the handle currently stored in
          `reference.value`. Rebinding `reference.value` afterwards does not
          affect the container; mutating the object it designates does.
        """
        if reference is None:
            return cls()
        return cls(reference.value)

    def is_empty(self):
        return not self._present

    def get(self):
        """
        Return `(value, True)` when present, `(default representation, False)` otherwise.
        """
        return self._value, self._present

    def to_reference(self):
        """
        Return a new Reference to the held value, or None when absent.

        Every call allocates a distinct Reference. Assigning to its `value`
        never changes this container, and `set()` on this container never
        changes a Reference issued before.
        """
        if not self._present:
            return None
        return Reference(self._value)

    def or_(self, default, /):
        """
        Return the held value, or `default` itself when absent.
        """
        if not self._present:
            return default
        return self._value

    def set(self, value, /):
        self._present = True
        self._value = value

    def unset(self):
        """
        Become absent and reset the slot to the default representation.
        """
        self._present = False
        self._value = zero(self.__type__)

    def marshal(self, codec=Unset, /):
        """
        Return the JSON text of this container.

        Absent → "null". Present → whatever the codec produces for the value,
        unchanged. The codec defaults to the shared JSONCodec of the value type.
        """
        if not self._present:
            return ABSENCE
        return coalesce(codec, default_codec(self.__type__)).encode(self._value)

    def unmarshal(self, text, codec=Unset, /):
        """
        Decode `text` into this container, in place.

        Text equal to "null" once surrounding space, tab, CR and LF are stripped
        makes the container absent. Any other text goes to the codec: on success
        the container holds the decoded value, on failure the codec's exception
        propagates unchanged and the container is left as it was.
        """
        if isabsent(text):
            self.unset()
            return
        self.set(coalesce(codec, default_codec(self.__type__)).decode(text))

    def __json__(self):
        """
        Embedding hook for OptionalEncoder: None when absent, the value otherwise.
        """
        if not self._present:
            return None
        return self._value

    @classmethod
    def __get_pydantic_core_schema__(cls, source, handler, /):
        """
        Pydantic hook: decode a JSON field of this type into a container.

        JSON null gives an absent container, any other value is validated
        against the value type and wrapped. Python input may also be a
        container already.
        """
        inner = handler.generate_schema(typing.Any if cls.__type__ is Unset else cls.__type__)
        wrapped = core_schema.no_info_after_validator_function(
            lambda value: cls() if value is None else cls(value),
            core_schema.nullable_schema(inner),
        )
        return core_schema.json_or_python_schema(
            json_schema=wrapped,
            python_schema=core_schema.union_schema([core_schema.is_instance_schema(cls), wrapped]),
            serialization=core_schema.plain_serializer_function_ser_schema(lambda optional: optional.__json__()),
        )

    def __reduce__(self):
        # Parameterized subclasses are built on the fly and cannot be found by name.
        if "__generic__" in type(self).__dict__:
            return _restore, (type(self).__generic__, self.__type__, self._present, self._value)
        return _restore, (type(self), Unset, self._present, self._value)

    def __repr__(self):
        if not self._present:
            return "%s(%s)" % (type(self).__name__, ABSENCE)
        return "%s(%r)" % (type(self).__name__, self._value)

    def __rich__(self):
        """
        Rich protocol hook: the value in plain text, or a dim null when absent.
        """
        if not self._present:
            return Text.assemble((type(self).__name__, "bold"), "(", (ABSENCE, "dim"), ")")
        return Text.assemble((type(self).__name__, "bold"), "(", repr(self._value), ")")


@functools.cache
def _parameterize(cls, type, /):
    """
    Internal: build (once) the subclass of `cls` bound to `type`.
    """
    name = "%s[%s]" % (cls.__name__, typename(type))
    return builtins.type(name, (cls,), {
        "__slots__": (),
        "__module__": cls.__module__,
        "__qualname__": name,
        "__type__": type,
        "__generic__": cls,
    })


def _restore(generic, type, present, value, /):
    """
    Internal: pickle support, rebuild a container from its parts.
    """
    kind = generic if type is Unset else generic[type]
    return kind(value) if present else kind()


__all__ = (
    "Optional",
)
