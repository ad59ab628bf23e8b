"""
Value codecs: the serializer/deserializer pair of a value type.

An Optional adds nothing to the interchange format beyond the absence token.
Everything else is delegated to a Codec, which knows how one value type is
written to and read from text.

Scope
- Codec: abstract capability pair, `encode(value) -> str` and `decode(text) -> T`.
- JSONCodec: the default codec. Encodes with the standard json module and
  decodes through a strict pydantic TypeAdapter of the value type.
- OptionalEncoder: json.JSONEncoder that writes containers (anything with a
  `__json__` hook) and dataclasses field by field.

JSONCodec decoding rules
- Not JSON, or bytes that are not UTF-8 → MalformedTextError.
- Valid JSON that does not validate against the type, at any depth → MismatchedTypeError.
- Validation is strict: no "42" for int, no true for int, but 1 is a float.
- Dataclasses are built from JSON objects (unknown keys are ignored, missing
  required keys are a mismatch); tuples and named tuples from JSON arrays.
- Optional[...] fields of a dataclass are decoded into containers: null gives
  an absent one.

Configuration
- Keyword options given to JSONCodec are forwarded to json.dumps
  (indent, separators, sort_keys, ensure_ascii, …). `cls` defaults to
  OptionalEncoder.
"""
import dataclasses
import functools
import json
import re
import typing
from abc import ABC, abstractmethod
from logging import getLogger

from pydantic import TypeAdapter, ValidationError

from .faults import MalformedTextError, MismatchedTypeError
from .utils import Unset, typename


ABSENCE = "null"
"""
Canonical JSON text of an absent value.
"""

WHITESPACE = " \t\r\n"
"""
Insignificant JSON whitespace tolerated around the absence token.
"""


def isabsent(text, /):
    """
    Return True when `text` is the absence token, ignoring surrounding whitespace.

    Accepts str, bytes or bytearray (bytes are compared as ASCII). Only space,
    tab, carriage return and newline are stripped; anything else, including
    whitespace inside the token, makes the text a regular value.

    Examples
    - isabsent("null")       -> True
    - isabsent(b"\\nnull\\t")  -> True
    - isabsent("nul l")      -> False
    - isabsent('"null"')     -> False
    """
    if isinstance(text, str):
        return text.strip(WHITESPACE) == ABSENCE
    if isinstance(text, bytes | bytearray):
        return bytes(text).strip(WHITESPACE.encode()) == ABSENCE.encode()
    raise TypeError("isabsent() argument must be str, bytes or bytearray, not %s" % type(text).__name__)


class OptionalEncoder(json.JSONEncoder):
    """
    JSON encoder that writes embedded containers field by field.

    Objects exposing `__json__()` (Optional does) are replaced by what it
    returns: None for an absent container, the value for a present one. The
    result is encoded by this same encoder, so nested containers, dataclasses
    and the usual JSON types all work.

    Example
        json.dumps({"id": 7, "name": Optional[str]()}, cls=OptionalEncoder)
        # '{"id": 7, "name": null}'
    """

    def default(self, object):
        if callable(getattr(type(object), "__json__", None)):
            return object.__json__()
        if dataclasses.is_dataclass(object) and not isinstance(object, type):
            return {field.name: getattr(object, field.name) for field in dataclasses.fields(object)}
        return super().default(object)


class Codec(ABC):
    """
    Serializer/deserializer pair for one value type.
    """

    @abstractmethod
    def encode(self, value, /):
        """
        Return the textual form of `value`.
        """

    @abstractmethod
    def decode(self, text, /):
        """
        Return the value encoded by `text`; raise on malformed input.
        """


class JSONCodec(Codec):
    """
    JSON codec validated against a value type.

    Parameters
    - type: the value type (positional-only). Omitted means Any.
    - options: forwarded to json.dumps on encode.

    Notes
    - The pydantic TypeAdapter is built on first decode, so a codec can be
      created for any type even if only encoding is ever needed.
    """

    def __init__(self, type=Unset, /, **options):
        self.type = type
        self.options = {"cls": OptionalEncoder} | options
        getLogger(__name__).debug("JSON codec for %s with options %s", typename(type), options)

    @functools.cached_property
    def adapter(self):
        return TypeAdapter(typing.Any if self.type is Unset else self.type)

    def encode(self, value, /):
        return json.dumps(value, **self.options)

    def decode(self, text, /):
        if isinstance(text, bytes | bytearray):
            try:
                text = bytes(text).decode("utf-8")
            except UnicodeDecodeError as error:
                raise MalformedTextError(
                    "invalid UTF-8 byte at position %d" % error.start,
                    text=text,
                    position=error.start,
                ) from error
        try:
            return self.adapter.validate_json(text, strict=True)
        except ValidationError as error:
            raise _fault(error, text, self.type) from error

    def __repr__(self):
        return "%s(%s)" % (type(self).__name__, typename(self.type))


def _fault(error, text, type):
    """
    Internal: translate a pydantic ValidationError into a decode fault.
    """
    errors = error.errors(include_url=False)
    first = errors[0]
    if first["type"] == "json_invalid":
        reason = first.get("ctx", {}).get("error", first["msg"])
        match = re.search(r"line (\d+) column (\d+)", reason)
        return MalformedTextError(
            reason,
            text=text,
            line=int(match[1]) if match else None,
            column=int(match[2]) if match else None,
        )
    where = ".".join(map(str, first["loc"]))
    return MismatchedTypeError(
        "cannot decode into %s: %s%s" % (typename(type), first["msg"].lower(), " at " + where if where else ""),
        expected=typename(type),
        received=first["input"],
        errors=errors,
    )


@functools.cache
def default_codec(type=Unset, /):
    """
    Shared JSONCodec for a value type (one instance per type, without options).
    """
    return JSONCodec(type)


__all__ = (
    "Codec",
    "JSONCodec",
    "OptionalEncoder",
    "default_codec",
    "isabsent",
    "ABSENCE",
    "WHITESPACE",
)
