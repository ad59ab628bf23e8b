"""
Optional faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every failure the
  library can report. Only decoding can fail; everything else is total.
- OptionalException: base type that carries message + options and knows how to
  render itself through rich.
- DecodeError and its kinds: MalformedTextError (not JSON at all) and
  MismatchedTypeError (valid JSON that does not fit the value type).
- getdoc(): optional description lookup for a code from the host application.

Propagation
- Codecs raise these faults. The container and the serialization adapter never
  catch, classify or wrap them: a caller sees exactly what the value type's
  decoder raised standalone.

Host integration (read from __main__ when present)
- __styles__: overrides for the style table used by __rich__.
- __codes__: remaps FaultCode members to custom labels.
- __docs__: FaultCode → short documentation string.
- __prog__: program name shown in rendered headers (defaults to "optional").
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - decoding (211xx)
      • MALFORMED_TEXT, MISMATCHED_TYPE

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- decoding errors (21xxx) ---
    MALFORMED_TEXT              = 21101
    MISMATCHED_TYPE             = 21102

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class OptionalException(Exception):
    """
    base class of every fault raised by this package.

    options
    - free-form keyword context (e.g. text, position, expected, received).
      exposed read-only through `options`.
    - `colorful` (default True) and `fancy` (default False) drive __rich__.
    """
    code = None
    title = "fault"
    hint = ""

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = coalesce(message, "")
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            return Text(str(fragment), styles[style])

        header = Text.assemble(
            "[ ",
            text(getattr(main, "__prog__", "optional"), "prog-name"),
            " — ",
            text(self.code.normalize() if self.code is not None else "", "code"),
            " | ",
            text(self.title.title(), "error-title"),
            " ]"
        )
        message = text(self.message, "error-message")
        hint = Text.assemble(text(" → ", "hint-arrow"), text(self.options.get("hint", self.hint), "hint"))

        if self.options.get("fancy", False):
            return Panel(Group(message, hint), title=header, title_align="left")

        return Group(header, message, hint)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class DecodeError(OptionalException, ValueError):
    """
    text could not be decoded into the value type.
    """
    title = "decode error"


class MalformedTextError(DecodeError):
    """
    the text is not valid JSON.

    options carry `text` plus `line` and `column` of the failure, or `position`
    for bytes that are not UTF-8.
    """
    code = FaultCode.MALFORMED_TEXT
    title = "malformed text"
    hint = "send a JSON value, or null for an absent one"


class MismatchedTypeError(DecodeError):
    """
    the text is valid JSON but does not fit the value type.

    options carry `expected` (the type name), `received` (the offending input)
    and `errors` (the validation errors, outermost first).
    """
    code = FaultCode.MISMATCHED_TYPE
    title = "mismatched type"
    hint = "check the value type the optional was declared with"


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    when not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "OptionalException",
    "DecodeError",
    "MalformedTextError",
    "MismatchedTypeError",
    "FaultCode",
    "getdoc",
)
