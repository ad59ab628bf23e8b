"""
Serialization adapter: Optional ↔ JSON text.

The wire contract
- Absent  ⇔ the JSON token `null`. On input the token may be surrounded by
  space, tab, carriage return and newline.
- Present ⇔ whatever the value type's codec writes, unmodified. There is no
  envelope and no tag.
- Round trip: dumps(loads(text)) is equivalent to text for every text that
  decodes.

Entry points
- dumps(optional, codec=...)           -> str
- loads(text, type=..., codec=...)     -> Optional[type]
- load(target, text, codec=...)        -> decode into an existing container
- OptionalEncoder                      -> json.JSONEncoder for structures that
                                          embed containers as fields

Errors
- Only decoding fails, and only with what the codec raises (MalformedTextError
  and MismatchedTypeError for JSONCodec). Nothing here catches or wraps them.

Examples
    >>> dumps(Optional[int]())
    'null'
    >>> loads(" 42 ", int).get()
    (42, True)
    >>> import json
    >>> json.dumps({"a": Optional(1), "b": Optional()}, cls=OptionalEncoder)
    '{"a": 1, "b": null}'
"""
from logging import getLogger

from .codecs import OptionalEncoder, isabsent
from .container import Optional
from .utils import Unset


def dumps(optional, codec=Unset, /):
    """
    Return the JSON text of `optional`; "null" when it is absent.
    """
    if not isinstance(optional, Optional):
        raise TypeError("dumps() argument must be an Optional, not %s" % type(optional).__name__)
    return optional.marshal(codec)


def loads(text, type=Unset, codec=Unset, /):
    """
    Decode `text` into a new container of value type `type` (Any when omitted).
    """
    optional = Optional() if type is Unset else Optional[type]()
    optional.unmarshal(text, codec)
    return optional


def load(target, text, codec=Unset, /):
    """
    Decode `text` into the existing container `target`, in place.

    A None target is tolerated: nothing is decoded and nothing is raised, so a
    structure with an unallocated field never takes its caller down.
    """
    if target is None:
        getLogger(__name__).debug("Decoding into a missing container ignored: %.40r", text)
        return
    if not isinstance(target, Optional):
        raise TypeError("load() target must be an Optional, not %s" % type(target).__name__)
    target.unmarshal(text, codec)


__all__ = (
    "dumps",
    "loads",
    "load",
    "isabsent",
    "OptionalEncoder",
)
