"""
Tests for the serialization adapter.

Scope
- dumps(): absence token for absent containers, codec output untouched otherwise.
- loads()/load()/unmarshal(): whitespace-tolerant absence, decoding through the
  codec, unwrapped error propagation, tolerance of a missing target.
- OptionalEncoder: containers embedded in larger JSON structures.
"""
import json
import unittest
from dataclasses import dataclass
from unittest import TestCase

from optional import (
    Codec,
    DecodeError,
    JSONCodec,
    MalformedTextError,
    MismatchedTypeError,
    Optional,
    OptionalEncoder,
    dumps,
    load,
    loads,
)


class Refused(Exception):
    pass


class AngleCodec(Codec):
    """Toy codec writing <value> and refusing anything it cannot read back."""

    def encode(self, value, /):
        return "<%s>" % value

    def decode(self, text, /):
        text = text.strip()
        if not (text.startswith("<") and text.endswith(">")):
            raise Refused(text)
        return text[1:-1]


@dataclass
class Record:
    id: int
    name: Optional


class TestDumps(TestCase):
    """Serializing containers."""

    def testAbsentIsNull(self):
        self.assertEqual(dumps(Optional[int]()), "null")
        self.assertEqual(dumps(Optional()), "null")
        self.assertEqual(Optional[str]().marshal(), "null")

    def testPresentDelegatesToCodec(self):
        self.assertEqual(dumps(Optional[int](42)), "42")
        self.assertEqual(dumps(Optional("x")), '"x"')
        self.assertEqual(dumps(Optional[list[int]]([1, 2])), "[1, 2]")

    def testCustomCodecOutputIsUnchanged(self):
        self.assertEqual(dumps(Optional("x"), AngleCodec()), "<x>")
        self.assertEqual(dumps(Optional(), AngleCodec()), "null")

    def testCodecOptions(self):
        self.assertEqual(dumps(Optional({"b": 1, "a": 2}), JSONCodec(dict, sort_keys=True)), '{"a": 2, "b": 1}')

    def testRejectsNonOptional(self):
        with self.assertRaises(TypeError):
            dumps(42)


class TestLoads(TestCase):
    """Deserializing into new containers."""

    def testNullVariantsAreAbsent(self):
        for text in ("null", " null ", "\nnull\t", b"null", b"\r\nnull "):
            with self.subTest(text=text):
                o = loads(text, int)
                self.assertTrue(o.is_empty())
                self.assertEqual(o.get(), (0, False))

    def testValue(self):
        o = loads("42", int)
        self.assertIs(type(o), Optional[int])
        self.assertEqual(o.get(), (42, True))
        self.assertEqual(dumps(o), "42")

    def testUntyped(self):
        o = loads('{"a": [1, null]}')
        self.assertIs(type(o), Optional)
        self.assertEqual(o.get(), ({"a": [1, None]}, True))

    def testQuotedNullIsAString(self):
        self.assertEqual(loads('"null"', str).get(), ("null", True))

    def testInnerWhitespaceIsNotAbsence(self):
        with self.assertRaises(MalformedTextError):
            loads("nu ll", int)

    def testMalformedInput(self):
        with self.assertRaises(DecodeError) as wrapped:
            loads("not-a-number", int)
        with self.assertRaises(DecodeError) as standalone:
            JSONCodec(int).decode("not-a-number")
        self.assertIsInstance(wrapped.exception, MalformedTextError)
        self.assertIs(type(wrapped.exception), type(standalone.exception))
        self.assertEqual(str(wrapped.exception), str(standalone.exception))

    def testInvalidUtf8Input(self):
        with self.assertRaises(MalformedTextError) as context:
            loads(b"\xff\xfe1", int)
        self.assertIsInstance(context.exception.__cause__, UnicodeDecodeError)
        self.assertEqual(context.exception.options["position"], 0)

    def testMismatchedInput(self):
        with self.assertRaises(MismatchedTypeError):
            loads('"forty-two"', int)

    def testEmbeddedContainers(self):
        o = loads('{"id": 1, "name": null}', Record)
        record, present = o.get()
        self.assertTrue(present)
        self.assertIs(type(record.name), Optional)
        self.assertTrue(record.name.is_empty())
        self.assertEqual(dumps(o), '{"id": 1, "name": null}')

        record.name.set("n")
        self.assertEqual(dumps(o), '{"id": 1, "name": "n"}')
        self.assertEqual(loads(dumps(o), Record).get()[0].name.get(), ("n", True))

    def testCustomCodecErrorIsNotWrapped(self):
        with self.assertRaises(Refused) as context:
            loads("plain", str, AngleCodec())
        self.assertEqual(context.exception.args, ("plain",))
        self.assertIsNone(context.exception.__cause__)

    def testCustomCodecRoundTrip(self):
        o = loads(" <x> ", str, AngleCodec())
        self.assertEqual(o.get(), ("x", True))
        self.assertEqual(dumps(o, AngleCodec()), "<x>")

    def testRoundTrips(self):
        for text, kind in (("null", int), ("0", int), ('"a"', str), ("[1, 2]", list[int]), ("1.5", float)):
            with self.subTest(text=text):
                self.assertEqual(dumps(loads(text, kind)), text)


class TestLoad(TestCase):
    """Deserializing into existing containers."""

    def testNullUnsetsPresentContainer(self):
        o = Optional[int](5)
        load(o, " null\n")
        self.assertEqual(o.get(), (0, False))

    def testValueSetsAbsentContainer(self):
        o = Optional[int]()
        load(o, "7")
        self.assertEqual(o.get(), (7, True))

    def testUnmarshalMethod(self):
        o = Optional[str]()
        o.unmarshal('"hello"')
        self.assertEqual(o.get(), ("hello", True))
        o.unmarshal("null")
        self.assertEqual(o.get(), ("", False))

    def testFailureLeavesContainerUntouched(self):
        o = Optional[int](5)
        with self.assertRaises(MismatchedTypeError):
            o.unmarshal('"x"')
        self.assertEqual(o.get(), (5, True))

    def testMissingTargetIsANoOp(self):
        with self.assertLogs("optional.serialization", level="DEBUG") as logs:
            self.assertIsNone(load(None, "42"))
            self.assertIsNone(load(None, "not-a-number"))
        self.assertEqual(len(logs.records), 2)

    def testPresentTargetIsNotLogged(self):
        o = Optional[int](5)
        with self.assertNoLogs("optional.serialization", level="DEBUG"):
            load(o, " null ")
            load(o, "3")
        self.assertEqual(o.get(), (3, True))

    def testRejectsNonOptionalTarget(self):
        with self.assertRaises(TypeError):
            load([], "42")


class TestOptionalEncoder(TestCase):
    """Containers embedded in structures."""

    def testMapping(self):
        text = json.dumps({"a": Optional(1), "b": Optional[int]()}, cls=OptionalEncoder)
        self.assertEqual(text, '{"a": 1, "b": null}')

    def testNested(self):
        text = json.dumps([Optional(Optional("x")), Optional([Optional()])], cls=OptionalEncoder)
        self.assertEqual(text, '["x", [null]]')

    def testDataclassFields(self):
        self.assertEqual(
            json.dumps(Record(1, Optional[str]()), cls=OptionalEncoder),
            '{"id": 1, "name": null}'
        )
        self.assertEqual(
            json.dumps(Record(2, Optional[str]("n")), cls=OptionalEncoder),
            '{"id": 2, "name": "n"}'
        )

    def testUnsupportedObjectsStillFail(self):
        with self.assertRaises(TypeError):
            json.dumps({"a": object()}, cls=OptionalEncoder)


if __name__ == '__main__':
    unittest.main()
