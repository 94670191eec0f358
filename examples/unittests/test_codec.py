#!/usr/bin/env python3
"""Offline tests for value classification and decoding.

Run:
  python3 -m unittest examples.unittests.test_codec -v
"""

import datetime as dt
import sys
import unittest
from pathlib import Path

# Allow running this file directly without installing the package.
_repo_root = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(_repo_root))

from docproxy import (
    F64,
    AliasingError,
    Counter,
    Datatype,
    DocumentEngine,
    DocumentEngineError,
    ErrorCategory,
    Int,
    MemoryEngine,
    RawString,
    TaggedValue,
    Text,
    Uint,
    UnsupportedTypeError,
    root_proxy,
)
from docproxy.codec import encode_value


class TestEncodeValue(unittest.TestCase):
    def test_scalars(self):
        cases = [
            (None, TaggedValue(None, Datatype.NULL)),
            (True, TaggedValue(True, Datatype.BOOLEAN)),
            (False, TaggedValue(False, Datatype.BOOLEAN)),
            (3, TaggedValue(3, Datatype.INT)),
            (3.0, TaggedValue(3, Datatype.INT)),
            (2.5, TaggedValue(2.5, Datatype.F64)),
            (Uint(3), TaggedValue(3, Datatype.UINT)),
            (Int(-3), TaggedValue(-3, Datatype.INT)),
            (F64(1), TaggedValue(1.0, Datatype.F64)),
            (Counter(4), TaggedValue(4, Datatype.COUNTER)),
            (b"\x00\x01", TaggedValue(b"\x00\x01", Datatype.BYTES)),
            (bytearray(b"ab"), TaggedValue(b"ab", Datatype.BYTES)),
            (RawString("raw"), TaggedValue("raw", Datatype.STR)),
        ]
        for value, expected in cases:
            with self.subTest(value=value):
                self.assertEqual(encode_value(value, "plain"), expected)

    def test_bool_is_not_int(self):
        self.assertIs(encode_value(True, "plain").datatype, Datatype.BOOLEAN)

    def test_timestamp_is_epoch_millis(self):
        when = dt.datetime(2024, 1, 2, 3, 4, 5, 123000, tzinfo=dt.timezone.utc)
        tv = encode_value(when, "plain")
        self.assertEqual(tv.datatype, Datatype.TIMESTAMP)
        self.assertEqual(tv.value, int(when.timestamp()) * 1000 + 123)

    def test_timestamp_needs_aware_whole_millis(self):
        with self.assertRaises(UnsupportedTypeError):
            encode_value(dt.datetime(2024, 1, 2, 3, 4, 5, 123000), "plain")
        with self.assertRaises(UnsupportedTypeError):
            encode_value(dt.datetime(2024, 1, 2, 3, 4, 5, 123456, tzinfo=dt.timezone.utc), "plain")

    def test_str_depends_on_text_scheme(self):
        self.assertEqual(encode_value("hi", "plain").datatype, Datatype.TEXT)
        self.assertEqual(encode_value("hi", "rich").datatype, Datatype.STR)

    def test_text_container(self):
        self.assertEqual(encode_value(Text("ab"), "rich").datatype, Datatype.TEXT)
        with self.assertRaises(UnsupportedTypeError):
            encode_value(Text("ab"), "plain")

    def test_composites(self):
        self.assertEqual(encode_value([1, 2], "plain"), TaggedValue([1, 2], Datatype.LIST))
        self.assertEqual(encode_value((1, 2), "plain"), TaggedValue([1, 2], Datatype.LIST))
        self.assertEqual(encode_value({"a": 1}, "plain").datatype, Datatype.MAP)

    def test_unsupported(self):
        for value in (set([1]), object(), 1j):
            with self.subTest(value=value):
                with self.assertRaises(UnsupportedTypeError) as ctx:
                    encode_value(value, "plain")
                self.assertEqual(ctx.exception.category, ErrorCategory.TYPE)
                self.assertIsInstance(ctx.exception, TypeError)

    def test_view_is_rejected(self):
        root = root_proxy(MemoryEngine(), "plain")
        root.a = {"x": 1}
        with self.assertRaises(AliasingError):
            encode_value(root.a, "plain")

    def test_deep_check_finds_nested_problems(self):
        root = root_proxy(MemoryEngine(), "plain")
        root.a = {"x": 1}
        bad = {"outer": [1, {"inner": object()}]}
        self.assertEqual(encode_value(bad, "plain").datatype, Datatype.MAP)
        with self.assertRaises(UnsupportedTypeError):
            encode_value(bad, "plain", deep=True)
        with self.assertRaises(UnsupportedTypeError):
            encode_value({1: "not a str key"}, "plain", deep=True)
        with self.assertRaises(AliasingError):
            encode_value({"ref": root.a}, "plain", deep=True)


class TestRoundTrip(unittest.TestCase):
    def test_scalars_read_back_equal(self):
        when = dt.datetime(2024, 5, 6, 7, 8, 9, 250000, tzinfo=dt.timezone.utc)
        cases = [
            (0, 0),
            (-5, -5),
            (Int(3), 3),
            (Uint(7), 7),
            (2.5, 2.5),
            (F64(2.0), 2.0),
            ("hello", "hello"),
            (True, True),
            (None, None),
            (when, when),
            (b"\x00\x01", b"\x00\x01"),
        ]
        for scheme in ("plain", "rich"):
            root = root_proxy(MemoryEngine(), scheme)
            for value, expected in cases:
                with self.subTest(scheme=scheme, value=value):
                    root.v = value
                    self.assertEqual(root.v, expected)

    def test_timestamps_read_back_as_the_same_instant(self):
        engine = MemoryEngine()
        root = root_proxy(engine, "plain")
        plus_two = dt.timezone(dt.timedelta(hours=2))
        when = dt.datetime(1969, 12, 31, 23, 59, 59, 999000, tzinfo=plus_two)
        root.t = when
        self.assertEqual(root.t, when)
        self.assertEqual(root.t.tzinfo, dt.timezone.utc)
        with self.assertRaises(UnsupportedTypeError):
            root.naive = dt.datetime(2024, 1, 2, 3, 4, 5, 123000)
        with self.assertRaises(UnsupportedTypeError):
            root.fine = dt.datetime(2024, 1, 2, 3, 4, 5, 123456, tzinfo=dt.timezone.utc)
        self.assertEqual(sorted(root), ["t"])

    def test_uint_keeps_its_tag_in_the_engine(self):
        engine = MemoryEngine()
        root = root_proxy(engine, "plain")
        root.n = Uint(9)
        self.assertEqual(engine.get("_root", "n"), ("uint", 9))
        root.f = F64(1)
        self.assertEqual(engine.get("_root", "f"), ("f64", 1.0))


class _OddEngine(DocumentEngine):
    def get(self, obj, prop, heads=None):
        return ("mystery", 1)

    def put(self, obj, prop, value, datatype):
        raise RuntimeError("disk on fire")


class TestDecodeErrors(unittest.TestCase):
    def test_unknown_datatype(self):
        root = root_proxy(_OddEngine(), "plain")
        with self.assertRaises(UnsupportedTypeError) as ctx:
            root["x"]
        self.assertIn("mystery", str(ctx.exception))

    def test_engine_errors_are_wrapped_with_path(self):
        root = root_proxy(_OddEngine(), "plain")
        with self.assertRaises(DocumentEngineError) as ctx:
            root.x = 1
        self.assertIsInstance(ctx.exception.__cause__, RuntimeError)
        self.assertIn("put()", str(ctx.exception))
        self.assertIn("<root>", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
