#!/usr/bin/env python3
"""Offline tests for counters, detached and bound to a view.

Run:
  python3 -m unittest examples.unittests.test_counter -v
"""

import sys
import unittest
from pathlib import Path

# Allow running this file directly without installing the package.
_repo_root = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(_repo_root))

from docproxy import (
    Counter,
    Document,
    DocumentEngineError,
    EngineError,
    FrozenDocumentError,
    MemoryEngine,
    WriteableCounter,
    root_proxy,
)


class TestCounterValue(unittest.TestCase):
    def test_behaves_like_its_value(self):
        c = Counter(3)
        self.assertEqual(c, 3)
        self.assertEqual(c.value, 3)
        self.assertEqual(c + 1, 4)
        self.assertEqual(10 - c, 7)
        self.assertTrue(c > 2)
        self.assertEqual(int(c), 3)
        self.assertEqual(hash(c), hash(3))
        self.assertEqual(str(c), "3")
        self.assertEqual(repr(c), "Counter(3)")
        self.assertFalse(Counter())

    def test_rejects_non_integers(self):
        with self.assertRaises(TypeError):
            Counter(1.5)
        with self.assertRaises(TypeError):
            Counter(True)


class TestBoundCounter(unittest.TestCase):
    def test_increment_goes_to_engine(self):
        engine = MemoryEngine()
        root = root_proxy(engine, "plain")
        root.visits = Counter(1)
        visits = root.visits
        self.assertIsInstance(visits, WriteableCounter)
        self.assertEqual(visits.increment(), 2)
        self.assertEqual(visits.increment(5), 7)
        self.assertEqual(visits.decrement(2), 5)
        self.assertEqual(engine.ops[-1].action, "increment")
        self.assertEqual(root_proxy(engine, "plain").visits, 5)
        self.assertEqual(visits.path, ("visits",))

    def test_increment_after_key_was_overwritten(self):
        engine = MemoryEngine()
        root = root_proxy(engine, "plain")
        root.visits = Counter(1)
        visits = root.visits
        root.visits = 5
        with self.assertRaises(DocumentEngineError) as ctx:
            visits.increment()
        self.assertIsInstance(ctx.exception.__cause__, EngineError)
        self.assertEqual(ctx.exception.path, ("visits",))
        self.assertIn("increment() failed at visits", str(ctx.exception))
        self.assertEqual(visits, 1)
        self.assertEqual(root.visits, 5)

    def test_counter_in_list(self):
        engine = MemoryEngine()
        root = root_proxy(engine, "plain")
        root.tallies = [Counter(0), Counter(10)]
        root.tallies[1].increment(3)
        self.assertEqual(root.tallies.to_list(), [0, 13])

    def test_readonly_view_gives_snapshot(self):
        engine = MemoryEngine()
        root_proxy(engine, "plain").visits = Counter(4)
        visits = root_proxy(engine, "plain", readonly=True).visits
        self.assertIs(type(visits), Counter)
        self.assertFalse(hasattr(visits, "increment"))

    def test_increment_after_freeze(self):
        held = []
        doc = Document(text_scheme="plain").change(lambda root: root.update({"visits": Counter(0)}))
        doc.change(lambda root: held.append(root.visits))
        ops_before = len(doc.engine.ops)
        with self.assertRaises(FrozenDocumentError):
            held[0].increment()
        self.assertEqual(len(doc.engine.ops), ops_before)


if __name__ == "__main__":
    unittest.main()
