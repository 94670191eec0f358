#!/usr/bin/env python3
"""
Internal test to verify the import-time text scheme switch.
"""

import os
import subprocess
import sys
import unittest
from pathlib import Path


_repo_root = Path(__file__).resolve().parents[2]


def _env_with_repo_root(extra: dict) -> dict:
    env = dict(os.environ)
    pp = env.get("PYTHONPATH", "")
    parts = [p for p in pp.split(os.pathsep) if p]
    if str(_repo_root) not in parts:
        parts.insert(0, str(_repo_root))
    env["PYTHONPATH"] = os.pathsep.join(parts)
    env.update(extra)
    return env


class TestTextSchemeEnvSwitch(unittest.TestCase):
    def _run(self, code: str, env_extra: dict) -> str:
        out = subprocess.check_output(
            [sys.executable, "-c", code],
            env=_env_with_repo_root(env_extra),
            stderr=subprocess.STDOUT,
        )
        return out.decode("utf-8", errors="replace").strip()

    def test_default_is_plain(self):
        code = "from docproxy import Document; print(Document().text_scheme)"
        self.assertEqual(self._run(code, {"DOCPROXY_TEXT_SCHEME": ""}), "plain")

    def test_rich_switch(self):
        code = (
            "from docproxy import Document\n"
            "doc = Document.from_dict({'note': 'hi'})\n"
            "print(doc.text_scheme, type(doc.root.note).__name__)"
        )
        self.assertEqual(self._run(code, {"DOCPROXY_TEXT_SCHEME": "rich"}), "rich str")

    def test_aliases(self):
        code = "from docproxy.defaults import DEFAULT_TEXT_SCHEME; print(DEFAULT_TEXT_SCHEME)"
        self.assertEqual(self._run(code, {"DOCPROXY_TEXT_SCHEME": "V1"}), "rich")
        self.assertEqual(self._run(code, {"DOCPROXY_TEXT_SCHEME": "string"}), "plain")

    def test_explicit_argument_wins(self):
        code = "from docproxy import Document; print(Document(text_scheme='plain').text_scheme)"
        self.assertEqual(self._run(code, {"DOCPROXY_TEXT_SCHEME": "rich"}), "plain")

    def test_repr_limit(self):
        code = (
            "from docproxy import Document\n"
            "doc = Document.from_dict({'xs': list(range(5))})\n"
            "print(repr(doc.root.xs))"
        )
        self.assertEqual(self._run(code, {"DOCPROXY_REPR_MAX_ITEMS": "2"}), "ListProxy([0, 1, ...])")

    def test_invalid_value_fails_fast(self):
        code = "import docproxy"
        with self.assertRaises(subprocess.CalledProcessError) as ctx:
            _ = self._run(code, {"DOCPROXY_TEXT_SCHEME": "nope"})
        self.assertIn("DOCPROXY_TEXT_SCHEME must be", ctx.exception.output.decode("utf-8", errors="replace"))


if __name__ == "__main__":
    unittest.main()
