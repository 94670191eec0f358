#!/usr/bin/env python3
"""
Console example: build a small document through views, then read its history.

Runs entirely in-process on the MemoryEngine; no other services are needed.

Resolution order for the text scheme:
- CLI args override all
- else environment variable (DOCPROXY_TEXT_SCHEME)
- else "plain"
"""

import argparse
import json
import logging
from typing import Optional

from docproxy import Counter, Document, DocProxyError, Text


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(description="Edit a small document through docproxy views.")
    parser.add_argument(
        "--text-scheme", "-s",
        default=None,
        choices=["plain", "rich"],
        help="How strings are stored. Default: DOCPROXY_TEXT_SCHEME or plain.",
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Log engine commits and rejected writes.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)

    doc1 = Document.from_dict({"birds": ["goldfinch"], "sightings": Counter(0)}, text_scheme=args.text_scheme)

    def add_birds(root):
        root.birds.push("greenfinch", "chaffinch")
        root.sightings.increment(3)
        if doc1.text_scheme == "rich":
            root.notes = Text(list("seen at dawn ") + [{"place": "hedge"}])
        else:
            root.notes = "seen at dawn"

    doc2 = doc1.change(add_birds, message="morning walk")

    print("before:", json.dumps(doc1.to_dict()))
    print("after: ", json.dumps(doc2.to_dict(), default=str))
    print("finches:", doc2.root.birds.join(", "))

    try:
        doc1.change(lambda root: root.birds.push("robin"))
    except DocProxyError as e:
        print(f"old version rejected the change ({e.category.value}): {e}")
        return 0
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
