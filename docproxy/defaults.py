"""docproxy.defaults

Centralized defaults and environment-variable helpers.

Precedence rule: args -> env var -> default.
"""

from __future__ import annotations

import os
from typing import Optional


def _env_str(name: str, default: str) -> str:
    v = os.environ.get(name)
    return v if isinstance(v, str) and v != "" else default


def _env_int(name: str, default: int) -> int:
    v = os.environ.get(name)
    if not isinstance(v, str) or v.strip() == "":
        return default
    try:
        return int(v.strip())
    except Exception:
        return default


# Env vars (library-level defaults; args still win via function parameters)
ENV_TEXT_SCHEME = "DOCPROXY_TEXT_SCHEME"
ENV_REPR_MAX_ITEMS = "DOCPROXY_REPR_MAX_ITEMS"


TEXT_SCHEME_PLAIN = "plain"
TEXT_SCHEME_RICH = "rich"


def normalize_text_scheme(v: str) -> str:
    s = (v or TEXT_SCHEME_PLAIN).strip().lower()
    if s in ("plain", "str", "string", "v2"):
        return TEXT_SCHEME_PLAIN
    if s in ("rich", "text", "v1"):
        return TEXT_SCHEME_RICH
    # Fail fast so users don't think they're in a mode they aren't.
    raise ValueError(f"{ENV_TEXT_SCHEME} must be 'plain' or 'rich'")


def resolve_text_scheme(text_scheme: Optional[str] = None) -> str:
    if text_scheme is not None:
        return normalize_text_scheme(text_scheme)
    return DEFAULT_TEXT_SCHEME


# Hard defaults (computed once at import)
DEFAULT_TEXT_SCHEME = normalize_text_scheme(_env_str(ENV_TEXT_SCHEME, TEXT_SCHEME_PLAIN))
DEFAULT_REPR_MAX_ITEMS = _env_int(ENV_REPR_MAX_ITEMS, 20)
