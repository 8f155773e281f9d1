from __future__ import annotations

import re


_INVALID_NAME_CHARS = re.compile(r"[<>:\"/\\|?*\x00-\x1F]")
_RESERVED_NAMES = {
    "CON",
    "PRN",
    "AUX",
    "NUL",
    *(f"COM{i}" for i in range(1, 10)),
    *(f"LPT{i}" for i in range(1, 10)),
}


def resolve_path(key: str) -> tuple[str, ...]:
    """Split a dotted key into path segments.

    ``" app . display name "`` becomes ``("app", "display_name")``. An empty
    key yields a single empty segment.
    """
    return tuple(part.strip().replace(" ", "_") for part in key.strip().split("."))


def normalize_profile_name(name: str) -> str:
    return name.strip()


def is_valid_profile_name(name: str) -> bool:
    text = normalize_profile_name(name)
    if not text or text in {".", ".."}:
        return False
    if _INVALID_NAME_CHARS.search(text):
        return False
    return text.upper() not in _RESERVED_NAMES
