"""
annotator/filenames.py

Map label text to output filename stems and keep stems unique per run.
"""

from __future__ import annotations

import re
from typing import Set

from models import COLLISION_POLICIES, FilenameCollisionError, FilenameError

_WHITESPACE = re.compile(r"\s")
_RESERVED = set('/\\<>:"|?*\0')


def derive_base_name(label: str) -> str:
    """Derive the output filename stem for *label*.

    All whitespace is removed, then only the first ``&``.

    >>> derive_base_name("Misaka Mikoto")
    'MisakaMikoto'
    >>> derive_base_name("A & B & C")
    'AB&C'
    """
    return _WHITESPACE.sub("", label).replace("&", "", 1)


def validate_base_name(base: str) -> str:
    """Reject stems that cannot be used as a single path component.

    Raises:
        FilenameError: If *base* is empty, a dot entry, or contains a
            path separator or another reserved character.
    """
    if base in ("", ".", ".."):
        raise FilenameError(f"Cannot derive a filename from {base!r}")
    bad = sorted(set(base) & _RESERVED)
    if bad:
        raise FilenameError(
            f"Filename {base!r} contains reserved characters: {' '.join(repr(c) for c in bad)}"
        )
    return base


class OutputNamer:
    """Hand out unique output stems for one run.

    Policies:
        ``suffix``: a repeated stem becomes ``stem-2``, ``stem-3``, ...
        ``error``: a repeated stem raises :class:`FilenameCollisionError`.
        ``overwrite``: a repeated stem is returned unchanged and the later
        output replaces the earlier one.
    """

    def __init__(self, policy: str = "suffix"):
        if policy not in COLLISION_POLICIES:
            raise ValueError(f"Unknown collision policy: {policy!r}")
        self.policy = policy
        self._used: Set[str] = set()

    def claim(self, label: str) -> str:
        """Return the stem to use for *label* and mark it as used."""
        base = validate_base_name(derive_base_name(label))
        # Case-folded so "Bob" and "bob" collide on case-insensitive filesystems.
        key = base.casefold()
        if key not in self._used or self.policy == "overwrite":
            self._used.add(key)
            return base
        if self.policy == "error":
            raise FilenameCollisionError(
                f"{label!r} maps to {base!r}, which is already used in this run"
            )
        n = 2
        while f"{base}-{n}".casefold() in self._used:
            n += 1
        stem = f"{base}-{n}"
        self._used.add(stem.casefold())
        return stem
