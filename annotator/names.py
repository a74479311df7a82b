"""
annotator/names.py

Resolve the ``--name`` option into name records.

The option is either a path to a text file with one name per line or
a literal name.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import List

from debug_trace import trace
from models import NameSourceError

COMMENT_PREFIX = "#"

_FILE_SUFFIX = re.compile(r"\.[A-Za-z0-9]+$")


def _looks_like_path(value: str) -> bool:
    """Heuristic for values meant as a file rather than a literal name.

    ``names.txt`` or ``lists/guests`` look like paths; ``Dr. Smith``
    does not, even though ``os.path.splitext`` gives it a suffix.
    """
    if os.sep in value or (os.altsep and os.altsep in value):
        return True
    return bool(_FILE_SUFFIX.search(value))


def split_records(text: str) -> List[str]:
    """Split name-file content into records.

    ``\\r\\n`` and lone ``\\r`` count as line breaks. Blank lines are
    kept as empty records; a trailing newline does not add one.
    """
    return text.splitlines()


def is_comment(record: str) -> bool:
    return record.startswith(COMMENT_PREFIX)


def load_names(source: str) -> List[str]:
    """Return the name records for *source*.

    Args:
        source: A name-file path or a literal name.

    Returns:
        Every non-comment record in file order. Empty records are kept.

    Raises:
        NameSourceError: If *source* looks like a path that does not
            exist, or the file cannot be read.
    """
    path = Path(source)
    if path.is_file():
        try:
            text = path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            raise NameSourceError(f"Cannot read {source}: {e}") from e
        records = [r for r in split_records(text) if not is_comment(r)]
        trace(f"Loaded {len(records)} name record(s) from {source}", "NAMES")
        return records

    if path.exists():
        raise NameSourceError(f"{source} is not a regular file!")
    if _looks_like_path(source):
        raise NameSourceError(f"{source} does not exist!")

    trace(f"Using {source!r} as a literal name", "NAMES")
    return [] if is_comment(source) else [source]
