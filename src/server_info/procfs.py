"""Low-level access to procfs pseudo-files.

Pseudo-files can vanish or be permission-restricted depending on kernel
configuration and container isolation, so a miss is a normal outcome here:
callers get an empty list instead of an exception.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

log = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"[^0-9]")


def read_lines(path: str | Path) -> list[str]:
    """Return the lines of a pseudo-file, or an empty list.

    Args:
        path: Full path to the pseudo-file.

    Returns:
        The file content split on newlines.  Empty if the path does not
        exist, is not a regular file, cannot be read, or has no content.
    """
    path = Path(path)
    try:
        if not path.is_file():
            log.debug("Pseudo-file not found: %s", path)
            return []
        text = path.read_text()
    except (OSError, UnicodeDecodeError) as exc:
        log.debug("Cannot read %s: %s", path, exc)
        return []

    if not text:
        return []
    return text.splitlines()


def parse_digits(text: str) -> int:
    """Strip every non-digit character from *text* and parse the rest.

    ``"ctxt 98765432"`` gives ``98765432`` and ``"  16384000 kB"`` gives
    ``16384000``.  A minus sign is dropped like any other character, so
    negative values cannot be represented.  Text without digits gives 0.
    """
    digits = _NON_DIGITS.sub("", text)
    return int(digits) if digits else 0
