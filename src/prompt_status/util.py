from __future__ import annotations
import logging
from pathlib import Path

log = logging.getLogger(__name__)


def cat(path: Path) -> str | None:
    """
    Return the raw contents of the given file.  If the file cannot be read
    (missing, unreadable, not decodable), return `None`.
    """
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        log.debug("Could not read %s: %s", path, e)
        return None
