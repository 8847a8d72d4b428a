"""
Loader for the semicolon-delimited import format.

Each line holds one job: name;duration;priority;deadline
Blank lines and lines with fewer than four fields are skipped. Numbers
are left as text; validation converts them.
"""

import logging
from pathlib import Path
from typing import List, Union


logger = logging.getLogger(__name__)

DELIMITER = ";"
FIELD_COUNT = 4


def parse_import_text(text: str) -> List[List[str]]:
    """
    Split import text into rows of four stripped fields.

    Args:
        text: Contents of an import file

    Returns:
        One row per usable line, in file order
    """
    rows = []
    for line_number, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        fields = line.split(DELIMITER)
        if len(fields) < FIELD_COUNT:
            logger.debug("Skipping malformed line %d: %r", line_number, line)
            continue
        rows.append([f.strip() for f in fields[:FIELD_COUNT]])
    return rows


def load_import_file(path: Union[str, Path]) -> List[List[str]]:
    """Read a UTF-8 import file and return its rows."""
    text = Path(path).read_text(encoding="utf-8")
    rows = parse_import_text(text)
    logger.info("Loaded %d rows from %s", len(rows), path)
    return rows
