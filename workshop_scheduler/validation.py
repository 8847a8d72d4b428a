"""
Conversion of raw input rows into jobs.

A row is either a sequence (name, duration, priority, deadline) or a
mapping with those keys. Rows are numbered from 1; the job id is the
0-based row index.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Union

from .errors import InvalidDuration, InvalidName, ParseError, ValidationError
from .types import Job


logger = logging.getLogger(__name__)

FIELDS = ("name", "duration", "priority", "deadline")

# ASCII digits only
INTEGER = re.compile(r"[+-]?[0-9]+\Z")

Row = Union[Sequence[Any], Mapping[str, Any]]


@dataclass(frozen=True)
class RowResult:
    """
    Outcome of parsing one row: exactly one of job or error is set.

    Attributes:
        row: 1-based row number
        job: Parsed job, if the row is valid
        error: Reason the row was rejected
    """
    row: int
    job: Optional[Job] = None
    error: Optional[ValidationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _to_int(field: str, value: Any, row: int) -> int:
    if isinstance(value, bool):
        raise ParseError(field, value, row)
    if isinstance(value, int):
        return value
    if isinstance(value, str) and INTEGER.match(value.strip()):
        return int(value.strip())
    raise ParseError(field, value, row)


def _fields(row_number: int, row: Row) -> List[Any]:
    if isinstance(row, Mapping):
        missing = [name for name in FIELDS if name not in row]
        if missing:
            raise ParseError(missing[0], None, row_number)
        return [row[name] for name in FIELDS]
    if (
        isinstance(row, str)
        or not isinstance(row, Sequence)
        or len(row) < len(FIELDS)
    ):
        raise ParseError("row", row, row_number)
    return list(row[:len(FIELDS)])


def parse_row(row_number: int, row: Row) -> RowResult:
    """
    Parse one input row.

    Args:
        row_number: 1-based position of the row in the input
        row: Raw fields

    Returns:
        RowResult holding the Job or the first problem found
    """
    try:
        name, duration, priority, deadline = _fields(row_number, row)
        name = str(name).strip() if name is not None else ""
        if not name:
            raise InvalidName(row_number)

        duration = _to_int("duration", duration, row_number)
        priority = _to_int("priority", priority, row_number)
        deadline = _to_int("deadline", deadline, row_number)
        if duration <= 0:
            raise InvalidDuration(duration, row_number)
    except ValidationError as e:
        return RowResult(row=row_number, error=e)

    return RowResult(
        row=row_number,
        job=Job(
            job_id=row_number - 1,
            name=name,
            duration=duration,
            priority=priority,
            deadline=deadline
        )
    )


def build_jobs(rows: Iterable[Row]) -> List[Job]:
    """
    Convert rows into jobs, stopping at the first bad row.

    Raises:
        ValidationError: for the first row that fails; no jobs are
            returned in that case
    """
    jobs = []
    for row_number, row in enumerate(rows, start=1):
        result = parse_row(row_number, row)
        if not result.ok:
            logger.error("Rejected input: %s", result.error)
            raise result.error
        jobs.append(result.job)
    return jobs
