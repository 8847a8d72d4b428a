"""
Workshop Scheduler Package

Orders a list of jobs by one of four policies and assigns them to
parallel machines, each machine taking the next job as soon as it is
free.
"""

__version__ = '0.1.0'

from .types import (
    Job,
    Machine,
    Policy,
    ScheduledJob,
    ScheduleRequest,
    ScheduleResponse,
)

from .errors import (
    SchedulingError,
    ValidationError,
    ParseError,
    InvalidDuration,
    InvalidName,
    InvalidMachineCount,
)

from .algorithm import (
    schedule,
    run_request,
    order_jobs,
    assign_jobs,
    find_late_jobs,
    calculate_scheduling_metrics,
)

from .validation import RowResult, parse_row, build_jobs
from .loader import parse_import_text, load_import_file
from .server import create_app, run_server

__all__ = [
    'Job',
    'Machine',
    'Policy',
    'ScheduledJob',
    'ScheduleRequest',
    'ScheduleResponse',
    'SchedulingError',
    'ValidationError',
    'ParseError',
    'InvalidDuration',
    'InvalidName',
    'InvalidMachineCount',
    'schedule',
    'run_request',
    'order_jobs',
    'assign_jobs',
    'find_late_jobs',
    'calculate_scheduling_metrics',
    'RowResult',
    'parse_row',
    'build_jobs',
    'parse_import_text',
    'load_import_file',
    'create_app',
    'run_server',
]
