"""
Data models for the workshop scheduler.

This module defines the core data structures used in scheduling:
- Jobs to be scheduled and the policies that order them
- Machines simulated during one assignment run
- Scheduled intervals produced for display
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Union
from enum import Enum


class Policy(Enum):
    """Job ordering rule selected by the caller."""
    BY_PRIORITY = "by_priority"
    SHORTEST_JOB_FIRST = "shortest_job_first"
    EARLIEST_DEADLINE_FIRST = "earliest_deadline_first"
    FIRST_COME_FIRST_SERVED = "first_come_first_served"

    @property
    def id(self) -> int:
        """Stable numeric id, in declaration order."""
        return list(Policy).index(self)

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()

    @classmethod
    def parse(cls, value: Union["Policy", str, int]) -> "Policy":
        """
        Resolve a policy from an enum member, value, name, alias or id.

        Raises:
            ValueError: if the value names no policy
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            members = list(cls)
            if 0 <= value < len(members):
                return members[value]
            raise ValueError(f"Unknown policy id: {value}")
        if isinstance(value, str):
            key = value.strip().lower().replace("-", "_")
            if key.isdigit():
                return cls.parse(int(key))
            if key in POLICY_ALIASES:
                return POLICY_ALIASES[key]
            for member in cls:
                if key == member.value:
                    return member
        raise ValueError(f"Unknown policy: {value!r}")


POLICY_ALIASES = {
    "priority": Policy.BY_PRIORITY,
    "sjf": Policy.SHORTEST_JOB_FIRST,
    "edf": Policy.EARLIEST_DEADLINE_FIRST,
    "fcfs": Policy.FIRST_COME_FIRST_SERVED,
}


@dataclass(frozen=True)
class Job:
    """
    A job to be scheduled.

    Attributes:
        job_id: Input row index (0-based), also the arrival order
        name: Display label
        duration: Processing time, strictly positive
        priority: Higher is more urgent
        deadline: Absolute time unit the job should finish by
    """
    job_id: int
    name: str
    duration: int
    priority: int
    deadline: int

    def __post_init__(self):
        """Validate job fields."""
        if self.job_id < 0:
            raise ValueError(f"Job id cannot be negative, got {self.job_id}")
        if not self.name:
            raise ValueError("Job name cannot be empty")
        if self.duration <= 0:
            raise ValueError(f"Duration must be positive, got {self.duration}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "job_id": self.job_id,
            "name": self.name,
            "duration": self.duration,
            "priority": self.priority,
            "deadline": self.deadline,
        }


@dataclass
class Machine:
    """
    Simulated machine state for one assignment run.

    Attributes:
        machine_id: Index in 0..machine_count-1
        available_time: Time the machine finishes its last job
    """
    machine_id: int
    available_time: int = 0


@dataclass(frozen=True)
class ScheduledJob:
    """
    A job placed on a machine for the interval [start_time, end_time).

    Attributes:
        job: The source job
        start_time: Time the job starts
        end_time: start_time + job.duration
        machine_id: Machine running the job
    """
    job: Job
    start_time: int
    end_time: int
    machine_id: int

    @property
    def is_late(self) -> bool:
        return self.end_time > self.job.deadline

    def to_dict(self) -> Dict[str, Any]:
        return {
            "job_id": self.job.job_id,
            "name": self.job.name,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "machine_id": self.machine_id,
            "deadline": self.job.deadline,
            "late": self.is_late,
        }


@dataclass
class ScheduleRequest:
    """
    Request to schedule jobs on parallel machines.

    Attributes:
        jobs: Validated jobs in input order
        policy: Ordering policy to apply
        machine_count: Number of parallel machines
    """
    jobs: List[Job]
    policy: Policy = Policy.BY_PRIORITY
    machine_count: int = 1


@dataclass
class ScheduleResponse:
    """
    Response containing the schedule for a request.

    Attributes:
        schedule: Scheduled jobs in assignment order
        metrics: Summary produced by calculate_scheduling_metrics
    """
    schedule: List[ScheduledJob]
    metrics: Dict[str, Any] = field(default_factory=dict)
