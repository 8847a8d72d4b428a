"""
Core scheduling algorithm.

This module implements the pure scheduling logic: jobs are ordered by
a policy, then placed on parallel machines by greedy list scheduling
(each job goes to the machine that becomes free first).

The algorithm is deterministic: given the same inputs, it will always
produce the same outputs.
"""

import heapq
import logging
from typing import Any, Callable, Dict, List, Sequence

from .errors import InvalidMachineCount
from .types import (
    Job, Machine, Policy, ScheduledJob, ScheduleRequest, ScheduleResponse
)


logger = logging.getLogger(__name__)


SORT_KEYS: Dict[Policy, Callable[[Job], int]] = {
    Policy.BY_PRIORITY: lambda job: -job.priority,  # Negative for descending order
    Policy.SHORTEST_JOB_FIRST: lambda job: job.duration,
    Policy.EARLIEST_DEADLINE_FIRST: lambda job: job.deadline,
    Policy.FIRST_COME_FIRST_SERVED: lambda job: job.job_id,
}


def schedule(
    jobs: Sequence[Job],
    policy: Policy,
    machine_count: int = 1
) -> List[ScheduledJob]:
    """
    Schedule jobs across parallel machines.

    This is the main scheduling function.

    Algorithm:
    1. Order jobs by the policy's key (stable, ties keep input order)
    2. Assign each job, in order, to the earliest available machine

    Args:
        jobs: Validated jobs in input order
        policy: Ordering policy
        machine_count: Number of parallel machines

    Returns:
        Scheduled jobs in assignment order

    Raises:
        InvalidMachineCount: if machine_count is not a positive integer
    """
    check_machine_count(machine_count)
    ordered_jobs = order_jobs(jobs, policy)
    return assign_jobs(ordered_jobs, machine_count)


def run_request(request: ScheduleRequest) -> ScheduleResponse:
    """Schedule a request and attach its metrics."""
    scheduled = schedule(request.jobs, request.policy, request.machine_count)
    return ScheduleResponse(
        schedule=scheduled,
        metrics=calculate_scheduling_metrics(scheduled, request.machine_count)
    )


def order_jobs(jobs: Sequence[Job], policy: Policy) -> List[Job]:
    """
    Order jobs by the given policy.

    Python's sort is stable, so jobs with equal keys keep their
    relative input order for every policy.

    Args:
        jobs: Jobs to order
        policy: Ordering policy

    Returns:
        New list of jobs; the input is not modified
    """
    ordered = sorted(jobs, key=SORT_KEYS[policy])
    logger.debug(
        "Ordered %d jobs by %s: %s",
        len(ordered), policy.value, [job.job_id for job in ordered]
    )
    return ordered


def check_machine_count(machine_count: Any) -> None:
    """Raise InvalidMachineCount unless machine_count is a positive int."""
    if (
        not isinstance(machine_count, int)
        or isinstance(machine_count, bool)
        or machine_count <= 0
    ):
        raise InvalidMachineCount(machine_count)


def assign_jobs(
    ordered_jobs: Sequence[Job],
    machine_count: int
) -> List[ScheduledJob]:
    """
    Assign ordered jobs to machines by greedy list scheduling.

    Machines are kept in a heap keyed by (available_time, machine_id),
    so the earliest free machine is picked and ties go to the lowest id.

    Args:
        ordered_jobs: Jobs in the order they should be dispatched
        machine_count: Number of parallel machines

    Returns:
        One ScheduledJob per input job, in dispatch order

    Raises:
        InvalidMachineCount: if machine_count is not a positive integer
    """
    check_machine_count(machine_count)

    machines = [Machine(machine_id=i) for i in range(machine_count)]
    free_at = [(m.available_time, m.machine_id) for m in machines]
    heapq.heapify(free_at)

    scheduled = []
    for job in ordered_jobs:
        _, machine_id = heapq.heappop(free_at)
        machine = machines[machine_id]

        start = machine.available_time
        end = start + job.duration
        scheduled.append(ScheduledJob(
            job=job,
            start_time=start,
            end_time=end,
            machine_id=machine_id
        ))
        logger.debug(
            "Job %d (%s) -> machine %d [%d, %d)",
            job.job_id, job.name, machine_id, start, end
        )

        machine.available_time = end
        heapq.heappush(free_at, (end, machine_id))

    return scheduled


def machine_loads(
    scheduled: Sequence[ScheduledJob],
    machine_count: int
) -> List[int]:
    """Final available time of each machine, indexed by machine id."""
    loads = [0] * machine_count
    for item in scheduled:
        loads[item.machine_id] = max(loads[item.machine_id], item.end_time)
    return loads


def find_late_jobs(scheduled: Sequence[ScheduledJob]) -> List[ScheduledJob]:
    """
    Return the scheduled jobs that finish after their deadline.

    Deadlines are only reported; they never change the schedule.
    """
    return [item for item in scheduled if item.is_late]


def calculate_scheduling_metrics(
    scheduled: Sequence[ScheduledJob],
    machine_count: int
) -> dict:
    """
    Calculate metrics about a schedule.

    Args:
        scheduled: Output of schedule() or assign_jobs()
        machine_count: Number of machines the schedule was built for

    Returns:
        Dictionary containing scheduling metrics
    """
    late = find_late_jobs(scheduled)

    return {
        "jobs_scheduled": len(scheduled),
        "machine_count": machine_count,
        "makespan": max((s.end_time for s in scheduled), default=0),
        "total_duration": sum(s.job.duration for s in scheduled),
        "average_completion_time": (
            sum(s.end_time for s in scheduled) / len(scheduled)
            if scheduled else 0
        ),
        "machine_loads": machine_loads(scheduled, machine_count),
        "late_jobs": len(late),
        "total_tardiness": sum(s.end_time - s.job.deadline for s in late),
    }
