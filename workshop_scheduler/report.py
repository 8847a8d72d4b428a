"""Plain-text rendering of schedules."""

from typing import Any, Dict, List, Sequence

from .types import ScheduledJob


def format_schedule(
    scheduled: Sequence[ScheduledJob],
    show_machine: bool = False
) -> List[str]:
    """One line per scheduled job, in dispatch order."""
    lines = []
    for item in scheduled:
        line = "Job: %-10s | Start: %2d | End: %2d" % (
            item.job.name, item.start_time, item.end_time
        )
        if show_machine:
            line += " | Machine: %d" % item.machine_id
        lines.append(line)
    return lines


def format_metrics(metrics: Dict[str, Any]) -> List[str]:
    loads = ", ".join(
        f"M{i}={load}" for i, load in enumerate(metrics["machine_loads"])
    )
    return [
        f"Jobs scheduled: {metrics['jobs_scheduled']}",
        f"Makespan: {metrics['makespan']}",
        f"Average completion time: {metrics['average_completion_time']:.2f}",
        f"Machine loads: {loads}",
        f"Late jobs: {metrics['late_jobs']} "
        f"(total tardiness {metrics['total_tardiness']})",
    ]
