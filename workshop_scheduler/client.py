import asyncio
import aiohttp
import json
import logging
from typing import Any, Dict, List, Optional, Union

from .types import Policy


logger = logging.getLogger(__name__)


class SchedulerClientError(Exception):
    """Raised when the scheduler service rejects a request."""

    def __init__(self, status: int, message: str, row: Optional[int] = None):
        self.status = status
        self.row = row
        super().__init__(f"{status}: {message}")


class ScheduleClient:
    def __init__(self, base_url="http://localhost:8001", timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout)

    async def health_check(self) -> bool:
        """Check if the scheduler service is healthy"""
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.get(f"{self.base_url}/health") as resp:
                    if resp.status == 200:
                        data = await resp.json()
                        logger.info(f"Scheduler health: {data}")
                        return True
                    logger.warning(f"Health check returned {resp.status}")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Health check failed: {e}")
        return False

    async def submit(
        self,
        jobs: List[Any],
        policy: Optional[Union[Policy, str, int]] = None,
        machine_count: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        Send jobs to the scheduler and return its response body.

        Raises:
            SchedulerClientError: if the service answers with an error
        """
        payload: Dict[str, Any] = {"jobs": jobs}
        if policy is not None:
            payload["policy"] = Policy.parse(policy).value
        if machine_count is not None:
            payload["machine_count"] = machine_count

        async with aiohttp.ClientSession(timeout=self.timeout) as session:
            async with session.post(f"{self.base_url}/schedule", json=payload) as resp:
                if resp.status != 200:
                    body = await resp.text()
                    try:
                        data = json.loads(body)
                    except ValueError:
                        data = None
                    if not isinstance(data, dict):
                        data = {"error": body.strip() or resp.reason or "unknown error"}
                    logger.error(f"Schedule request failed: {data}")
                    raise SchedulerClientError(
                        resp.status, data.get("error", "unknown error"), data.get("row")
                    )
                data = await resp.json()
                logger.info(
                    f"Received schedule for {len(data['schedule'])} jobs "
                    f"on {data['machine_count']} machines"
                )
                return data


def run_client(
    jobs: List[Any],
    policy: Optional[Union[Policy, str, int]] = None,
    machine_count: Optional[int] = None,
    base_url: str = "http://localhost:8001"
) -> Dict[str, Any]:
    """Submit jobs synchronously"""
    client = ScheduleClient(base_url)
    return asyncio.run(client.submit(jobs, policy, machine_count))
