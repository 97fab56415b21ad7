"""
Readiness checks for the bridge
"""

import asyncio
import inspect
import time
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, List, Tuple, Union

import structlog
from aiokafka import AIOKafkaConsumer

logger = structlog.get_logger(__name__)

Check = Callable[[], Union[bool, Awaitable[bool]]]


class HealthChecker:
    """Named readiness checks plus informational details.

    A check returns a bool or an awaitable bool. Non-critical checks are
    reported but never make the bridge unready. Details are plain snapshots
    (stream state, for example) included verbatim in the report.
    """

    def __init__(self, check_timeout: float = 5.0):
        self.check_timeout = check_timeout
        self._checks: List[Tuple[str, Check, bool]] = []
        self._details: Dict[str, Callable[[], Any]] = {}

    def add_check(self, name: str, check: Check, critical: bool = True) -> None:
        self._checks.append((name, check, critical))

    def add_detail(self, name: str, provider: Callable[[], Any]) -> None:
        self._details[name] = provider

    async def _run_check(self, name: str, check: Check, critical: bool) -> Dict[str, Any]:
        started = time.perf_counter()
        error = None
        try:
            result = check()
            if inspect.isawaitable(result):
                result = await asyncio.wait_for(result, timeout=self.check_timeout)
            healthy = bool(result)
        except asyncio.TimeoutError:
            healthy = False
            error = f"timed out after {self.check_timeout}s"
        except Exception as e:
            logger.error("Health check failed", check=name, error=str(e))
            healthy = False
            error = str(e)

        report: Dict[str, Any] = {
            "name": name,
            "status": "healthy" if healthy else "unhealthy",
            "critical": critical,
            "duration_ms": round((time.perf_counter() - started) * 1000, 2),
        }
        if error is not None:
            report["error"] = error
        return report

    async def check_health(self) -> Dict[str, Any]:
        """Run every check concurrently and aggregate readiness."""
        reports = await asyncio.gather(
            *(self._run_check(name, check, critical) for name, check, critical in self._checks)
        )
        ready = all(r["status"] == "healthy" for r in reports if r["critical"])

        return {
            "ready": ready,
            "status": "healthy" if ready else "unhealthy",
            "checks": list(reports),
            "details": {name: provider() for name, provider in self._details.items()},
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }


async def kafka_broker_reachable(bootstrap_servers: str, timeout: float = 5.0) -> bool:
    """Whether a throwaway consumer can fetch topic metadata from the brokers."""
    consumer = AIOKafkaConsumer(
        bootstrap_servers=bootstrap_servers,
        request_timeout_ms=int(timeout * 1000),
    )
    try:
        await consumer.start()
        await consumer.topics()
        return True
    except Exception as e:
        logger.warning("Kafka broker unreachable", bootstrap_servers=bootstrap_servers, error=str(e))
        return False
    finally:
        try:
            await consumer.stop()
        except Exception as e:
            logger.debug("Error stopping broker probe", error=str(e))
