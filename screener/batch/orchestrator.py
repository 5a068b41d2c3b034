"""Sequential batch evaluation against the evaluate endpoint."""

import asyncio
import enum
import logging
import math
import random
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from screener.schemas.evaluation import EvaluationResponse

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 3
DEFAULT_RETRY_AFTER_SECONDS = 60


class ItemState(str, enum.Enum):
    PENDING = "PENDING"
    IN_FLIGHT = "IN_FLIGHT"
    RETRYING = "RETRYING"
    SUCCEEDED = "SUCCEEDED"
    SKIPPED = "SKIPPED"


@dataclass
class BatchItem:
    """Progress of one solution through the batch."""

    solution_id: str
    state: ItemState = ItemState.PENDING
    attempts: int = 0
    rate_limit_waits: int = 0
    last_error: str | None = None


@dataclass
class BatchReport:
    items: list[BatchItem]
    results: dict[str, EvaluationResponse] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.items)

    @property
    def succeeded(self) -> int:
        return len(self.results)

    @property
    def summary(self) -> str:
        return f"{self.succeeded} of {self.total} succeeded"


class RateLimited(Exception):
    """The server answered 429."""

    def __init__(self, retry_after: float):
        super().__init__(f"rate limited, retry after {retry_after}s")
        self.retry_after = retry_after


def pacing_delay_ms(index: int) -> int:
    """Delay before item ``index``: 2s, growing 1s every 5 items, capped at 6s."""
    return min(2000 + (index // 5) * 1000, 6000)


def backoff_delay_ms(attempts: int, rng: random.Random) -> float:
    """Exponential backoff with up to 3s of jitter, capped at 30s."""
    return min(30000, 2**attempts * 5000 + rng.random() * 3000)


def rate_limit_delay_ms(retry_after: float, rng: random.Random) -> float:
    """Server-suggested wait plus up to 2s of jitter."""
    return retry_after * 1000 + rng.random() * 2000


def _retry_after(response: httpx.Response) -> float:
    try:
        value = response.json().get("retryAfter")
    except (ValueError, AttributeError):
        value = None
    if not value:
        value = response.headers.get("Retry-After")
    try:
        seconds = float(value) if value is not None else 0
    except (TypeError, ValueError):
        seconds = 0
    # A missing, zero or negative hint falls back to the default wait.
    return seconds if seconds > 0 else DEFAULT_RETRY_AFTER_SECONDS


def _error_message(response: httpx.Response) -> str:
    try:
        message = response.json().get("message")
    except (ValueError, AttributeError):
        message = None
    return message or f"API error: {response.status_code}"


class BatchOrchestrator:
    """
    Evaluate solutions one at a time, never concurrently.

    Pacing, backoff and rate-limit waits go through ``sleep`` (seconds) and
    jitter comes from ``rng``; both can be replaced in tests. A rate-limited
    response does not use up an attempt. Other failures do, and an item that
    fails ``max_attempts`` times is skipped without stopping the batch.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        model: str,
        temperature: float,
        max_attempts: int = MAX_ATTEMPTS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        rng: random.Random | None = None,
        on_progress: Callable[[int, BatchItem], None] | None = None,
    ):
        self.client = client
        self.model = model
        self.temperature = temperature
        self.max_attempts = max_attempts
        self._sleep = sleep
        self._rng = rng or random.Random()
        self._on_progress = on_progress

    async def run(self, solution_ids: Sequence[str]) -> BatchReport:
        report = BatchReport(items=[BatchItem(solution_id=s) for s in solution_ids])
        for index, item in enumerate(report.items):
            if index > 0:
                await self._wait(pacing_delay_ms(index))
            logger.info(
                "Evaluating solution %d of %d: %s", index + 1, report.total, item.solution_id
            )
            result = await self._evaluate_item(index, item)
            if result is not None:
                report.results[item.solution_id] = result
        logger.info("Batch evaluation complete: %s", report.summary)
        return report

    async def _evaluate_item(self, index: int, item: BatchItem) -> EvaluationResponse | None:
        while True:
            self._transition(index, item, ItemState.IN_FLIGHT)
            try:
                result = await self._request(item.solution_id)
            except RateLimited as exc:
                item.rate_limit_waits += 1
                wait_ms = rate_limit_delay_ms(exc.retry_after, self._rng)
                logger.warning(
                    "Rate limited on %s; waiting %.1fs before retrying",
                    item.solution_id,
                    wait_ms / 1000,
                )
                self._transition(index, item, ItemState.RETRYING)
                await self._wait(wait_ms)
                continue
            except Exception as exc:
                item.attempts += 1
                item.last_error = str(exc)
                if item.attempts >= self.max_attempts:
                    logger.error(
                        "Failed to evaluate %s after %d attempts, skipping: %s",
                        item.solution_id,
                        item.attempts,
                        exc,
                    )
                    self._transition(index, item, ItemState.SKIPPED)
                    return None
                wait_ms = backoff_delay_ms(item.attempts, self._rng)
                logger.warning(
                    "Attempt %d/%d for %s failed (%s); retrying in %ds",
                    item.attempts,
                    self.max_attempts,
                    item.solution_id,
                    exc,
                    math.ceil(wait_ms / 1000),
                )
                self._transition(index, item, ItemState.RETRYING)
                await self._wait(wait_ms)
                continue

            item.attempts += 1
            item.last_error = None
            self._transition(index, item, ItemState.SUCCEEDED)
            return result

    async def _request(self, solution_id: str) -> EvaluationResponse:
        response = await self.client.post(
            f"/api/evaluate/{quote(solution_id, safe='')}",
            json={"model": self.model, "temperature": self.temperature},
        )
        if response.status_code == httpx.codes.TOO_MANY_REQUESTS:
            raise RateLimited(_retry_after(response))
        if not response.is_success:
            raise httpx.HTTPStatusError(
                _error_message(response), request=response.request, response=response
            )
        try:
            return EvaluationResponse.model_validate(response.json())
        except ValidationError as exc:
            raise ValueError(f"Invalid evaluation response: {exc}") from exc

    async def _wait(self, milliseconds: float) -> None:
        await self._sleep(milliseconds / 1000)

    def _transition(self, index: int, item: BatchItem, state: ItemState) -> None:
        item.state = state
        if self._on_progress is not None:
            self._on_progress(index, item)
