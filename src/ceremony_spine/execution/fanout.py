"""Chunked Fan-out Executor: split, dispatch every batch at once, merge.

WHY
───
The document store caps a membership (``in``) filter at 10 values, so any
lookup keyed by an arbitrary number of ids has to be cut into batches and
issued as several queries.  Those queries are independent I/O, so they are
all put in flight together on the event loop and joined once.

ARCHITECTURE
────────────
::

    run_fanout(items, operation, mode=...)
      ├── chunk(items, batch_size)      ─ contiguous batches, order kept
      ├── COLLECT_ALL                   ─ asyncio.gather, one slot per batch
      │     └── failure → BatchOperationFailure in .errors (never raised)
      ├── FAIL_FAST                     ─ asyncio.wait(FIRST_EXCEPTION)
      │     └── failure → cancel pending, raise AggregateAbortError
      └── FanoutResult                  ─ flattened .results + .errors

    Each batch task writes only its own slot; the slots are merged once,
    after the join, in batch order.  Nothing shared is mutated while
    batches are in flight.

Related modules:
    chunking.py   : the partitioning step on its own
    aggregation/avatars.py: the collect-all caller

Example::

    async def lookup(batch: list[str]) -> list[str]:
        docs = await store.query_membership("avatars", "__name__", batch)
        return [d.data["avatarUrl"] for d in docs]

    result = await run_fanout(participant_ids, lookup)
    print(len(result.results), len(result.errors))
"""

from __future__ import annotations

import asyncio
import uuid
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any, Generic, TypeVar

from ceremony_spine.core.errors import AggregateAbortError, BatchOperationFailure
from ceremony_spine.core.logging import get_logger
from ceremony_spine.core.settings import MEMBERSHIP_FILTER_LIMIT
from ceremony_spine.execution.chunking import chunk

logger = get_logger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class FanoutMode(str, Enum):
    """How a failing batch affects the whole fan-out."""

    # Record the failure, let every other batch finish
    COLLECT_ALL = "collect_all"

    # First failure aborts the fan-out
    FAIL_FAST = "fail_fast"


@dataclass
class FanoutResult(Generic[R]):
    """Aggregate result of a fan-out.

    ``results`` is the list-concatenation of every successful batch output.
    ``errors`` holds one :class:`BatchOperationFailure` per failed batch.
    """

    fanout_id: str
    batch_count: int
    results: list[R] = field(default_factory=list)
    errors: list[BatchOperationFailure] = field(default_factory=list)
    started_at: datetime | None = None
    completed_at: datetime | None = None

    @property
    def succeeded_batches(self) -> int:
        return self.batch_count - len(self.errors)

    @property
    def failed_batches(self) -> int:
        return len(self.errors)

    @property
    def ok(self) -> bool:
        """True when no batch failed."""
        return not self.errors

    @property
    def duration_seconds(self) -> float | None:
        if self.started_at and self.completed_at:
            return (self.completed_at - self.started_at).total_seconds()
        return None

    def to_dict(self) -> dict[str, Any]:
        """Serialise for logging / CLI output."""
        return {
            "fanout_id": self.fanout_id,
            "batch_count": self.batch_count,
            "succeeded_batches": self.succeeded_batches,
            "failed_batches": self.failed_batches,
            "result_count": len(self.results),
            "duration_seconds": self.duration_seconds,
            "errors": [e.to_dict() for e in self.errors],
        }


async def run_fanout(
    items: Sequence[T],
    operation: Callable[[list[T]], Awaitable[Sequence[R]]],
    *,
    mode: FanoutMode = FanoutMode.COLLECT_ALL,
    batch_size: int = MEMBERSHIP_FILTER_LIMIT,
    max_concurrency: int | None = None,
    name: str = "fanout",
    log_failures: bool = True,
) -> FanoutResult[R]:
    """Run ``operation`` over ``items`` in batches of ``batch_size``.

    Args:
        items: Input sequence, any length.
        operation: Async callable taking one batch and returning a sequence.
        mode: ``COLLECT_ALL`` records failures, ``FAIL_FAST`` raises on the first.
        batch_size: Maximum items per batch.
        max_concurrency: Optional cap on in-flight batches.  ``None`` dispatches
            every batch at once.
        name: Label used in log events.
        log_failures: Emit a ``fanout.batch_failed`` warning per failed batch
            in ``COLLECT_ALL`` mode.  Failures are still recorded on the result.

    Returns:
        :class:`FanoutResult` with flattened results and per-batch failures.

    Raises:
        AggregateAbortError: ``FAIL_FAST`` mode only, wrapping the first failure.
    """
    batches = chunk(items, batch_size)
    fanout_id = str(uuid.uuid4())
    semaphore = asyncio.Semaphore(max_concurrency) if max_concurrency else None
    started_at = datetime.now(UTC)

    logger.debug(
        "fanout.start",
        fanout=name,
        fanout_id=fanout_id,
        items=len(items),
        batches=len(batches),
        mode=mode.value,
    )

    async def _call(batch: list[T]) -> list[R]:
        if semaphore is None:
            return list(await operation(batch))
        async with semaphore:
            return list(await operation(batch))

    if mode == FanoutMode.FAIL_FAST:
        slots = await _run_fail_fast(batches, _call, name=name, fanout_id=fanout_id)
    else:
        slots = await _run_collect_all(
            batches, _call, name=name, fanout_id=fanout_id, log_failures=log_failures,
        )

    result: FanoutResult[R] = FanoutResult(fanout_id=fanout_id, batch_count=len(batches))
    for slot in slots:
        if isinstance(slot, BatchOperationFailure):
            result.errors.append(slot)
        else:
            result.results.extend(slot)
    result.started_at = started_at
    result.completed_at = datetime.now(UTC)

    logger.debug(
        "fanout.complete",
        fanout=name,
        fanout_id=fanout_id,
        succeeded=result.succeeded_batches,
        failed=result.failed_batches,
        results=len(result.results),
        duration_seconds=result.duration_seconds,
    )
    return result


async def _run_collect_all(
    batches: list[list[T]],
    call: Callable[[list[T]], Awaitable[list[R]]],
    *,
    name: str,
    fanout_id: str,
    log_failures: bool,
) -> list[list[R] | BatchOperationFailure]:
    async def _run_one(index: int, batch: list[T]) -> list[R] | BatchOperationFailure:
        try:
            return await call(batch)
        except Exception as exc:
            if log_failures:
                logger.warning(
                    "fanout.batch_failed",
                    fanout=name,
                    fanout_id=fanout_id,
                    batch_index=index,
                    batch_size=len(batch),
                    error_type=type(exc).__name__,
                    error=str(exc),
                )
            return BatchOperationFailure(index, batch, exc)

    return list(await asyncio.gather(*(_run_one(i, b) for i, b in enumerate(batches))))


async def _run_fail_fast(
    batches: list[list[T]],
    call: Callable[[list[T]], Awaitable[list[R]]],
    *,
    name: str,
    fanout_id: str,
) -> list[list[R]]:
    tasks = [asyncio.create_task(call(batch)) for batch in batches]
    pending: set[asyncio.Task[list[R]]] = set(tasks)
    try:
        while pending:
            done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_EXCEPTION)
            failed = [t for t in done if not t.cancelled() and t.exception() is not None]
            if failed:
                # several batches can fail in the same round; lowest index wins
                first = min(failed, key=tasks.index)
                index = tasks.index(first)
                cause = first.exception()
                logger.error(
                    "fanout.aborted",
                    fanout=name,
                    fanout_id=fanout_id,
                    batch_index=index,
                    error_type=type(cause).__name__,
                    error=str(cause),
                    abandoned=len(pending),
                )
                raise AggregateAbortError(index, cause) from cause
    finally:
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    return [task.result() for task in tasks]


__all__ = ["FanoutMode", "FanoutResult", "run_fanout"]
