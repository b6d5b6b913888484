# File: site_shots/scheduler.py
"""site_shots.scheduler: Запуск задач пачками фиксированной ширины с остановкой по abortIfFail."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Iterator, List, Optional, Sequence

from site_shots.checker.models import PageResult
from site_shots.jobs import PageJob
from site_shots.logger import logger

__all__ = ["DEFAULT_CONCURRENCY", "ScheduleOutcome", "iter_batches", "run_batches"]

DEFAULT_CONCURRENCY = 5

JobRunner = Callable[[PageJob], Awaitable[PageResult]]


@dataclass(slots=True)
class ScheduleOutcome:
    """Результаты в исходном порядке задач и информация о досрочной остановке."""

    results: List[PageResult] = field(default_factory=list)
    aborted: bool = False
    aborted_by: Optional[PageResult] = None
    skipped: int = 0


def iter_batches(jobs: Sequence[PageJob], width: int) -> Iterator[Sequence[PageJob]]:
    """Последовательные срезы длиной не более width."""
    if width < 1:
        raise ValueError("concurrency width must be >= 1")
    for start in range(0, len(jobs), width):
        yield jobs[start:start + width]


async def run_batches(
    jobs: Sequence[PageJob],
    run_job: JobRunner,
    width: int = DEFAULT_CONCURRENCY,
) -> ScheduleOutcome:
    """
    Выполняет пачку целиком (asyncio.gather), затем просматривает её результаты.
    Упавшая задача с abortIfFail не прерывает текущую пачку, но следующие не запускаются.
    Задачи из незапущенных пачек в результаты не попадают.
    """
    outcome = ScheduleOutcome()
    done = 0
    for batch in iter_batches(jobs, width):
        logger.debug("Batch %d-%d of %d", done + 1, done + len(batch), len(jobs))
        batch_results = await asyncio.gather(*(run_job(job) for job in batch))
        done += len(batch)

        for job, result in zip(batch, batch_results):
            outcome.results.append(result)
            if not result.success and job.config.abort_if_fail and not outcome.aborted:
                outcome.aborted = True
                outcome.aborted_by = result

        if outcome.aborted:
            outcome.skipped = len(jobs) - done
            logger.warning(
                "Critical page failed (abortIfFail): %s [%s]. Stopping remaining checks (%d skipped)",
                outcome.aborted_by.url,
                outcome.aborted_by.device,
                outcome.skipped,
            )
            break
    return outcome
