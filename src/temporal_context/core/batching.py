"""Chunked, cancellable execution of per-snapshot batch units."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Sequence, TypeVar

from temporal_context.core.exceptions import NotFoundError
from temporal_context.core.types import ContextSnapshot

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=ContextSnapshot)


@dataclass
class BatchOutcome:
    """Tally of one batch run."""

    processed: int = 0  # units whose work was committed
    skipped: int = 0  # malformed or vanished records
    cancelled: bool = False


async def run_in_batches(
    items: Sequence[T],
    unit: Callable[[T], Awaitable[bool]],
    batch_size: int,
    cancel: asyncio.Event | None = None,
    operation: str = "batch",
) -> BatchOutcome:
    """Run ``unit`` over ``items`` in concurrent chunks of ``batch_size``.

    ``unit`` returns True when it committed a change. A unit raising
    ValueError or TypeError is treated as a malformed record and one raising
    NotFoundError as a snapshot deleted mid-run: both are logged and
    skipped. Anything else (store failures) propagates. ``cancel`` is
    checked between chunks; writes from finished chunks stay committed.
    """
    outcome = BatchOutcome()

    async def guarded(item: T) -> bool | None:
        try:
            return await unit(item)
        except NotFoundError:
            logger.debug("%s: snapshot %s vanished mid-run", operation, item.id)
            return None
        except (ValueError, TypeError) as e:
            logger.warning("%s: skipping malformed snapshot %s: %s", operation, item.id, e)
            return None

    for start in range(0, len(items), batch_size):
        if cancel is not None and cancel.is_set():
            outcome.cancelled = True
            logger.info(
                "%s cancelled after %d of %d snapshot(s)",
                operation,
                start,
                len(items),
            )
            break
        chunk = items[start:start + batch_size]
        results = await asyncio.gather(*(guarded(item) for item in chunk))
        for result in results:
            if result is None:
                outcome.skipped += 1
            elif result:
                outcome.processed += 1

    return outcome
