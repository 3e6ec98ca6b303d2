from __future__ import annotations

import concurrent.futures as _fut
import logging
import time
from typing import Callable, List, Optional, Sequence

from .fetcher import FeedRetriever, error_message, fetch_source
from .models import BatchProcessingResult, ProcessedSource, Source
from .normalizer import utc_now_iso

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 25
DEFAULT_BATCH_DELAY_MS = 1000


def _failed(source: Source, exc: BaseException) -> ProcessedSource:
    return ProcessedSource(
        source=source,
        success=False,
        last_fetched=utc_now_iso(),
        error=error_message(exc),
    )


def _run_chunk(chunk: Sequence[Source], client: FeedRetriever) -> List[ProcessedSource]:
    """
    Fetch every source in the chunk concurrently and wait for all of them.

    Results are written to each source's slot, so the output order matches the
    chunk order regardless of completion order.
    """
    slots: List[Optional[ProcessedSource]] = [None] * len(chunk)
    with _fut.ThreadPoolExecutor(max_workers=len(chunk)) as ex:
        futures: List[Optional[_fut.Future]] = []
        for idx, source in enumerate(chunk):
            try:
                futures.append(ex.submit(fetch_source, source, client))
            except Exception as e:
                logger.error("Failed to schedule source %s: %s", source.name, e)
                slots[idx] = _failed(source, e)
                futures.append(None)

        for idx, fu in enumerate(futures):
            if fu is None:
                continue
            try:
                slots[idx] = fu.result()
            except Exception as e:
                logger.error("Failed to process source %s: %s", chunk[idx].name, e)
                slots[idx] = _failed(chunk[idx], e)
    return [s for s in slots if s is not None]


def process_batch_sources(
    sources: Sequence[Source],
    client: FeedRetriever,
    *,
    batch_size: int = DEFAULT_BATCH_SIZE,
    batch_delay_ms: int = DEFAULT_BATCH_DELAY_MS,
    sleep: Callable[[float], None] = time.sleep,
) -> BatchProcessingResult:
    """
    Process sources in chunks of `batch_size`, pausing `batch_delay_ms`
    between chunks to avoid overwhelming servers.
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be positive, got {batch_size}")

    start = time.monotonic()
    results: List[ProcessedSource] = []

    for i in range(0, len(sources), batch_size):
        chunk = sources[i:i + batch_size]
        logger.info(
            "Processing batch %d, sources %d to %d",
            i // batch_size + 1, i + 1, min(i + batch_size, len(sources)),
        )
        results.extend(_run_chunk(chunk, client))

        if i + batch_size < len(sources):
            sleep(batch_delay_ms / 1000)

    processing_time_ms = int((time.monotonic() - start) * 1000)

    successful = [r for r in results if r.success]
    failed = [r for r in results if not r.success]

    return BatchProcessingResult(
        processed_sources=results,
        successful_sources=successful,
        failed_sources=failed,
        processing_time_ms=processing_time_ms,
    )
