from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional

from .batch import DEFAULT_BATCH_DELAY_MS, DEFAULT_BATCH_SIZE, process_batch_sources
from .classifier import filter_out_not_keywords
from .config import Settings
from .enricher import enrich_articles
from .exceptions import InvalidBatchRequest
from .fetcher import FeedClient, FeedClientConfig, FeedRetriever, default_headers
from .models import ArticleFetchResponse, SourceBatch
from .report import build_response
from .serialization import to_dict

logger = logging.getLogger(__name__)

INVALID_REQUEST_MESSAGE = "Invalid sourceBatch object or required fields missing"


def parse_request(body: Any) -> SourceBatch:
    """
    Validate a `{"sourceBatch": {...}}` payload and build the SourceBatch.

    Raises InvalidBatchRequest before any fetching when the batch object, its
    `sources` list of objects, `batchId` or `topicName` is missing.
    """
    if not isinstance(body, Mapping):
        raise InvalidBatchRequest(INVALID_REQUEST_MESSAGE)
    batch = body.get("sourceBatch")
    if not isinstance(batch, Mapping):
        raise InvalidBatchRequest(INVALID_REQUEST_MESSAGE)
    sources = batch.get("sources")
    if not isinstance(sources, list) or not all(isinstance(s, Mapping) for s in sources):
        raise InvalidBatchRequest(INVALID_REQUEST_MESSAGE)
    if not batch.get("batchId") or not batch.get("topicName"):
        raise InvalidBatchRequest(INVALID_REQUEST_MESSAGE)
    return SourceBatch.from_dict(batch)


@dataclass
class FetchOptions:
    batch_size: int = DEFAULT_BATCH_SIZE
    batch_delay_ms: int = DEFAULT_BATCH_DELAY_MS


class ArticleFetcher:
    """
    High-level API: fetch every source of a batch and return the filtered report.

    Pipeline: fetch (chunked, concurrent) → enrich → NOT-keyword filter → report
    """

    def __init__(
        self,
        *,
        client: Optional[FeedRetriever] = None,
        batch_size: int = DEFAULT_BATCH_SIZE,
        batch_delay_ms: int = DEFAULT_BATCH_DELAY_MS,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.client = client or FeedClient()
        self.options = FetchOptions(batch_size=batch_size, batch_delay_ms=batch_delay_ms)
        self._sleep = sleep

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "ArticleFetcher":
        client = FeedClient(FeedClientConfig(
            timeout_ms=settings.timeout_ms,
            headers=default_headers(settings.user_agent),
        ))
        return cls(
            client=client,
            batch_size=settings.batch_size,
            batch_delay_ms=settings.batch_delay_ms,
            **kwargs,
        )

    def fetch(self, batch: SourceBatch) -> ArticleFetchResponse:
        logger.info(
            "Processing Topic: %s - batch %s with %d sources",
            batch.topic_name, batch.batch_id, len(batch.sources),
        )

        result = process_batch_sources(
            batch.sources,
            self.client,
            batch_size=self.options.batch_size,
            batch_delay_ms=self.options.batch_delay_ms,
            sleep=self._sleep,
        )

        enriched = enrich_articles(result.successful_sources, batch)
        filtering = filter_out_not_keywords(enriched, batch.relationship_keywords)
        response = build_response(batch, result, enriched, filtering)

        logger.info(
            "Topic: %s with Batch %s completed: %d successful, %d failed, %d articles after NOT filtering",
            batch.topic_name, batch.batch_id,
            len(result.successful_sources), len(result.failed_sources),
            len(filtering.filtered_articles),
        )
        return response

    def handle(self, body: Any) -> Dict[str, Any]:
        """Validate a raw request payload, run it and return the JSON-ready response."""
        batch = parse_request(body)
        return to_dict(self.fetch(batch))
