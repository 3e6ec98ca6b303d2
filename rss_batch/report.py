from __future__ import annotations

from typing import Any, Dict, Iterable, List

from .models import (
    ArticleFetchResponse,
    BatchDetails,
    BatchProcessingResult,
    EnrichedArticle,
    FailedSourceInfo,
    FilteringResult,
    ProcessedSource,
    ProcessingStats,
    SourceBatch,
)
from .normalizer import utc_now_iso


def build_batch_details(batch: SourceBatch, processing_time_ms: int) -> BatchDetails:
    return BatchDetails(
        batch_id=batch.batch_id,
        batch_number=batch.batch_number,
        total_batches=batch.total_batches,
        topic_id=batch.topic_id,
        topic_name=batch.topic_name,
        processed_at=utc_now_iso(),
        processing_time_ms=processing_time_ms,
    )


def format_failed_sources(failed: Iterable[ProcessedSource]) -> List[FailedSourceInfo]:
    return [
        FailedSourceInfo(
            id=p.source.id,
            name=p.source.name,
            url=p.source.url,
            rss_feed_url=p.source.rss_feed_url,
            error=p.error or "",
            last_fetched=p.last_fetched,
        )
        for p in failed
    ]


def build_response(
    batch: SourceBatch,
    batch_result: BatchProcessingResult,
    enriched: List[EnrichedArticle],
    filtering: FilteringResult,
) -> ArticleFetchResponse:
    """
    Assemble the final payload for one batch.

    `filtering_applied` reflects whether any relationship keyword group was
    supplied, not whether a NOT keyword was found among them.
    """
    discarded = filtering.discarded_articles_results
    stats = ProcessingStats(
        total_sources_processed=len(batch_result.processed_sources),
        successful_sources=len(batch_result.successful_sources),
        failed_sources=len(batch_result.failed_sources),
        total_articles_fetched=len(enriched),
        total_articles_after_filtering=len(filtering.filtered_articles),
        total_articles_discarded=discarded.total_discarded,
        filtering_applied=bool(batch.relationship_keywords),
    )
    return ArticleFetchResponse(
        batch_details=build_batch_details(batch, batch_result.processing_time_ms),
        processing_stats=stats,
        failed_sources=format_failed_sources(batch_result.failed_sources),
        discarded_articles_results=discarded,
        articles=filtering.filtered_articles,
        relationship_keywords=list(batch.relationship_keywords or []),
        topic_keywords=list(batch.keywords or []),
    )


def error_response(message: str) -> Dict[str, Any]:
    return {"success": False, "error": message, "timestamp": utc_now_iso()}


def validation_error_response(message: str) -> Dict[str, Any]:
    return error_response(f"Validation Error: {message}")
