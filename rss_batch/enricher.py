from __future__ import annotations

from dataclasses import fields
from typing import Iterable, List

from .models import DEFAULT_CONTENT_FETCHING, Article, EnrichedArticle, ProcessedSource, SourceBatch


def enrich_article(article: Article, processed: ProcessedSource, batch: SourceBatch) -> EnrichedArticle:
    source = processed.source
    base = {f.name: getattr(article, f.name) for f in fields(Article)}
    base.update(source_id=source.id, source_score=source.score)
    return EnrichedArticle(
        **base,
        original_source_id=source.id,
        original_source_name=source.name,
        source_name=source.name,
        source_rss_feed_url=source.rss_feed_url,
        source_content_fetching=source.content_fetching or DEFAULT_CONTENT_FETCHING,
        feed_language=processed.feed_language or "",
        topic_id=source.topic_id or batch.topic_id,
        topic_name=source.topic_name or batch.topic_name,
    )


def enrich_articles(sources: Iterable[ProcessedSource], batch: SourceBatch) -> List[EnrichedArticle]:
    """
    Attach source and topic metadata to every article of the given sources.
    Source order, then feed order, is preserved. Failed sources add nothing.
    """
    out: List[EnrichedArticle] = []
    for processed in sources:
        if not processed.success:
            continue
        for article in processed.articles:
            out.append(enrich_article(article, processed, batch))
    return out
