from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

DEFAULT_CONTENT_FETCHING = "SCRAPING"

NOT = "NOT"


@dataclass(frozen=True)
class Source:
    """
    A configured feed origin. Immutable input; identity is `id`.
    """
    id: str
    name: str
    url: str
    rss_feed_url: str
    score: float = 0
    language: Optional[str] = None
    content_fetching: Optional[str] = None  # "SCRAPING" | "RSS_ONLY"
    topic_id: Optional[str] = None
    topic_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Source":
        return cls(
            id=data.get("id") or "",
            name=data.get("name") or "",
            url=data.get("url") or "",
            rss_feed_url=data.get("rssFeedUrl") or data.get("feedUrl") or "",
            score=data.get("score") or 0,
            language=data.get("language"),
            content_fetching=data.get("contentFetching"),
            topic_id=data.get("topicId"),
            topic_name=data.get("topicName"),
        )


@dataclass(frozen=True)
class Article:
    """
    Normalized representation of one feed item.

    Every text field is a plain string (possibly empty); `pub_date` is an
    ISO-8601 UTC string or "".
    """
    title: str
    description: str
    content: str
    content_snippet: str
    summary: str
    full_content_body: str
    content_encoded: str
    content_snippet_encoded: str
    link: str
    pub_date: str
    author: str
    guid: str
    source: str
    source_id: str
    source_score: float


@dataclass(frozen=True)
class EnrichedArticle(Article):
    """Article augmented with its source's and the batch's topic metadata."""
    original_source_id: str = ""
    original_source_name: str = ""
    source_name: str = ""
    source_rss_feed_url: str = ""
    source_content_fetching: str = DEFAULT_CONTENT_FETCHING
    feed_language: str = ""
    topic_id: str = ""
    topic_name: str = ""


@dataclass
class ProcessedSource:
    """Outcome of fetching one Source. Exactly one exists per input Source."""
    source: Source
    success: bool
    last_fetched: str
    articles: List[Article] = field(default_factory=list)
    articles_count: Optional[int] = None
    feed_title: Optional[str] = None
    feed_description: Optional[str] = None
    feed_language: Optional[str] = None
    feed_link: Optional[str] = None
    error: Optional[str] = None


@dataclass
class BatchProcessingResult:
    processed_sources: List[ProcessedSource]
    successful_sources: List[ProcessedSource]
    failed_sources: List[ProcessedSource]
    processing_time_ms: int


@dataclass(frozen=True)
class RelationshipItem:
    type: str  # "NOT" | "INCLUDE" | "EXCLUDE"
    keywords: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RelationshipItem":
        keywords: List[str] = []
        for k in data.get("keywords") or []:
            # Wire form is {"keyword": "..."}; bare strings are tolerated.
            if isinstance(k, Mapping):
                k = k.get("keyword")
            if isinstance(k, str):
                keywords.append(k)
        return cls(type=str(data.get("type") or ""), keywords=tuple(keywords))

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "keywords": [{"keyword": k} for k in self.keywords]}


@dataclass(frozen=True)
class RelationshipKeyword:
    items: Tuple[RelationshipItem, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RelationshipKeyword":
        items = data.get("items") or []
        return cls(items=tuple(RelationshipItem.from_dict(i) for i in items if isinstance(i, Mapping)))

    def to_dict(self) -> Dict[str, Any]:
        return {"items": [i.to_dict() for i in self.items]}


@dataclass(frozen=True)
class TopicKeyword:
    keyword: str
    type: str  # "INCLUDE" | "EXCLUDE"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TopicKeyword":
        return cls(keyword=str(data.get("keyword") or ""), type=str(data.get("type") or ""))


@dataclass
class SourceBatch:
    """One batch request: a topic and the sources to fetch for it."""
    batch_id: str
    batch_number: int
    total_batches: int
    topic_id: str
    topic_name: str
    sources: List[Source]
    relationship_keywords: Optional[List[RelationshipKeyword]] = None
    keywords: Optional[List[TopicKeyword]] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SourceBatch":
        rel = data.get("relationshipKeywords")
        kws = data.get("keywords")
        return cls(
            batch_id=str(data.get("batchId") or ""),
            batch_number=data.get("batchNumber") or 0,
            total_batches=data.get("totalBatches") or 0,
            topic_id=data.get("topicId") or "",
            topic_name=data.get("topicName") or "",
            sources=[Source.from_dict(s) for s in data.get("sources") or []],
            relationship_keywords=(
                [RelationshipKeyword.from_dict(r) for r in rel if isinstance(r, Mapping)]
                if isinstance(rel, list) else None
            ),
            keywords=(
                [TopicKeyword.from_dict(k) for k in kws if isinstance(k, Mapping)]
                if isinstance(kws, list) else None
            ),
        )


@dataclass
class DiscardStats:
    total_discarded: int = 0
    discarded_by_no_content: int = 0
    discarded_by_not_keywords: int = 0
    keyword_discard_stats: Dict[str, int] = field(default_factory=dict)


@dataclass
class FilteringResult:
    filtered_articles: List[EnrichedArticle]
    discarded_articles_results: DiscardStats


@dataclass
class BatchDetails:
    batch_id: str
    batch_number: int
    total_batches: int
    topic_id: str
    topic_name: str
    processed_at: str
    processing_time_ms: int


@dataclass
class ProcessingStats:
    total_sources_processed: int
    successful_sources: int
    failed_sources: int
    total_articles_fetched: int
    total_articles_after_filtering: int
    total_articles_discarded: int
    filtering_applied: bool


@dataclass
class FailedSourceInfo:
    id: str
    name: str
    url: str
    rss_feed_url: str
    error: str
    last_fetched: str
    success: bool = False


@dataclass
class ArticleFetchResponse:
    """
    Final payload for one batch.

    WARNING: Field names are the wire contract (camelCased on output).
    """
    batch_details: BatchDetails
    processing_stats: ProcessingStats
    failed_sources: List[FailedSourceInfo]
    discarded_articles_results: DiscardStats
    articles: List[EnrichedArticle]
    relationship_keywords: List[RelationshipKeyword]
    topic_keywords: List[TopicKeyword]
    success: bool = True
