"""
rss_batch

Fetches one batch of RSS/Atom sources concurrently and returns their articles,
normalized, enriched with source/topic metadata and stripped of articles that
contain NOT keywords.

Core ideas:
- Input: a source batch (sources, topic, relationship keywords)
- Process: fetch (chunks of 25, 1s apart) → normalize → enrich → NOT-keyword filter → report
- Output: ArticleFetchResponse (camelCase JSON via `to_dict`)

Example
-------
from rss_batch import ArticleFetcher

fetcher = ArticleFetcher()
response = fetcher.handle({
    "sourceBatch": {
        "batchId": "b-1",
        "batchNumber": 1,
        "totalBatches": 1,
        "topicId": "t-1",
        "topicName": "Markets",
        "sources": [
            {"id": "s-1", "name": "BBC", "url": "https://bbc.co.uk",
             "rssFeedUrl": "https://feeds.bbci.co.uk/news/rss.xml", "score": 8},
        ],
        "relationshipKeywords": [
            {"items": [{"type": "NOT", "keywords": [{"keyword": "bitcoin"}]}]},
        ],
    }
})

for article in response["articles"]:
    print(article["pubDate"], article["sourceName"], article["title"])
"""
from .models import (
    Article,
    ArticleFetchResponse,
    EnrichedArticle,
    ProcessedSource,
    RelationshipKeyword,
    Source,
    SourceBatch,
)
from .core import ArticleFetcher, parse_request
from .fetcher import FeedClient, FeedClientConfig
from .config import Settings

__all__ = [
    "Article",
    "ArticleFetchResponse",
    "EnrichedArticle",
    "ProcessedSource",
    "RelationshipKeyword",
    "Source",
    "SourceBatch",
    "ArticleFetcher",
    "parse_request",
    "FeedClient",
    "FeedClientConfig",
    "Settings",
]
