from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable, List, Optional, Pattern

from .models import NOT, DiscardStats, EnrichedArticle, FilteringResult, RelationshipKeyword
from .normalizer import strip_html


@lru_cache(maxsize=1024)
def keyword_matcher(keyword: str) -> Pattern[str]:
    """Exact whole-word matcher: no plurals, stems or partial words."""
    return re.compile(rf"\b{re.escape(keyword)}\b", re.IGNORECASE)


def matches_keyword(text: str, keyword: str) -> bool:
    return keyword_matcher(keyword).search(text) is not None


def searchable_text(article: EnrichedArticle) -> str:
    title = strip_html(article.title).lower()
    description = strip_html(article.description).lower()
    return f"{title} {description}".strip()


def extract_not_keywords(relationship_keywords: Iterable[RelationshipKeyword]) -> List[str]:
    """
    Collect lowercase NOT keywords across every relationship group.
    Duplicates across groups are kept.
    """
    out: List[str] = []
    for relationship in relationship_keywords:
        for item in relationship.items:
            if item.type != NOT:
                continue
            out.extend(k.lower() for k in item.keywords if k)
    return out


def filter_out_not_keywords(
    articles: List[EnrichedArticle],
    relationship_keywords: Optional[Iterable[RelationshipKeyword]] = None,
) -> FilteringResult:
    """
    Drop articles whose title/description contain any NOT keyword, and
    articles with no searchable text at all.

    Every match of a discarded article is counted per keyword, but the article
    itself counts once towards the totals.
    """
    stats = DiscardStats()

    not_keywords = extract_not_keywords(relationship_keywords or [])
    if not not_keywords:
        return FilteringResult(filtered_articles=list(articles), discarded_articles_results=stats)

    kept: List[EnrichedArticle] = []
    for article in articles:
        text = searchable_text(article)

        if not text:
            stats.total_discarded += 1
            stats.discarded_by_no_content += 1
            continue

        matched = [k for k in not_keywords if matches_keyword(text, k)]
        if matched:
            stats.total_discarded += 1
            stats.discarded_by_not_keywords += 1
            # a keyword listed in several groups counts once per listing
            for k in matched:
                stats.keyword_discard_stats[k] = stats.keyword_discard_stats.get(k, 0) + 1
            continue

        kept.append(article)

    return FilteringResult(filtered_articles=kept, discarded_articles_results=stats)
