#!/usr/bin/env python3
"""
Ranking & Pagination - sort scored items and slice out one page.

Sorting is descending by score and stable: items with equal scores keep their
input order. Page and limit coming from a request are coerced to safe values
before any slicing happens.
"""

import math
import logging
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple, TypeVar, Literal

from core.matcher.alert_matcher import AlertMatcher, CriteriaDocument, coerce_criteria
from core.scorer.models import ScoredItem, RankedPage

logger = logging.getLogger(__name__)

T = TypeVar('T')

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


def _positive_int(value: Any, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(number) or math.isinf(number) or number < 1:
        return default
    return int(number)


def coerce_pagination(
    page: Any,
    limit: Any,
    default_page: int = DEFAULT_PAGE,
    default_limit: int = DEFAULT_LIMIT,
    max_limit: Optional[int] = None
) -> Tuple[int, int]:
    """
    Turn request-supplied page/limit into positive integers.

    Non-numeric, NaN, zero and negative values fall back to the defaults.
    """
    page = _positive_int(page, default_page)
    limit = _positive_int(limit, default_limit)
    if max_limit:
        limit = min(limit, max_limit)
    return page, limit


def sort_scored(scored: Iterable[ScoredItem[T]]) -> List[ScoredItem[T]]:
    """Descending by score; ties keep their input order."""
    return sorted(scored, key=lambda s: s.score, reverse=True)


def rank_items(items: Iterable[T], score_fn: Callable[[T], float]) -> List[ScoredItem[T]]:
    """Score every item with an ad-hoc function and sort the results."""
    return sort_scored(ScoredItem(item=item, score=float(score_fn(item))) for item in items)


def paginate(
    scored: Sequence[ScoredItem[T]],
    page: Any = DEFAULT_PAGE,
    limit: Any = DEFAULT_LIMIT,
    **pagination_defaults
) -> RankedPage[T]:
    """Slice one page out of an already sorted sequence."""
    page, limit = coerce_pagination(page, limit, **pagination_defaults)
    start = (page - 1) * limit
    return RankedPage(
        results=list(scored[start:start + limit]),
        page=page,
        limit=limit,
        total=len(scored),
    )


def rank_against_criteria(
    items: Iterable[T],
    criteria: CriteriaDocument,
    page: Any = DEFAULT_PAGE,
    limit: Any = DEFAULT_LIMIT,
    matcher: Optional[AlertMatcher] = None,
    only_matched: bool = False,
    target: Literal['candidate', 'job'] = 'candidate'
) -> RankedPage[T]:
    """
    Score items against alert criteria, rank them and return one page.

    Args:
        items: Candidate documents (resume alerts) or job documents (job alerts)
        criteria: Alert criteria
        page: 1-based page number; unusable values fall back to 1
        limit: Page size; unusable values fall back to 10
        matcher: AlertMatcher to use (default threshold when omitted)
        only_matched: Drop results below the match threshold before paging
        target: Whether items are candidates or jobs

    Returns:
        RankedPage whose total counts every ranked item (after filtering)
    """
    matcher = matcher or AlertMatcher()
    criteria = coerce_criteria(criteria)
    match = matcher.match_job_to_alert if target == 'job' else matcher.match_to_alert

    scored = []
    for item in items:
        result = match(item, criteria)
        if only_matched and not result.matched:
            continue
        scored.append(ScoredItem(
            item=item,
            score=result.score,
            matched=result.matched,
            components=result.breakdown,
        ))

    ranked = sort_scored(scored)
    ranked_page = paginate(ranked, page, limit)

    logger.debug(
        f"Ranked {ranked_page.total} {target}s, returning page {ranked_page.page} "
        f"({len(ranked_page.results)} results)"
    )
    return ranked_page
