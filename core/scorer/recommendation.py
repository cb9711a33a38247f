#!/usr/bin/env python3
"""
Job Recommendation - rank job postings for one candidate.

Unlike alert matching, which counts satisfied criteria, recommendations add
up weighted signals:

    score = 20 * overlapping categories
          + 25 if the city matches
          + 15 if the experience band matches
          + 15 if the job type is one the candidate prefers
          + 10 if the offered salary band meets the expected one
          + 15 * text similarity of the two free texts

clamped to 0-100. Weights come from RecommendationWeights.
"""

import logging
from typing import Any, Dict, Iterable, Optional, Tuple

from core.config_loader import RecommendationWeights
from core.matcher.bands import NEGOTIABLE, SALARY_BANDS, salary_band_range
from core.matcher.models import CandidateAttributes, JobAttributes
from core.matcher.normalizer import CandidateDocument, to_candidate_attributes, to_job_attributes
from core.scorer.models import ScoredItem, RankedPage
from core.scorer.ranking import sort_scored, paginate
from core.scorer.similarity import text_similarity

logger = logging.getLogger(__name__)


def _same(a: str, b: str) -> bool:
    return bool(a) and bool(b) and a.strip().lower() == b.strip().lower()


def salary_meets_expectation(offered: str, expected: str) -> bool:
    """An offered band meets the expectation when its lower edge is at least the expected one."""
    if offered == NEGOTIABLE or offered not in SALARY_BANDS or expected not in SALARY_BANDS:
        return False
    offered_min, _ = salary_band_range(offered)
    expected_min, _ = salary_band_range(expected)
    return offered_min >= expected_min


def score_job_for_candidate(
    candidate: CandidateAttributes,
    job: JobAttributes,
    weights: Optional[RecommendationWeights] = None
) -> Tuple[float, Dict[str, Any]]:
    """
    Calculate how well a job suits a candidate.

    Returns: (score, components)
    """
    weights = weights or RecommendationWeights()

    overlap = len(set(candidate.categories) & set(job.categories))
    city_match = _same(candidate.city, job.city)
    experience_match = _same(candidate.experience, job.experience)
    job_type_match = bool(job.job_type) and job.job_type in candidate.job_types
    salary_match = salary_meets_expectation(job.offered_salary, candidate.expected_salary)
    similarity = text_similarity(candidate.free_text, job.free_text)

    raw_score = (
        overlap * weights.category +
        (weights.city if city_match else 0.0) +
        (weights.experience if experience_match else 0.0) +
        (weights.job_type if job_type_match else 0.0) +
        (weights.salary if salary_match else 0.0) +
        similarity * weights.text_similarity
    )
    score = max(0.0, min(100.0, raw_score))

    components = {
        'category_overlap': overlap,
        'city_match': city_match,
        'experience_match': experience_match,
        'job_type_match': job_type_match,
        'salary_match': salary_match,
        'text_similarity': similarity,
        'raw_score': raw_score,
        'score': score,
    }
    return score, components


def recommend_jobs(
    candidate_doc: CandidateDocument,
    jobs: Iterable[Any],
    page: Any = 1,
    limit: Any = 10,
    weights: Optional[RecommendationWeights] = None
) -> RankedPage:
    """Rank job documents for a candidate and return one page."""
    candidate = to_candidate_attributes(candidate_doc)

    scored = []
    for job in jobs:
        score, components = score_job_for_candidate(candidate, to_job_attributes(job), weights)
        scored.append(ScoredItem(item=job, score=score, components=components))

    ranked_page = paginate(sort_scored(scored), page, limit)
    logger.info(f"Recommended {ranked_page.total} jobs for {candidate.name or 'candidate'}")
    return ranked_page
