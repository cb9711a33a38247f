#!/usr/bin/env python3
"""
Scoring Module - ranking, recommendation and resume scores.

Public API:
- rank_against_criteria: Rank candidates or jobs against alert criteria
- recommend_jobs: Rank jobs for a candidate by weighted signals
- text_similarity: Term-frequency cosine similarity of two texts
- calculate_ats_score: Resume completeness and keyword score

- models.py: Data structures (ScoredItem, RankedPage)
- similarity.py: Text similarity
- ranking.py: Sorting, pagination and criteria ranking
- recommendation.py: Job recommendation scoring
- ats.py: ATS resume score
"""

from core.scorer.models import ScoredItem, RankedPage
from core.scorer.similarity import text_similarity
from core.scorer.ranking import (
    rank_against_criteria, rank_items, paginate, coerce_pagination, sort_scored
)
from core.scorer.recommendation import recommend_jobs, score_job_for_candidate
from core.scorer.ats import calculate_ats_score

__all__ = [
    'ScoredItem', 'RankedPage', 'text_similarity',
    'rank_against_criteria', 'rank_items', 'paginate', 'coerce_pagination', 'sort_scored',
    'recommend_jobs', 'score_job_for_candidate', 'calculate_ats_score',
]
