#!/usr/bin/env python3
"""
Alert Matcher - score a candidate or a job against alert criteria.

Only the criteria an alert actually declares are evaluated. Each declared
criterion adds one to the denominator; each satisfied one adds one to the
numerator. The score is the satisfied percentage and a result counts as a
match once the score reaches the threshold.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple, Union
from datetime import datetime

from pydantic import ValidationError

from core.matcher import attribute_matchers as m
from core.matcher.models import (
    JOB_ALERT_CRITERIA, CandidateAttributes, JobAttributes, JobPosting, MatchCriteria,
    MatchResult
)
from core.matcher.normalizer import (
    CandidateDocument, to_candidate_attributes, to_job_attributes
)

logger = logging.getLogger(__name__)

DEFAULT_MATCH_THRESHOLD = 60.0

CriteriaDocument = Union[MatchCriteria, Dict[str, Any], None]


def coerce_criteria(criteria: CriteriaDocument) -> MatchCriteria:
    """
    Read alert criteria, falling back to an empty criteria set when the
    document cannot be read. Empty criteria never match.
    """
    if isinstance(criteria, MatchCriteria):
        return criteria
    if not criteria:
        return MatchCriteria()
    try:
        return MatchCriteria.model_validate(dict(criteria))
    except (ValidationError, TypeError, ValueError) as e:
        logger.warning(f"Unreadable alert criteria, treating as empty: {e}")
        return MatchCriteria()


def candidate_checks(
    candidate: CandidateAttributes,
    criteria: MatchCriteria
) -> List[Tuple[str, bool]]:
    """Evaluate every declared criterion against a candidate."""
    diversity = criteria.diversity
    evaluators: Dict[str, Callable[[], bool]] = {
        'categories': lambda: m.match_categories(criteria.categories, candidate.categories),
        'location': lambda: m.match_city(criteria.location.city, candidate.city),
        'experience': lambda: m.match_experience(criteria.experience, candidate.experience),
        'skills': lambda: m.match_skills(criteria.skills, candidate.skills),
        'education_levels': lambda: m.match_education_levels(
            criteria.education_levels, candidate.education_levels),
        'salary_range': lambda: m.match_salary_range(criteria.salary_range, candidate.expected_salary),
        'gender': lambda: m.match_gender(diversity.gender, candidate.gender),
        'age_range': lambda: m.match_age_range(diversity.age_range, candidate.age),
        'remote_work': lambda: m.match_remote_work(criteria.remote_work, candidate),
        'keywords': lambda: m.match_keywords(criteria.keywords, candidate.free_text),
        'job_type': lambda: m.match_job_type_preference(criteria.job_type, candidate.job_types),
    }
    return [(name, evaluators[name]()) for name in criteria.declared_criteria()]


def job_checks(job: JobAttributes, criteria: MatchCriteria) -> List[Tuple[str, bool]]:
    """Evaluate every declared criterion a job posting can be scored on."""
    evaluators: Dict[str, Callable[[], bool]] = {
        'categories': lambda: m.match_categories(criteria.categories, job.categories),
        'location': lambda: m.match_city(criteria.location.city, job.city),
        'experience': lambda: m.match_experience(criteria.experience, job.experience),
        'salary_range': lambda: m.match_salary_range(
            criteria.salary_range, job.offered_salary, negotiable_matches=True),
        'remote_work': lambda: m.match_work_mode(criteria.remote_work, job.remote_work),
        'keywords': lambda: m.match_keywords(criteria.keywords, job.free_text),
        'job_type': lambda: m.match_job_type(criteria.job_type, job.job_type),
    }
    return [
        (name, evaluators[name]())
        for name in criteria.declared_criteria()
        if name in JOB_ALERT_CRITERIA
    ]


class AlertMatcher:
    """Score candidates and jobs against alert criteria."""

    def __init__(self, threshold: float = DEFAULT_MATCH_THRESHOLD):
        """
        Args:
            threshold: Minimum score (0-100) for a result to count as a match
        """
        self.threshold = threshold

    def aggregate(self, checks: List[Tuple[str, bool]]) -> MatchResult:
        """Combine criterion outcomes into a score and a verdict."""
        total_criteria = len(checks)
        matched_criteria = sum(1 for _, ok in checks if ok)

        score = (matched_criteria / total_criteria) * 100 if total_criteria else 0.0

        return MatchResult(
            matched=score >= self.threshold,
            score=score,
            total_criteria=total_criteria,
            matched_criteria=matched_criteria,
            breakdown=dict(checks),
        )

    def match_to_alert(
        self,
        source_doc: CandidateDocument,
        criteria: CriteriaDocument,
        now: Optional[datetime] = None
    ) -> MatchResult:
        """
        Score a candidate profile or resume against resume-alert criteria.

        Never raises; unreadable input yields score 0 and no match.
        """
        candidate = to_candidate_attributes(source_doc, now=now)
        result = self.aggregate(candidate_checks(candidate, coerce_criteria(criteria)))

        logger.debug(
            f"[ResumeMatch] {candidate.name or 'unnamed'}: "
            f"{result.matched_criteria}/{result.total_criteria} matched ({result.score:.1f}%)"
        )
        return result

    def match_job_to_alert(
        self,
        job_doc: Union[JobPosting, Dict[str, Any]],
        criteria: CriteriaDocument
    ) -> MatchResult:
        """Score a job posting against job-alert criteria. Never raises."""
        job = to_job_attributes(job_doc)
        result = self.aggregate(job_checks(job, coerce_criteria(criteria)))

        logger.debug(
            f"[JobMatch] {job.title or 'untitled'}: "
            f"{result.matched_criteria}/{result.total_criteria} matched ({result.score:.1f}%)"
        )
        return result


def match_to_alert(source_doc: CandidateDocument, criteria: CriteriaDocument) -> MatchResult:
    """Score a candidate against criteria with the default threshold."""
    return AlertMatcher().match_to_alert(source_doc, criteria)
