"""Matcher Module - alert criteria matching for candidates and jobs."""
from core.matcher.models import (
    MatchCriteria, CandidateAttributes, JobAttributes, MatchResult,
    ProfileSource, ResumeSource, CandidateSource, JobPosting
)
from core.matcher.normalizer import (
    candidate_source_from_document, to_candidate_attributes, to_job_attributes
)
from core.matcher.alert_matcher import (
    AlertMatcher, match_to_alert, coerce_criteria, DEFAULT_MATCH_THRESHOLD
)

__all__ = [
    'AlertMatcher', 'match_to_alert', 'coerce_criteria', 'DEFAULT_MATCH_THRESHOLD',
    'candidate_source_from_document', 'to_candidate_attributes', 'to_job_attributes',
    'MatchCriteria', 'CandidateAttributes', 'JobAttributes', 'MatchResult',
    'ProfileSource', 'ResumeSource', 'CandidateSource', 'JobPosting',
]
