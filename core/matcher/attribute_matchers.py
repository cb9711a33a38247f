#!/usr/bin/env python3
"""
Attribute Matchers - one comparison per criterion.

Each function takes the declared criterion value and the actual attribute
value and returns whether the criterion is satisfied. Whether a criterion is
declared at all is decided by the caller; these functions always evaluate.
"""

import logging
from typing import Iterable, List, Optional

from core.matcher.bands import (
    LAKH, NEGOTIABLE, NO_PREFERENCE, REMOTE_ANY, REMOTE_ONLY, salary_band_range
)
from core.matcher.models import AgeRange, SalaryRange, CandidateAttributes

logger = logging.getLogger(__name__)


def _intersects(wanted: Iterable[str], actual: Iterable[str]) -> bool:
    actual_set = set(actual or [])
    return any(value in actual_set for value in wanted)


def _same_text(wanted: Optional[str], actual: Optional[str]) -> bool:
    return (wanted or '').strip().lower() == (actual or '').strip().lower()


def match_categories(wanted: List[str], actual: Iterable[str]) -> bool:
    return _intersects(wanted, actual)


def match_skills(wanted: List[str], actual: Iterable[str]) -> bool:
    return _intersects(wanted, actual)


def match_education_levels(wanted: List[str], actual: Iterable[str]) -> bool:
    return _intersects(wanted, actual)


def match_city(wanted: str, actual: Optional[str]) -> bool:
    return _same_text(wanted, actual)


def match_experience(wanted: str, actual: Optional[str]) -> bool:
    return _same_text(wanted, actual)


def match_job_type(wanted: str, actual: Optional[str]) -> bool:
    return _same_text(wanted, actual)


def match_salary_range(
    criterion: SalaryRange,
    band: Optional[str],
    negotiable_matches: bool = False
) -> bool:
    """
    Compare a declared salary range against a salary band.

    The band is translated into a lakh range; its lower edge must reach the
    declared minimum and its upper edge must stay within the declared maximum.
    A band without an upper edge never satisfies a declared maximum.
    """
    if negotiable_matches and band == NEGOTIABLE:
        return True

    band_min, band_max = salary_band_range(band)

    if criterion.min and band_min * LAKH < criterion.min:
        return False
    if criterion.max:
        if band_max is None or band_max * LAKH > criterion.max:
            return False
    return True


def match_gender(wanted: str, actual: Optional[str]) -> bool:
    if wanted == NO_PREFERENCE:
        return True
    return wanted == actual


def match_age_range(age_range: AgeRange, age: Optional[int]) -> bool:
    """Inclusive range check; an undeclared bound is open."""
    age = age or 0
    if age_range.min is not None and age < age_range.min:
        return False
    if age_range.max is not None and age > age_range.max:
        return False
    return True


def match_remote_work(wanted: str, candidate: CandidateAttributes) -> bool:
    """
    "Any" always matches. "Remote Only" and "Remote" need a remote-ready
    candidate. "On-site" and "Hybrid" need the candidate's own work-mode
    preference to be the same or "Any".
    """
    if wanted == REMOTE_ANY:
        return True
    if wanted in (REMOTE_ONLY, 'Remote'):
        return candidate.remote_ready
    if candidate.remote_work == REMOTE_ANY:
        return True
    return _same_text(wanted, candidate.remote_work)


def match_keywords(keywords: List[str], text: str) -> bool:
    """True if any keyword occurs, case-insensitively, within the text."""
    haystack = (text or '').lower()
    return any(kw and kw.lower() in haystack for kw in keywords)


def match_work_mode(wanted: str, actual: Optional[str]) -> bool:
    """Work mode of a job posting against a declared mode ("Remote Only" reads as "Remote")."""
    if wanted == REMOTE_ANY:
        return True
    if wanted == REMOTE_ONLY:
        wanted = 'Remote'
    return _same_text(wanted, actual)


def match_job_type_preference(wanted: str, preferred: Iterable[str]) -> bool:
    return any(_same_text(wanted, job_type) for job_type in preferred or [])
