#!/usr/bin/env python3
"""
Criteria Normalizer - project candidate and job documents into one vocabulary.

A candidate arrives either as a flat profile or as a resume with nested
personal info, education and experience entries. Both are converted once into
CandidateAttributes and consumed uniformly by the matchers afterwards.
"""

import logging
from datetime import datetime, date, timezone
from typing import Any, Dict, Iterable, List, Optional, Union

from dateutil import parser as date_parser
from pydantic import BaseModel, ValidationError

from core.matcher.bands import experience_band_for_years, NO_PREFERENCE
from core.matcher.models import (
    CandidateAttributes, JobAttributes, JobPosting,
    ProfileSource, ResumeSource, ExperienceEntry,
)

logger = logging.getLogger(__name__)

DAYS_PER_YEAR = 365.25

CandidateDocument = Union[ProfileSource, ResumeSource, Dict[str, Any]]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _as_dict(doc: Any) -> Dict[str, Any]:
    if doc is None:
        return {}
    if isinstance(doc, BaseModel):
        return doc.model_dump(by_alias=True)
    return dict(doc)


def candidate_source_from_document(doc: CandidateDocument) -> Union[ProfileSource, ResumeSource]:
    """
    Tag a raw candidate document as a profile or a resume.

    Documents carrying personal info are resumes; everything else is treated
    as a flat profile. Already-tagged sources are returned unchanged.

    Raises:
        pydantic.ValidationError: if a field has an unusable type
    """
    if isinstance(doc, (ProfileSource, ResumeSource)):
        return doc

    data = _as_dict(doc)
    if 'personalInfo' in data or 'personal_info' in data:
        return ResumeSource.model_validate({**data, 'kind': 'resume'})
    return ProfileSource.model_validate({**data, 'kind': 'profile'})


def parse_date(value: Any) -> Optional[datetime]:
    """Parse a date-like value into a naive UTC datetime, or None."""
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        try:
            parsed = date_parser.isoparse(str(value))
        except (ValueError, OverflowError):
            try:
                parsed = date_parser.parse(str(value))
            except (ValueError, OverflowError, TypeError):
                return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def calculate_total_years(
    experiences: Iterable[ExperienceEntry],
    now: Optional[datetime] = None
) -> float:
    """
    Sum the durations of experience entries in years.

    Current entries run until `now`. Entries without a usable start date, or
    without an end date while not current, contribute nothing.
    """
    now = parse_date(now) or _utcnow()
    total_years = 0.0

    for entry in experiences:
        start = parse_date(entry.start_date)
        end = now if entry.current else parse_date(entry.end_date)
        if start is None or end is None:
            logger.debug(f"Skipping experience entry at {entry.company or 'unknown company'}: missing dates")
            continue
        total_years += (end - start).days / DAYS_PER_YEAR

    return total_years


def calculate_experience_band(
    experiences: List[ExperienceEntry],
    now: Optional[datetime] = None
) -> str:
    """Experience band of a resume; no entries gives the lowest band."""
    if not experiences:
        return experience_band_for_years(0)
    return experience_band_for_years(calculate_total_years(experiences, now))


def _profile_attributes(profile: ProfileSource) -> CandidateAttributes:
    preferences = profile.preferences
    gender = profile.gender or profile.social_media.get('gender') or NO_PREFERENCE
    remote_ready = bool(preferences and preferences.remote_ready) or profile.location.remote_work == 'Remote'

    job_types = [profile.job_type] if profile.job_type else []
    if preferences:
        job_types.extend(t for t in preferences.job_types if t not in job_types)

    return CandidateAttributes(
        name=profile.full_name or profile.job_title or '',
        title=profile.job_title or '',
        description=profile.description or '',
        categories=list(profile.categories),
        city=profile.location.city or '',
        experience=profile.experience or experience_band_for_years(0),
        skills=list(profile.skills),
        education_levels=list(profile.education_levels),
        expected_salary=profile.expected_salary or '',
        age=profile.age or 0,
        gender=gender,
        remote_ready=remote_ready,
        remote_work=profile.location.remote_work,
        job_types=job_types,
    )


def _resume_attributes(resume: ResumeSource, now: Optional[datetime]) -> CandidateAttributes:
    info = resume.personal_info
    preferences = info.preferences or resume.preferences

    education_levels: List[str] = []
    for entry in resume.education:
        if entry.degree and entry.degree not in education_levels:
            education_levels.append(entry.degree)

    return CandidateAttributes(
        name=info.full_name or info.professional_title or '',
        title=info.professional_title or '',
        description=info.summary or resume.description or '',
        categories=list(resume.categories),
        city=info.location.city or '',
        experience=calculate_experience_band(resume.experience, now),
        skills=list(resume.skills),
        education_levels=education_levels,
        expected_salary=info.expected_salary or '',
        age=info.age or 0,
        gender=info.gender or NO_PREFERENCE,
        remote_ready=bool(preferences and preferences.remote_ready),
        remote_work=info.location.remote_work,
        job_types=list(preferences.job_types) if preferences else [],
    )


def to_candidate_attributes(
    source: CandidateDocument,
    now: Optional[datetime] = None
) -> CandidateAttributes:
    """
    Project a profile or resume into CandidateAttributes.

    Never raises: a document that cannot be read at all yields empty
    attributes, which then match nothing.
    """
    try:
        tagged = candidate_source_from_document(source)
    except (ValidationError, TypeError, ValueError) as e:
        logger.warning(f"Unreadable candidate document, using empty attributes: {e}")
        return CandidateAttributes()

    if isinstance(tagged, ResumeSource):
        return _resume_attributes(tagged, now)
    return _profile_attributes(tagged)


def job_posting_from_document(doc: Union[JobPosting, Dict[str, Any]]) -> JobPosting:
    if isinstance(doc, JobPosting):
        return doc
    return JobPosting.model_validate(_as_dict(doc))


def to_job_attributes(doc: Union[JobPosting, Dict[str, Any]]) -> JobAttributes:
    """Project a job posting into JobAttributes. Never raises."""
    try:
        job = job_posting_from_document(doc)
    except (ValidationError, TypeError, ValueError) as e:
        logger.warning(f"Unreadable job document, using empty attributes: {e}")
        return JobAttributes()

    return JobAttributes(
        title=job.title or '',
        description=job.description or '',
        categories=list(job.specialisms),
        city=job.location.city or '',
        experience=job.experience or '',
        job_type=job.job_type or '',
        offered_salary=job.offered_salary or '',
        remote_work=job.remote_work or job.location.remote_work,
    )
