#!/usr/bin/env python3
"""
ATS Score - completeness and keyword score of a resume.

20 points each for a summary, education, experience, skills and portfolio,
plus 2 points per resume token found in the job description (at most 20).
The total is capped at 100.
"""

import logging
from typing import Any, Dict, Union

from core.matcher.models import ResumeSource
from core.scorer.similarity import tokenize

logger = logging.getLogger(__name__)

SECTION_POINTS = 20
KEYWORD_POINTS = 2
KEYWORD_CAP = 20


def calculate_ats_score(
    resume: Union[ResumeSource, Dict[str, Any]],
    job_description: str = ''
) -> int:
    if not isinstance(resume, ResumeSource):
        resume = ResumeSource.model_validate({**dict(resume), 'kind': 'resume'})

    summary = resume.personal_info.summary
    score = 0
    for present in (summary, resume.education, resume.experience, resume.skills, resume.portfolio):
        if present:
            score += SECTION_POINTS

    resume_tokens = tokenize(f"{summary or ''} {' '.join(resume.skills)}")
    job_tokens = set(tokenize(job_description))
    keyword_hits = sum(1 for token in resume_tokens if token in job_tokens)
    score += min(keyword_hits * KEYWORD_POINTS, KEYWORD_CAP)

    return min(score, 100)
