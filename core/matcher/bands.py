#!/usr/bin/env python3
"""
Bands - ordinal buckets used in place of continuous values.

Salary bands are labels like "₹10-15 LPA" (lakhs per annum) and experience
bands are labels like "3-5 years". Matching compares bands, never raw numbers.
"""

import re
import logging
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

LAKH = 100_000

EXPERIENCE_BANDS = [
    'Less than 1 year',
    '1-3 years',
    '3-5 years',
    '5-10 years',
    '10+ years',
]
FRESHER = 'Fresher'

SALARY_BANDS = [
    '< ₹5 LPA',
    '₹5-10 LPA',
    '₹10-15 LPA',
    '₹15-20 LPA',
    '₹20-30 LPA',
    '₹30+ LPA',
]
NEGOTIABLE = 'Negotiable'

EDUCATION_LEVELS = ['10th', '12th', 'Diploma', 'Bachelor', 'Master', 'Doctorate', 'Other']
JOB_TYPES = ['Full-time', 'Part-time', 'Contract', 'Freelance', 'Internship', 'Temporary']

NO_PREFERENCE = 'No Preference'
REMOTE_ANY = 'Any'
REMOTE_ONLY = 'Remote Only'

_NUMBER_RE = re.compile(r'[\d.]+')


def salary_band_range(band: Optional[str]) -> Tuple[float, Optional[float]]:
    """
    Translate a salary band label into a (min, max) range in lakhs.

    "₹10-15 LPA" -> (10, 15), "< ₹5 LPA" -> (0, 5), "₹30+ LPA" -> (30, None).
    Unknown labels, "Negotiable" and missing values give (0, None), i.e. no
    lower bound and an unbounded top.
    """
    if not band or band not in SALARY_BANDS:
        return 0.0, None

    numbers = [float(n) for n in _NUMBER_RE.findall(band)]
    if band.startswith('<'):
        return 0.0, numbers[0]
    if len(numbers) == 1:
        return numbers[0], None
    return numbers[0], numbers[1]


def experience_band_for_years(total_years: float) -> str:
    """Bucket a number of years into the platform-wide experience bands."""
    if total_years < 1:
        return EXPERIENCE_BANDS[0]
    if total_years <= 3:
        return EXPERIENCE_BANDS[1]
    if total_years <= 5:
        return EXPERIENCE_BANDS[2]
    if total_years <= 10:
        return EXPERIENCE_BANDS[3]
    return EXPERIENCE_BANDS[4]
