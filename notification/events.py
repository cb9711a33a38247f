"""
Application events published after a write.

The write itself returns normally; whoever performed it hands the event to
the AlertNotificationDispatcher, which runs the matching against alerts.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from core.matcher.models import ProfileSource, ResumeSource, JobPosting


@dataclass(frozen=True)
class CandidateSaved:
    """A candidate profile or resume was created or updated."""
    document: Union[ProfileSource, ResumeSource, Dict[str, Any]]
    candidate_id: Optional[str] = None


@dataclass(frozen=True)
class JobPublished:
    """A job posting was created or updated."""
    document: Union[JobPosting, Dict[str, Any]]
    job_id: Optional[str] = None
