from typing import List, Optional, Dict, Any
from urllib.parse import urljoin

from pydantic import BaseModel

from core.matcher.models import CandidateAttributes, JobPosting, MatchCriteria


class CandidateInfo(BaseModel):
    name: str
    title: str
    profile_id: Optional[str] = None


class JobInfo(BaseModel):
    title: str
    company: str
    job_id: Optional[str] = None
    location: Optional[str] = None


class AlertMatchContent(BaseModel):
    alert_title: str
    score: float
    criteria_summary: List[str] = []
    candidate: Optional[CandidateInfo] = None
    job: Optional[JobInfo] = None
    link: Optional[str] = None


class AlertMessageBuilder:
    """Render alert matches into subjects, bodies and channel metadata."""

    def __init__(self, base_url: str = "http://localhost:5000"):
        self.base_url = base_url.rstrip('/') + '/'

    @staticmethod
    def summarize_criteria(criteria: MatchCriteria) -> List[str]:
        lines = []
        if criteria.categories:
            lines.append(f"Categories: {', '.join(criteria.categories)}")
        if criteria.location and criteria.location.city:
            lines.append(f"Location: {criteria.location.city}")
        if criteria.experience:
            lines.append(f"Experience: {criteria.experience}")
        if criteria.skills:
            lines.append(f"Skills: {', '.join(criteria.skills)}")
        if criteria.education_levels:
            lines.append(f"Education: {', '.join(criteria.education_levels)}")
        if criteria.job_type:
            lines.append(f"Job type: {criteria.job_type}")
        return lines

    def build_resume_alert_content(
        self,
        alert_title: str,
        criteria: MatchCriteria,
        candidate: CandidateAttributes,
        profile_id: Optional[Any],
        score: float
    ) -> AlertMatchContent:
        link = urljoin(self.base_url, f"employer/candidates/{profile_id}") if profile_id else None
        return AlertMatchContent(
            alert_title=alert_title,
            score=round(score, 1),
            criteria_summary=self.summarize_criteria(criteria),
            candidate=CandidateInfo(
                name=candidate.name or "Unnamed Candidate",
                title=candidate.title or "Not Specified",
                profile_id=str(profile_id) if profile_id else None,
            ),
            link=link,
        )

    def build_job_alert_content(
        self,
        alert_title: str,
        criteria: MatchCriteria,
        job: JobPosting,
        score: float
    ) -> AlertMatchContent:
        link = urljoin(self.base_url, f"jobs/{job.id}") if job.id else None
        return AlertMatchContent(
            alert_title=alert_title,
            score=round(score, 1),
            criteria_summary=self.summarize_criteria(criteria),
            job=JobInfo(
                title=job.title or "Unknown Position",
                company=job.company_name,
                job_id=str(job.id) if job.id else None,
                location=job.location.city,
            ),
            link=link,
        )

    @staticmethod
    def subject(content: AlertMatchContent) -> str:
        if content.candidate:
            return f'New Resume Alert: {content.candidate.name} for "{content.alert_title}"'
        if content.job:
            return f"New Job Alert: {content.job.title}"
        return f"Alert match: {content.alert_title}"

    @staticmethod
    def to_text(content: AlertMatchContent) -> str:
        lines = [f"Alert: {content.alert_title}", f"Match score: {content.score:.1f}%"]
        if content.candidate:
            lines.append(f"Candidate: {content.candidate.name}")
            lines.append(f"Job Title: {content.candidate.title}")
        if content.job:
            lines.append(f"Job Title: {content.job.title}")
            lines.append(f"Company: {content.job.company}")
            if content.job.location:
                lines.append(f"Location: {content.job.location}")
        if content.criteria_summary:
            lines.append("Criteria:")
            lines.extend(f"  - {line}" for line in content.criteria_summary)
        if content.link:
            lines.append(f"View: {content.link}")
        return "\n".join(lines)

    @staticmethod
    def to_metadata(content: AlertMatchContent) -> Dict[str, Any]:
        return {'alert_match': content.model_dump()}
