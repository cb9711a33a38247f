import logging
from datetime import datetime, timezone
from typing import Any, Dict, FrozenSet, List, Optional, Union

from pydantic import ValidationError
from sqlalchemy import select, update

from core.exceptions import InvalidCriteriaException
from core.matcher.models import JOB_ALERT_CRITERIA, MatchCriteria
from database.models import ResumeAlert, JobAlert, ALERT_FREQUENCIES
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

CriteriaInput = Union[MatchCriteria, Dict[str, Any]]


def _validated_criteria(
    criteria: Optional[CriteriaInput],
    applicable: Optional[FrozenSet[str]] = None
) -> Dict[str, Any]:
    """Check that criteria are readable and declare at least one usable criterion."""
    if not criteria:
        raise InvalidCriteriaException("At least one criterion is required")
    try:
        parsed = criteria if isinstance(criteria, MatchCriteria) else MatchCriteria.model_validate(criteria)
    except ValidationError as e:
        raise InvalidCriteriaException(f"Invalid alert criteria: {e}") from e
    if parsed.is_empty(applicable):
        raise InvalidCriteriaException("At least one criterion is required")
    return parsed.model_dump(by_alias=True, exclude_defaults=True)


def _validated_frequency(frequency: str) -> str:
    if frequency not in ALERT_FREQUENCIES:
        raise InvalidCriteriaException(
            f"Invalid frequency: {frequency}. Allowed: {', '.join(ALERT_FREQUENCIES)}"
        )
    return frequency


class AlertRepository(BaseRepository):
    """Owner-checked persistence of resume alerts and job alerts."""

    # ============ Resume alerts (owned by employers) ============

    def create_resume_alert(
        self,
        employer_id: str,
        title: str,
        criteria: CriteriaInput,
        frequency: str = 'Daily'
    ) -> ResumeAlert:
        alert = ResumeAlert(
            employer_id=str(employer_id),
            title=title,
            criteria=_validated_criteria(criteria),
            frequency=_validated_frequency(frequency),
            is_active=True,
            matching_count=0,
            emails_sent=0,
            total_matches=0,
        )
        self._save(alert)
        logger.info(f"Created resume alert {alert.id} for employer {employer_id}")
        return alert

    def get_owned_resume_alert(self, alert_id: str, employer_id: str) -> ResumeAlert:
        return self._get_owned(ResumeAlert, alert_id, 'employer_id', employer_id, "Resume alert")

    def update_resume_alert(
        self,
        alert_id: str,
        employer_id: str,
        title: Optional[str] = None,
        criteria: Optional[CriteriaInput] = None,
        frequency: Optional[str] = None,
        is_active: Optional[bool] = None
    ) -> ResumeAlert:
        alert = self.get_owned_resume_alert(alert_id, employer_id)
        if title:
            alert.title = title
        if criteria:
            alert.criteria = _validated_criteria(criteria)
        if frequency:
            alert.frequency = _validated_frequency(frequency)
        if is_active is not None:
            alert.is_active = is_active
        return self._save(alert)

    def delete_resume_alert(self, alert_id: str, employer_id: str) -> None:
        alert = self.get_owned_resume_alert(alert_id, employer_id)
        self._remove(alert)
        logger.info(f"Deleted resume alert {alert_id}")

    def list_resume_alerts(self, employer_id: str) -> List[ResumeAlert]:
        stmt = (
            select(ResumeAlert)
            .where(ResumeAlert.employer_id == str(employer_id), ResumeAlert.is_active.is_(True))
            .order_by(ResumeAlert.created_at.desc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def list_active_instant_resume_alerts(self) -> List[ResumeAlert]:
        stmt = select(ResumeAlert).where(
            ResumeAlert.is_active.is_(True),
            ResumeAlert.frequency == 'Instant'
        )
        return list(self.db.execute(stmt).scalars().all())

    def increment_matching_count(self, alert_id: str) -> int:
        stmt = (
            update(ResumeAlert)
            .where(ResumeAlert.id == alert_id)
            .values(matching_count=ResumeAlert.matching_count + 1)
            .execution_options(synchronize_session='fetch')
        )
        return self.db.execute(stmt).rowcount

    def record_resume_alert_match(self, alert_id: str, email_sent: bool) -> None:
        """Update alert performance stats after a match."""
        values = {
            'total_matches': ResumeAlert.total_matches + 1,
            'last_match_at': datetime.now(timezone.utc),
        }
        if email_sent:
            values['emails_sent'] = ResumeAlert.emails_sent + 1
        stmt = (
            update(ResumeAlert)
            .where(ResumeAlert.id == alert_id)
            .values(**values)
            .execution_options(synchronize_session='fetch')
        )
        self.db.execute(stmt)

    # ============ Job alerts (owned by candidates) ============

    def create_job_alert(
        self,
        candidate_id: str,
        criteria: CriteriaInput,
        frequency: str = 'Daily',
        profile: Optional[Dict[str, Any]] = None
    ) -> JobAlert:
        """
        Create a job alert. Categories, location and experience missing from
        the criteria are filled in from the candidate's profile when given.
        """
        if not criteria:
            raise InvalidCriteriaException("At least one criterion is required")

        if isinstance(criteria, MatchCriteria):
            criteria = criteria.model_dump(by_alias=True, exclude_defaults=True)
        criteria = dict(criteria)
        if profile:
            for key in ('categories', 'location', 'experience'):
                if not criteria.get(key) and profile.get(key):
                    criteria[key] = profile[key]

        alert = JobAlert(
            candidate_id=str(candidate_id),
            criteria=_validated_criteria(criteria, JOB_ALERT_CRITERIA),
            frequency=_validated_frequency(frequency),
            is_active=True,
        )
        self._save(alert)
        logger.info(f"Created job alert {alert.id} for candidate {candidate_id}")
        return alert

    def get_owned_job_alert(self, alert_id: str, candidate_id: str) -> JobAlert:
        return self._get_owned(JobAlert, alert_id, 'candidate_id', candidate_id, "Job alert")

    def update_job_alert(
        self,
        alert_id: str,
        candidate_id: str,
        criteria: Optional[CriteriaInput] = None,
        frequency: Optional[str] = None,
        is_active: Optional[bool] = None
    ) -> JobAlert:
        alert = self.get_owned_job_alert(alert_id, candidate_id)
        if criteria:
            alert.criteria = _validated_criteria(criteria, JOB_ALERT_CRITERIA)
        if frequency:
            alert.frequency = _validated_frequency(frequency)
        if is_active is not None:
            alert.is_active = is_active
        return self._save(alert)

    def delete_job_alert(self, alert_id: str, candidate_id: str) -> None:
        alert = self.get_owned_job_alert(alert_id, candidate_id)
        self._remove(alert)
        logger.info(f"Deleted job alert {alert_id}")

    def list_job_alerts(self, candidate_id: str) -> List[JobAlert]:
        stmt = (
            select(JobAlert)
            .where(JobAlert.candidate_id == str(candidate_id), JobAlert.is_active.is_(True))
            .order_by(JobAlert.created_at.desc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def list_active_instant_job_alerts(self) -> List[JobAlert]:
        stmt = select(JobAlert).where(
            JobAlert.is_active.is_(True),
            JobAlert.frequency == 'Instant'
        )
        return list(self.db.execute(stmt).scalars().all())
