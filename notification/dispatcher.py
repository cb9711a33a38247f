#!/usr/bin/env python3
"""
Alert Notification Dispatcher

Runs Instant alerts against a freshly saved candidate or a freshly published
job and delivers a notification for every match. The dispatcher is invoked
explicitly by whoever performed the write; it is handed its repository,
matcher and channel instead of finding them on its own.

Usage:
    dispatcher = create_dispatcher(config, AlertRepository(db))
    report = dispatcher.handle(CandidateSaved(document=resume, candidate_id=rid))
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Union

from core.config_loader import AppConfig
from core.exceptions import NotificationException
from core.matcher.alert_matcher import AlertMatcher, candidate_checks, coerce_criteria, job_checks
from core.matcher.normalizer import (
    job_posting_from_document, to_candidate_attributes, to_job_attributes
)
from database.repositories.alert import AlertRepository
from notification.channels import NotificationChannel, NotificationChannelFactory
from notification.events import CandidateSaved, JobPublished
from notification.message_builder import AlertMessageBuilder

logger = logging.getLogger(__name__)

PUBLISHED_STATUS = 'Published'

# (owner_id, alert_kind) -> recipient address for the configured channel
RecipientResolver = Callable[[str, str], Optional[str]]


def _owner_as_recipient(owner_id: str, alert_kind: str) -> Optional[str]:
    return owner_id


@dataclass
class DispatchReport:
    evaluated: int = 0
    matched: int = 0
    sent: int = 0
    failed: int = 0
    skipped: bool = False


class AlertNotificationDispatcher:
    """
    Match saved candidates and published jobs against Instant alerts.

    Channel failures are logged and counted in the report; they never reach
    the caller, so a failed delivery cannot undo the write that triggered it.
    """

    def __init__(
        self,
        repo: AlertRepository,
        channel: NotificationChannel,
        matcher: Optional[AlertMatcher] = None,
        recipient_resolver: Optional[RecipientResolver] = None,
        message_builder: Optional[AlertMessageBuilder] = None,
        enabled: bool = True
    ):
        self.repo = repo
        self.enabled = enabled
        self.channel = channel
        self.matcher = matcher or AlertMatcher()
        self.recipient_resolver = recipient_resolver or _owner_as_recipient
        self.message_builder = message_builder or AlertMessageBuilder()

    def handle(self, event: Union[CandidateSaved, JobPublished]) -> DispatchReport:
        if not self.enabled:
            logger.debug(f"Alert notifications disabled, ignoring {type(event).__name__}")
            return DispatchReport(skipped=True)
        if isinstance(event, CandidateSaved):
            return self.on_candidate_saved(event)
        if isinstance(event, JobPublished):
            return self.on_job_published(event)
        raise TypeError(f"Unsupported event: {type(event).__name__}")

    def _deliver(self, recipient: Optional[str], subject: str, body: str, metadata: dict) -> bool:
        if not recipient:
            logger.warning(f"No recipient for alert notification '{subject}'")
            return False
        try:
            return bool(self.channel.send(recipient, subject, body, metadata))
        except Exception as e:
            logger.error(f"Channel {self.channel.channel_type} failed for '{subject}': {e}")
            return False

    def on_candidate_saved(self, event: CandidateSaved) -> DispatchReport:
        """Check a saved profile or resume against employers' Instant resume alerts."""
        report = DispatchReport()
        alerts = self.repo.list_active_instant_resume_alerts()
        if not alerts:
            logger.debug("No active Instant resume alerts")
            return report

        candidate = to_candidate_attributes(event.document)

        for alert in alerts:
            report.evaluated += 1
            criteria = coerce_criteria(alert.criteria)
            result = self.matcher.aggregate(candidate_checks(candidate, criteria))
            if not result.matched:
                continue

            report.matched += 1
            self.repo.increment_matching_count(alert.id)

            content = self.message_builder.build_resume_alert_content(
                alert.title, criteria, candidate,
                event.candidate_id, result.score
            )
            sent = self._deliver(
                self.recipient_resolver(alert.employer_id, 'resume'),
                self.message_builder.subject(content),
                self.message_builder.to_text(content),
                self.message_builder.to_metadata(content),
            )
            self.repo.record_resume_alert_match(alert.id, email_sent=sent)

            if sent:
                report.sent += 1
            else:
                report.failed += 1

        logger.info(
            f"[ResumeAlerts] candidate {event.candidate_id or 'unknown'}: "
            f"{report.matched}/{report.evaluated} alerts matched, {report.sent} sent, {report.failed} failed"
        )
        return report

    def on_job_published(self, event: JobPublished) -> DispatchReport:
        """Check a published job against candidates' Instant job alerts."""
        report = DispatchReport()
        try:
            job = job_posting_from_document(event.document)
        except (ValueError, TypeError) as e:
            logger.warning(f"Unreadable job {event.job_id or 'unknown'}, skipping alerts: {e}")
            report.skipped = True
            return report

        if job.status != PUBLISHED_STATUS:
            logger.debug(f"Job {event.job_id or job.id} has status {job.status!r}, skipping alerts")
            report.skipped = True
            return report

        if event.job_id and not job.id:
            job = job.model_copy(update={'id': event.job_id})

        job_attributes = to_job_attributes(job)

        for alert in self.repo.list_active_instant_job_alerts():
            report.evaluated += 1
            criteria = coerce_criteria(alert.criteria)
            result = self.matcher.aggregate(job_checks(job_attributes, criteria))
            if not result.matched:
                continue

            report.matched += 1
            content = self.message_builder.build_job_alert_content(
                alert.title, criteria, job, result.score
            )
            sent = self._deliver(
                self.recipient_resolver(alert.candidate_id, 'job'),
                self.message_builder.subject(content),
                self.message_builder.to_text(content),
                self.message_builder.to_metadata(content),
            )
            if sent:
                report.sent += 1
            else:
                report.failed += 1

        logger.info(
            f"[JobAlerts] job {job.id or 'unknown'}: "
            f"{report.matched}/{report.evaluated} alerts matched, {report.sent} sent, {report.failed} failed"
        )
        return report


def create_dispatcher(
    config: AppConfig,
    repo: AlertRepository,
    recipient_resolver: Optional[RecipientResolver] = None
) -> AlertNotificationDispatcher:
    """
    Build a dispatcher from application config.

    Raises:
        NotificationException: If the configured channel type is unknown
    """
    notifications = config.notifications
    try:
        channel = NotificationChannelFactory.get_channel(notifications.channel)
    except ValueError as e:
        raise NotificationException(str(e)) from e

    if recipient_resolver is None:
        channel_config = notifications.channels.get(notifications.channel)
        if channel_config and channel_config.recipient:
            fixed = channel_config.recipient
            recipient_resolver = lambda owner_id, alert_kind: fixed

    return AlertNotificationDispatcher(
        repo=repo,
        channel=channel,
        matcher=AlertMatcher(threshold=config.matching.match_threshold),
        recipient_resolver=recipient_resolver,
        message_builder=AlertMessageBuilder(base_url=notifications.base_url),
        enabled=notifications.enabled,
    )
