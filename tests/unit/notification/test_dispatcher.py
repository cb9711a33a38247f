#!/usr/bin/env python3
"""
Tests for AlertNotificationDispatcher.

Alerts live in an in-memory SQLite database; the channel is a Mock so
deliveries can be inspected.
"""

import unittest
from unittest.mock import Mock, patch

from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from core.config_loader import AppConfig
from core.exceptions import NotificationException
from core.matcher.alert_matcher import AlertMatcher
from core.matcher.normalizer import to_candidate_attributes, to_job_attributes
from database.models import Base
from database.repositories.alert import AlertRepository
from notification import (
    AlertNotificationDispatcher, CandidateSaved, JobPublished, InAppChannel,
    WebhookChannel, create_dispatcher
)

PROFILE = {
    'fullName': 'Ravi Kumar',
    'jobTitle': 'Backend Engineer',
    'categories': ['Engineering'],
    'location': {'city': 'Chennai'},
    'experience': '3-5 years',
}

JOB = {
    '_id': 'job-1',
    'title': 'Python Developer',
    'specialisms': ['Engineering'],
    'location': {'city': 'Chennai'},
    'status': 'Published',
}


class DispatcherTestCase(unittest.TestCase):

    def setUp(self):
        self.engine = create_engine("sqlite://")
        Base.metadata.create_all(self.engine)
        self.session = Session(self.engine)
        self.repo = AlertRepository(self.session)

        self.channel = Mock()
        self.channel.channel_type = 'mock'
        self.channel.send.return_value = True
        self.dispatcher = AlertNotificationDispatcher(repo=self.repo, channel=self.channel)

    def tearDown(self):
        self.session.close()
        self.engine.dispose()


class TestCandidateSaved(DispatcherTestCase):

    def test_matching_instant_alert_is_notified_and_counted(self):
        alert = self.repo.create_resume_alert(
            'emp-1', 'Chennai engineers',
            {'categories': ['Engineering', 'Sales'], 'location': {'city': 'Chennai'}},
            frequency='Instant'
        )

        report = self.dispatcher.handle(CandidateSaved(document=PROFILE, candidate_id='prof-1'))

        self.assertEqual((report.evaluated, report.matched, report.sent, report.failed), (1, 1, 1, 0))
        recipient, subject, body, metadata = self.channel.send.call_args[0]
        self.assertEqual(recipient, 'emp-1')
        self.assertEqual(subject, 'New Resume Alert: Ravi Kumar for "Chennai engineers"')
        self.assertIn('Match score: 100.0%', body)
        self.assertEqual(metadata['alert_match']['candidate']['profile_id'], 'prof-1')

        self.session.commit()
        self.session.refresh(alert)
        self.assertEqual(alert.matching_count, 1)
        self.assertEqual(alert.total_matches, 1)
        self.assertEqual(alert.emails_sent, 1)

    def test_non_matching_and_non_instant_alerts_are_ignored(self):
        miss = self.repo.create_resume_alert(
            'emp-1', 'Marketing', {'categories': ['Marketing'], 'experience': '5-10 years'},
            frequency='Instant'
        )
        self.repo.create_resume_alert('emp-2', 'Daily', {'categories': ['Engineering']})

        report = self.dispatcher.handle(CandidateSaved(document=PROFILE))

        self.assertEqual((report.evaluated, report.matched), (1, 0))
        self.channel.send.assert_not_called()
        self.session.commit()
        self.session.refresh(miss)
        self.assertEqual(miss.matching_count, 0)

    def test_channel_failure_is_counted_not_raised(self):
        alert = self.repo.create_resume_alert(
            'emp-1', 'Engineers', {'categories': ['Engineering']}, frequency='Instant'
        )
        self.channel.send.side_effect = RuntimeError("smtp down")

        report = self.dispatcher.handle(CandidateSaved(document=PROFILE))

        self.assertEqual((report.matched, report.sent, report.failed), (1, 0, 1))
        self.session.commit()
        self.session.refresh(alert)
        self.assertEqual(alert.matching_count, 1)
        self.assertEqual(alert.emails_sent, 0)

    def test_resume_documents_are_matched_too(self):
        self.repo.create_resume_alert(
            'emp-1', 'Pune analysts', {'location': {'city': 'Pune'}, 'skills': ['SQL']},
            frequency='Instant'
        )
        resume = {'personalInfo': {'fullName': 'Asha', 'location': {'city': 'Pune'}}, 'skills': ['SQL']}

        report = self.dispatcher.handle(CandidateSaved(document=resume, candidate_id='res-1'))
        self.assertEqual(report.sent, 1)

    def test_candidate_is_projected_once_for_all_alerts(self):
        for title in ('A', 'B', 'C'):
            self.repo.create_resume_alert('emp-1', title, {'categories': ['Engineering']}, frequency='Instant')

        with patch('notification.dispatcher.to_candidate_attributes', wraps=to_candidate_attributes) as project:
            report = self.dispatcher.handle(CandidateSaved(document=PROFILE))

        self.assertEqual(report.matched, 3)
        project.assert_called_once_with(PROFILE)

    def test_recipient_resolver(self):
        self.repo.create_resume_alert('emp-1', 'E', {'categories': ['Engineering']}, frequency='Instant')
        resolver = Mock(return_value='hr@example.com')
        dispatcher = AlertNotificationDispatcher(self.repo, self.channel, recipient_resolver=resolver)

        dispatcher.handle(CandidateSaved(document=PROFILE))

        resolver.assert_called_once_with('emp-1', 'resume')
        self.assertEqual(self.channel.send.call_args[0][0], 'hr@example.com')

    def test_threshold_comes_from_matcher(self):
        self.repo.create_resume_alert(
            'emp-1', 'Half', {'categories': ['Engineering'], 'experience': '5-10 years'},
            frequency='Instant'
        )
        self.assertEqual(self.dispatcher.handle(CandidateSaved(document=PROFILE)).matched, 0)

        lenient = AlertNotificationDispatcher(self.repo, self.channel, matcher=AlertMatcher(threshold=50))
        self.assertEqual(lenient.handle(CandidateSaved(document=PROFILE)).matched, 1)


class TestJobPublished(DispatcherTestCase):

    def test_matching_job_alert_is_notified(self):
        self.repo.create_job_alert(
            'cand-1', {'title': 'Chennai jobs', 'location': {'city': 'Chennai'}}, frequency='Instant'
        )

        report = self.dispatcher.handle(JobPublished(document=JOB, job_id='job-1'))

        self.assertEqual((report.evaluated, report.matched, report.sent), (1, 1, 1))
        recipient, subject, body, metadata = self.channel.send.call_args[0]
        self.assertEqual(recipient, 'cand-1')
        self.assertEqual(subject, 'New Job Alert: Python Developer')
        self.assertIn('/jobs/job-1', metadata['alert_match']['link'])

    def test_job_is_projected_once_for_all_alerts(self):
        for city in ('Chennai', 'Pune'):
            self.repo.create_job_alert('cand-1', {'location': {'city': city}}, frequency='Instant')

        with patch('notification.dispatcher.to_job_attributes', wraps=to_job_attributes) as project:
            report = self.dispatcher.handle(JobPublished(document=JOB))

        self.assertEqual((report.evaluated, report.matched), (2, 1))
        project.assert_called_once()

    def test_unpublished_jobs_are_skipped(self):
        self.repo.create_job_alert('cand-1', {'location': {'city': 'Chennai'}}, frequency='Instant')

        report = self.dispatcher.handle(JobPublished(document={**JOB, 'status': 'Draft'}))

        self.assertTrue(report.skipped)
        self.assertEqual(report.evaluated, 0)
        self.channel.send.assert_not_called()

    def test_event_job_id_fills_missing_document_id(self):
        self.repo.create_job_alert('cand-1', {'location': {'city': 'Chennai'}}, frequency='Instant')
        document = {k: v for k, v in JOB.items() if k != '_id'}

        self.dispatcher.handle(JobPublished(document=document, job_id='job-42'))

        metadata = self.channel.send.call_args[0][3]
        self.assertEqual(metadata['alert_match']['job']['job_id'], 'job-42')


class TestDispatcherSetup(DispatcherTestCase):

    def test_disabled_dispatcher_does_nothing(self):
        self.repo.create_resume_alert('emp-1', 'E', {'categories': ['Engineering']}, frequency='Instant')
        dispatcher = AlertNotificationDispatcher(self.repo, self.channel, enabled=False)

        report = dispatcher.handle(CandidateSaved(document=PROFILE))

        self.assertTrue(report.skipped)
        self.channel.send.assert_not_called()

    def test_unknown_event(self):
        with self.assertRaises(TypeError):
            self.dispatcher.handle(object())

    def test_create_dispatcher_from_config(self):
        config = AppConfig(
            matching={'match_threshold': 75},
            notifications={
                'enabled': True,
                'channel': 'webhook',
                'base_url': 'https://jobs.example.com',
                'channels': {'webhook': {'recipient': 'https://hooks.example.com/a'}},
            },
        )
        dispatcher = create_dispatcher(config, self.repo)

        self.assertIsInstance(dispatcher.channel, WebhookChannel)
        self.assertEqual(dispatcher.matcher.threshold, 75)
        self.assertTrue(dispatcher.enabled)
        self.assertEqual(dispatcher.recipient_resolver('emp-1', 'resume'), 'https://hooks.example.com/a')
        self.assertEqual(dispatcher.message_builder.base_url, 'https://jobs.example.com/')

    def test_create_dispatcher_defaults(self):
        dispatcher = create_dispatcher(AppConfig(), self.repo)
        self.assertIsInstance(dispatcher.channel, InAppChannel)
        self.assertFalse(dispatcher.enabled)
        self.assertEqual(dispatcher.recipient_resolver('emp-1', 'resume'), 'emp-1')

    def test_create_dispatcher_unknown_channel(self):
        config = AppConfig(notifications={'channel': 'pager'})
        with self.assertRaises(NotificationException):
            create_dispatcher(config, self.repo)


if __name__ == '__main__':
    unittest.main()
