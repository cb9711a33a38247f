"""
Notification Module

Delivers alert matches through pluggable channels.

Usage:
    from notification import CandidateSaved, create_dispatcher

    dispatcher = create_dispatcher(config, AlertRepository(db))
    report = dispatcher.handle(CandidateSaved(document=profile, candidate_id=pid))

    # Get a channel
    channel = NotificationChannelFactory.get_channel('email')
    channel.send('user@example.com', 'Subject', 'Body', {})
"""

from notification.channels import (
    NotificationChannel,
    EmailChannel,
    WebhookChannel,
    InAppChannel,
    NotificationChannelFactory,
)
from notification.events import CandidateSaved, JobPublished
from notification.message_builder import AlertMessageBuilder, AlertMatchContent
from notification.dispatcher import (
    AlertNotificationDispatcher,
    DispatchReport,
    create_dispatcher,
)

__all__ = [
    'NotificationChannel',
    'EmailChannel',
    'WebhookChannel',
    'InAppChannel',
    'NotificationChannelFactory',
    'CandidateSaved',
    'JobPublished',
    'AlertMessageBuilder',
    'AlertMatchContent',
    'AlertNotificationDispatcher',
    'DispatchReport',
    'create_dispatcher',
]
