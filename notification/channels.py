#!/usr/bin/env python3
"""
Notification Channels

Every channel implements the same NotificationChannel interface so the alert
dispatcher can be handed any of them.

Usage:
    from notification.channels import NotificationChannelFactory

    channel = NotificationChannelFactory.get_channel('email')
    channel.send(recipient, subject, body, metadata)
"""

from abc import ABC, abstractmethod
from typing import Dict, Any
from datetime import datetime, timezone
import logging
import os
import html

import requests
import smtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
import urllib.parse
import ipaddress
import socket

logger = logging.getLogger(__name__)


def _validate_webhook_url(url: str) -> bool:
    """
    Validate webhook URL to prevent SSRF attacks.

    Checks:
    - Scheme is http or https
    - Hostname resolves to public IP (not private/loopback)
    """
    try:
        parsed = urllib.parse.urlparse(url)

        if parsed.scheme not in ('http', 'https'):
            logger.error(f"Invalid URL scheme: {parsed.scheme}")
            return False

        if not parsed.hostname:
            logger.error("URL missing hostname")
            return False

        try:
            addrinfo = socket.getaddrinfo(parsed.hostname, None)
            for _, _, _, _, sockaddr in addrinfo:
                ip = ipaddress.ip_address(sockaddr[0])
                if ip.is_private or ip.is_loopback or ip.is_reserved or ip.is_link_local:
                    logger.error(f"URL resolves to private/reserved IP: {ip}")
                    return False
        except socket.gaierror:
            logger.error(f"Could not resolve hostname: {parsed.hostname}")
            return False

        return True
    except ValueError as e:
        logger.error(f"URL validation error: {e}")
        return False


def _is_dry_run_mode() -> bool:
    """Check if notification channels should run in dry-run (log-only) mode."""
    return os.environ.get('NOTIFICATION_DRY_RUN', '').lower() in ('true', '1', 'yes')


def _mask_email(email: str) -> str:
    """
    Mask email address for safe logging (PII protection).

    Shows only domain, e.g., "***@example.com"
    """
    if '@' not in email:
        return "***"
    local, domain = email.rsplit('@', 1)
    return f"***@{domain}"


class NotificationChannel(ABC):
    """
    Abstract base class for all notification channels.
    """

    @property
    @abstractmethod
    def channel_type(self) -> str:
        """Return the channel type identifier."""
        pass

    @abstractmethod
    def send(self, recipient: str, subject: str, body: str, metadata: Dict[str, Any]) -> bool:
        """
        Send a notification through this channel.

        Args:
            recipient: Target recipient (format depends on channel)
            subject: Notification subject/title
            body: Notification body
            metadata: Additional channel-specific metadata

        Returns:
            True if sent successfully, False otherwise
        """
        pass

    def validate_config(self) -> bool:
        """
        Validate that the channel is properly configured.

        Returns:
            True if configured correctly, False otherwise
        """
        return True


class EmailChannel(NotificationChannel):
    """Email notification channel via SMTP."""

    @property
    def channel_type(self) -> str:
        return 'email'

    def validate_config(self) -> bool:
        required_vars = ['SMTP_SERVER', 'SMTP_PORT', 'SMTP_USERNAME', 'SMTP_PASSWORD']
        return all(os.environ.get(var) for var in required_vars)

    def send(self, recipient: str, subject: str, body: str, metadata: Dict[str, Any]) -> bool:
        if not recipient:
            logger.error("Email recipient is missing")
            return False

        if _is_dry_run_mode():
            logger.info(f"[DRY RUN] Email to {_mask_email(recipient)}: {subject}")
            return True

        if not self.validate_config():
            logger.error("Email not configured - SMTP environment variables not set")
            return False

        try:
            smtp_server = os.environ.get('SMTP_SERVER', 'smtp.gmail.com')
            smtp_port = int(os.environ.get('SMTP_PORT', '587'))
            username = os.environ.get('SMTP_USERNAME', '')
            password = os.environ.get('SMTP_PASSWORD', '')
            from_email = os.environ.get('FROM_EMAIL', username)

            msg = MIMEMultipart()
            msg['From'] = f"Job Portal Alerts <{from_email}>"
            msg['To'] = recipient
            msg['Subject'] = subject

            alert_match = metadata.get('alert_match')
            if alert_match:
                msg.attach(MIMEText(self._build_html_body(subject, body), 'html', 'utf-8'))
            else:
                msg.attach(MIMEText(body, 'plain'))

            with smtplib.SMTP(smtp_server, smtp_port) as server:
                server.starttls()
                server.login(username, password)
                server.send_message(msg)

            logger.info(f"Email sent to {_mask_email(recipient)}")
            return True

        except (smtplib.SMTPException, OSError, ValueError) as e:
            logger.error(f"Failed to send email to {_mask_email(recipient)}: {e}")
            return False

    def _build_html_body(self, subject: str, body: str) -> str:
        """Wrap the plain-text alert body in a minimal HTML email."""
        rows = "".join(f"<p>{html.escape(line)}</p>" for line in body.splitlines() if line.strip())
        return f"""<!DOCTYPE html>
<html>
<head><meta charset="utf-8"></head>
<body style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
    <h2 style="color: #2563eb;">{html.escape(subject)}</h2>
    {rows}
</body>
</html>"""


class WebhookChannel(NotificationChannel):
    """Generic webhook notification channel."""

    @property
    def channel_type(self) -> str:
        return 'webhook'

    def send(self, recipient: str, subject: str, body: str, metadata: Dict[str, Any]) -> bool:
        """Send webhook POST request."""
        webhook_url = recipient

        if not _validate_webhook_url(webhook_url):
            logger.error(f"Invalid or unsafe webhook URL: {webhook_url}")
            return False

        payload = {
            'type': 'alert_match',
            'subject': subject,
            'body': body,
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'alert_match': metadata.get('alert_match'),
        }

        if _is_dry_run_mode():
            logger.info(f"[DRY RUN] Webhook: {subject}")
            return True

        try:
            response = requests.post(
                webhook_url,
                json=payload,
                headers={'User-Agent': 'JobBoard-Alert-Service/1.0'},
                timeout=30
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Failed to send webhook: {e}")
            return False

        parsed = urllib.parse.urlparse(webhook_url)
        logger.info(f"Webhook sent to {parsed.scheme}://{parsed.hostname}{parsed.path}")
        return True


class InAppChannel(NotificationChannel):
    """In-app notification channel (log only)."""

    @property
    def channel_type(self) -> str:
        return 'in_app'

    def send(self, recipient: str, subject: str, body: str, metadata: Dict[str, Any]) -> bool:
        logger.info(f"[IN_APP] User: {recipient}, Title: {subject}")
        return True


class NotificationChannelFactory:
    """
    Factory for creating notification channels.

    New channels can be registered without touching the factory.
    """

    _channels: Dict[str, type] = {
        'email': EmailChannel,
        'webhook': WebhookChannel,
        'in_app': InAppChannel,
    }

    @classmethod
    def get_channel(cls, channel_type: str) -> NotificationChannel:
        """
        Get a notification channel instance by type.

        Raises:
            ValueError: If channel type is not registered
        """
        channel_class = cls._channels.get(channel_type.lower())
        if not channel_class:
            raise ValueError(f"Unknown channel type: {channel_type}. "
                             f"Available: {', '.join(cls._channels.keys())}")
        return channel_class()

    @classmethod
    def register_channel(cls, channel_type: str, channel_class: type):
        """Register a new notification channel class."""
        if not issubclass(channel_class, NotificationChannel):
            raise ValueError("Channel class must extend NotificationChannel")

        cls._channels[channel_type.lower()] = channel_class
        logger.info(f"Registered new channel type: {channel_type}")

    @classmethod
    def list_channels(cls) -> list:
        """List all available channel types."""
        return list(cls._channels.keys())
