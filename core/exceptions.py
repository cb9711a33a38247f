#!/usr/bin/env python3
"""
Custom exceptions for the service layer.

The matching core never raises; these are raised by alert persistence and
notification code and translated by whatever front end calls them.
"""


class ServiceException(Exception):
    """Base exception for service layer errors."""
    pass


class AlertNotFoundException(ServiceException):
    """Raised when an alert does not exist or belongs to someone else."""
    pass


class InvalidCriteriaException(ServiceException):
    """Raised when an alert is created without any criterion."""
    pass


class NotificationException(ServiceException):
    """Raised when a notification channel cannot be built."""
    pass
