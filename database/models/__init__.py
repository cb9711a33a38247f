from .base import Base
from .alert import ResumeAlert, JobAlert, ALERT_FREQUENCIES

__all__ = [
    'Base',
    'ResumeAlert',
    'JobAlert',
    'ALERT_FREQUENCIES',
]
