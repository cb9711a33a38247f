import yaml
import os
from typing import Dict, Optional
from pydantic import BaseModel, Field


class DatabaseConfig(BaseModel):
    url: str = "sqlite:///jobboard.db"
    echo: bool = False


class PaginationConfig(BaseModel):
    """Fallbacks used when a caller passes an unusable page or limit."""
    default_page: int = 1
    default_limit: int = 10
    max_limit: int = 100


class RecommendationWeights(BaseModel):
    """
    Points awarded per signal when ranking jobs for a candidate.

    score = category_overlap * category + city + experience + job_type
            + salary + text_similarity * similarity, clamped to 0-100
    """
    category: float = 20.0  # per overlapping category
    city: float = 25.0
    experience: float = 15.0
    job_type: float = 15.0
    salary: float = 10.0
    text_similarity: float = 15.0  # multiplied by similarity in [0, 1]


class MatchingConfig(BaseModel):
    """
    Configuration for alert matching and ranking.
    """
    # Minimum percentage of declared criteria a result must satisfy
    match_threshold: float = 60.0

    # Alert "matches" listings drop results below the threshold
    only_matched_listings: bool = True

    pagination: PaginationConfig = Field(default_factory=PaginationConfig)
    recommendation: RecommendationWeights = Field(default_factory=RecommendationWeights)


class NotificationChannelConfig(BaseModel):
    """Configuration for a single notification channel."""
    enabled: bool = True
    recipient: Optional[str] = None  # Email, webhook URL, etc.


class NotificationConfig(BaseModel):
    """
    Configuration for alert notifications.

    Controls whether saved candidates and published jobs are checked against
    Instant alerts and which channel delivers the result.
    """
    enabled: bool = False  # Disabled by default - must opt-in

    # Channel used for alert notifications (email, webhook, in_app)
    channel: str = "in_app"
    channels: Dict[str, NotificationChannelConfig] = {}

    # Base URL for links in notifications
    base_url: str = "http://localhost:5000"


class AppConfig(BaseModel):
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    notifications: NotificationConfig = Field(default_factory=NotificationConfig)


def load_config(config_path: str = "config.yaml") -> AppConfig:
    # If not found at relative path (e.g. running from root), try next to the package
    if not os.path.exists(config_path):
        base_dir = os.path.dirname(os.path.abspath(__file__))
        config_path = os.path.join(base_dir, "..", "config.yaml")

    data = {}
    if os.path.exists(config_path):
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}

    # Allow env var override for DB URL
    env_db_url = os.environ.get("DATABASE_URL")
    if env_db_url:
        if not data.get('database'):
            data['database'] = {}
        data['database']['url'] = env_db_url

    # Allow env var override for the match threshold
    env_threshold = os.environ.get("MATCH_THRESHOLD")
    if env_threshold:
        if not data.get('matching'):
            data['matching'] = {}
        data['matching']['match_threshold'] = float(env_threshold)

    # Allow env var override for notification links
    env_base_url = os.environ.get("NOTIFICATION_BASE_URL")
    if env_base_url:
        if not data.get('notifications'):
            data['notifications'] = {}
        data['notifications']['base_url'] = env_base_url

    return AppConfig(**data)
