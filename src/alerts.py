# ABOUTME: Decides whether a fog probability warrants an alert for a subscriber.
# ABOUTME: Applies the enabled flag, the probability threshold, and daily rate limiting.

import logging
import os
from datetime import datetime, timedelta

from dotenv import load_dotenv

from src.models import AlertConfig

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_ALERT_THRESHOLD = 80


def default_alert_config() -> AlertConfig:
    """Alert config using FOG_ALERT_THRESHOLD from the environment, or 80 if unset or invalid."""
    raw = os.environ.get("FOG_ALERT_THRESHOLD")
    if raw is None:
        return AlertConfig(threshold=DEFAULT_ALERT_THRESHOLD)
    try:
        threshold = int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer FOG_ALERT_THRESHOLD=%r, using %d", raw, DEFAULT_ALERT_THRESHOLD)
        threshold = DEFAULT_ALERT_THRESHOLD
    return AlertConfig(threshold=threshold)


def should_send_alert(
    config: AlertConfig,
    overall_fog_pct: int,
    last_notified_at: datetime | None = None,
    now: datetime | None = None,
) -> bool:
    """Return True when an alert should go out for this fog probability.

    With "daily" frequency, at most one alert is sent per 24 hours.
    """
    if not config.enabled:
        return False
    if overall_fog_pct < config.threshold:
        return False
    if config.frequency == "daily" and last_notified_at is not None:
        now = now or datetime.now(last_notified_at.tzinfo)
        if now - last_notified_at < timedelta(days=1):
            return False
    return True
