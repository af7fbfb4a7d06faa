"""Display helpers used by the templates."""

from datetime import datetime

from postboard.models.mixins import as_utc, utc_now


def time_ago(timestamp: datetime, now: datetime | None = None) -> str:
    """Describe how long ago a timestamp was, using its largest whole unit.

    Examples: "3day(s) ago", "2hrs ago", "1min ago", "Just now".
    """
    now = as_utc(now) if now is not None else utc_now()
    seconds = int((now - as_utc(timestamp)).total_seconds())
    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24

    if days > 0:
        return f"{days}day(s) ago"
    if hours > 0:
        return f"{hours}hrs ago"
    if minutes > 0:
        return f"{minutes}min ago"
    return "Just now"
