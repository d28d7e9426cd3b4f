from datetime import datetime, timezone


def utc_now():
    """Returns the current datetime in UTC."""
    return datetime.now(timezone.utc)
