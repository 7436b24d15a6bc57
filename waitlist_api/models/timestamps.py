from datetime import date, datetime, time, timedelta, timezone


def utcnow():
    """Naive UTC timestamp, the form every DateTime column is stored in."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def isoformat(value):
    if value is None:
        return None
    return value.replace(tzinfo=timezone.utc).isoformat()


def _local_to_utc(day):
    # a naive datetime passed to astimezone() is read as local time
    local_midnight = datetime.combine(day, time.min).astimezone()
    return local_midnight.astimezone(timezone.utc).replace(tzinfo=None)


def local_midnight(days_ago=0):
    """Start of the local calendar day `days_ago` days back, as naive UTC."""
    return _local_to_utc(date.today() - timedelta(days=days_ago))


def local_month_start():
    return _local_to_utc(date.today().replace(day=1))
