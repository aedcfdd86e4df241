from datetime import timezone as dt_tz

from django.utils import timezone


def to_local_iso(dt_utc):
    if dt_utc is None:
        return None
    try:
        return timezone.localtime(dt_utc).isoformat()
    except OverflowError:
        # saturated due dates sit at datetime.max and cannot shift east of UTC
        return to_utc_iso(dt_utc)


def to_utc_iso(dt):
    if dt is None:
        return None
    return dt.astimezone(dt_tz.utc).isoformat()
