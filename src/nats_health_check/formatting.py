"""Duration and timestamp helpers shared by checks and configuration."""

import re
from datetime import datetime, timedelta, timezone

_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "ms": 1e-3,
    "s": 1,
    "m": 60,
    "h": 3600,
    "d": 86400,
    "w": 7 * 86400,
    "y": 365 * 86400,
}

_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(ns|us|ms|s|m|h|d|w|y)")
_FRACTION = re.compile(r"\.(\d{6})\d+")


def humanize_duration(duration: timedelta) -> str:
    """Render a duration as ``1y2d3h4m5s``, or ``1.50s`` below one minute."""
    total = duration.total_seconds()
    if total < 0:
        return "-" + humanize_duration(-duration)

    tsecs = int(total)
    tmins = tsecs // 60
    thrs = tmins // 60
    tdays = thrs // 24
    tyrs = tdays // 365

    if tyrs > 0:
        return f"{tyrs}y{tdays % 365}d{thrs % 24}h{tmins % 60}m{tsecs % 60}s"
    if tdays > 0:
        return f"{tdays}d{thrs % 24}h{tmins % 60}m{tsecs % 60}s"
    if thrs > 0:
        return f"{thrs}h{tmins % 60}m{tsecs % 60}s"
    if tmins > 0:
        return f"{tmins}m{tsecs % 60}s"
    return f"{total:.2f}s"


def short_duration(duration: timedelta) -> str:
    """Compact duration for threshold values, e.g. ``500ms``, ``1s``, ``1m30s``, ``2h0m0s``."""
    total = duration.total_seconds()
    if 0 < total < 1:
        if total >= 1e-3:
            return f"{total * 1e3:g}ms"
        return f"{total * 1e6:g}us"
    if total < 60:
        return f"{total:g}s"

    hours, rest = divmod(int(total), 3600)
    minutes = rest // 60
    seconds = total - hours * 3600 - minutes * 60
    if hours:
        return f"{hours}h{minutes}m{seconds:g}s"
    return f"{minutes}m{seconds:g}s"


def parse_duration(value: timedelta | int | float | str) -> timedelta:
    """Parse a configured duration.

    Numbers are seconds. Strings are either a bare number of seconds or a
    sequence of ``<number><unit>`` parts such as ``1h30m`` or ``500ms``.
    """
    if isinstance(value, timedelta):
        return value
    if isinstance(value, (int, float)):
        return timedelta(seconds=value)

    text = value.strip()
    try:
        return timedelta(seconds=float(text))
    except ValueError:
        pass

    parts = _DURATION_PART.findall(text)
    if not parts or "".join(n + u for n, u in parts) != text:
        raise ValueError(f"Invalid duration: {value!r}")

    return timedelta(seconds=sum(float(n) * _DURATION_UNITS[u] for n, u in parts))


def parse_instant(value: datetime | int | float | str) -> datetime:
    """Parse a timestamp into an aware UTC datetime.

    Accepts datetimes (naive ones are taken as UTC), Unix seconds and
    RFC 3339 strings with any number of fractional digits.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    else:
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        text = _FRACTION.sub(r".\1", text)
        parsed = datetime.fromisoformat(text)

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_instant(instant: datetime) -> str:
    """Render an instant in UTC as ``2100-01-01 00:00:00 +0000 UTC``."""
    return instant.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M:%S +0000 UTC")
