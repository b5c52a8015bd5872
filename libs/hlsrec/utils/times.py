import re


_hours_minutes_seconds_re = re.compile(
    r"""
    ^(?:(?P<hours>\d+(?:\.\d+)?)[Hh])?
    (?:(?P<minutes>\d+(?:\.\d+)?)[Mm])?
    (?:(?P<seconds>\d+(?:\.\d+)?)[Ss])?$
    """,
    re.VERBOSE,
)

_hours_minutes_seconds_2_re = re.compile(
    r"""
    ^(?:(?P<hours>\d+):)?(?P<minutes>\d+):(?P<seconds>\d+(?:\.\d+)?)$
    """,
    re.VERBOSE,
)


def hours_minutes_seconds(value: str) -> float:
    """
    Converts a timestamp to seconds

      - plain seconds: ``90`` or ``90.5``
      - hours:minutes:seconds: ``01:30:00``
      - minutes:seconds: ``15:30``
      - duration units: ``1h30m15s``, ``90s``, ``2h``
    """
    value = str(value).strip()

    try:
        seconds = float(value)
    except ValueError:
        pass
    else:
        if seconds < 0:
            raise ValueError(f"Negative duration: {value!r}")
        return seconds

    for regex in (_hours_minutes_seconds_re, _hours_minutes_seconds_2_re):
        match = regex.match(value)
        if not match or not any(match.groupdict().values()):
            continue
        return (
            float(match.group("hours") or 0) * 3600
            + float(match.group("minutes") or 0) * 60
            + float(match.group("seconds") or 0)
        )

    raise ValueError(f"Invalid duration: {value!r}")


__all__ = ["hours_minutes_seconds"]
