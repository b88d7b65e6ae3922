"""Utility methods used by multiple components."""

from __future__ import annotations

import datetime
from importlib import metadata
import uuid
import zoneinfo

from dateutil import parser

__all__ = [
    "dtstamp_factory",
    "uid_factory",
    "prodid_factory",
    "format_date",
    "format_duration",
]


MIDNIGHT = datetime.time()
PRODID = "github.com/icalgen/icalgen"
VERSION = metadata.version("icalgen")

_DATE_FORMAT = "%Y%m%d"
_DATE_TIME_FORMAT = "%Y%m%dT%H%M%S"


def dtstamp_factory() -> datetime.datetime:
    """Factory method for new event timestamps to facilitate mocking."""
    return datetime.datetime.now(tz=datetime.UTC)


def uid_factory() -> str:
    """Factory method for new uids to facilitate mocking."""
    return str(uuid.uuid1())


def prodid_factory() -> str:
    """Return the icalgen version to facilitate mocking."""
    return f"-//{PRODID}//{VERSION}//EN"


def local_timezone() -> datetime.tzinfo:
    """Get the local timezone to use when converting date to datetime."""
    if local_tz := datetime.datetime.now().astimezone().tzinfo:
        return local_tz
    return datetime.timezone.utc


def normalize_datetime(
    value: datetime.date | datetime.datetime, tzinfo: datetime.tzinfo | None = None
) -> datetime.datetime:
    """Convert date or datetime to a value that can be used for comparison."""
    if not isinstance(value, datetime.datetime):
        value = datetime.datetime.combine(value, MIDNIGHT)
    if value.tzinfo is None:
        if tzinfo is None:
            tzinfo = local_timezone()
        value = value.replace(tzinfo=tzinfo)
    return value


def parse_date_and_datetime(
    value: str | datetime.date | None,
) -> datetime.date | None:
    """Coerce str into date and datetime value.

    Strings are parsed as ISO 8601 in either the extended or the basic
    format (e.g. `2022-08-29T09:00:00` or `20220829T090000Z`).
    """
    if not isinstance(value, str):
        return value
    if "T" in value or " " in value:
        return parser.isoparse(value.replace(" ", "T"))
    return parser.isoparse(value).date()


def validate_timezone(value: str | None) -> str | None:
    """Verify the value is a known IANA timezone name."""
    if value is None:
        return value
    try:
        zoneinfo.ZoneInfo(value)
    except (zoneinfo.ZoneInfoNotFoundError, ValueError) as err:
        raise ValueError(f"Unknown timezone: {value}") from err
    return value


def format_date(
    value: datetime.date,
    timezone: str | None = None,
    date_only: bool = False,
    floating: bool = False,
) -> str:
    """Format a date or datetime as an rfc5545 DATE or DATE-TIME value.

    With a timezone the local time in that zone is returned and the caller
    is responsible for the TZID parameter. Floating values are the wall
    clock time without any zone. Otherwise the value is returned in UTC.
    """
    if date_only:
        if isinstance(value, datetime.datetime) and value.tzinfo and timezone:
            value = value.astimezone(zoneinfo.ZoneInfo(timezone))
        return value.strftime(_DATE_FORMAT)

    if not isinstance(value, datetime.datetime):
        value = datetime.datetime.combine(value, MIDNIGHT)

    if timezone:
        if value.tzinfo is not None:
            value = value.astimezone(zoneinfo.ZoneInfo(timezone))
        return value.strftime(_DATE_TIME_FORMAT)

    if floating:
        return value.strftime(_DATE_TIME_FORMAT)

    value = normalize_datetime(value).astimezone(datetime.UTC)
    return value.strftime(_DATE_TIME_FORMAT) + "Z"


def format_duration(seconds: int) -> str:
    """Format a number of seconds as an rfc5545 DURATION value."""
    result = ""
    if seconds < 0:
        result = "-"
        seconds *= -1
    result += "P"

    if seconds >= 86400:
        result += f"{seconds // 86400}D"
        seconds %= 86400
    if not seconds and len(result) > 1:
        return result

    result += "T"
    if seconds >= 3600:
        result += f"{seconds // 3600}H"
        seconds %= 3600
    if seconds >= 60:
        result += f"{seconds // 60}M"
        seconds %= 60
    if seconds > 0:
        result += f"{seconds}S"
    elif len(result) <= 2:
        result += "0S"
    return result
