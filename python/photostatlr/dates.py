import datetime
import os
import re
import time

from loguru import logger

from photostatlr import constants

# date is mandatory, time and zone are optional, eg, 2016-03-12T19:40:05+01:00
PATTERN_ISO_DATE = re.compile(
    r'(\d+)-(\d+)-(\d+)'
    r'(?:T(\d*)(?::(\d*))?(?::(\d*))?)?'
    r'(Z|[+-]\d{2}:?\d{2})?'
)


def format_timestamp(timestamp, fmt=constants.LOG_DATE_FORMAT):
    """
    Formats a POSIX timestamp in local time using strftime directives.

    :param float    timestamp:
    :param str      fmt:
    :rtype: str
    """
    return time.strftime(fmt, time.localtime(timestamp))


def to_timestamp(value):
    """
    Converts a host date value to a POSIX timestamp. Naive datetimes are
    interpreted as local time, strings must be ISO8601.

    :param datetime.datetime|float|int|str  value:
    :rtype: float|None
    """
    if value is None or value == '':
        return None
    if isinstance(value, datetime.datetime):
        return value.timestamp()
    if isinstance(value, str):
        return parse_iso_date(value)
    return float(value)


def _parse_zone(zone):
    if not zone:
        return None
    if zone == 'Z':
        return datetime.timezone.utc
    sign = -1 if zone[0] == '-' else 1
    digits = zone[1:].replace(':', '')
    offset = datetime.timedelta(hours=int(digits[:2]), minutes=int(digits[2:]))
    return datetime.timezone(sign * offset)


def parse_iso_date(string):
    """
    Parses an ISO8601 / IPTC date created string. The date is mandatory, time
    components default to 0 and a missing timezone means local time.

    :param str  string:
    :rtype: float|None
    :return: POSIX timestamp, or None if the string contains no date
    """
    match = PATTERN_ISO_DATE.search(string or '')
    if match is None:
        return None
    year, month, day, hour, minute, second, zone = match.groups()
    try:
        date = datetime.datetime(
            int(year), int(month), int(day),
            int(hour or 0), int(minute or 0), int(second or 0),
            tzinfo=_parse_zone(zone),
        )
    except ValueError:
        logger.debug('Invalid date {!r}', string)
        return None
    return date.timestamp()


def file_creation_time(path):
    """
    :param str  path:
    :rtype: float|None
    """
    try:
        stat = os.stat(path)
    except (OSError, TypeError, ValueError):
        return None
    return getattr(stat, 'st_birthtime', stat.st_mtime)


def get_date_time_original(photo):
    """
    Finds the capture date of a photo or whatever comes closest to it. Sources
    in order of precedence:

        * dateTimeOriginal, dateTimeOriginalISO8601
        * dateTimeDigitized, dateTimeDigitizedISO8601
        * formatted IPTC dateCreated
        * creation date of the photo's file
        * the current time

    :param photo: Host photo object
    :rtype: tuple[float, bool]
    :return: Tuple of (POSIX timestamp, whether a real DateTimeOriginal was found)
    """
    for is_original, keys in ((True, constants.DATE_ORIGINAL_KEYS),
                              (False, constants.DATE_DIGITIZED_KEYS)):
        for key in keys:
            timestamp = to_timestamp(photo.get_raw_metadata(key))
            if timestamp is not None:
                logger.debug('  {}: {}', key, format_timestamp(timestamp))
                return timestamp, is_original

    date_created = photo.get_formatted_metadata(constants.DATE_CREATED_KEY)
    if date_created:
        timestamp = parse_iso_date(date_created)
        if timestamp is not None:
            logger.debug('  dateCreated: {}', format_timestamp(timestamp))
            return timestamp, False

    path = photo.get_raw_metadata('path') or ''
    timestamp = file_creation_time(path)
    if timestamp is not None:
        logger.debug('  fileCreationDate: {}', format_timestamp(timestamp))
        return timestamp, False

    timestamp = time.time()
    logger.debug('  no date found for {}, using current date: {}', path, format_timestamp(timestamp))
    return timestamp, False
