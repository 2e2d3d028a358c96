"""
Logging initialization using loguru.

The photostatlr modules only log through loguru's logger. Sinks are set up by
the host application, which calls configure_logging once at startup with the
logLevel of the export settings.
"""

import sys

from loguru import logger

# Verbosity levels of the plugin settings
LOG_LEVELS = {
    1: 'ERROR',
    2: 'INFO',
    3: 'DEBUG',
    4: 'TRACE',
}


def get_level_name(level):
    """
    :param int|str  level: Plugin verbosity 1-4 or a loguru level name
    :rtype: str
    """
    if isinstance(level, int):
        try:
            return LOG_LEVELS[level]
        except KeyError:
            raise ValueError('Invalid log level {}, must be one of {}'.format(level, sorted(LOG_LEVELS)))
    return level.upper()


def configure_logging(level=2, logfile=None):
    """
    Replaces loguru's default sink by stderr, or a rotating logfile if given.

    :param int|str  level:
    :param str      logfile:
    :rtype: int
    :return: Id of the added sink
    """
    level_name = get_level_name(level)
    logger.remove()
    if logfile:
        return logger.add(
            logfile,
            rotation='10 MB',
            retention='10 days',
            backtrace=False,
            diagnose=False,
            level=level_name,
        )
    return logger.add(sys.stderr, level=level_name)
