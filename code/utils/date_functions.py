# -*- coding: utf-8 -*-
"""
Created on Tue Oct 14 14:03:55 2025

Simple date helpers for task arguments.
"""

###############################################################################
### BEGIN IMPORTS ###
###############################################################################

import datetime as dt
import logging
import re

#------------------------------------------------------------------------------

from utils.exceptions import DateFormatError

###############################################################################
### END IMPORTS ###
###############################################################################



###############################################################################
### BEGIN INITS ###
###############################################################################

DATE_FORMAT = '%Y-%m-%d'
DATE_PATTERN = re.compile(r'\d{4}-\d{2}-\d{2}')
logger = logging.getLogger(__name__)

###############################################################################
### END INITS ###
###############################################################################



###############################################################################
### BEGIN FUNCTIONS ###
###############################################################################

#------------------------------------------------------------------------------
def get_now(now=None) -> dt.datetime:
    """
    Get the current local wall-clock time.

    Args:
        now (optional): fixed datetime, or zero-argument callable returning
            one, used in place of the system clock. Defaults to None.

    Returns:
        the local time.

    """

    if now is None:
        return dt.datetime.now()
    if callable(now):
        return now()
    return now
#------------------------------------------------------------------------------

#------------------------------------------------------------------------------
def valid_date(date: str) -> dt.date:
    """
    Validate a date given in YYYY-MM-DD format.

    Args:
        date: the date string.

    Raises:
        DateFormatError: raised if the string is not a YYYY-MM-DD calendar
            date.

    Returns:
        the date.

    """

    if not isinstance(date, str) or not DATE_PATTERN.fullmatch(date):
        raise DateFormatError(f"'{date}' is an invalid date.")
    try:
        return dt.datetime.strptime(date, DATE_FORMAT).date()
    except ValueError:
        raise DateFormatError(f"'{date}' is an invalid date.")
#------------------------------------------------------------------------------

#------------------------------------------------------------------------------
def day_diff(diff: int, now=None) -> str:
    """
    Return today + `diff` number of days (negative goes back in time) as
    YYYY-MM-DD. Uses local time, not UTC.
    """

    return (get_now(now=now) + dt.timedelta(days=diff)).strftime(DATE_FORMAT)
#------------------------------------------------------------------------------

###############################################################################
### END FUNCTIONS ###
###############################################################################
