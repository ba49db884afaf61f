# -*- coding: utf-8 -*-
"""
Created on Wed Oct 15 09:12:40 2025

Parse and validate named arguments passed to a task.

Each task describes its arguments with a docopt usage fragment, e.g.

    --sites=<list> [--aggregates=<list>] [--days-ago=<n>] [--upload]

and receives an argument vector shaped like a shell invocation of the task:

    ['compute_site_metrics', '--', '--sites=foo.com,bar.com', '--upload']

The vector is either the real process arguments or one built by a parent
task. The `--` after the task name keeps the task arguments apart from the
runner's own options; it is dropped before parsing. Once parsed the leading
`--` is removed from every key, so the above gives `sites` and `upload`
(flags map to True / False, omitted optional values to None).

All functions raise a subclass of ArgumentValidationError on bad input; the
task runner turns that into a user-facing abort.
"""

###############################################################################
### BEGIN IMPORTS ###
###############################################################################

import logging
import re

#------------------------------------------------------------------------------

from docopt import docopt, DocoptExit

#------------------------------------------------------------------------------

from utils.date_functions import day_diff, valid_date, DATE_FORMAT
from utils.exceptions import (
    ArgumentValidationError,
    DateFormatError,
    GrammarConformanceError,
    IntegerFormatError,
    ValueListError
    )

###############################################################################
### END IMPORTS ###
###############################################################################



###############################################################################
### BEGIN INITS ###
###############################################################################

SEPARATOR = '--'
TASK_NAME_SLOT = '<task_name>'
TASK_NAME_KEY = 'task_name'
USAGE_TEMPLATE = (
    'Usage: {task} {slot} {spec}\n'
    '       {task} {slot} --help\n'
    )
INTEGER_PATTERN = re.compile(r'[+-]?[0-9]+')
logger = logging.getLogger(__name__)

__all__ = [
    'ArgumentValidationError',
    'DateFormatError',
    'GrammarConformanceError',
    'IntegerFormatError',
    'ValueListError',
    'build_usage',
    'get_dates_start_end',
    'is_integer',
    'parse_arguments',
    'validate_integer',
    'validate_values',
    ]

###############################################################################
### END INITS ###
###############################################################################



###############################################################################
### BEGIN ARGUMENT PARSING FUNCTIONS ###
###############################################################################

#------------------------------------------------------------------------------
def build_usage(task_name: str, argument_spec: str) -> str:
    """
    Build the docopt usage string for a task.

    The first word after the task name is a positional slot that receives
    the task name from the argument vector. The second usage line makes a
    plain `--help` a recognised invocation.

    Args:
        task_name: name of the task (docopt program name).
        argument_spec: docopt usage fragment describing the task arguments.

    Returns:
        the usage string.

    """

    return USAGE_TEMPLATE.format(
        task=task_name, slot=TASK_NAME_SLOT, spec=argument_spec.strip()
        )
#------------------------------------------------------------------------------

#------------------------------------------------------------------------------
def parse_arguments(task_name: str, argument_spec: str, args: list) -> dict:
    """
    Parse and validate the task input against the argument specification.

    Args:
        task_name: name of the task.
        argument_spec: docopt usage fragment, e.g. '--sites=<list> [--upload]'.
        args: argument vector, e.g. ['task', '--', '--sites=a,b'].

    Raises:
        GrammarConformanceError: raised if the input does not match the
            specification, or if help was requested.

    Returns:
        dict of argument name (without leading '--') to value, plus the
        task name under 'task_name'.

    """

    doc = build_usage(task_name=task_name, argument_spec=argument_spec)

    # Some runner versions pass the separator along; docopt would treat
    # everything after it as positional
    args = list(args)
    if len(args) >= 2 and args[1] == SEPARATOR:
        del args[1]

    try:
        parsed = docopt(doc, argv=args, default_help=False)
    except DocoptExit as e:
        logger.debug(f'Input {args} rejected by usage for task {task_name}')
        raise GrammarConformanceError(str(e).strip()) from e

    arguments = {}
    for key, value in parsed.items():
        if key == TASK_NAME_SLOT:
            arguments[TASK_NAME_KEY] = value
        else:
            arguments[key.replace(SEPARATOR, '')] = value

    if arguments.get('help') is True:
        raise GrammarConformanceError(doc.strip())
    return arguments
#------------------------------------------------------------------------------

###############################################################################
### END ARGUMENT PARSING FUNCTIONS ###
###############################################################################



###############################################################################
### BEGIN VALIDATION FUNCTIONS ###
###############################################################################

#------------------------------------------------------------------------------
def validate_values(
        input_values: str, valid_values: str | list,
        allow_multiple: bool=True
        ) -> str:
    """
    Validate the provided (comma-separated) values against a list of valid
    values.

    Args:
        input_values: comma-separated input, e.g. 'daily,weekly'.
        valid_values: allowed values, as a list or comma-separated string.
        allow_multiple (optional): whether more than one input value is
            allowed. Defaults to True.

    Raises:
        ValueListError: raised if the input is empty, has multiple values
            where only one is allowed, or contains a value that is not valid.

    Returns:
        the input values (unchanged).

    """

    if isinstance(valid_values, str):
        valid_values = valid_values.split(',')
    list_valid_values = [str(value).strip() for value in valid_values]

    if input_values is None or not str(input_values).strip():
        raise ValueListError('An empty value was provided.')

    list_input_values = input_values.split(',')
    if not allow_multiple and len(list_input_values) > 1:
        raise ValueListError(
            f"Multiple input values were provided: {list_input_values}, "
            f"while only one of these can be used: {list_valid_values}."
            )
    for value in list_input_values:
        if not value in list_valid_values:
            raise ValueListError(
                f"An invalid value was provided: '{value}'.\n"
                f"Valid values are: {list_valid_values}."
                )
    return input_values
#------------------------------------------------------------------------------

#------------------------------------------------------------------------------
def is_integer(value) -> bool:
    """Return True if the given value represents a base-10 integer."""

    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, str) and bool(INTEGER_PATTERN.fullmatch(value))
#------------------------------------------------------------------------------

#------------------------------------------------------------------------------
def validate_integer(value: str) -> str:
    """Return the value if it represents an integer, raise otherwise."""

    if not is_integer(value):
        raise IntegerFormatError(f"'{value}' is not a valid integer argument.")
    return value
#------------------------------------------------------------------------------

#------------------------------------------------------------------------------
def get_dates_start_end(
        start_date: str, end_date: str, days_ago: str, default_days_ago: int,
        days_ago_end: str=None, now=None
        ) -> tuple:
    """
    Validate the input for a begin / end date window.

    If neither date is given, the window is derived from the number of days
    ago for the begin (`days_ago`, or `default_days_ago` if None) and for
    the end (`days_ago_end`, or today if None). Otherwise both dates are
    validated and the day offsets are ignored; note that a single missing
    date is then reported as invalid.

    Args:
        start_date: begin date (YYYY-MM-DD) or None.
        end_date: end date (YYYY-MM-DD) or None.
        days_ago: days before today of the begin date, or None.
        default_days_ago: used if `days_ago` is None.
        days_ago_end (optional): days before today of the end date.
            Defaults to None.
        now (optional): clock override passed to day_diff. Defaults to None.

    Raises:
        IntegerFormatError: raised if a day offset is not an integer.
        DateFormatError: raised if a given date is not valid.

    Returns:
        begin and end date as YYYY-MM-DD strings.

    """

    if start_date is None and end_date is None:
        if days_ago is None:
            diff_begin = int(validate_integer(default_days_ago))
        else:
            diff_begin = int(validate_integer(days_ago))
        if days_ago_end is None:
            diff_end = 0
        else:
            diff_end = int(validate_integer(days_ago_end))
        start_date = day_diff(-diff_begin, now=now)
        end_date = day_diff(-diff_end, now=now)
    else:
        start_date = valid_date(start_date).strftime(DATE_FORMAT)
        end_date = valid_date(end_date).strftime(DATE_FORMAT)
    logger.debug(f'Resolved date window {start_date} to {end_date}')
    return start_date, end_date
#------------------------------------------------------------------------------

###############################################################################
### END VALIDATION FUNCTIONS ###
###############################################################################
