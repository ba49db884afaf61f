#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Fri Aug  2 09:43:07 2024

Task definitions and task management.

Every task takes the argument vector it was invoked with, parses it against
its own argument specification (configs/task_arguments.yml) and validates
the values against the site / task matrix (configs/tasks.csv). The actual
computations are stubs that log what they would do.
"""

###############################################################################
### BEGIN IMPORTS ###
###############################################################################

import copy
import inspect
import logging.config
import sys

#------------------------------------------------------------------------------

from tasks.registry import register, get_task, TASKS
from managers import paths
from utils import task_arguments as ta

###############################################################################
### END IMPORTS ###
###############################################################################



###############################################################################
### BEGIN INITS ###
###############################################################################

logger_configs = paths.get_internal_configs('py_logger')
task_configs = paths.get_internal_configs('task_arguments')
logger = logging.getLogger(__name__)

#------------------------------------------------------------------------------
class SiteTaskManager():
    """
    Ingest csv site / task boolean matrix and expose methods to get site and
    task lists
    """

    #--------------------------------------------------------------------------
    def __init__(self) -> None:
        """
        Initialise with contents of csv config file.

        Returns:
            None.

        """

        self.tasks_df = (
            paths.get_internal_configs('tasks')
            .set_index(keys='Site')
            .astype(bool)
            )
    #--------------------------------------------------------------------------

    #--------------------------------------------------------------------------
    def get_site_list(self) -> list:
        """
        Return the list of sites.

        Returns:
            the list.

        """

        return self.tasks_df.index.tolist()
    #--------------------------------------------------------------------------

    #--------------------------------------------------------------------------
    def get_site_list_for_task(self, task: str, disabled=False) -> list:
        """
        Return the list of sites for which task is enabled.

        Args:
            task: name of task.
            disabled: set True to get a list of sites for which task is disabled.

        Returns:
            the list.

        """

        return self.tasks_df[self.tasks_df[task] != disabled].index.tolist()
    #--------------------------------------------------------------------------

    #--------------------------------------------------------------------------
    def get_task_list(self) -> list:

        return self.tasks_df.columns.tolist()
    #--------------------------------------------------------------------------

    #--------------------------------------------------------------------------
    def get_task_list_for_site(self, site: str, disabled=False) -> list:
        """
        Return the list of enabled tasks for a site.

        Args:
            site: name of site.
            disabled: set True to get a list of tasks disabled for the site.

        Returns:
            the list.

        """

        row = self.tasks_df.loc[site]
        return row[row != disabled].index.tolist()
    #--------------------------------------------------------------------------

    #--------------------------------------------------------------------------
    def set_site_task_status(self, site: str, task: str, status: bool) -> None:
        """
        Edit the status of a site task.

        Args:
            site: name of site.
            task: name of task.
            status: status of task.

        Raises:
            TypeError: raised if `status` kwarg not passed a boolean.

        Returns:
            None.

        """

        if not isinstance(status, bool):
            raise TypeError('`status` kwarg must be a boolean')
        self.tasks_df.loc[site, task] = status
    #--------------------------------------------------------------------------

    #--------------------------------------------------------------------------
    def write_tasks_config(self, path=None) -> None:
        """
        Write config file.

        Args:
            path (optional): output path. Defaults to the internal tasks
                config file.

        Returns:
            None.

        """

        if path is None:
            path = paths.get_internal_config_path('tasks')
        self.tasks_df.to_csv(path, index_label='Site')
    #--------------------------------------------------------------------------

#------------------------------------------------------------------------------

# Instantiate tasks manager at top level, since for site-based tasks, it must be
# repeatedly called.
mngr = SiteTaskManager()

#------------------------------------------------------------------------------
def get_task_configs(task: str) -> dict:
    """Get the argument specification and defaults for a task."""

    try:
        return task_configs[task]
    except KeyError:
        raise KeyError(f'No argument configuration for task "{task}"!')
#------------------------------------------------------------------------------

###############################################################################
### END INITS ###
###############################################################################



###############################################################################
### BEGIN TASK DEFINITION FUNCTIONS ###
###############################################################################

#------------------------------------------------------------------------------
@register
def compute_site_metrics(args: list) -> list:
    """Compute aggregates per site over a date window."""

    this_task = inspect.stack()[0][3]
    configs = get_task_configs(task=this_task)
    arguments = ta.parse_arguments(
        task_name=this_task, argument_spec=configs['spec'], args=args
        )

    # Validate the values
    sites = ta.validate_values(
        input_values=arguments['sites'],
        valid_values=mngr.get_site_list_for_task(task=this_task)
        )
    aggregates = arguments['aggregates']
    if aggregates is None:
        aggregates = ','.join(configs['aggregates'])
    ta.validate_values(
        input_values=aggregates, valid_values=configs['aggregates']
        )
    start_date, end_date = ta.get_dates_start_end(
        start_date=arguments['start-date'],
        end_date=arguments['end-date'],
        days_ago=arguments['days-ago'],
        default_days_ago=configs['default_days_ago'],
        days_ago_end=arguments['days-ago-end']
        )

    # Do the work for each site
    return [
        _compute_site_metrics(
            site=site,
            aggregates=aggregates.split(','),
            start_date=start_date,
            end_date=end_date,
            upload=arguments['upload']
            )
        for site in sites.split(',')
        ]
#------------------------------------------------------------------------------

#------------------------------------------------------------------------------
def _compute_site_metrics(
        site: str, aggregates: list, start_date: str, end_date: str,
        upload: bool=False
        ) -> dict:

    logger.info(
        f'Computing {", ".join(aggregates)} metrics for {site} '
        f'from {start_date} to {end_date}'
        )
    if upload:
        logger.info(f'Uploading {site} metrics...')
    return {
        'site': site,
        'aggregates': aggregates,
        'start_date': start_date,
        'end_date': end_date,
        'uploaded': upload
        }
#------------------------------------------------------------------------------

#------------------------------------------------------------------------------
@register
def compute_network_metrics(args: list) -> list:
    """Compute site metrics for the whole network, one aggregate at a time."""

    this_task = inspect.stack()[0][3]
    configs = get_task_configs(task=this_task)
    arguments = ta.parse_arguments(
        task_name=this_task, argument_spec=configs['spec'], args=args
        )
    child = get_task(configs['child_task'])
    child_configs = get_task_configs(task=child.name)

    # Validate the values
    aggregates = arguments['aggregates']
    if aggregates is None:
        aggregates = ','.join(child_configs['aggregates'])
    ta.validate_values(
        input_values=aggregates, valid_values=child_configs['aggregates']
        )
    days_ago = arguments['days-ago']
    if days_ago is None:
        days_ago = str(configs['default_days_ago'])
    ta.validate_integer(days_ago)

    # Only sites enabled for both tasks
    child_sites = mngr.get_site_list_for_task(task=child.name)
    sites = [
        site for site in mngr.get_site_list_for_task(task=this_task)
        if site in child_sites
        ]
    if not sites:
        logger.warning(f'No sites enabled for task {this_task}; nothing to do')
        return []

    # Invoke the child task once per aggregate
    results = []
    for aggregate in aggregates.split(','):
        child_args = [
            child.name, ta.SEPARATOR,
            f'--sites={",".join(sites)}',
            f'--aggregates={aggregate}',
            f'--days-ago={days_ago}'
            ]
        if arguments['upload']:
            child_args.append('--upload')
        logger.info(f'Invoking task {child.name} with {child_args[2:]}')
        child.reenable()
        try:
            results.extend(child.invoke(args=child_args))
        finally:
            child.reenable()
    return results
#------------------------------------------------------------------------------

###############################################################################
### END TASK DEFINITION FUNCTIONS ###
###############################################################################



###############################################################################
### BEGIN TASK MANAGEMENT FUNCTIONS ###
###############################################################################

#------------------------------------------------------------------------------
def configure_logger(log_path):
    """Configure the logger for the task (including setting output path)."""

    if logger.hasHandlers():
        logger.handlers.clear()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    new_configs = copy.deepcopy(logger_configs)
    new_configs['handlers']['file']['filename'] = str(log_path)
    logging.config.dictConfig(new_configs)
#------------------------------------------------------------------------------

#------------------------------------------------------------------------------
def list_tasks() -> dict:
    """Return the registered tasks and their descriptions."""

    return {name: task.description for name, task in sorted(TASKS.items())}
#------------------------------------------------------------------------------

#------------------------------------------------------------------------------
def run_task(task: str, args: list=None):
    """
    Run a task. This is where invalid input ends the process.

    Args:
        task: name of task to run.
        args (optional): argument vector passed to the task. Defaults to
            just the task name.

    Raises:
        SystemExit: raised with the error message if the task is unknown or
            its arguments are invalid.

    Returns:
        the task result.

    """

    if args is None:
        args = [task]
    try:
        this_task = get_task(task)
    except KeyError as e:
        sys.exit(e.args[0])

    configure_logger(log_path=paths.get_log_path(task=task))

    logger.info(f'Running task {task}...')
    try:
        result = this_task.invoke(args=args)
        logger.info('Task completed without error\n')
        return result
    except ta.ArgumentValidationError as e:
        logger.error(f'Task {task} aborted: invalid arguments')
        sys.exit(str(e))
    except Exception:
        logger.error('Task failed with the following error:', exc_info=True)
        raise
    finally:
        this_task.reenable()
#------------------------------------------------------------------------------

###############################################################################
### END TASK MANAGEMENT FUNCTIONS ###
###############################################################################
