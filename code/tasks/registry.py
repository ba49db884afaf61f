#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Thu Sep 11 15:49:52 2025

Task registration. A registered task runs once per invoke until it is
re-enabled, so a parent task that invokes a child repeatedly must re-enable
it after each run.
"""

import logging

logger = logging.getLogger(__name__)

###############################################################################
### BEGIN TASK CLASS DEFINITION ###
###############################################################################

#------------------------------------------------------------------------------
class Task():
    """Named task wrapping a function that takes the argument vector."""

    #--------------------------------------------------------------------------
    def __init__(self, func) -> None:

        self.name = func.__name__
        self.func = func
        self.description = (func.__doc__ or '').strip()
        self.already_invoked = False
    #--------------------------------------------------------------------------

    #--------------------------------------------------------------------------
    def invoke(self, args: list):
        """
        Run the task with the given argument vector (if not already run).

        Args:
            args: argument vector, e.g. ['task', '--', '--key=value'].

        Returns:
            whatever the task function returns (None if skipped).

        """

        if self.already_invoked:
            logger.debug(f'Task {self.name} already invoked; skipping')
            return None
        self.already_invoked = True
        return self.func(args=args)
    #--------------------------------------------------------------------------

    #--------------------------------------------------------------------------
    def reenable(self) -> None:
        """Allow the task to be invoked again."""

        self.already_invoked = False
    #--------------------------------------------------------------------------

#------------------------------------------------------------------------------

###############################################################################
### END TASK CLASS DEFINITION ###
###############################################################################



###############################################################################
### BEGIN TASK DECORATOR DEFINITION ###
###############################################################################

TASKS = {}

def register(func):

    TASKS[func.__name__] = Task(func)
    return func

def get_task(name: str) -> Task:

    try:
        return TASKS[name]
    except KeyError:
        raise KeyError(
            f'Task "{name}" not implemented! Available tasks: {sorted(TASKS)}'
            )

###############################################################################
### END TASK DECORATOR DEFINITION ###
###############################################################################
