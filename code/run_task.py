#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mon Oct 13 07:11:27 2025

Run a task from the tasks module, e.g.

    python run_task.py compute_site_metrics -- --sites=foo.com --days-ago=7
"""

#------------------------------------------------------------------------------
import sys
from tasks import tasks
#------------------------------------------------------------------------------

#------------------------------------------------------------------------------
def usage() -> str:

    lines = ['Usage: run_task.py <task> -- [task arguments]', '', 'Tasks:']
    lines += [
        f'  {name:<28}{description}'
        for name, description in tasks.list_tasks().items()
        ]
    return '\n'.join(lines)
#------------------------------------------------------------------------------

#------------------------------------------------------------------------------
def main(argv: list=None):

    # The whole vector (task name included) is passed on to the task
    if argv is None:
        argv = sys.argv[1:]
    if not argv or argv[0] in ('-h', '--help'):
        sys.exit(usage())

    # Run the task
    return tasks.run_task(task=argv[0], args=argv)
#------------------------------------------------------------------------------

#------------------------------------------------------------------------------
if __name__ == '__main__':

    main()
#------------------------------------------------------------------------------
