# -*- coding: utf-8 -*-
"""
Created on Tue Aug 27 15:46:11 2024

Access to the internal configuration files and the local output paths
(task logs) used by the task runner.
"""

###############################################################################
### BEGIN IMPORTS ###
###############################################################################

import pandas as pd
import pathlib
import yaml

###############################################################################
### END IMPORTS ###
###############################################################################



###############################################################################
### BEGIN INITS ###
###############################################################################

def _read_yml(file):

    with open(file) as f:
        return yaml.safe_load(stream=f)

CODE_PATH = pathlib.Path(__file__).resolve().parents[1]
CONFIGS_PATH = CODE_PATH / 'configs'
PATHS_CONFIG = _read_yml(file=CONFIGS_PATH / 'paths.yml')
LOCAL_PATHS = PATHS_CONFIG['local']
ALLOWED_CONFIG_TYPES = ['.yml', '.txt', '.csv']
PLACEHOLDER = '<task>'

###############################################################################
### END INITS ###
###############################################################################



###############################################################################
### BEGIN CONFIGURATION FILE FUNCTIONS ###
###############################################################################

#------------------------------------------------------------------------------
def list_internal_config_files() -> list:
    """List the available internal configuration files incl. absolute path."""

    return [
        file for file in CONFIGS_PATH.glob('*')
        if file.suffix in ALLOWED_CONFIG_TYPES
        ]
#------------------------------------------------------------------------------

#------------------------------------------------------------------------------
def list_internal_config_names() -> list:
    """List the available internal configurations"""

    return [file.stem for file in list_internal_config_files()]
#------------------------------------------------------------------------------

#------------------------------------------------------------------------------
def get_internal_config_path(config_name: str) -> pathlib.Path:
    """Get the path to an internal configuration file"""

    files_dict = {file.stem: file for file in list_internal_config_files()}
    try:
        return files_dict[config_name]
    except KeyError:
        raise KeyError(
            f'No internal configuration named "{config_name}"; available '
            f'configurations are: {sorted(files_dict)}'
            )
#------------------------------------------------------------------------------

#------------------------------------------------------------------------------
def get_internal_configs(config_name: str) -> dict | pd.DataFrame | str:
    """
    Get the content of an internal configuration file.

    Args:
        config_name: name (stem) of the configuration file.

    Returns:
        dict for .yml files, DataFrame for .csv files, str for .txt files.

    """

    path = get_internal_config_path(config_name=config_name)
    with open(path) as f:
        if path.suffix == '.txt':
            return f.read()
        if path.suffix == '.yml':
            return yaml.safe_load(stream=f)
        if path.suffix == '.csv':
            return pd.read_csv(f)
#------------------------------------------------------------------------------

###############################################################################
### END CONFIGURATION FILE FUNCTIONS ###
###############################################################################



###############################################################################
### BEGIN LOCAL RESOURCE FUNCTIONS ###
###############################################################################

#------------------------------------------------------------------------------
def get_log_path(task: str) -> pathlib.Path:
    """Get the path to the log file for a task"""

    return get_path(
        resource='logs', stream='task_logs', task=task,
        file_name=f'{task}.log'
        )
#------------------------------------------------------------------------------

#------------------------------------------------------------------------------
def get_path(
        resource: str, stream: str=None, task: str=None,
        file_name: str=None
        ) -> pathlib.Path:
    """
    Get the path to a local resource or stream.

    Args:
        resource: resource to select.
        stream (optional): stream path to extract. Defaults to None.
        task (optional): name of task to fill placeholder. Defaults to None.
        file_name (optional): file name to append. Defaults to None.

    Returns:
        Path to resource / stream.

    """

    # Relative base paths are anchored to the project root
    resource_configs = LOCAL_PATHS[resource]
    path = pathlib.Path(resource_configs['base_path']).expanduser()
    if not path.is_absolute():
        path = CODE_PATH.parent / path

    # Add the resource stream to the path
    if not stream is None:
        path = path / resource_configs['stream'][stream]

    # Add the file name
    if not file_name is None:
        path = path / file_name

    # Fill task placeholder
    if not task is None:
        path = pathlib.Path(str(path).replace(PLACEHOLDER, task))

    return path
#------------------------------------------------------------------------------

###############################################################################
### END LOCAL RESOURCE FUNCTIONS ###
###############################################################################
