# -*- coding: utf-8 -*-
"""
Exceptions raised while parsing and validating task arguments. The message
of each is the text shown to the user when the task is aborted.
"""

#------------------------------------------------------------------------------
class ArgumentValidationError(Exception):
    """Base class for invalid task input."""
#------------------------------------------------------------------------------

#------------------------------------------------------------------------------
class GrammarConformanceError(ArgumentValidationError):
    """Input does not match the task's usage grammar (or help requested)."""
#------------------------------------------------------------------------------

#------------------------------------------------------------------------------
class ValueListError(ArgumentValidationError):
    """Blank, unexpected multiple or disallowed value(s)."""
#------------------------------------------------------------------------------

#------------------------------------------------------------------------------
class IntegerFormatError(ArgumentValidationError):
    """Value expected to be a base-10 integer is not."""
#------------------------------------------------------------------------------

#------------------------------------------------------------------------------
class DateFormatError(ArgumentValidationError, ValueError):
    """Value is not a YYYY-MM-DD calendar date."""
#------------------------------------------------------------------------------
