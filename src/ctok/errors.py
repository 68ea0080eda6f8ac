"""
Exceptions raised while converting coordinate and tour files.
"""


class CtoKError(Exception):
    """Base class for all CtoK errors."""


class UsageError(CtoKError):
    """The tool was invoked without enough input to do its job."""


class FormatError(CtoKError, ValueError):
    """A record could not be parsed into its expected numeric shape."""


class ConsistencyError(CtoKError):
    """A tour cannot be evaluated over the coordinate set it is paired with."""
