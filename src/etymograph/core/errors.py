"""
Error taxonomy for the graph engine.

A word missing from the index is not an error: lookups return an empty
graph or None.
"""


class EtymographError(Exception):
    """Base class for engine errors."""


class DataUnavailableError(EtymographError):
    """The dataset or sampling table source could not be read."""


class DataFormatError(EtymographError):
    """The source was read but does not have the expected shape."""


class InvalidDepthError(EtymographError, ValueError):
    """Requested graph depth is outside the accepted range."""
