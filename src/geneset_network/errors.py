"""Exception types raised by the network pipeline.

Every error is also a ``ValueError`` so callers that only care about
"bad data or bad parameters" can catch the builtin.
"""


class NetworkError(Exception):
    """Base class for all geneset_network errors."""


class InvalidInput(NetworkError, ValueError):
    """Upstream data cannot be processed (empty member sets, bad names, ...)."""


class InvalidConfiguration(NetworkError, ValueError):
    """A parameter lies outside its valid range."""


class InvalidThreshold(InvalidConfiguration):
    """The Jaccard threshold is not inside the open interval (0, 1)."""
