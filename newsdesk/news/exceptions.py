class NewsdeskError(Exception):
    """Base class for newsdesk errors."""


class FeedFetchError(NewsdeskError):
    """Raised when a single feed cannot be fetched or parsed."""


class FeedConfigError(NewsdeskError):
    """Raised when the source catalogue or hero signal file is malformed."""
