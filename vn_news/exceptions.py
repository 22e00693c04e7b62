class FeedFetchError(Exception):
    """Raised when an RSS/Atom feed cannot be fetched or parsed."""
