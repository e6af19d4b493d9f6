class ScraperError(Exception):
    """Base class for scraper failures."""


class NetworkError(ScraperError):
    """Transport failure or non-success status while fetching a page."""

    def __init__(self, url: str, reason: str = ""):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch {url}" + (f": {reason}" if reason else ""))


class ParseError(ScraperError):
    """Markup could not be turned into a document."""


class DetailFetchError(ScraperError):
    """A single item's detail page could not be fetched or parsed."""

    def __init__(self, item_title: str, url: str, cause: Exception):
        self.item_title = item_title
        self.url = url
        self.cause = cause
        super().__init__(f"Error fetching details for item {item_title} ({url}): {cause}")


class PublishError(ScraperError):
    """The publish sink rejected a batch."""
