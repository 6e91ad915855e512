"""
Wikipedia API Client

Text-search lookups against the MediaWiki Action API, used to find a
reference article for an album and, when needed, the article's lead image.
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests

from catalog.exceptions import WikipediaAPIError

logger = logging.getLogger(__name__)

WIKI_PAGE_URL = "https://en.wikipedia.org/wiki/{slug}"


def page_url(title: str) -> str:
    """
    Build the article URL for a page title.

    Spaces become underscores and the result is percent-encoded, keeping the
    characters browsers leave alone in URI components.

    Examples:
        "OK Computer" -> "https://en.wikipedia.org/wiki/OK_Computer"
        "Rumours (album)" -> "https://en.wikipedia.org/wiki/Rumours_(album)"
    """
    slug = quote(title.replace(' ', '_'), safe="!*'()")
    return WIKI_PAGE_URL.format(slug=slug)


class WikipediaClient:
    """
    Client for the Wikipedia (MediaWiki) Action API.

    Args:
        api_url: Action API endpoint
        thumb_size: Requested page-image thumbnail width in pixels
        user_agent: Identifying User-Agent string
        timeout: Request timeout in seconds, None for the transport default
    """

    def __init__(
        self,
        api_url: str = "https://en.wikipedia.org/w/api.php",
        thumb_size: int = 500,
        user_agent: str = "VinylCollectionApp/1.0",
        timeout: Optional[float] = None
    ):
        self.api_url = api_url
        self.thumb_size = thumb_size
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({'User-Agent': user_agent})

    def _query(self, params: Dict[str, Any]) -> Dict[str, Any]:
        query = {'action': 'query', 'format': 'json'}
        query.update(params)
        try:
            response = self.session.get(self.api_url, params=query, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise WikipediaAPIError(f"Wikipedia request failed: {e}") from e

        if response.status_code != 200:
            raise WikipediaAPIError(f"Wikipedia error {response.status_code}: {response.text[:200]}")

        try:
            data = response.json()
        except ValueError as e:
            raise WikipediaAPIError("Wikipedia returned invalid JSON") from e

        if not isinstance(data, dict) or not isinstance(data.get('query'), dict):
            raise WikipediaAPIError("Wikipedia response has no query block")
        return data['query']

    def search_top_title(self, text: str) -> Optional[str]:
        """
        Run a full-text search and return the best-ranked page title.

        Returns:
            Title of the top hit, or None when nothing matched

        Raises:
            WikipediaAPIError: On network errors or malformed responses
        """
        result = self._query({'list': 'search', 'srsearch': text})
        hits = result.get('search') or []
        if not isinstance(hits, list):
            raise WikipediaAPIError("Wikipedia search results are not a list")
        if not hits:
            logger.debug(f"Wikipedia search returned no results for '{text}'")
            return None
        if not isinstance(hits[0], dict):
            raise WikipediaAPIError("Wikipedia search hit is not an object")
        title = hits[0].get('title')
        if title is not None and not isinstance(title, str):
            raise WikipediaAPIError("Wikipedia search hit has a non-text title")
        return title or None

    def page_image_url(self, title: str) -> Optional[str]:
        """
        Thumbnail URL of a page's lead image.

        Returns:
            Thumbnail source URL, or None when the page has no image

        Raises:
            WikipediaAPIError: On network errors or malformed responses
        """
        result = self._query({
            'titles': title,
            'prop': 'pageimages',
            'pithumbsize': self.thumb_size,
        })
        pages = result.get('pages') or {}
        if not isinstance(pages, dict):
            raise WikipediaAPIError("Wikipedia pages block is not an object")
        if not pages:
            return None
        first_page = next(iter(pages.values()))
        if not isinstance(first_page, dict):
            raise WikipediaAPIError("Wikipedia page entry is not an object")
        thumbnail = first_page.get('thumbnail') or {}
        if not isinstance(thumbnail, dict):
            raise WikipediaAPIError("Wikipedia page thumbnail is not an object")
        source = thumbnail.get('source')
        if source is not None and not isinstance(source, str):
            raise WikipediaAPIError("Wikipedia thumbnail source is not text")
        return source or None

    def __repr__(self) -> str:
        return f"WikipediaClient(api_url={self.api_url})"
