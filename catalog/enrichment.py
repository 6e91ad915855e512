"""
Album enrichment: cover art and reference links from external services.

Resolution for one album runs in this order:

1. With a Discogs release id, fetch the release and take its primary (or
   first) image as the cover.
2. Always search Wikipedia for "<artist> <title> album"; the top hit gives
   the reference page link.
3. Only when Discogs produced no cover, use the Wikipedia page's lead image.

Each lookup is best effort. A failure only blanks the field it would have
filled and never stops the other lookup. Nothing is cached: every selection
resolves again from scratch.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional

from catalog.discogs_client import DiscogsClient
from catalog.exceptions import LookupFailure
from catalog.models import EMPTY_RESULT, EnrichmentResult, Record
from catalog.wikipedia_client import WikipediaClient, page_url

logger = logging.getLogger(__name__)


def search_query(record: Record) -> str:
    return f"{record.artist} {record.title} album"


class EnrichmentResolver:
    """
    Resolve cover image and reference page for an album.

    Args:
        discogs: Release-metadata lookup client
        wikipedia: Text-search lookup client
    """

    def __init__(self, discogs: DiscogsClient, wikipedia: WikipediaClient):
        self.discogs = discogs
        self.wikipedia = wikipedia

    @classmethod
    def from_config(cls, config) -> "EnrichmentResolver":
        discogs = DiscogsClient(
            base_url=config.discogs_api_url,
            user_agent=config.user_agent,
            token=config.discogs_token,
            timeout=config.request_timeout,
        )
        wikipedia = WikipediaClient(
            api_url=config.wikipedia_api_url,
            thumb_size=config.wikipedia_thumb_size,
            user_agent=config.user_agent,
            timeout=config.request_timeout,
        )
        return cls(discogs, wikipedia)

    def _discogs_cover(self, record: Record) -> Optional[str]:
        try:
            return self.discogs.get_cover_url(record.release_id)
        except LookupFailure as e:
            logger.warning(f"Discogs lookup failed for {record.artist} - {record.title}: {e}")
            return None

    def _wikipedia_title(self, record: Record) -> Optional[str]:
        try:
            return self.wikipedia.search_top_title(search_query(record))
        except LookupFailure as e:
            logger.warning(f"Wikipedia search failed for {record.artist} - {record.title}: {e}")
            return None

    def _wikipedia_image(self, title: str) -> Optional[str]:
        try:
            return self.wikipedia.page_image_url(title)
        except LookupFailure as e:
            logger.warning(f"Wikipedia page image lookup failed for '{title}': {e}")
            return None

    def resolve(self, record: Record) -> EnrichmentResult:
        """
        Resolve enrichment for one album. Never raises a lookup error.

        Returns:
            EnrichmentResult with whatever could be found
        """
        image_url = self._discogs_cover(record) if record.release_id else None

        title = self._wikipedia_title(record)
        reference_page_url = page_url(title) if title else None

        if image_url is None and title:
            image_url = self._wikipedia_image(title)

        logger.debug(
            f"Resolved {record.artist} - {record.title}: image={image_url}, page={reference_page_url}"
        )
        return EnrichmentResult(image_url=image_url, reference_page_url=reference_page_url)


@dataclass(frozen=True)
class EnrichmentState:
    row_id: Optional[int] = None
    pending: bool = False
    result: EnrichmentResult = EMPTY_RESULT


def spawn_thread(target: Callable[[], None]) -> None:
    threading.Thread(target=target, daemon=True).start()


class EnrichmentTracker:
    """
    Run enrichment in the background and keep only the latest selection's result.

    Every `start` bumps a generation counter. A worker's result is applied
    only if no newer `start` or `clear` happened meanwhile; older results are
    dropped on arrival. In-flight lookups are never interrupted.

    Args:
        resolver: Object with a `resolve(record)` method
        spawn: Callable that runs a zero-argument job asynchronously
            (default: a daemon thread per job)
    """

    def __init__(self, resolver, spawn: Callable[[Callable[[], None]], None] = spawn_thread):
        self.resolver = resolver
        self.spawn = spawn
        self._lock = threading.Lock()
        self._generation = 0
        self._state = EnrichmentState()

    @property
    def generation(self) -> int:
        return self._generation

    def start(self, record: Record) -> int:
        """Begin resolving `record`, superseding any earlier resolution."""
        with self._lock:
            self._generation += 1
            generation = self._generation
            self._state = EnrichmentState(row_id=record.row_id, pending=True)

        self.spawn(lambda: self._run(generation, record))
        return generation

    def clear(self) -> None:
        """Forget the current album; any in-flight result will be ignored."""
        with self._lock:
            self._generation += 1
            self._state = EnrichmentState()

    def _run(self, generation: int, record: Record) -> None:
        try:
            result = self.resolver.resolve(record)
        except Exception:
            logger.exception(f"Enrichment crashed for {record.artist} - {record.title}")
            result = EMPTY_RESULT
        self._apply(generation, record, result)

    def _apply(self, generation: int, record: Record, result: EnrichmentResult) -> bool:
        with self._lock:
            if generation != self._generation:
                logger.debug(f"Discarding stale enrichment for {record.artist} - {record.title}")
                return False
            self._state = EnrichmentState(row_id=record.row_id, pending=False, result=result)
            return True

    def snapshot(self) -> EnrichmentState:
        with self._lock:
            return self._state
