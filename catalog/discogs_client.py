"""
Discogs API Client

Provides release-metadata lookups against the Discogs REST API:
- Release lookup by release id
- Cover image selection (primary image, else the first one)
- User agent and optional personal access token handling

Discogs requires every request to carry an identifying User-Agent.
https://www.discogs.com/developers
"""

import logging
from typing import Any, Dict, Optional

import requests

from catalog.exceptions import DiscogsAPIError

logger = logging.getLogger(__name__)

DISCOGS_RELEASE_URL = "https://www.discogs.com/release/{release_id}"


def release_page_url(release_id: str) -> Optional[str]:
    """Link to the public Discogs release page, or None without an id."""
    if not release_id:
        return None
    return DISCOGS_RELEASE_URL.format(release_id=release_id)


def primary_image_url(release: Dict[str, Any]) -> Optional[str]:
    """
    Pick the cover image from a release payload.

    Returns the `uri` of the image tagged "primary", falling back to the first
    image, or None when the release carries no images.

    Raises:
        DiscogsAPIError: If the images block is not a list of image objects
    """
    images = release.get('images') or []
    if not isinstance(images, list) or not all(isinstance(img, dict) for img in images):
        raise DiscogsAPIError("Unexpected images block in Discogs release")
    if not images:
        return None
    primary = next((img for img in images if img.get('type') == 'primary'), images[0])
    uri = primary.get('uri')
    if uri is not None and not isinstance(uri, str):
        raise DiscogsAPIError("Unexpected image uri in Discogs release")
    return uri or None


class DiscogsClient:
    """
    Client for the Discogs database API.

    Args:
        base_url: API root (default: https://api.discogs.com)
        user_agent: Identifying User-Agent string
        token: Optional personal access token
        timeout: Request timeout in seconds, None for the transport default
    """

    def __init__(
        self,
        base_url: str = "https://api.discogs.com",
        user_agent: str = "VinylCollectionApp/1.0",
        token: Optional[str] = None,
        timeout: Optional[float] = None
    ):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

        self.session = requests.Session()
        self.session.headers.update({
            'User-Agent': user_agent,
            'Accept': 'application/json',
        })
        if token:
            self.session.headers['Authorization'] = f"Discogs token={token}"

        logger.debug(f"Discogs client initialized with user agent: {user_agent}")

    def get_release(self, release_id: str) -> Dict[str, Any]:
        """
        Fetch release metadata.

        Args:
            release_id: Discogs release id

        Returns:
            Decoded release payload

        Raises:
            DiscogsAPIError: On network errors, non-success responses or
                an undecodable body
        """
        url = f"{self.base_url}/releases/{release_id}"
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise DiscogsAPIError(f"Discogs request failed for release {release_id}: {e}") from e

        if response.status_code != 200:
            raise DiscogsAPIError(
                f"Discogs error {response.status_code} for release {release_id}: {response.text[:200]}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise DiscogsAPIError(f"Discogs returned invalid JSON for release {release_id}") from e

        if not isinstance(data, dict):
            raise DiscogsAPIError(f"Unexpected Discogs payload for release {release_id}")
        return data

    def get_cover_url(self, release_id: str) -> Optional[str]:
        """Cover image URL for a release, or None if it has no images."""
        return primary_image_url(self.get_release(release_id))

    def __repr__(self) -> str:
        return f"DiscogsClient(base_url={self.base_url})"
