"""Minimal client for the Flickr REST API."""

import logging
from typing import Any, Dict, Optional

import requests

from .errors import RemoteApiError, RemoteCallFailed
from .models import PhotosetListing, RemoteRecord

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = 'https://www.flickr.com/services/rest'
DEFAULT_TIMEOUT = 30
# Largest page flickr.photosets.getPhotos will return
DEFAULT_PER_PAGE = 500


class FlickrClient:
    """Calls Flickr REST methods and unwraps their JSON payloads."""

    def __init__(self, api_key: str, endpoint: str = DEFAULT_ENDPOINT,
                 timeout: float = DEFAULT_TIMEOUT, per_page: int = DEFAULT_PER_PAGE,
                 session: Optional[requests.Session] = None):
        self.api_key = api_key
        self.endpoint = endpoint
        self.timeout = timeout
        self.per_page = per_page
        self.session = session or requests.Session()

    def call(self, method: str, **params) -> Dict[str, Any]:
        """
        Call a REST method and return its payload.

        The payload is the value of the first top-level key other than
        ``stat`` (e.g. ``user`` or ``photoset``), whatever the method.

        Raises:
            RemoteCallFailed: On transport errors, timeouts, non-2xx status
                or an unparseable body
            RemoteApiError: If the response ``stat`` is not ``ok``
        """
        query = dict(params)
        query.update({
            'method': method,
            'api_key': self.api_key,
            'format': 'json',
            'nojsoncallback': 1,
        })

        logger.debug(f"Calling {method}")
        try:
            response = self.session.get(self.endpoint, params=query, timeout=self.timeout)
        except requests.RequestException as e:
            raise RemoteCallFailed(f"Request error calling {method}: {e}") from e

        if not response.ok:
            raise RemoteCallFailed(
                f"Request error calling {method}: {response.status_code} {response.reason}"
            )

        try:
            body = response.json()
        except ValueError as e:
            raise RemoteCallFailed(f"Invalid JSON from {method}: {e}") from e

        if not isinstance(body, dict) or not body:
            raise RemoteCallFailed(f"Unexpected response from {method}: {body!r}")

        if body.get('stat') != 'ok':
            raise RemoteApiError(method, body.get('message', 'unknown error'), body.get('code'))

        payload = [value for key, value in body.items() if key != 'stat']
        if not payload:
            raise RemoteCallFailed(f"Empty payload from {method}")
        return payload[0]

    def find_user_id(self, username: str) -> str:
        user = self.call('flickr.people.findByUsername', username=username)
        try:
            return user['id']
        except (KeyError, TypeError) as e:
            raise RemoteCallFailed("No user id in flickr.people.findByUsername response") from e

    def get_photoset(self, user_id: str, set_id: str) -> PhotosetListing:
        """Fetch the first page of a photo set with capture times."""
        photoset = self.call(
            'flickr.photosets.getPhotos',
            user_id=user_id,
            photoset_id=set_id,
            extras='date_taken',
            per_page=self.per_page,
        )
        try:
            photos = [RemoteRecord.from_api(photo) for photo in photoset.get('photo', [])]
            return PhotosetListing(
                id=str(photoset.get('id', set_id)),
                title=photoset.get('title', ''),
                total=int(photoset.get('total', len(photos))),
                per_page=int(photoset.get('perpage', len(photos))),
                photos=photos,
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise RemoteCallFailed(
                f"Unexpected flickr.photosets.getPhotos response: {e!r}") from e

    def list_set(self, username: str, set_id: str) -> PhotosetListing:
        """Resolve username and fetch the set; only the first page is used."""
        user_id = self.find_user_id(username)
        listing = self.get_photoset(user_id, set_id)

        logger.info(f"Set: {listing.title}")
        logger.info(f"Photos: {listing.total}")
        if listing.truncated:
            logger.warning(f"Acting on first {listing.per_page} photos only")

        return listing
