"""Shortlink generation and retrieval

ShortlinkService implements the {shorten, unshorten, info} capability set on
top of the abstract DAO interfaces, so the same logic runs against Redis in
production and against the in-memory DAOs in tests.

Shorten procedure (get-or-create):
    - Step 1: Look up sha1(url) in the hash index; on hit return the cached
              shortcode as-is (no counter increment, no writes)
    - Step 2: On miss, atomically increment the global counter and base62-encode it
    - Step 3: Build the shortlink record (created now, requested validity window)
    - Step 4: Persist code -> url and code -> detail, then sha1(url) -> code,
              all with the same TTL
    - Step 5: Return the shortcode

NOTE: Steps 1-4 are not atomic as a whole. Two concurrent shortens of the same
      URL can both miss, each consume a counter value, and the last hash index
      write wins. The losing shortcode stays resolvable but is no longer reached
      by deduplication:

      (lambda 1): GET hashes:<sha1>:code => nil
      (lambda 2): GET hashes:<sha1>:code => nil
      (lambda 1): INCR links:counter => 7, SET links:7:url ..., SET hashes:<sha1>:code 7
      (lambda 2): INCR links:counter => 8, SET links:8:url ..., SET hashes:<sha1>:code 8

Example:
    >>> from shortlinker.dao.memory import InMemoryStore, ShortlinkMemoryDAO, URLHashMemoryDAO
    >>> store = InMemoryStore()
    >>> service = ShortlinkService(ShortlinkMemoryDAO(store), URLHashMemoryDAO(store))
    >>> service.shorten('http://example.com', 60)
    '1'
    >>> service.shorten('http://example.com', 60)
    '1'
    >>> service.unshorten('1')
    'http://example.com'
"""

import logging
from datetime import datetime, UTC

from shortlinker.models import ShortlinkModel
from shortlinker.dao.base import ShortlinkBaseDAO, URLHashBaseDAO
from shortlinker.constants import MAX_EXPIRATION_IN_MINUTES
from shortlinker.exceptions import ValidationError
from shortlinker.utils.encoder import encode


logger = logging.getLogger(__name__)


class ShortlinkService:
    """Get-or-create shortlinks and resolve shortcodes

    Attributes:
        shortlinks (ShortlinkBaseDAO):
            Counter and shortlink store (code -> url, code -> detail).
        url_hashes (Optional[URLHashBaseDAO]):
            Deduplication index (sha1(url) -> code). Only shorten() reads it,
            so read-only callers (redirect, info) may omit it. shorten() on a
            service built without it raises TypeError.

    Every method propagates DAO exceptions unchanged:
        ShortlinkNotFoundError for unknown or expired shortcodes,
        DataStoreError for any storage failure.
    """

    def __init__(self, shortlinks: ShortlinkBaseDAO, url_hashes: URLHashBaseDAO | None = None):
        self.shortlinks = shortlinks
        self.url_hashes = url_hashes

    def shorten(self, url: str, expiration_in_minutes: int) -> str:
        """Return the shortcode for url, issuing a new one if needed

        Args:
            url (str):
                Non-empty original URL.
            expiration_in_minutes (int):
                Validity window, 0 for a shortlink that never expires.

        Returns:
            str: base62 shortcode.

        Raises:
            ValidationError:
                If url is empty or not encodable as UTF-8, or expiration_in_minutes
                is not an integer in [0, MAX_EXPIRATION_IN_MINUTES].
            TypeError:
                If the service was built without a URLHashBaseDAO.
            DataStoreError:
                If any storage call fails. No shortcode is returned, but keys
                written before the failure may remain until they expire.
        """
        if not isinstance(url, str) or not url:
            raise ValidationError('url must be a non-empty string.')
        if not isinstance(expiration_in_minutes, int) or isinstance(expiration_in_minutes, bool) or expiration_in_minutes < 0:
            raise ValidationError('expiration_in_minutes must be a non-negative integer.')
        if expiration_in_minutes > MAX_EXPIRATION_IN_MINUTES:
            raise ValidationError(f'expiration_in_minutes must not exceed {MAX_EXPIRATION_IN_MINUTES}.')
        try:
            url.encode('utf-8')
        except UnicodeEncodeError as e:
            raise ValidationError('url must be valid UTF-8.') from e
        if self.url_hashes is None:
            raise TypeError('ShortlinkService needs a URLHashBaseDAO to shorten URLs.')

        cached_shortcode = self.url_hashes.get(url)
        if cached_shortcode is not None:
            logger.debug('URL already shortened, reusing shortcode %s.', cached_shortcode, extra={'shortcode': cached_shortcode})
            return cached_shortcode

        shortcode = encode(self.shortlinks.count(increment=True))
        shortlink = ShortlinkModel(
            target=url,
            shortcode=shortcode,
            created_at=datetime.now(UTC),
            expiration_in_minutes=expiration_in_minutes,
        )

        # Hash index entry goes last, so a dedup hit never points at a half-written shortlink
        self.shortlinks.insert(shortlink)
        self.url_hashes.insert(url, shortcode, expiration_in_minutes)

        logger.debug(
            'Issued new shortcode %s.',
            shortcode,
            extra={'shortcode': shortcode, 'expirationInMinutes': expiration_in_minutes},
        )
        return shortcode

    def unshorten(self, shortcode: str) -> str:
        return self.shortlinks.get_url(shortcode)

    def info(self, shortcode: str) -> ShortlinkModel:
        return self.shortlinks.get_detail(shortcode)
