"""Abstract base class for URL hash index data access objects (DAOs).

The hash index maps the digest of an original URL to the shortcode issued for it,
so that shortening the same URL twice within its validity window returns the
same shortcode. It is never consulted when resolving shortcodes.
"""

from abc import ABC, abstractmethod


class URLHashBaseDAO(ABC):
    """Interface for URL hash index data access objects (DAOs).

    Methods:
        get(url: str, **kwargs) -> str | None:
            Return the shortcode previously issued for a URL.
            Returns None if the digest was never seen or its entry expired.
            Raises DataStoreError on connection or read failure.

        insert(url: str, shortcode: str, expiration_in_minutes: int, **kwargs) -> URLHashBaseDAO:
            Map the URL digest to a shortcode with the shortlink's TTL.
            Raises DataStoreError on connection or write failure.
    """

    @abstractmethod
    def get(self, url: str, **kwargs) -> str | None:
        pass

    @abstractmethod
    def insert(self, url: str, shortcode: str, expiration_in_minutes: int, **kwargs) -> 'URLHashBaseDAO':
        pass
