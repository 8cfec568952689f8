"""Abstract base class for Shortlink data access objects (DAOs).

This class establishes a consistent contract for all Shortlink DAO implementations,
regardless of the underlying storage mechanism (e.g., Redis or the in-memory store
used in tests).

Responsibilities:
    - Issue globally unique, monotonically increasing counter values.
    - Persist the two projections of a shortlink (code -> url, code -> detail)
      under the same validity window.
    - Retrieve a shortlink's URL or detail record by shortcode.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from shortlinker.dao.redis import ShortlinkRedisDAO
        >>> dao = ShortlinkRedisDAO(...)

        >>> counter = dao.count(increment=True)
        >>> dao.insert(ShortlinkModel(target='http://example.com', shortcode='1', created_at=now, expiration_in_minutes=60))

        >>> dao.get_url('1')
        'http://example.com'
"""

from abc import ABC, abstractmethod

from shortlinker.models import ShortlinkModel


class ShortlinkBaseDAO(ABC):
    """Interface for Shortlink data access objects (DAOs).

    Methods:
        insert(shortlink: ShortlinkModel, **kwargs) -> ShortlinkBaseDAO:
            Persist code -> url and code -> detail with the shortlink's TTL.
            Raises ShortlinkAlreadyExistsError if the shortcode is still live.
            Raises DataStoreError on connection or (partial) write failure.

        get_url(shortcode: str, **kwargs) -> str:
            Retrieve the original URL of a shortlink.
            Raises ShortlinkNotFoundError if absent or expired.
            Raises DataStoreError on connection or read failure.

        get_detail(shortcode: str, **kwargs) -> ShortlinkModel:
            Retrieve the detail record of a shortlink.
            Raises ShortlinkNotFoundError if absent or expired.
            Raises DataStoreError on connection or read failure.

        count(increment: bool, **kwargs) -> int:
            Return the global counter, optionally atomically incrementing it first.
            Raises DataStoreError on connection or read failure.

    NOTE:
        - Mappings expire on their own. The DAO does not provide an interface
          to manually delete entries.
        - An expiration of 0 minutes means the shortlink never expires.
    """

    @abstractmethod
    def insert(self, shortlink: ShortlinkModel, **kwargs) -> 'ShortlinkBaseDAO':
        """Persist a new shortlink in the data store.

        Args:
            shortlink (ShortlinkModel):
                The shortlink to be persisted.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortlinkBaseDAO: self (for method chaining)

        Raises:
            ShortlinkAlreadyExistsError:
                If a live shortlink with the same shortcode already exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get_url(self, shortcode: str, **kwargs) -> str:
        """Retrieve the original URL for a shortcode.

        Raises:
            ShortlinkNotFoundError:
                If no live shortlink with the given shortcode exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get_detail(self, shortcode: str, **kwargs) -> ShortlinkModel:
        """Retrieve the detail record for a shortcode.

        Raises:
            ShortlinkNotFoundError:
                If no live shortlink with the given shortcode exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def count(self, increment: bool = False, **kwargs) -> int:
        """Retrieve the current counter value from the data store.

        Args:
            increment (bool):
                If True, atomically increment the counter by 1 before returning the value.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            int: The current counter value.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass
