"""Data Access Object (DAO) implementation for managing shortlinks in Redis

This module provides a Redis-based implementation of ShortlinkBaseDAO.

Responsibilities:
    - Increment the global counter (the only cross-request synchronization point);
    - Insert the two projections of a shortlink (code -> url, code -> detail)
      with the same TTL in one transaction;
    - Retrieve a shortlink's URL or detail record by shortcode;
    - Convert Redis failures into DAO exceptions.

Classes:
    ShortlinkRedisDAO:
        DAO for storing and retrieving ShortlinkModel in a Redis datastore.

Example:
    >>> from shortlinker.models import ShortlinkModel
    >>> from shortlinker.dao.redis import ShortlinkRedisDAO

    >>> dao = ShortlinkRedisDAO(prefix="app:dev")
    >>> dao.count(increment=True)
    1
    >>> dao.insert(ShortlinkModel(target='http://example.com', shortcode='1', created_at=now, expiration_in_minutes=60))
    <ShortlinkRedisDAO>
    >>> dao.get_url('1')
    'http://example.com'
    >>> dao.get_detail('1').expires_at
    <datetime>
"""

from datetime import datetime, timedelta, UTC

from beartype import beartype

from shortlinker.models import ShortlinkModel
from shortlinker.dao.base import ShortlinkBaseDAO
from shortlinker.dao.redis.mixins import RedisClientMixin
from shortlinker.dao.redis.helpers import handle_redis_errors
from shortlinker.dao.exceptions import DataStoreError, ShortlinkAlreadyExistsError, ShortlinkNotFoundError


class ShortlinkRedisDAO(RedisClientMixin, ShortlinkBaseDAO):
    """Redis-based Data Access Object (DAO) for managing shortlinks

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.
    """

    @handle_redis_errors
    @beartype
    def insert(self, shortlink: ShortlinkModel, **kwargs) -> 'ShortlinkRedisDAO':
        """Insert a shortlink into Redis

        Both keys are written in one MULTI/EXEC transaction with the same TTL
        (none when the shortlink never expires), so they expire in lockstep.

        Raises:
            ShortlinkAlreadyExistsError:
                If a live shortlink with the same shortcode already exists.
            DataStoreError:
                If Redis is unreachable, times out, or not every key was written.
        """
        link_url_key = self.keys.link_url_key(shortlink.shortcode)
        link_detail_key = self.keys.link_detail_key(shortlink.shortcode)
        if self.redis.exists(link_url_key):
            raise ShortlinkAlreadyExistsError(f"Shortlink with code '{shortlink.shortcode}' already exists.")

        # NOTE: Without the transaction a concurrent info request could observe
        #       the URL key without its detail key:
        #
        #       (lambda 1): ShortlinkRedisDAO.insert():
        #                   -> SET <app>:links:<shortcode>:url <original url> EX <ttl>
        #                   ... interruption
        #       (lambda 2): ShortlinkRedisDAO.get_detail():
        #                   -> GET <app>:links:<shortcode>:detail  => returns 'nil' (404)
        #       (lambda 1): ShortlinkRedisDAO.insert() continued...:
        #                   -> SET <app>:links:<shortcode>:detail <detail json> EX <ttl>
        with self.redis.pipeline(transaction=True) as pipe:
            pipe.set(link_url_key, shortlink.target, ex=shortlink.ttl)
            pipe.set(link_detail_key, shortlink.detail_json(), ex=shortlink.ttl)
            results = pipe.execute()

        if not all(results):
            raise DataStoreError(f"Shortlink with code '{shortlink.shortcode}' was only partially written.")
        return self

    @handle_redis_errors
    @beartype
    def get_url(self, shortcode: str, **kwargs) -> str:
        """Retrieve the original URL stored under a shortcode

        Raises:
            ShortlinkNotFoundError:
                If the shortlink does not exist or has expired.
            DataStoreError:
                If Redis connectivity issues occur.
        """
        original_url = self.redis.get(self.keys.link_url_key(shortcode))
        if original_url is None:
            raise ShortlinkNotFoundError(f"Shortlink with code '{shortcode}' not found.")
        return original_url

    @handle_redis_errors
    @beartype
    def get_detail(self, shortcode: str, **kwargs) -> ShortlinkModel:
        """Retrieve the detail record stored under a shortcode

        The detail blob and its remaining TTL are read in a single transaction.
        expires_at is None when the key has no TTL (shortlink never expires).

        Raises:
            ShortlinkNotFoundError:
                If the shortlink does not exist or has expired.
            DataStoreError:
                If Redis connectivity issues occur or the stored record is malformed.
        """
        link_detail_key = self.keys.link_detail_key(shortcode)

        with self.redis.pipeline(transaction=True) as pipe:
            pipe.get(link_detail_key)
            pipe.ttl(link_detail_key)
            detail_blob, ttl = pipe.execute()

        if detail_blob is None:
            raise ShortlinkNotFoundError(f"Shortlink with code '{shortcode}' not found.")

        expires_at = datetime.now(UTC) + timedelta(seconds=ttl) if ttl is not None and ttl >= 0 else None
        try:
            return ShortlinkModel.from_detail_json(shortcode, detail_blob, expires_at=expires_at)
        except ValueError as e:
            raise DataStoreError(str(e)) from e

    @handle_redis_errors
    def count(self, increment: bool = False, **kwargs) -> int:
        """Retrieve global shortlink counter

        Args:
            increment (bool):
                If True, atomically increments the counter (Redis INCR) and returns
                the new value. Otherwise, returns the current value (0 if unset).

        Example:
            >>> dao.count(increment=False)
            123
            >>> dao.count(increment=True)
            124
        """
        if increment:
            return int(self.redis.incr(self.keys.counter_key()))
        else:
            return int(self.redis.get(self.keys.counter_key()) or 0)
