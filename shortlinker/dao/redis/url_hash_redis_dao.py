"""Redis-based hash index: sha1(url) -> shortcode

The entry shares the TTL of the shortlink it points to, so a miss covers both
"never shortened" and "shortened but expired".
"""

from beartype import beartype

from shortlinker.dao.base import URLHashBaseDAO
from shortlinker.dao.redis.mixins import RedisClientMixin
from shortlinker.dao.redis.helpers import handle_redis_errors
from shortlinker.utils.digest import url_digest
from shortlinker.utils.helpers import ttl_seconds


class URLHashRedisDAO(RedisClientMixin, URLHashBaseDAO):
    @handle_redis_errors
    @beartype
    def get(self, url: str, **kwargs) -> str | None:
        return self.redis.get(self.keys.url_hash_key(url_digest(url)))

    @handle_redis_errors
    @beartype
    def insert(self, url: str, shortcode: str, expiration_in_minutes: int, **kwargs) -> 'URLHashRedisDAO':
        # Last writer wins: concurrent shortens of the same URL may each issue a
        # shortcode, only the last one stays reachable through the index.
        self.redis.set(
            self.keys.url_hash_key(url_digest(url)),
            shortcode,
            ex=ttl_seconds(expiration_in_minutes),
        )
        return self
