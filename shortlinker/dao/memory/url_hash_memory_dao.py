from beartype import beartype

from shortlinker.dao.base import URLHashBaseDAO
from shortlinker.dao.memory.store import InMemoryStore
from shortlinker.dao.redis.redis_key_schema import RedisKeySchema
from shortlinker.utils.digest import url_digest
from shortlinker.utils.helpers import ttl_seconds


class URLHashMemoryDAO(URLHashBaseDAO):
    def __init__(self, store: InMemoryStore | None = None, prefix: str | None = None):
        self.store = store if store is not None else InMemoryStore()
        self.keys = RedisKeySchema(prefix=prefix)

    @beartype
    def get(self, url: str, **kwargs) -> str | None:
        return self.store.get(self.keys.url_hash_key(url_digest(url)))

    @beartype
    def insert(self, url: str, shortcode: str, expiration_in_minutes: int, **kwargs) -> 'URLHashMemoryDAO':
        self.store.set(self.keys.url_hash_key(url_digest(url)), shortcode, ex=ttl_seconds(expiration_in_minutes))
        return self
