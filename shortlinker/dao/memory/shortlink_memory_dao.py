from datetime import datetime, timedelta, UTC

from beartype import beartype

from shortlinker.models import ShortlinkModel
from shortlinker.dao.base import ShortlinkBaseDAO
from shortlinker.dao.exceptions import ShortlinkAlreadyExistsError, ShortlinkNotFoundError
from shortlinker.dao.memory.store import InMemoryStore
from shortlinker.dao.redis.redis_key_schema import RedisKeySchema


class ShortlinkMemoryDAO(ShortlinkBaseDAO):
    """In-memory ShortlinkBaseDAO backed by an InMemoryStore

    Share one InMemoryStore between ShortlinkMemoryDAO and URLHashMemoryDAO to
    get the same key space a Redis deployment would have.
    """

    def __init__(self, store: InMemoryStore | None = None, prefix: str | None = None):
        self.store = store if store is not None else InMemoryStore()
        self.keys = RedisKeySchema(prefix=prefix)

    @beartype
    def insert(self, shortlink: ShortlinkModel, **kwargs) -> 'ShortlinkMemoryDAO':
        link_url_key = self.keys.link_url_key(shortlink.shortcode)
        if self.store.exists(link_url_key):
            raise ShortlinkAlreadyExistsError(f"Shortlink with code '{shortlink.shortcode}' already exists.")

        self.store.set(link_url_key, shortlink.target, ex=shortlink.ttl)
        self.store.set(self.keys.link_detail_key(shortlink.shortcode), shortlink.detail_json(), ex=shortlink.ttl)
        return self

    @beartype
    def get_url(self, shortcode: str, **kwargs) -> str:
        original_url = self.store.get(self.keys.link_url_key(shortcode))
        if original_url is None:
            raise ShortlinkNotFoundError(f"Shortlink with code '{shortcode}' not found.")
        return original_url

    @beartype
    def get_detail(self, shortcode: str, **kwargs) -> ShortlinkModel:
        link_detail_key = self.keys.link_detail_key(shortcode)
        detail_blob = self.store.get(link_detail_key)
        if detail_blob is None:
            raise ShortlinkNotFoundError(f"Shortlink with code '{shortcode}' not found.")

        ttl = self.store.ttl(link_detail_key)
        expires_at = datetime.now(UTC) + timedelta(seconds=ttl) if ttl >= 0 else None
        return ShortlinkModel.from_detail_json(shortcode, detail_blob, expires_at=expires_at)

    def count(self, increment: bool = False, **kwargs) -> int:
        if increment:
            return self.store.incr(self.keys.counter_key())
        return int(self.store.get(self.keys.counter_key()) or 0)
