from shortlinker.dao.redis.redis_key_schema import RedisKeySchema
from shortlinker.dao.redis.mixins import RedisClientMixin
from shortlinker.dao.redis.shortlink_redis_dao import ShortlinkRedisDAO
from shortlinker.dao.redis.url_hash_redis_dao import URLHashRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'ShortlinkRedisDAO',
    'URLHashRedisDAO',
]
