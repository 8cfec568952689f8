"""Shared Redis client construction for the Redis DAOs

RedisClientMixin either adopts a ready client (so several DAOs in one
invocation share a connection pool) or builds one from AppConfig's Redis
section. Every socket operation is bounded by the invocation's storage
deadline, and the client is pinged once so misconfiguration fails before the
first real command.
"""

from typing import Optional

import redis

from shortlinker.dao.redis.redis_key_schema import RedisKeySchema
from shortlinker.dao.exceptions import DataStoreError


class RedisClientMixin:
    """Attach `redis` (client) and `keys` (RedisKeySchema) to a DAO

    Raises:
        DataStoreError:
            If the PING issued on construction fails or times out.
    """

    def __init__(
        self,
        redis_host: Optional[str] = 'localhost',
        redis_port: Optional[int] = 6379,
        redis_db: Optional[int] = 0,
        redis_decode_responses: Optional[bool] = True,
        redis_username: Optional[str] = None,
        redis_password: Optional[str] = None,
        redis_socket_timeout: Optional[float] = None,
        redis_client: Optional[redis.Redis] = None,
        prefix: Optional[str] = None,
    ):
        """
        Args:
            redis_host, redis_port, redis_db, redis_username, redis_password:
                Connection parameters, ignored when redis_client is given.
            redis_decode_responses (Optional[bool]):
                Return str instead of bytes. The DAOs expect True.
            redis_socket_timeout (Optional[float]):
                Seconds allowed to connect and for every command
                (see utils.runtime.storage_timeout). None disables the deadline.
            redis_client (Optional[redis.Redis]):
                Client to reuse, e.g. the one of a sibling DAO.
            prefix (Optional[str]):
                Key namespace, usually utils.config.app_prefix().
        """
        if redis_client is None:
            redis_client = redis.Redis(
                host=redis_host,
                port=int(redis_port),
                db=int(redis_db),
                decode_responses=redis_decode_responses,
                username=redis_username,
                password=redis_password,
                socket_timeout=redis_socket_timeout,
                socket_connect_timeout=redis_socket_timeout,
            )

        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)

        self._healthcheck()

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """PING Redis; return False instead of raising when raise_error is False"""
        try:
            self.redis.ping()
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            if not raise_error:
                return False
            info = self.redis.connection_pool.connection_kwargs
            raise DataStoreError(
                f"Can't connect to Redis at {info.get('host')}:{info.get('port')}/{info.get('db')}. "
                'Check the provided configuration parameters.'
            ) from e
        return True
