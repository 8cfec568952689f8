import functools
from collections.abc import Callable


__all__ = ['RedisKeySchema']  # hide internal decorator prefix_key from imports


def prefix_key(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs) -> str:
        key = func(self, *args, **kwargs)
        return f'{self.prefix}:{key}' if self.prefix is not None else key

    return wrapper


class RedisKeySchema:
    """Provide standardized Redis keys for storing shortlinks.

    An optional prefix can be provided to namespace all generated keys.
    It is highly encouraged to set a custom prefix for each app and environment,
    e.g. "shortlinker:prod" or "shortlinker:dev".

    Key layout:
        links:counter               -> global counter (INCR)
        links:<shortcode>:url       -> original URL
        links:<shortcode>:detail    -> detail record JSON
        hashes:<sha1(url)>:code     -> shortcode issued for the URL
    """

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = prefix

    @prefix_key
    def counter_key(self) -> str:
        return 'links:counter'

    @prefix_key
    def link_url_key(self, shortcode: str) -> str:
        return f'links:{shortcode}:url'

    @prefix_key
    def link_detail_key(self, shortcode: str) -> str:
        return f'links:{shortcode}:detail'

    @prefix_key
    def url_hash_key(self, digest: str) -> str:
        return f'hashes:{digest}:code'
