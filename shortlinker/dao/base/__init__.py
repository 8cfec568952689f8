from shortlinker.dao.base.shortlink_base_dao import ShortlinkBaseDAO
from shortlinker.dao.base.url_hash_base_dao import URLHashBaseDAO


__all__ = [
    'ShortlinkBaseDAO',
    'URLHashBaseDAO',
]
