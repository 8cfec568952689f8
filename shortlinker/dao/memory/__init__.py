from shortlinker.dao.memory.store import InMemoryStore
from shortlinker.dao.memory.shortlink_memory_dao import ShortlinkMemoryDAO
from shortlinker.dao.memory.url_hash_memory_dao import URLHashMemoryDAO


__all__ = [
    'InMemoryStore',
    'ShortlinkMemoryDAO',
    'URLHashMemoryDAO',
]
