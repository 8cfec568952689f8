from shortlinker.utils.config import app_env, app_name, project_root, app_prefix, load_config, redis_config
from shortlinker.utils.helpers import base_url, get_short_url, ttl_seconds, require_environment, guarantee_500_response
from shortlinker.utils.encoder import encode, decode
from shortlinker.utils.digest import url_digest
from shortlinker.utils.runtime import running_locally, storage_timeout, duration_ms
from shortlinker.utils.logging import initialize_logging


__all__ = [
    'encode',
    'decode',
    'url_digest',
    'app_env',
    'app_name',
    'app_prefix',
    'project_root',
    'load_config',
    'redis_config',
    'base_url',
    'get_short_url',
    'ttl_seconds',
    'require_environment',
    'guarantee_500_response',
    'running_locally',
    'storage_timeout',
    'duration_ms',
    'initialize_logging',
]
