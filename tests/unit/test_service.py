"""Unit tests for ShortlinkService

Test coverage includes:

1. Shorten (get-or-create)
   - New URLs receive consecutive base62 shortcodes starting at '1'.
   - Repeated URLs reuse their shortcode without advancing the counter.
   - Expired URLs receive a fresh shortcode.
   - Input validation (including the longest validity window and non UTF-8
     URLs) raises ValidationError before any storage call.

2. Retrieval
   - unshorten() resolves shortcodes, info() returns the detail record.
   - Unknown or expired shortcodes raise ShortlinkNotFoundError.
   - A zero validity window never expires.

3. Storage failures
   - DataStoreError propagates and no shortcode is returned.

4. Concurrency
   - Concurrent shortens of distinct URLs never share a shortcode.
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from freezegun import freeze_time

from shortlinker.service import ShortlinkService
from shortlinker.dao.base import ShortlinkBaseDAO, URLHashBaseDAO
from shortlinker.dao.exceptions import DataStoreError, ShortlinkNotFoundError
from shortlinker.dao.memory import InMemoryStore, ShortlinkMemoryDAO, URLHashMemoryDAO
from shortlinker.exceptions import ValidationError
from shortlinker.constants import MAX_EXPIRATION_IN_MINUTES


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def service(store):
    return ShortlinkService(ShortlinkMemoryDAO(store), URLHashMemoryDAO(store))


# -------------------------------
# 1. Shorten (get-or-create)
# -------------------------------


def test_first_shorten_returns_one(service):
    assert service.shorten('http://example.com', 60) == '1'
    assert service.unshorten('1') == 'http://example.com'
    assert service.info('1').target == 'http://example.com'


def test_repeated_shorten_reuses_shortcode(service):
    first = service.shorten('http://example.com', 60)
    second = service.shorten('http://example.com', 60)

    assert first == second == '1'
    assert service.shortlinks.count() == 1


def test_distinct_urls_get_consecutive_shortcodes(service):
    shortcodes = [service.shorten(f'http://example.com/{n}', 60) for n in range(63)]

    assert shortcodes[:3] == ['1', '2', '3']
    assert shortcodes[60:] == ['Z', '10', '11']
    assert len(set(shortcodes)) == 63


def test_expired_url_gets_new_shortcode():
    with freeze_time('2025-10-15 00:00:00') as frozen:
        store = InMemoryStore()
        service = ShortlinkService(ShortlinkMemoryDAO(store), URLHashMemoryDAO(store))

        assert service.shorten('http://example.com', 1) == '1'
        frozen.tick(timedelta(minutes=2))
        assert service.shorten('http://example.com', 1) == '2'


@pytest.mark.parametrize(
    'url, minutes',
    [
        ('', 60),
        (None, 60),
        ('http://example.com', -1),
        ('http://example.com', 1.5),
        ('http://example.com', True),
        ('http://example.com', '60'),
    ],
)
def test_shorten_validation(url, minutes):
    shortlinks = MagicMock(spec=ShortlinkBaseDAO)
    url_hashes = MagicMock(spec=URLHashBaseDAO)
    service = ShortlinkService(shortlinks, url_hashes)

    with pytest.raises(ValidationError):
        service.shorten(url, minutes)

    shortlinks.count.assert_not_called()
    url_hashes.get.assert_not_called()


def test_shorten_rejects_expiration_beyond_maximum(service):
    with pytest.raises(ValidationError, match=str(MAX_EXPIRATION_IN_MINUTES)):
        service.shorten('http://example.com', MAX_EXPIRATION_IN_MINUTES + 1)
    with pytest.raises(ValidationError):
        service.shorten('http://example.com', 10**12)

    assert service.shortlinks.count() == 0


def test_shorten_accepts_maximum_expiration(service):
    assert service.shorten('http://example.com', MAX_EXPIRATION_IN_MINUTES) == '1'
    assert service.info('1').expiration_in_minutes == MAX_EXPIRATION_IN_MINUTES


def test_shorten_rejects_lone_surrogate(service):
    with pytest.raises(ValidationError, match='UTF-8'):
        service.shorten('http://x/\ud800', 60)

    assert service.shortlinks.count() == 0


def test_shorten_without_hash_index(store):
    service = ShortlinkService(ShortlinkMemoryDAO(store))

    with pytest.raises(TypeError):
        service.shorten('http://example.com', 60)


def test_shorten_writes_shortlink_before_hash_index():
    calls = []
    shortlinks = MagicMock(spec=ShortlinkBaseDAO)
    shortlinks.count.return_value = 1
    shortlinks.insert.side_effect = lambda shortlink: calls.append(('insert', shortlink.shortcode))
    url_hashes = MagicMock(spec=URLHashBaseDAO)
    url_hashes.get.return_value = None
    url_hashes.insert.side_effect = lambda url, shortcode, minutes: calls.append(('hash', shortcode))

    ShortlinkService(shortlinks, url_hashes).shorten('http://example.com', 60)

    shortlinks.count.assert_called_once_with(increment=True)
    assert calls == [('insert', '1'), ('hash', '1')]


# -------------------------------
# 2. Retrieval
# -------------------------------


def test_unknown_shortcode(service):
    with pytest.raises(ShortlinkNotFoundError):
        service.unshorten('doesnotexist')
    with pytest.raises(ShortlinkNotFoundError):
        service.info('doesnotexist')


def test_shortlink_expires():
    with freeze_time('2025-10-15 00:00:00') as frozen:
        store = InMemoryStore()
        service = ShortlinkService(ShortlinkMemoryDAO(store), URLHashMemoryDAO(store))
        shortcode = service.shorten('http://example.com', 60)

        frozen.tick(timedelta(minutes=59))
        assert service.unshorten(shortcode) == 'http://example.com'

        frozen.tick(timedelta(minutes=1))
        with pytest.raises(ShortlinkNotFoundError):
            service.unshorten(shortcode)
        with pytest.raises(ShortlinkNotFoundError):
            service.info(shortcode)


def test_zero_validity_never_expires():
    with freeze_time('2025-10-15 00:00:00') as frozen:
        store = InMemoryStore()
        service = ShortlinkService(ShortlinkMemoryDAO(store), URLHashMemoryDAO(store))
        shortcode = service.shorten('http://example.com', 0)

        frozen.tick(timedelta(days=3650))
        assert service.unshorten(shortcode) == 'http://example.com'
        assert service.info(shortcode).expires_at is None
        assert service.shorten('http://example.com', 0) == shortcode


def test_info_detail(service):
    with freeze_time('2025-10-15 12:00:00'):
        service.shorten('http://example.com', 60)
        detail = service.info('1').detail()

    assert detail == {
        'url': 'http://example.com',
        'created_at': '2025-10-15T12:00:00+00:00',
        'expiration_in_minutes': 60,
    }


# -------------------------------
# 3. Storage failures
# -------------------------------


def test_storage_failure_propagates():
    shortlinks = MagicMock(spec=ShortlinkBaseDAO)
    shortlinks.count.side_effect = DataStoreError('Redis at redis.test:6379/0 timed out.')
    url_hashes = MagicMock(spec=URLHashBaseDAO)
    url_hashes.get.return_value = None

    with pytest.raises(DataStoreError, match='timed out'):
        ShortlinkService(shortlinks, url_hashes).shorten('http://example.com', 60)

    shortlinks.insert.assert_not_called()
    url_hashes.insert.assert_not_called()


def test_hash_index_failure_propagates():
    shortlinks = MagicMock(spec=ShortlinkBaseDAO)
    url_hashes = MagicMock(spec=URLHashBaseDAO)
    url_hashes.get.side_effect = DataStoreError("Can't connect to Redis at redis.test:6379/0.")

    with pytest.raises(DataStoreError):
        ShortlinkService(shortlinks, url_hashes).shorten('http://example.com', 60)

    shortlinks.count.assert_not_called()


# -------------------------------
# 4. Concurrency
# -------------------------------


def test_concurrent_shortens_issue_unique_shortcodes(service):
    urls = [f'http://example.com/{n}' for n in range(200)]

    with ThreadPoolExecutor(max_workers=8) as pool:
        shortcodes = list(pool.map(lambda url: service.shorten(url, 60), urls))

    assert len(set(shortcodes)) == len(urls)
    for url, shortcode in zip(urls, shortcodes):
        assert service.unshorten(shortcode) == url
