import hashlib


def url_digest(url: str) -> str:
    """Return the SHA-1 hex digest used as the hash index key of a URL.

    Example:
        >>> len(url_digest('http://example.com'))
        40
    """
    return hashlib.sha1(url.encode('utf-8')).hexdigest()  # noqa: S324
