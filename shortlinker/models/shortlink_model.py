import json
from dataclasses import dataclass
from datetime import datetime

from shortlinker.types import ShortlinkDetail
from shortlinker.utils.helpers import ttl_seconds


@dataclass(frozen=True)
class ShortlinkModel:
    """Represent a shortlink and its detail record.

    Attributes:
        target (str):
            The original long URL that the shortcode redirects to.
        shortcode (str):
            The unique base62 identifier of the shortlink.
        created_at (datetime):
            Moment the shortlink was issued (UTC).
        expiration_in_minutes (int):
            Validity window requested at creation. 0 means the shortlink
            never expires.
        expires_at (Optional[datetime]):
            Computed from the remaining store TTL on retrieval. None if the
            shortlink has no expiration or was never persisted.

    Example:
        >>> from datetime import datetime, UTC
        >>> link = ShortlinkModel(
        ...     target='http://example.com',
        ...     shortcode='1',
        ...     created_at=datetime(2025, 10, 15, tzinfo=UTC),
        ...     expiration_in_minutes=60,
        ... )
        >>> link.detail()
        {'url': 'http://example.com', 'created_at': '2025-10-15T00:00:00+00:00', 'expiration_in_minutes': 60}
    """

    target: str
    shortcode: str
    created_at: datetime
    expiration_in_minutes: int = 0
    expires_at: datetime | None = None

    @property
    def ttl(self) -> int | None:
        """Store TTL in seconds, None when the shortlink never expires."""
        return ttl_seconds(self.expiration_in_minutes)

    def detail(self) -> ShortlinkDetail:
        return {
            'url': self.target,
            'created_at': self.created_at.isoformat(),
            'expiration_in_minutes': self.expiration_in_minutes,
        }

    def detail_json(self) -> str:
        return json.dumps(self.detail(), separators=(',', ':'), ensure_ascii=False)

    @classmethod
    def from_detail_json(cls, shortcode: str, blob: str, expires_at: datetime | None = None) -> 'ShortlinkModel':
        """Rebuild a ShortlinkModel from its persisted detail JSON.

        Raises:
            ValueError:
                If the blob is not valid JSON or misses detail fields.
        """
        try:
            detail = json.loads(blob)
            return cls(
                target=detail['url'],
                shortcode=shortcode,
                created_at=datetime.fromisoformat(detail['created_at']),
                expiration_in_minutes=int(detail['expiration_in_minutes']),
                expires_at=expires_at,
            )
        except (ValueError, KeyError, TypeError) as e:
            raise ValueError(f"Malformed detail record for shortcode '{shortcode}'.") from e
