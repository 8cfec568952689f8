from shortlinker.models.shortlink_model import ShortlinkModel


__all__ = [
    'ShortlinkModel',
]
