"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    ShortlinkNotFoundError:
        Raised when a shortlink is absent from the data store or has expired.

    ShortlinkAlreadyExistsError:
        Raised when attempting to insert a shortlink whose shortcode is still live.

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection issues, timeouts,
        failed transactions, etc.).

Example:
    >>> from shortlinker.dao.exceptions import ShortlinkNotFoundError
    >>> raise ShortlinkNotFoundError("Shortlink with code 'abc' not found.")
    Traceback (most recent call last):
        ...
    shortlinker.dao.exceptions.ShortlinkNotFoundError: Shortlink with code 'abc' not found.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class ShortlinkNotFoundError(DAOError):
    """Exception raised when a shortlink is not found in the data store."""

    pass


class ShortlinkAlreadyExistsError(DAOError):
    """Exception raised when attempting to insert a shortlink that already exists in the data store."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, partially applied transactions, etc.
    """

    pass
