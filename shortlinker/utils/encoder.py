"""Base62 shortcode encoding

This module maps counter values to shortcodes and back. The mapping is a plain
positional base62 numeral system, so it is deterministic and injective: every
non-negative integer has exactly one shortcode and no leading padding.

Alphabet order: digits, then lowercase letters, then uppercase letters.

Functions:
    encode(number: int) -> str:
        Encode a non-negative integer as a base62 shortcode.
    decode(shortcode: str) -> int:
        Decode a base62 shortcode back into its integer.

Example:
    >>> from shortlinker.utils.encoder import encode, decode
    >>> encode(0)
    '0'
    >>> encode(61)
    'Z'
    >>> encode(62)
    '10'
    >>> decode('10')
    62
"""

import string


ALPHABET = string.digits + string.ascii_lowercase + string.ascii_uppercase
BASE = len(ALPHABET)
_INDEX = {character: position for position, character in enumerate(ALPHABET)}


def encode(number: int) -> str:
    """Encode a non-negative integer into a base62 shortcode.

    Args:
        number (int):
            Counter value to encode.

    Returns:
        str: shortcode, e.g. encode(1) == '1', encode(3844) == '100'.

    Raises:
        TypeError: If number is not an integer (booleans included).
        ValueError: If number is negative.
    """
    if not isinstance(number, int) or isinstance(number, bool):
        raise TypeError(f'Number must be of type integer (given type: {type(number)}).')
    if number < 0:
        raise ValueError(f'Number must be a non-negative integer (given value: {number}).')
    if number == 0:
        return ALPHABET[0]

    digits = []
    while number:
        number, remainder = divmod(number, BASE)
        digits.append(ALPHABET[remainder])
    return ''.join(reversed(digits))


def decode(shortcode: str) -> int:
    """Decode a base62 shortcode back into an integer.

    Raises:
        TypeError: If shortcode is not a string.
        ValueError: If shortcode is empty or contains characters outside the alphabet.
    """
    if not isinstance(shortcode, str):
        raise TypeError(f'Shortcode must be of type string (given type: {type(shortcode)}).')
    if not shortcode:
        raise ValueError('Shortcode must be a non-empty string.')

    number = 0
    for character in shortcode:
        try:
            number = number * BASE + _INDEX[character]
        except KeyError as e:
            raise ValueError(f'Invalid base62 character {character!r} in shortcode {shortcode!r}.') from e
    return number
